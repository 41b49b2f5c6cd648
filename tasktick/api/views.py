from tasktick.domain.task import Task, TaskId
from tasktick.domain.enums import DurationClass
from tasktick.domain.errors import TaskNotFoundError, DomainError
from typing import Iterable
from datetime import datetime


### COMMENTS
# ==========================================================
# Pomocnicze widoki dla warstwy prezentacji (api/views.py).
# ==========================================================
# TaskStore nie filtruje ani nie grupuje: robi to tutaj prezentacja:
# - grupy po klasie czasu trwania (Short → Medium → Long, kolejność dodania w grupie),
# - aktywne vs. zakończone,
# - rozwiązywanie skróconego ID wpisanego w CLI.


def active_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if not t.is_completed]


def completed_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if t.is_completed]


def group_by_duration(tasks: Iterable[Task], include_completed: bool = False) -> dict[DurationClass, list[Task]]:
    """Grupuje zadania po `duration`; każda klasa obecna w wyniku, także pusta."""
    groups: dict[DurationClass, list[Task]] = {d: [] for d in DurationClass}
    for t in tasks:
        if t.is_completed and not include_completed:
            continue
        groups[DurationClass(t.duration)].append(t)
    return groups


def format_created(dt: datetime) -> str:
    """Data utworzenia w czasie lokalnym, np. '2025-01-01 13:00'."""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def short_id(task_id: str, n: int = 8) -> str:
    """Zwraca skróconą wersję UUID do wyświetlenia (np. pierwsze 8 znaków)."""
    return task_id[:n]


def resolve_task_id(tasks: Iterable[Task], prefix: str) -> TaskId:
    """
        Zamienia pełne lub skrócone ID na pełne `task_id`.

        :raises TaskNotFoundError: Gdy żadne zadanie nie pasuje.
        :raises DomainError: Gdy prefiks pasuje do więcej niż jednego zadania.
    """
    matches = [t.task_id for t in tasks if t.task_id == prefix or t.task_id.startswith(prefix)]
    if prefix and prefix in matches:
        return TaskId(prefix)
    if not prefix or not matches:
        raise TaskNotFoundError(prefix)
    if len(matches) > 1:
        raise DomainError(f"ID '{prefix}' pasuje do {len(matches)} zadań: podaj dłuższy prefiks.")
    return matches[0]
