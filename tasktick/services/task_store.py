from tasktick.ports.task_repository import TaskRepository
from tasktick.ports.id_provider import IdProvider
from tasktick.ports.clock import Clock
from tasktick.domain.task import Task, TaskId
from tasktick.domain.enums import DurationClass
from tasktick.domain.errors import TaskNotFoundError, PersistenceError
from tasktick.adapters.system.clock_system import SystemClock
from tasktick.adapters.system.id_provider_uuid import UuidIdProvider
from dataclasses import replace
from typing import Iterable
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Magazyn zadań (services/task_store.py): przypadki użycia.
# ==========================================================
# Rola:
# - Właściciel uporządkowanej kolekcji zadań (kolejność dodania, unikalne task_id).
# - Odczyt z repozytorium raz, w konstruktorze; pełny zapis po każdej mutacji.
#
# Zasady:
# - Magazyn korzysta wyłącznie z portów (repozytorium, zegar, generator ID).
# - Brak zadania przy delete/update/toggle → no-op, nie błąd.
# - Błędy trwałości nie wychodzą do wywołującego:
#     * odczyt → pusta kolekcja,
#     * zapis → log WARNING, pamięć pozostaje źródłem prawdy.
# - Modele domenowe są niemutowalne (`frozen=True`): zmiana = nowa instancja na tej samej pozycji.
# - Na zewnątrz wychodzi tylko kopia listy, nigdy wewnętrzna referencja.



class TaskStore:
    """
    Uporządkowana kolekcja zadań z zapisem po każdej zmianie.

    :param repo: Implementacja portu TaskRepository.
    :param id_provider: Generator identyfikatorów (domyślnie UUID4).
    :param clock: Źródło czasu UTC (domyślnie zegar systemowy).
    """
    def __init__(
        self,
        repo: TaskRepository,
        id_provider: IdProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.repo = repo
        self.id_provider = id_provider or UuidIdProvider()
        self.clock = clock or SystemClock()
        self._tasks: list[Task] = []
        self._load()

    def _load(self) -> None:
        try:
            self._tasks = list(self.repo.load_all())
        except (PersistenceError, OSError) as e:
            logger.warning("Could not load tasks, starting empty: %s", e)
            self._tasks = []

    def _save(self) -> None:
        try:
            self.repo.save_all(list(self._tasks))
        except (PersistenceError, OSError) as e:
            logger.warning("Could not save %d tasks: %s", len(self._tasks), e)

    def _index_of(self, task_id: TaskId) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.task_id == task_id:
                return index
        return None

    def add_task(self, title: str, description: str = "", duration: DurationClass = DurationClass.MEDIUM) -> Task:
        """
            Tworzy nowe zadanie, dopisuje je na koniec kolekcji i zapisuje.

            - `task_id` z generatora ID, `created_at = clock.now()`, `is_completed = False`.
            - Tytuł nie jest walidowany: robi to warstwa prezentacji.

            :param title: Tytuł zadania.
            :param description: Opis (może być pusty).
            :param duration: Klasa czasu trwania.
            :return: Utworzony obiekt `Task`.
        """
        task = Task(
            task_id=TaskId(self.id_provider.new_id()),
            title=title,
            description=description or "",
            duration=DurationClass(duration),
            created_at=self.clock.now(),
        )
        self._tasks.append(task)
        logger.debug("Added task %s", task.task_id)
        self._save()
        return task

    def delete_task(self, task_id: TaskId) -> None:
        """Usuwa zadanie o podanym ID; brak zadania to no-op. Zapisuje kolekcję."""
        index = self._index_of(task_id)
        if index is not None:
            del self._tasks[index]
            logger.debug("Deleted task %s", task_id)
        self._save()

    def delete_tasks_at(self, positions: Iterable[int]) -> None:
        """
            Usuwa zadania z podanych pozycji `list_tasks()` (np. zaznaczone wiersze listy).

            Pozycje spoza zakresu i duplikaty są pomijane; zapis wykonywany raz.
        """
        doomed = {p for p in positions if 0 <= p < len(self._tasks)}
        if doomed:
            self._tasks = [t for i, t in enumerate(self._tasks) if i not in doomed]
            logger.debug("Deleted %d tasks by position", len(doomed))
        self._save()

    def toggle_completion(self, task_id: TaskId) -> None:
        """Odwraca `is_completed`; brak zadania to no-op. Zapisuje kolekcję."""
        index = self._index_of(task_id)
        if index is not None:
            task = self._tasks[index]
            self._tasks[index] = replace(task, is_completed=not task.is_completed)
            logger.debug("Toggled task %s", task_id)
        self._save()

    def update_task(self, task_id: TaskId, title: str, description: str, duration: DurationClass) -> None:
        """
            Podmienia pola treści zadania w miejscu (ta sama pozycja w kolekcji).

            `task_id`, `created_at` i `is_completed` pozostają bez zmian.
            Brak zadania to no-op. Zapisuje kolekcję.
        """
        index = self._index_of(task_id)
        if index is not None:
            self._tasks[index] = replace(
                self._tasks[index],
                title=title,
                description=description or "",
                duration=DurationClass(duration),
            )
            logger.debug("Updated task %s", task_id)
        self._save()

    def list_tasks(self) -> list[Task]:
        """Zwraca kopię kolekcji w kolejności dodania. Filtrowanie robi wywołujący."""
        return list(self._tasks)

    def get_task(self, task_id: TaskId) -> Task:
        """
            Zwraca pojedyncze zadanie o wskazanym identyfikatorze.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        index = self._index_of(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        return self._tasks[index]
