from tasktick.domain.task import Task, TaskId
from tasktick.domain.enums import DurationClass
from typing import Iterable, Any
from datetime import datetime, timezone


### COMMENTS
# ==========================================================
# Wspólny format rekordu zadania dla adapterów trwałych (JSON, SQL).
# ==========================================================
# Rekord:
#   {"task_id": str, "title": str, "description": str, "duration": "Short"|"Medium"|"Long",
#    "is_completed": bool, "created_at": "2025-01-01T12:00:00Z"}
# - Czas zawsze w UTC z sufiksem 'Z'.
# - Dekodowanie rzuca KeyError / ValueError / TypeError: adapter mapuje je na PersistenceError.


def encode_dt(dt: datetime) -> str:
    # ISO 8601 w UTC z sufiksem 'Z'
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def decode_dt(s: str) -> datetime:
    """Parsuje datę w formacie ISO8601 zakończoną literą 'Z' (UTC)."""
    if not isinstance(s, str) or not s.endswith("Z"):
        raise ValueError("created_at must be ISO8601 UTC with 'Z'")
    return datetime.fromisoformat(s.replace("Z", "+00:00")).astimezone(timezone.utc)


def encode_task(task: Task) -> dict[str, Any]:
    return {
        "task_id": str(task.task_id),
        "title": task.title,
        "description": task.description,
        "duration": DurationClass(task.duration).value,  # enum -> str
        "is_completed": bool(task.is_completed),
        "created_at": encode_dt(task.created_at),
    }


def decode_task(row: dict[str, Any]) -> Task:
    if not isinstance(row, dict):
        raise TypeError(f"task record must be an object, got {type(row).__name__}")
    completed = row.get("is_completed", False)
    if not isinstance(completed, bool):
        raise ValueError("is_completed must be a boolean")
    description = row.get("description", "")
    for name, value in (("task_id", row["task_id"]), ("title", row["title"]), ("description", description)):
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    return Task(
        task_id=TaskId(row["task_id"]),
        title=row["title"],
        description=description,
        duration=DurationClass(row["duration"]),  # str -> enum, ValueError gdy nieznany
        is_completed=completed,
        created_at=decode_dt(row["created_at"]),
    )


def encode_tasks(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    return [encode_task(t) for t in tasks]


def decode_tasks(rows: Any) -> list[Task]:
    """Dekoduje listę rekordów; duplikat `task_id` traktowany jak uszkodzone dane."""
    if not isinstance(rows, list):
        raise TypeError(f"task collection must be a list, got {type(rows).__name__}")
    tasks: list[Task] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        task = decode_task(row)
        if task.task_id in seen:
            raise ValueError(f"record {index}: duplicate task_id '{task.task_id}'")
        seen.add(task.task_id)
        tasks.append(task)
    return tasks
