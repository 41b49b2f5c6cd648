from tasktick.domain.task import Task
from typing import Iterable

### COMMENTS
# ==========================================================
# Adapter pamięciowy dla repozytorium zadań (adapters/memory/task_repo.py).
# ==========================================================
# Ten moduł zawiera implementację portu `TaskRepository` w pamięci.
#
# - Służy do testów i trybu bez trwałego zapisu (--backend memory).
# - Przechowuje migawkę ostatnio zapisanej kolekcji (kopię listy, nie referencję).
# - `save_count` pozwala testom sprawdzić, że każda mutacja zapisuje kolekcję.



class InMemoryTaskRepository:
    """
        Repozytorium z opcjonalną kolekcją startowych zadań.
        :param initial: Iterable z obiektami Task zwracanymi przez pierwszy `load_all()`.
    """
    def __init__(self, initial: Iterable[Task] | None = None) -> None:
        self._snapshot: list[Task] = list(initial or [])
        self.save_count = 0

    def load_all(self) -> list[Task]:
        """Zwraca kopię ostatnio zapisanej kolekcji."""
        return list(self._snapshot)

    def save_all(self, tasks: Iterable[Task]) -> None:
        """Zastępuje migawkę pełną kolekcją."""
        self._snapshot = list(tasks)
        self.save_count += 1
