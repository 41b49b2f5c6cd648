from typing import Protocol, Iterable
from tasktick.domain.task import Task


### COMMENTS
# ==========================================================
# Kontrakt repozytorium zadań (ports/task_repository.py).
# ==========================================================
# Ten moduł definiuje interfejs (Protocol) dla warstwy trwałości kolekcji Tasków.
# - Jest niezależny od technologii (pamięć, plik JSON, baza SQL).
# - Repozytorium zapisuje i odczytuje CAŁĄ kolekcję naraz, pod jednym kluczem ("tasks").
# - Adaptery mają obowiązek mapować błędy technologiczne na PersistenceError.
# - Repozytorium nie zawiera logiki biznesowej: kolejność i unikalność pilnuje TaskStore.

STORAGE_KEY = "tasks"


class TaskRepository(Protocol):
    """Interfejs repozytorium do zapisu i odczytu kolekcji obiektów `Task`.

    Adaptery (implementacje) muszą:
    - zachować kolejność zadań przy zapisie i odczycie,
    - zapisywać kolekcję w całości (bez zapisu przyrostowego),
    - mapować błędy technologiczne na `PersistenceError`.
    """

    def load_all(self) -> list[Task]:
        """Odczytuje zapisaną kolekcję.

        Zwraca:
            list[Task]: Zadania w kolejności zapisu; pusta lista, gdy nic jeszcze nie zapisano.

        Wyjątki domenowe:
            PersistenceError: Gdy danych nie da się odczytać lub są uszkodzone.
        """

    def save_all(self, tasks: Iterable[Task]) -> None:
        """Zapisuje pełną kolekcję, zastępując poprzednią.

        Wyjątki domenowe:
            PersistenceError: Gdy zapis się nie powiódł.

        Uwagi:
            Operacja powinna być atomowa (po błędzie zostaje poprzednia wersja).
        """
