

### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Repozytoria (adaptery):
#     * mapują błędy techniczne (OSError, JSONDecodeError, SQLAlchemyError) na PersistenceError
#
# - Magazyn zadań (TaskStore):
#     * PersistenceError przy odczycie -> pusta kolekcja, przy zapisie -> log i dalej
#     * brak zadania przy delete/update/toggle to no-op, nie błąd
#     * get_task() bez wyniku -> TaskNotFoundError
#
# - UI (CLI):
#     * waliduje tytuł i rzuca TaskValidationError
#     * łapie DomainError i wyświetla przyjazny komunikat


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio: używaj klas pochodnych.
    """

class TaskValidationError(DomainError):
    """Rzucany, gdy dane wejściowe nie spełniają reguł dla zadania (np. pusty tytuł).
    Zgłaszany przez warstwę prezentacji, zanim wywoła `TaskStore.add_task()`.
    Zawiera nazwę pola (`field`) i komunikat (`message`).
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class TaskNotFoundError(DomainError):
    """Rzucany, gdy żądane zadanie nie istnieje w magazynie.
    Dotyczy tylko odczytu pojedynczego zadania (`get_task()`); operacje
    modyfikujące traktują brak zadania jako no-op.
    """
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Zadanie o ID {self.task_id} nie istnieje."


class PersistenceError(DomainError):
    """Rzucany przez adaptery repozytoriów, gdy odczyt lub zapis kolekcji się nie powiódł
    (brak dostępu do pliku, uszkodzony JSON, błąd bazy danych).
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd trwałości danych: {self.message}"
