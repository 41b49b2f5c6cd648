from tasktick.ports.task_repository import TaskRepository, STORAGE_KEY
from tasktick.domain.task import Task
from tasktick.domain.errors import PersistenceError
from tasktick.adapters.serialization import encode_tasks, decode_tasks
from pathlib import Path
from typing import Iterable
import json
import logging
import os

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Adapter plikowy JSON (adapters/jsonfile/task_repo.py).
# ==========================================================
# - Plik to dokument JSON z jednym kluczem: {"tasks": [rekord, rekord, ...]}.
# - Inne klucze w dokumencie są zachowywane przy zapisie.
# - Brak pliku = pusta kolekcja; uszkodzony plik = PersistenceError.
# - Zapis atomowy: plik tymczasowy ".swap" + fsync + os.replace.


class JsonTaskRepository(TaskRepository):
    def __init__(self, path: Path, key: str = STORAGE_KEY) -> None:
        """Inicjalizuje repozytorium JSON.
        Nie dotyka dysku; katalog nadrzędny powstaje przy pierwszym zapisie."""
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            raise PersistenceError(f"{self.path.name}: invalid JSON: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(str(e))
        if not isinstance(document, dict):
            raise PersistenceError(f"{self.path.name}: top-level value must be an object")
        return document

    def load_all(self) -> list[Task]:
        """Zwraca zadania zapisane pod kluczem `self.key`, w kolejności zapisu."""
        document = self._read_document()
        if self.key not in document:
            return []
        try:
            tasks = decode_tasks(document[self.key])
        except (KeyError, ValueError, TypeError) as e:
            raise PersistenceError(f"{self.path.name}: {e}")
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def _atomic_dump(self, document: dict) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".swap")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                logger.debug("Could not remove swap file %s", tmp)
            raise PersistenceError(str(e))

    def save_all(self, tasks: Iterable[Task]) -> None:
        """Zapisuje pełną kolekcję pod kluczem `self.key` (atomowo)."""
        try:
            document = self._read_document()
        except PersistenceError:
            # uszkodzony plik nadpisujemy w całości
            document = {}
        records = encode_tasks(tasks)
        document[self.key] = records
        self._atomic_dump(document)
        logger.debug("Saved %d tasks to %s", len(records), self.path)
