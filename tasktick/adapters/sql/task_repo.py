from __future__ import annotations
from typing import Iterable
import json
import logging
import sqlalchemy as db
from sqlalchemy.exc import SQLAlchemyError
from pathlib import Path
from tasktick.ports.task_repository import TaskRepository, STORAGE_KEY
from tasktick.domain.task import Task
from tasktick.domain.errors import PersistenceError
from tasktick.adapters.serialization import encode_tasks, decode_tasks

logger = logging.getLogger(__name__)


class SqlTaskRepository(TaskRepository):
    """
    Repozytorium w tabeli klucz-wartość `kv_store` (SQLAlchemy Core).
    Cała kolekcja to jeden wiersz: key="tasks", value=tablica rekordów JSON.
    """
    def __init__(self, url: str | Path, key: str = STORAGE_KEY) -> None:
        """
        url: np. 'sqlite:///data/tasks.db' lub Path do pliku (zostanie zrobiony URL)
        """
        self.db_dir: Path | None = None
        if isinstance(url, Path):
            self.db_dir = url.parent
            db_url = f"sqlite:///{url}"
        else:
            db_url = url

        self.key = key
        self.engine = db.create_engine(db_url, future=True)
        self.meta = db.MetaData()

        self.kv_store = db.Table(
            "kv_store",
            self.meta,
            db.Column("key", db.String, primary_key=True),
            db.Column("value", db.Text, nullable=False),  # JSON: lista rekordów zadań
        )

        self._schema_ready = False

    def _ensure_schema(self) -> None:
        # katalog i tabela tworzone przy pierwszym dostępie, nie w konstruktorze
        if self._schema_ready:
            return
        try:
            if self.db_dir is not None:
                self.db_dir.mkdir(parents=True, exist_ok=True)
            self.meta.create_all(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(str(e))
        self._schema_ready = True

    def load_all(self) -> list[Task]:
        self._ensure_schema()
        stmt = db.select(self.kv_store.c.value).where(self.kv_store.c.key == self.key)
        try:
            with self.engine.connect() as conn:
                raw = conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(str(e))
        if raw is None:
            return []
        try:
            tasks = decode_tasks(json.loads(raw))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            raise PersistenceError(f"kv_store[{self.key!r}]: {e}")
        logger.debug("Loaded %d tasks from kv_store[%r]", len(tasks), self.key)
        return tasks

    def save_all(self, tasks: Iterable[Task]) -> None:
        self._ensure_schema()
        records = encode_tasks(tasks)
        payload = json.dumps(records, ensure_ascii=False)
        # podmiana wiersza w jednej transakcji
        delete = db.delete(self.kv_store).where(self.kv_store.c.key == self.key)
        insert = db.insert(self.kv_store).values(key=self.key, value=payload)
        try:
            with self.engine.begin() as conn:
                conn.execute(delete)
                conn.execute(insert)
        except SQLAlchemyError as e:
            raise PersistenceError(str(e))
        logger.debug("Saved %d tasks to kv_store[%r]", len(records), self.key)
