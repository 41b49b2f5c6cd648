"""Ustawienia aplikacji wczytywane ze zmiennych środowiskowych (prefiks TASKTICK_)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "TASKTICK"
BACKENDS = ("json", "sql", "memory")

Backend = Literal["json", "sql", "memory"]


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


@dataclass(frozen=True)
class Settings:
    home: Path
    backend: Backend = "json"
    data_file: Path | None = None
    log_level: str = "WARNING"

    @property
    def storage_path(self) -> Path:
        """Plik danych: jawnie podany albo domyślny dla wybranego backendu."""
        if self.data_file is not None:
            return self.data_file
        name = "tasks.db" if self.backend == "sql" else "tasks.json"
        return self.home / name


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Buduje `Settings` z podanego środowiska (domyślnie `os.environ`)."""
    env = os.environ if env is None else env

    raw_home = env.get(_k("HOME"), "").strip()
    home = Path(raw_home).expanduser() if raw_home else Path.home() / ".tasktick"

    backend = env.get(_k("BACKEND"), "json").strip().lower() or "json"
    if backend not in BACKENDS:
        logger.warning("Unknown %s=%r, falling back to 'json'", _k("BACKEND"), backend)
        backend = "json"

    raw_file = env.get(_k("FILE"), "").strip()
    data_file = Path(raw_file).expanduser() if raw_file else None

    log_level = env.get(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

    return Settings(home=home, backend=backend, data_file=data_file, log_level=log_level)
