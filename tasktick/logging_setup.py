from __future__ import annotations

import logging
import sys


def setup_logging(level: int | str = logging.WARNING) -> None:
    """
    Konfiguruje logowanie na stderr (stdout zostaje dla wyników CLI).
    Wywołać RAZ, na starcie procesu.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    # bez duplikatów przy ponownym wywołaniu (np. testy CLI)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    # biblioteki tylko od WARNING
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
