from datetime import datetime, timedelta
from tasktick.domain.enums import DurationClass, UrgencyLevel
from tasktick.domain.task import Task


### COMMENTS
# ==========================================================
# Wyliczanie pilności zadania (domain/urgency.py).
# ==========================================================
# - Czysta funkcja: wejście to klasa czasu trwania + liczba pełnych dni od utworzenia.
# - "Teraz" zawsze przekazywane jawnie (testy bez mockowania zegara).
# - Wynik nie jest nigdzie zapamiętywany: liczymy przy każdym odczycie.
# - Progi: dni >= próg => co najmniej ten poziom; sprawdzamy od Red w dół.


class UrgencyThresholds:
    """Progi pilności w dniach dla każdej klasy czasu trwania."""

    class Short:
        YELLOW = 1
        RED = 2

    class Medium:
        YELLOW = 2
        ORANGE = 3
        RED = 4

    class Long:
        YELLOW = 4
        ORANGE = 5
        RED = 6


# kolejność ważna: najwyższy poziom pierwszy, Short nie ma progu Orange
_LADDERS: dict[DurationClass, tuple[tuple[UrgencyLevel, int], ...]] = {
    DurationClass.SHORT: (
        (UrgencyLevel.RED, UrgencyThresholds.Short.RED),
        (UrgencyLevel.YELLOW, UrgencyThresholds.Short.YELLOW),
    ),
    DurationClass.MEDIUM: (
        (UrgencyLevel.RED, UrgencyThresholds.Medium.RED),
        (UrgencyLevel.ORANGE, UrgencyThresholds.Medium.ORANGE),
        (UrgencyLevel.YELLOW, UrgencyThresholds.Medium.YELLOW),
    ),
    DurationClass.LONG: (
        (UrgencyLevel.RED, UrgencyThresholds.Long.RED),
        (UrgencyLevel.ORANGE, UrgencyThresholds.Long.ORANGE),
        (UrgencyLevel.YELLOW, UrgencyThresholds.Long.YELLOW),
    ),
}


def days_elapsed(created_at: datetime, now: datetime) -> int:
    """Liczba pełnych dni między `created_at` a `now`.
    Gdy zegar cofnął się przed czas utworzenia, zwraca 0."""
    delta = now - created_at
    if delta < timedelta(0):
        return 0
    return delta.days


def urgency_for(duration: DurationClass, days: int) -> UrgencyLevel:
    """
        Zwraca poziom pilności dla klasy czasu trwania i liczby dni od utworzenia.

        :param duration: Klasa czasu trwania zadania.
        :param days: Liczba pełnych dni (ujemne traktowane jak 0).
        :return: Najwyższy poziom, którego próg został osiągnięty, albo `Normal`.
    """
    days = max(0, days)
    for level, threshold in _LADDERS[DurationClass(duration)]:
        if days >= threshold:
            return level
    return UrgencyLevel.NORMAL


def urgency_level(task: Task, now: datetime) -> UrgencyLevel:
    """Poziom pilności zadania w chwili `now`."""
    return urgency_for(task.duration, days_elapsed(task.created_at, now))
