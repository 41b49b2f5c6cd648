from enum import Enum
from tasktick.domain.enums import UrgencyLevel

class TaskColor(Enum):
    RED = "[red]"
    ORANGE = "[dark_orange]"
    YELLOW = "[yellow]"
    GREEN = "[green]"
    DIM = "[dim]"
    RESET = "[/]"

    def __str__(self):
        return self.value


URGENCY_COLORS = {
    UrgencyLevel.NORMAL: TaskColor.GREEN,
    UrgencyLevel.YELLOW: TaskColor.YELLOW,
    UrgencyLevel.ORANGE: TaskColor.ORANGE,
    UrgencyLevel.RED: TaskColor.RED,
}


def urgency_color(level: UrgencyLevel) -> TaskColor:
    """Kolor wskaźnika pilności; Normal to neutralny/pozytywny zielony."""
    return URGENCY_COLORS[UrgencyLevel(level)]
