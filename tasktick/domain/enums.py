from enum import Enum

class DurationClass(str, Enum):
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"

    def __str__(self):
        return self.value


class UrgencyLevel(str, Enum):
    NORMAL = "Normal"
    YELLOW = "Yellow"
    ORANGE = "Orange"
    RED = "Red"

    def __str__(self):
        return self.value
