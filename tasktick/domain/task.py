from typing import NewType
from datetime import datetime
from dataclasses import dataclass
from tasktick.domain.enums import DurationClass

TaskId = NewType("TaskId", str)

@dataclass(frozen=True)
class Task():
    """
    Model domenowy pojedynczego zadania; niemutowalny; klasa czasu trwania z zamkniętego
    zestawu wartości; czas utworzenia w UTC dostarczany przez magazyn (port Clock)
    """
    task_id: TaskId
    title: str
    duration: DurationClass
    created_at: datetime
    description: str = ""
    is_completed: bool = False



### COMMENTS
# ======================================
# Tożsamość a treść zadania
# ======================================
# `task_id` i `created_at` są ustawiane raz, przy tworzeniu w TaskStore.add_task().
# Pozostałe pola (title, description, duration, is_completed) można zmieniać,
# ale tylko przez operacje magazynu: każda zmiana to nowa instancja
# (dataclasses.replace), więc id i czas utworzenia przechodzą bez zmian.
#
# Poziom pilności (UrgencyLevel) NIE jest polem modelu: liczy go
# tasktick.domain.urgency na podstawie `duration`, `created_at` i podanego "teraz".
