from tasktick.ports.id_provider import IdProvider
from tasktick.domain.task import TaskId
import uuid

class UuidIdProvider(IdProvider):
    """Generuje identyfikatory zadań jako UUID4 w postaci tekstowej."""

    def new_id(self) -> TaskId:
        return TaskId(str(uuid.uuid4()))
