from tasktick.adapters.memory.task_repo import InMemoryTaskRepository
from tasktick.adapters.system.id_provider_uuid import UuidIdProvider
from tasktick.services.task_store import TaskStore
from tasktick.domain.task import Task, TaskId
from tasktick.domain.enums import DurationClass, UrgencyLevel
from tasktick.domain.errors import TaskNotFoundError, PersistenceError
from tasktick.domain.urgency import urgency_level
import pytest
import uuid
from datetime import datetime, timezone, timedelta


class FakeIdProvider:
    def __init__(self):
        self.counter = 0
    def new_id(self) -> str:
        self.counter += 1
        return f"id-{self.counter}"

class FakeClock:
    def __init__(self, fixed: datetime | None = None):
        # jeśli nie podamy fixed, zwróci zawsze ten sam „teraz”
        self.fixed = fixed or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    def now(self) -> datetime:
        return self.fixed
    def advance(self, delta: timedelta) -> None:
        self.fixed = self.fixed + delta

class BrokenRepository:
    """Repozytorium, którego odczyt i zapis zawsze się nie udają."""
    def __init__(self):
        self.save_attempts = 0
    def load_all(self) -> list[Task]:
        raise PersistenceError("disk on fire")
    def save_all(self, tasks) -> None:
        self.save_attempts += 1
        raise PersistenceError("disk on fire")


def make_store(repo=None, clock=None) -> TaskStore:
    return TaskStore(repo or InMemoryTaskRepository(), FakeIdProvider(), clock or FakeClock())


def test_add_task_appends_and_returns_new_task():
    # Arrange
    clock = FakeClock()
    store = make_store(clock=clock)

    # Act
    task = store.add_task("Kup mleko", "2% bez laktozy", DurationClass.SHORT)

    # Assert
    items = store.list_tasks()
    assert items == [task]
    assert task.task_id == "id-1"
    assert task.title == "Kup mleko"
    assert task.description == "2% bez laktozy"
    assert task.duration == DurationClass.SHORT
    assert task.is_completed is False
    assert task.created_at == clock.fixed


def test_add_task_uses_real_clock_by_default():
    store = TaskStore(InMemoryTaskRepository())
    before = datetime.now(timezone.utc)
    task = store.add_task("A", "", DurationClass.MEDIUM)
    after = datetime.now(timezone.utc)

    assert task.created_at.tzinfo is not None
    assert before <= task.created_at <= after
    assert abs(after - task.created_at) < timedelta(seconds=5)


def test_list_preserves_insertion_order():
    store = make_store()
    a = store.add_task("A", "", DurationClass.LONG)
    b = store.add_task("B", "", DurationClass.SHORT)
    c = store.add_task("C", "", DurationClass.MEDIUM)

    assert [t.task_id for t in store.list_tasks()] == [a.task_id, b.task_id, c.task_id]


def test_list_returns_copy():
    store = make_store()
    store.add_task("A", "", DurationClass.SHORT)

    items = store.list_tasks()
    items.clear()

    assert len(store.list_tasks()) == 1


def test_every_mutation_saves_full_collection():
    repo = InMemoryTaskRepository()
    store = make_store(repo)

    a = store.add_task("A", "", DurationClass.SHORT)
    b = store.add_task("B", "", DurationClass.SHORT)
    store.toggle_completion(a.task_id)
    store.update_task(b.task_id, "B2", "", DurationClass.LONG)
    store.delete_task(a.task_id)

    assert repo.save_count == 5
    assert repo.load_all() == store.list_tasks()


def test_delete_is_idempotent():
    store = make_store()
    a = store.add_task("A", "", DurationClass.SHORT)
    b = store.add_task("B", "", DurationClass.SHORT)

    store.delete_task(a.task_id)
    after_first = store.list_tasks()
    store.delete_task(a.task_id)

    assert store.list_tasks() == after_first == [b]


def test_delete_tasks_at_positions():
    store = make_store()
    a = store.add_task("A", "", DurationClass.SHORT)
    b = store.add_task("B", "", DurationClass.SHORT)
    c = store.add_task("C", "", DurationClass.SHORT)

    store.delete_tasks_at([0, 2, 2, 99, -1])

    assert store.list_tasks() == [b]
    assert a not in store.list_tasks() and c not in store.list_tasks()


def test_toggle_twice_restores_state():
    store = make_store()
    t = store.add_task("A", "", DurationClass.SHORT)

    store.toggle_completion(t.task_id)
    assert store.get_task(t.task_id).is_completed is True

    store.toggle_completion(t.task_id)
    assert store.get_task(t.task_id).is_completed is False


def test_update_changes_only_content_fields():
    clock = FakeClock()
    store = make_store(clock=clock)
    t = store.add_task("A", "old", DurationClass.SHORT)
    other = store.add_task("B", "", DurationClass.SHORT)
    store.toggle_completion(t.task_id)
    clock.advance(timedelta(days=3))

    store.update_task(t.task_id, "A2", "new", DurationClass.LONG)

    updated = store.get_task(t.task_id)
    assert updated.task_id == t.task_id
    assert updated.created_at == t.created_at
    assert updated.is_completed is True
    assert updated.title == "A2"
    assert updated.description == "new"
    assert updated.duration == DurationClass.LONG
    # pozycja w kolekcji bez zmian
    assert [x.task_id for x in store.list_tasks()] == [t.task_id, other.task_id]


@pytest.mark.parametrize("operation", [
    lambda s: s.delete_task(TaskId("missing")),
    lambda s: s.toggle_completion(TaskId("missing")),
    lambda s: s.update_task(TaskId("missing"), "X", "", DurationClass.LONG),
])
def test_missing_id_is_noop(operation):
    store = make_store()
    t = store.add_task("A", "", DurationClass.SHORT)

    operation(store)

    assert store.list_tasks() == [t]


def test_get_raises_on_missing():
    store = make_store()
    with pytest.raises(TaskNotFoundError):
        store.get_task(TaskId("non-existent-id"))


def test_store_loads_existing_collection_on_construction():
    seed = [
        Task(task_id=TaskId("x"), title="X", duration=DurationClass.MEDIUM,
             created_at=datetime(2025, 1, 1, tzinfo=timezone.utc)),
    ]
    store = make_store(InMemoryTaskRepository(seed))
    assert store.list_tasks() == seed


def test_load_failure_starts_empty():
    store = make_store(BrokenRepository())
    assert store.list_tasks() == []


def test_save_failure_keeps_memory_state():
    repo = BrokenRepository()
    store = make_store(repo)

    t = store.add_task("A", "", DurationClass.SHORT)
    store.toggle_completion(t.task_id)

    assert repo.save_attempts == 2
    assert store.get_task(t.task_id).is_completed is True


def test_ids_are_never_reused():
    store = make_store()
    a = store.add_task("A", "", DurationClass.SHORT)
    store.delete_task(a.task_id)
    b = store.add_task("B", "", DurationClass.SHORT)
    assert a.task_id != b.task_id


def test_short_task_ages_to_red():
    clock = FakeClock()
    store = make_store(clock=clock)
    t = store.add_task("A", "", DurationClass.SHORT)

    assert urgency_level(t, clock.now()) == UrgencyLevel.NORMAL
    clock.advance(timedelta(hours=48))
    assert urgency_level(store.get_task(t.task_id), clock.now()) == UrgencyLevel.RED


def test_default_ids_are_unique_uuid4():
    store = TaskStore(InMemoryTaskRepository(), UuidIdProvider(), FakeClock())

    t1 = store.add_task("A", "", DurationClass.SHORT)
    t2 = store.add_task("B", "", DurationClass.SHORT)

    assert uuid.UUID(t1.task_id).version == 4
    assert uuid.UUID(t2.task_id).version == 4
    assert t1.task_id != t2.task_id
