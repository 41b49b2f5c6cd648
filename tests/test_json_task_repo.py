import json
import pytest
from datetime import datetime, timezone
from tasktick.adapters.jsonfile.task_repo import JsonTaskRepository
from tasktick.services.task_store import TaskStore
from tasktick.domain.task import Task, TaskId
from tasktick.domain.enums import DurationClass
from tasktick.domain.errors import PersistenceError


@pytest.fixture
def tasks_file(tmp_path):
    return tmp_path / "data" / "tasks.json"


def make_task(task_id: str, title: str = "Test", completed: bool = False) -> Task:
    return Task(
        task_id=TaskId(task_id),
        title=title,
        description="desc",
        duration=DurationClass.MEDIUM,
        created_at=datetime(2025, 1, 1, 12, 30, tzinfo=timezone.utc),
        is_completed=completed,
    )


def test_missing_file_loads_empty(tasks_file):
    repo = JsonTaskRepository(tasks_file)
    assert repo.load_all() == []
    assert not tasks_file.parent.exists()


def test_save_and_load_preserves_order_and_fields(tasks_file):
    repo = JsonTaskRepository(tasks_file)
    tasks = [make_task("b", "B"), make_task("a", "A", completed=True), make_task("c", "C")]

    repo.save_all(tasks)

    assert JsonTaskRepository(tasks_file).load_all() == tasks


def test_file_format_uses_single_key(tasks_file):
    JsonTaskRepository(tasks_file).save_all([make_task("a")])

    document = json.loads(tasks_file.read_text(encoding="utf-8"))
    assert list(document) == ["tasks"]
    record = document["tasks"][0]
    assert record == {
        "task_id": "a",
        "title": "Test",
        "description": "desc",
        "duration": "Medium",
        "is_completed": False,
        "created_at": "2025-01-01T12:30:00Z",
    }


def test_other_keys_survive_save(tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(json.dumps({"settings": {"theme": "dark"}}), encoding="utf-8")

    JsonTaskRepository(tasks_file).save_all([make_task("a")])

    document = json.loads(tasks_file.read_text(encoding="utf-8"))
    assert document["settings"] == {"theme": "dark"}


@pytest.mark.parametrize("content", [
    "{not json",
    "[]",
    json.dumps({"tasks": {"a": 1}}),
    json.dumps({"tasks": [{"task_id": "a"}]}),
    json.dumps({"tasks": [{"task_id": "a", "title": "A", "duration": "Huge",
                           "created_at": "2025-01-01T00:00:00Z"}]}),
    json.dumps({"tasks": [{"task_id": "a", "title": "A", "duration": "Short",
                           "created_at": "2025-01-01T00:00:00"}]}),
    json.dumps({"tasks": [{"task_id": 1, "title": "A", "duration": "Short",
                           "created_at": "2025-01-01T00:00:00Z"}]}),
    json.dumps({"tasks": [{"task_id": "a", "title": None, "duration": "Short",
                           "created_at": "2025-01-01T00:00:00Z"}]}),
    json.dumps({"tasks": [{"task_id": "a", "title": "A", "description": 5, "duration": "Short",
                           "created_at": "2025-01-01T00:00:00Z"}]}),
])
def test_malformed_data_raises_persistence_error(tasks_file, content):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(content, encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonTaskRepository(tasks_file).load_all()


def test_duplicate_ids_are_malformed(tasks_file):
    repo = JsonTaskRepository(tasks_file)
    repo.save_all([make_task("a"), make_task("a")])
    with pytest.raises(PersistenceError):
        repo.load_all()


def test_store_falls_back_to_empty_on_malformed_file(tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text("garbage", encoding="utf-8")

    store = TaskStore(JsonTaskRepository(tasks_file))
    assert store.list_tasks() == []

    # pierwszy zapis nadpisuje uszkodzony plik
    store.add_task("A", "", DurationClass.SHORT)
    assert len(JsonTaskRepository(tasks_file).load_all()) == 1


def test_reload_is_fixed_point(tasks_file):
    store = TaskStore(JsonTaskRepository(tasks_file))
    a = store.add_task("A", "first", DurationClass.SHORT)
    store.add_task("B", "", DurationClass.LONG)
    store.toggle_completion(a.task_id)

    first = TaskStore(JsonTaskRepository(tasks_file)).list_tasks()
    JsonTaskRepository(tasks_file).save_all(first)
    second = TaskStore(JsonTaskRepository(tasks_file)).list_tasks()

    assert first == second == store.list_tasks()


def test_no_swap_file_left_behind(tasks_file):
    JsonTaskRepository(tasks_file).save_all([make_task("a")])
    assert not tasks_file.with_suffix(".json.swap").exists()
