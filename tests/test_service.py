from datetime import datetime

import pytest
from freezegun import freeze_time

from taskdeck.core.errors import NotFound, ValidationError
from taskdeck.db.models import Priority
from taskdeck.schemas.tasks import TaskCreate, TaskQuery, TaskUpdate


def test_create_returns_fresh_task(service):
    task = service.create_task(TaskCreate(title="Buy milk", priority="low"))
    assert task.id is not None
    assert task.completed is False
    assert task.priority is Priority.low
    assert task.created_at == task.updated_at


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_create_rejects_blank_title_and_persists_nothing(service, store, title):
    with pytest.raises(ValidationError):
        service.create_task(TaskCreate(title=title))
    assert store.count() == 0


def test_list_without_filter_returns_everything_newest_first(service, make_task):
    with freeze_time("2024-01-01") as frozen:
        first = make_task("first")
        frozen.tick()
        second = make_task("second")
        frozen.tick()
        third = make_task("third")
    assert [t.id for t in service.list_tasks()] == [third.id, second.id, first.id]
    assert [t.id for t in service.list_tasks(TaskQuery())] == [third.id, second.id, first.id]


def test_list_ands_priority_and_category(service, make_task):
    both = make_task("both", priority="high", category="work")
    make_task("priority only", priority="high", category="home")
    make_task("category only", priority="low", category="work")
    result = service.list_tasks(TaskQuery(priority="high", category="work"))
    assert [t.id for t in result] == [both.id]


def test_list_by_completed(service, make_task):
    done = make_task("done")
    make_task("open")
    service.toggle_task_completion(done.id)
    assert [t.id for t in service.list_tasks(TaskQuery(completed=True))] == [done.id]
    assert [t.title for t in service.list_tasks(TaskQuery(completed=False))] == ["open"]


def test_update_partial(service, make_task):
    task = make_task("Original", description="keep me", category="work", due_date=datetime(2024, 12, 31))
    updated = service.update_task(TaskUpdate(id=task.id, title="Partially Updated", completed=True))
    assert updated.title == "Partially Updated"
    assert updated.completed is True
    assert updated.description == "keep me"
    assert updated.category == "work"
    assert updated.due_date == datetime(2024, 12, 31)


def test_update_null_clears_nullable_fields(service, make_task):
    task = make_task("t", description="d", category="c", due_date=datetime(2024, 1, 1))
    updated = service.update_task(TaskUpdate(id=task.id, description=None, category=None, due_date=None))
    assert (updated.description, updated.category, updated.due_date) == (None, None, None)
    assert updated.title == "t"


def test_update_without_fields_only_bumps_updated_at(service, make_task):
    with freeze_time("2024-01-01"):
        task = make_task("t", description="d")
        updated = service.update_task(TaskUpdate(id=task.id))
    assert updated.updated_at > task.updated_at
    assert (updated.title, updated.description, updated.priority) == (task.title, task.description, task.priority)


@pytest.mark.parametrize("field", ["title", "completed", "priority"])
def test_update_rejects_null_for_required_fields(service, make_task, field):
    task = make_task("t")
    with pytest.raises(ValidationError):
        service.update_task(TaskUpdate(id=task.id, **{field: None}))


def test_update_rejects_blank_title(service, make_task):
    task = make_task("t")
    with pytest.raises(ValidationError):
        service.update_task(TaskUpdate(id=task.id, title=" "))


def test_update_unknown_id(service):
    with pytest.raises(NotFound):
        service.update_task(TaskUpdate(id=404, title="x"))


def test_delete(service, store, make_task):
    task = make_task("t")
    assert service.delete_task(task.id).success is True
    assert store.find_by_id(task.id) is None
    assert service.delete_task(task.id).success is False


def test_delete_unknown_never_raises(service):
    assert service.delete_task(12345).success is False


def test_toggle_is_its_own_inverse(service, make_task):
    task = make_task("t")
    once = service.toggle_task_completion(task.id)
    twice = service.toggle_task_completion(task.id)
    assert once.completed is True
    assert twice.completed is task.completed


def test_toggle_unknown_id(service):
    with pytest.raises(NotFound):
        service.toggle_task_completion(99)


def test_list_categories(service, make_task):
    for category in ["work", None, "work", ""]:
        make_task("t", category=category)
    assert set(service.list_categories()) == {"work", ""}


def test_end_to_end(service):
    a = service.create_task(TaskCreate(title="Buy milk", priority="low"))
    assert [t.id for t in service.list_tasks()] == [a.id]

    service.toggle_task_completion(a.id)
    completed = service.list_tasks(TaskQuery(completed=True))
    assert [t.id for t in completed] == [a.id]
    assert completed[0].completed is True

    assert service.delete_task(a.id).success is True
    assert service.list_tasks() == []
