"""Tests for the in-memory TaskStore."""

import uuid

import pytest

from taskboard.domain.task import TaskPriority, TaskStatus


@pytest.mark.unit
class TestCreate:
    """Tests for TaskStore.create."""

    def test_create_fills_defaults(self, task_store):
        """Absent optional fields take their defaults."""
        task = task_store.create({"title": "Write report"})

        assert task.title == "Write report"
        assert task.description == ""
        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.MEDIUM
        assert task.due_date is None
        assert task.tags == []
        assert task.created_at == task.updated_at == "2025-01-15T12:00:00.000000Z"

    def test_create_keeps_given_fields(self, task_store):
        """Fields provided by the caller are stored as given."""
        task = task_store.create(
            {
                "title": "Ship",
                "description": "Release 1.0",
                "status": TaskStatus.IN_PROGRESS,
                "priority": TaskPriority.HIGH,
                "due_date": "2025-12-31T23:59:59.000Z",
                "tags": ["Release", "urgent"],
            }
        )

        assert task.status == TaskStatus.IN_PROGRESS
        assert task.priority == TaskPriority.HIGH
        assert task.due_date == "2025-12-31T23:59:59.000Z"
        assert task.tags == ["Release", "urgent"]

    def test_create_generates_unique_uuid_ids(self, task_store):
        """Every created task gets a distinct UUID."""
        ids = {task_store.create({"title": f"Task {i}"}).id for i in range(20)}

        assert len(ids) == 20
        for task_id in ids:
            uuid.UUID(task_id)

    def test_create_does_not_alias_input_tags(self, task_store):
        """Mutating the caller's tag list after create does not change the store."""
        tags = ["a"]
        task = task_store.create({"title": "T", "tags": tags})
        tags.append("b")

        assert task_store.find_by_id(task.id).tags == ["a"]

    def test_create_tolerates_missing_title(self, task_store):
        """The store does no validation of its own."""
        task = task_store.create({})

        assert task.title == ""
        assert len(task_store) == 1


@pytest.mark.unit
class TestFindById:
    """Tests for TaskStore.find_by_id."""

    def test_find_returns_equal_copy(self, task_store):
        """A created task is found and equals the create result."""
        created = task_store.create({"title": "Find me", "tags": ["x"]})

        assert task_store.find_by_id(created.id) == created

    def test_find_unknown_returns_none(self, task_store):
        """Unknown ids give None rather than an exception."""
        assert task_store.find_by_id("00000000-0000-0000-0000-000000000000") is None

    def test_returned_task_is_a_copy(self, task_store):
        """Mutating a returned task never affects stored state."""
        created = task_store.create({"title": "Original", "tags": ["keep"]})

        found = task_store.find_by_id(created.id)
        found.title = "Changed"
        found.tags.append("leak")

        stored = task_store.find_by_id(created.id)
        assert stored.title == "Original"
        assert stored.tags == ["keep"]

    def test_all_returns_copies_in_insertion_order(self, task_store):
        """all() lists tasks oldest first and hands out copies."""
        first = task_store.create({"title": "First"})
        second = task_store.create({"title": "Second"})

        tasks = task_store.all()
        tasks[0].tags.append("leak")

        assert [t.id for t in tasks] == [first.id, second.id]
        assert task_store.find_by_id(first.id).tags == []


@pytest.mark.unit
class TestUpdate:
    """Tests for TaskStore.update."""

    def test_update_overwrites_only_present_fields(self, task_store, clock):
        """Fields not in the patch keep their value."""
        created = task_store.create({"title": "Original", "description": "Keep this", "priority": "low"})
        clock.advance(seconds=5)

        updated = task_store.update(created.id, {"priority": TaskPriority.HIGH})

        assert updated.title == "Original"
        assert updated.description == "Keep this"
        assert updated.priority == TaskPriority.HIGH
        assert updated.updated_at == "2025-01-15T12:00:05.000000Z"
        assert updated.created_at == created.created_at

    def test_empty_patch_changes_only_updated_at(self, task_store, clock):
        """update(id, {}) re-stamps updated_at and nothing else."""
        created = task_store.create({"title": "Same", "tags": ["a"], "due_date": "2025-02-01T00:00:00Z"})
        clock.advance(seconds=1)

        updated = task_store.update(created.id, {})

        assert updated.updated_at != created.updated_at
        assert updated.model_dump(exclude={"updated_at"}) == created.model_dump(exclude={"updated_at"})

    def test_explicit_none_clears_due_date(self, task_store):
        """A present-but-null due_date clears it."""
        created = task_store.create({"title": "Due", "due_date": "2025-02-01T00:00:00Z"})

        updated = task_store.update(created.id, {"due_date": None})

        assert updated.due_date is None

    def test_unknown_fields_are_ignored(self, task_store):
        """Immutable and unknown keys in the patch have no effect."""
        created = task_store.create({"title": "T"})

        updated = task_store.update(created.id, {"id": "hijack", "created_at": "1999", "color": "red"})

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert task_store.find_by_id(created.id) is not None

    def test_update_unknown_returns_none(self, task_store):
        """Updating an unknown id gives None."""
        assert task_store.update("missing", {"title": "x"}) is None


@pytest.mark.unit
class TestDelete:
    """Tests for TaskStore.delete and clear."""

    def test_delete_is_true_only_once(self, task_store):
        """Deleting twice returns True then False."""
        created = task_store.create({"title": "Delete me"})

        assert task_store.delete(created.id) is True
        assert task_store.delete(created.id) is False
        assert task_store.find_by_id(created.id) is None

    def test_clear_removes_everything(self, task_store):
        """clear() empties the store."""
        for i in range(3):
            task_store.create({"title": f"Task {i}"})

        task_store.clear()

        assert len(task_store) == 0
        assert task_store.all() == []


@pytest.mark.unit
class TestBulkOperations:
    """Tests for bulk delete and bulk status update."""

    def test_bulk_delete_partitions_found_and_missing(self, task_store):
        """Two valid ids and one unknown id."""
        a = task_store.create({"title": "A"})
        b = task_store.create({"title": "B"})
        missing = str(uuid.uuid4())

        result = task_store.bulk_delete([a.id, missing, b.id])

        assert result.deleted == [a.id, b.id]
        assert result.not_found == [missing]
        assert result.deleted_count == 2
        assert task_store.find_by_id(a.id) is None
        assert task_store.find_by_id(b.id) is None

    def test_bulk_delete_duplicate_id_is_not_found_second_time(self, task_store):
        """A repeated id is deleted once, then reported missing."""
        a = task_store.create({"title": "A"})

        result = task_store.bulk_delete([a.id, a.id])

        assert result.deleted == [a.id]
        assert result.not_found == [a.id]
        assert result.deleted_count == 1

    def test_bulk_update_status_restamps_each_task(self, task_store, clock):
        """Updated tasks get the new status and a fresh updated_at."""
        a = task_store.create({"title": "A"})
        b = task_store.create({"title": "B"})
        clock.advance(minutes=1)

        result = task_store.bulk_update_status([a.id, "missing", b.id], TaskStatus.COMPLETED)

        assert result.updated_count == 2
        assert result.not_found == ["missing"]
        assert [t.id for t in result.updated] == [a.id, b.id]
        for task in result.updated:
            assert task.status == TaskStatus.COMPLETED
            assert task.updated_at == "2025-01-15T12:01:00.000000Z"
        assert task_store.find_by_id(a.id).status == TaskStatus.COMPLETED

    def test_bulk_update_counts_duplicates_each_time(self, task_store):
        """A repeated id is updated and counted once per occurrence."""
        a = task_store.create({"title": "A"})

        result = task_store.bulk_update_status([a.id, a.id], TaskStatus.IN_PROGRESS)

        assert result.updated_count == 2
        assert result.not_found == []


@pytest.mark.unit
def test_seed_sample_tasks(task_store):
    """Seeding adds the four demonstration tasks."""
    seeded = task_store.seed_sample_tasks()

    assert len(seeded) == 4
    assert len(task_store) == 4
    assert {t.status for t in seeded} == {TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED}
    assert sum(1 for t in seeded if t.due_date is None) == 1
