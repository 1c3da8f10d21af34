import pytest

from notekeeper.api.repositories import InMemoryRepository
from notekeeper.api.store import NoteStore
from notekeeper.errors import NotFoundError, ValidationError


@pytest.fixture()
def store():
    return NoteStore(InMemoryRepository())


class TestCreate:
    def test_assigns_id_and_created_at(self, store):
        note = store.create("Groceries", "Milk, eggs")
        assert note["id"] == 1
        assert note["title"] == "Groceries"
        assert note["content"] == "Milk, eggs"
        assert note["created_at"].tzinfo is not None

    def test_ids_are_unique(self, store):
        ids = {store.create(f"t{i}", "c")["id"] for i in range(5)}
        assert len(ids) == 5

    @pytest.mark.parametrize(
        "title,content,field",
        [("", "c", "title"), ("   ", "c", "title"), ("t", "", "content"), ("t", "\n\t", "content"), (None, "c", "title")],
    )
    def test_rejects_empty_fields(self, store, title, content, field):
        with pytest.raises(ValidationError) as exc_info:
            store.create(title, content)
        assert exc_info.value.field == field
        assert store.list() == []


class TestUpdate:
    def test_overwrites_title_and_content_only(self, store):
        created = store.create("Groceries", "Milk, eggs")
        updated = store.update(created["id"], "Groceries", "Milk, eggs, bread")
        assert updated["id"] == created["id"]
        assert updated["created_at"] == created["created_at"]
        assert updated["content"] == "Milk, eggs, bread"

    def test_missing_id(self, store):
        store.create("a", "b")
        with pytest.raises(NotFoundError) as exc_info:
            store.update(42, "t", "c")
        assert exc_info.value.note_id == 42
        assert len(store.list()) == 1

    def test_validation_comes_before_lookup(self, store):
        with pytest.raises(ValidationError):
            store.update(42, "", "c")

    def test_rejected_update_changes_nothing(self, store):
        created = store.create("a", "b")
        with pytest.raises(ValidationError):
            store.update(created["id"], "a", " ")
        assert store.get(created["id"]) == created


class TestDelete:
    def test_delete_then_delete_again(self, store):
        created = store.create("a", "b")
        store.delete(created["id"])
        assert created["id"] not in {n["id"] for n in store.list()}
        with pytest.raises(NotFoundError):
            store.delete(created["id"])
        with pytest.raises(NotFoundError):
            store.get(created["id"])


class TestList:
    def test_filter_trims_the_query(self, store):
        store.create("Groceries", "x")
        store.create("Work", "y")
        assert [n["title"] for n in store.list("  groc ")] == ["Groceries"]
        assert len(store.list("")) == 2

    def test_returned_notes_are_copies(self, store):
        store.create("a", "b")
        store.list()[0]["title"] = "changed"
        assert store.list()[0]["title"] == "a"
