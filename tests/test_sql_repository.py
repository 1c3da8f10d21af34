import pytest
from sqlalchemy import text

from notekeeper.api.db import SQLRepository
from notekeeper.api.repositories import ListQuery
from notekeeper.errors import TransportError


@pytest.fixture()
def repo(tmp_path):
    r = SQLRepository(f"sqlite:///{tmp_path / 'nested' / 'notes.db'}", pool_size=3, pool_timeout=1.0)
    yield r
    r.close()


def drop_notes_table(repo: SQLRepository) -> None:
    with repo.engine.begin() as conn:
        conn.execute(text("DROP TABLE notes"))


class TestSQLRepository:
    def test_creates_database_directory_and_table(self, tmp_path, repo):
        assert (tmp_path / "nested" / "notes.db").exists()
        assert repo.list() == []

    def test_pool_is_bounded(self, repo):
        assert repo.engine.pool.size() == 3

    def test_round_trip_keeps_created_at_timezone(self, repo):
        created = repo.create("Groceries", "Milk, eggs")
        fetched = repo.get(created["id"])
        assert fetched == created
        assert fetched["created_at"].tzinfo is not None

    def test_update_and_delete_missing(self, repo):
        assert repo.update(99, "t", "c") is None
        assert repo.delete(99) is False

    def test_filter_by_title(self, repo):
        repo.create("Alpha", "a")
        repo.create("beta", "b")
        titles = [n["title"] for n in repo.list(ListQuery(title="ALP"))]
        assert titles == ["Alpha"]

    def test_connections_are_returned_to_the_pool(self, repo):
        note = repo.create("t", "c")
        repo.update(note["id"], "t2", "c2")
        repo.list()
        assert repo.engine.pool.checkedout() == 0

        drop_notes_table(repo)
        with pytest.raises(TransportError):
            repo.create("t", "c")
        assert repo.engine.pool.checkedout() == 0

    def test_unreachable_database_raises_transport_error(self, tmp_path):
        # A directory cannot be opened as a database file
        (tmp_path / "dir.db").mkdir()
        with pytest.raises(TransportError):
            SQLRepository(f"sqlite:///{tmp_path / 'dir.db'}")


class TestStorageFailureResponse:
    def test_database_failure_is_a_generic_server_error(self, sql_client):
        drop_notes_table(sql_client.app.state.note_store.repository)

        res = sql_client.get("/notes")
        assert res.status_code == 500
        body = res.json()
        assert body["error"] == "ServerError"
        assert body["message"] == "Internal server error"

        res_post = sql_client.post("/notes", json={"title": "t", "content": "c"})
        assert res_post.status_code == 500
