import pytest
from fastapi.testclient import TestClient

from notekeeper.api.main import create_app
from notekeeper.api.settings import Settings


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(backend: str, tmp_path) -> Settings:
    return Settings(
        persistence_backend=backend,
        database_url=f"sqlite:///{tmp_path / 'notes.db'}",
        db_pool_size=2,
        db_pool_timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture(params=["memory", "sql"])
def client(request, tmp_path):
    # Every API test runs against both storage backends
    app = create_app(make_settings(request.param, tmp_path))
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sql_client(tmp_path):
    app = create_app(make_settings("sql", tmp_path))
    with TestClient(app) as c:
        yield c
