import logging

from notekeeper.api.settings import get_settings
from notekeeper.api.utils import configure_logging
from notekeeper.client.settings import get_client_settings


class TestServerSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PERSISTENCE_BACKEND", "DATABASE_URL", "DB_POOL_SIZE", "DB_POOL_TIMEOUT", "CORS_ALLOW_ORIGINS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        s = get_settings()
        assert s.persistence_backend == "sql"
        assert s.database_url == "sqlite:///./data/notes.db"
        assert s.db_pool_size == 5
        assert s.cors_allow_origins == ["*"]
        assert s.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "Memory")
        monkeypatch.setenv("DATABASE_URL", "mysql+pymysql://user:secret@db/notes")
        monkeypatch.setenv("DB_POOL_SIZE", "3")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.database_url == "mysql+pymysql://user:secret@db/notes"
        assert s.db_pool_size == 3
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert s.log_level == "DEBUG"

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "mongo")
        monkeypatch.setenv("DB_POOL_SIZE", "zero")
        monkeypatch.setenv("DB_POOL_TIMEOUT", "-1")
        s = get_settings()
        assert s.persistence_backend == "sql"
        assert s.db_pool_size == 5
        assert s.db_pool_timeout == 30.0


class TestClientSettings:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("NOTES_API_URL", "https://notes.example/")
        monkeypatch.setenv("NOTES_API_TIMEOUT", "2.5")
        monkeypatch.delenv("NOTIFICATION_SECONDS", raising=False)
        s = get_client_settings()
        assert s.base_url == "https://notes.example"
        assert s.timeout == 2.5
        assert s.notification_seconds == 3.0


class TestLogging:
    def test_package_logger_has_one_handler_and_does_not_propagate(self):
        configure_logging("DEBUG")
        configure_logging("WARNING")
        logger = logging.getLogger("notekeeper")
        assert logger.propagate is False
        assert logger.level == logging.WARNING
        assert len([h for h in logger.handlers if getattr(h, "_notekeeper", False)]) == 1
