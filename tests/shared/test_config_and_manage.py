"""Tests for environment settings and the management CLI."""

from manage import drop_database, issue_token, main, setup_database
from shared.auth import decode_access_token
from shared.config import Settings
from shared.db import PRODUCTS


class TestSettings:
    def test_defaults_follow_the_environment(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_DIR", raising=False)

        settings = Settings.from_env()

        assert settings.env == "production"
        assert settings.log_level == "INFO"
        assert settings.log_dir == "logs"
        assert settings.is_development is False

    def test_test_environment_logs_to_console_only(self, monkeypatch):
        monkeypatch.setenv("ENV", "test")
        monkeypatch.delenv("LOG_DIR", raising=False)

        assert Settings.from_env().log_dir is None

    def test_cors_origins_are_split(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://shop.example, https://admin.example,")

        assert Settings.from_env().cors_origins == ["https://shop.example", "https://admin.example"]


class TestManage:
    def test_setup_and_drop_database(self, database):
        database[PRODUCTS].drop()

        setup_database(database)
        assert "sku_1" in database[PRODUCTS].index_information()

        database[PRODUCTS].insert_one({"_id": "p1"})
        drop_database(database)
        assert database[PRODUCTS].count_documents({}) == 0

    def test_issue_token(self):
        token = issue_token("employee-1", role="employee", name="Warehouse")

        actor = decode_access_token(token)
        assert (actor.id, actor.role, actor.name) == ("employee-1", "employee", "Warehouse")

    def test_issue_token_command(self, capsys):
        main(["issue-token", "--user-id", "admin-1", "--role", "admin"])

        token = capsys.readouterr().out.strip()
        assert decode_access_token(token).is_admin
