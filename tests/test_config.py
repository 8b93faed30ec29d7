"""Tests for settings loading and logging setup."""

import logging

from trellis.config import Settings, TrelloConfig, WebhooksConfig, load_settings
from trellis.service import TrelloService, create_service
from trellis.utils.logging import _filter_sensitive, get_logger, setup_logging


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.trello.base_url == "https://api.trello.com/1"
        assert settings.webhooks.port == 8420
        assert settings.webhooks.path == "/webhooks/trello"
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TRELLIS_TRELLO__API_KEY", "env-key")
        monkeypatch.setenv("TRELLIS_WEBHOOKS__PORT", "9000")
        settings = Settings()
        assert settings.trello.api_key == "env-key"
        assert settings.webhooks.port == 9000

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("trello:\n  token: yaml-token\nwebhooks:\n  port: 9100\n")
        settings = load_settings(path)
        assert settings.trello.token == "yaml-token"
        assert settings.webhooks.port == 9100
        assert isinstance(settings.webhooks, WebhooksConfig)

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("trello:\n  token: yaml-token\n  api_key: yaml-key\n")
        monkeypatch.setenv("TRELLIS_TRELLO__TOKEN", "env-token")
        settings = load_settings(path)
        assert settings.trello.token == "env-token"
        assert settings.trello.api_key == "yaml-key"

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.trello == TrelloConfig()


class TestCreateService:
    async def test_default_dispatcher(self):
        service = create_service(Settings())
        assert isinstance(service, TrelloService)
        assert not service.event_dispatcher.has_listeners()
        await service.close()


class TestLogging:
    def test_setup_logging_sets_level(self):
        setup_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level >= logging.WARNING
        setup_logging(level="INFO")

    def test_get_logger(self):
        assert get_logger("trellis.test") is not None

    def test_sensitive_values_redacted(self):
        event = {"event": "fetch", "url": "/1/cards/C1?key=abc123&token=xyz"}
        result = _filter_sensitive(None, "info", event)
        assert "abc123" not in result["url"]
        assert "xyz" not in result["url"]

    def test_query_string_credentials_redacted(self):
        event = {"url": "https://api.trello.com/1/cards/C1?key=abc123&token=xyz&fields=name"}
        result = _filter_sensitive(None, "info", event)
        assert result["url"] == (
            "https://api.trello.com/1/cards/C1?key=***REDACTED***&token=***REDACTED***&fields=name"
        )
