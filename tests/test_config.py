"""Tests for settings, logging setup and the server entry point."""

import logging

import pytest

from pasties import __main__ as entry_point
from pasties.config import Settings
from pasties.core.logging import HANDLER_NAME, configure_logging
from pasties.domains.pastes.errors import NotFound, PasteError


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.host == "127.0.0.1"
        assert settings.port == 7878
        assert settings.content_max_length == 200_000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PASTIES_HOST", "0.0.0.0")
        monkeypatch.setenv("PASTIES_PORT", "9000")
        settings = Settings(_env_file=None)
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000


class TestEntryPoint:
    def test_main_uses_settings(self, monkeypatch, settings):
        settings.host = "0.0.0.0"
        settings.port = 9001
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr(entry_point, "get_settings", lambda: settings)
        monkeypatch.setattr(entry_point.uvicorn, "run", fake_run)

        entry_point.main()

        assert calls["host"] == "0.0.0.0"
        assert calls["port"] == 9001
        assert calls["app"].title == "Pasties"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_handler_is_installed_once(self):
        configure_logging("DEBUG")
        configure_logging("INFO")
        named = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
        assert len(named) == 1
        assert logging.getLogger().level == logging.INFO


class TestPasteError:
    def test_default_message(self):
        error = NotFound()
        assert error.message == "No paste with this URL has been found"
        assert str(error) == error.message

    def test_custom_message(self):
        error = PasteError("custom")
        assert error.message == "custom"
        assert error.code == "paste_error"
