"""Tests for logging setup module."""

from __future__ import annotations

import logging

import pytest

from camrelay.logging_setup import configure_logging, set_camera_name


@pytest.fixture(autouse=True)
def reset_logging_state() -> None:
    """Reset global logging state after each test."""
    import camrelay.logging_setup as module

    original_camera = module._CURRENT_CAMERA_NAME

    yield

    module._CURRENT_CAMERA_NAME = original_camera


@pytest.fixture(autouse=True)
def reset_logging_root() -> None:
    """Restore root logger handlers/levels after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    original_aiohttp_level = logging.getLogger("aiohttp").level

    yield

    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in original_handlers:
        root.addHandler(handler)

    root.setLevel(original_level)
    logging.captureWarnings(False)
    logging.getLogger("aiohttp").setLevel(original_aiohttp_level)


class TestLoggingInjection:
    """Tests for camera name injection and extras rendering."""

    def test_camera_and_target_in_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        # Given: Logging configured for a camera
        configure_logging(log_level="INFO", camera_name="front_door")

        # When: Logging with a target extra
        logging.getLogger("camrelay.test").info("New file", extra={"target": "image"})

        # Then: The target is part of the prefix, not repeated as JSON
        out = capsys.readouterr().out
        assert "[front_door/image]" in out
        assert "New file" in out
        assert '"target"' not in out

    def test_other_extras_rendered_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        # Given: Logging configured for a camera
        configure_logging(log_level="INFO", camera_name="front_door")

        # When: Logging with a target and another extra
        logging.getLogger("camrelay.test").warning(
            "Delivery failed", extra={"target": "video", "status": 500}
        )

        # Then: Target in the prefix, the rest appended as JSON
        out = capsys.readouterr().out
        assert "[front_door/video]" in out
        assert '{"status": 500}' in out

    def test_default_camera_placeholder(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO")

        logging.getLogger("camrelay.test").warning("hello")

        assert "[-/-]" in capsys.readouterr().out

    def test_set_camera_name_updates_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO")
        set_camera_name("garage")

        logging.getLogger("camrelay.test").info("hello")

        assert "[garage/-]" in capsys.readouterr().out

    def test_level_filters_console(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="WARNING")

        logging.getLogger("camrelay.test").info("hidden")
        logging.getLogger("camrelay.test").warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_noisy_loggers_quieted(self) -> None:
        configure_logging(log_level="DEBUG")

        assert logging.getLogger("aiohttp").level == logging.WARNING

    def test_console_format_env_override(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("CONSOLE_LOG_FORMAT", "CUSTOM %(message)s")
        configure_logging(log_level="INFO")

        logging.getLogger("camrelay.test").info("hello")

        assert "CUSTOM hello" in capsys.readouterr().out

    def test_target_kept_as_json_when_format_omits_it(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("CONSOLE_LOG_FORMAT", "CUSTOM %(message)s")
        configure_logging(log_level="INFO")

        logging.getLogger("camrelay.test").info("hello", extra={"target": "image"})

        assert 'CUSTOM hello {"target": "image"}' in capsys.readouterr().out
