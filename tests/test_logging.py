"""Tests for the logging helper."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from apiclient.config import Settings
from apiclient.logging import configure_logging
from apiclient.main import create_client


class DummySettings(Settings):
    model_config = {"env_file": None}


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, previous in quiet.items():
        logging.getLogger(name).setLevel(previous)


def test_configure_logging_installs_stream_handler(restore_logging: None) -> None:
    configure_logging("debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_configure_logging_unknown_level_falls_back_to_info(restore_logging: None) -> None:
    configure_logging("chatty")

    assert logging.getLogger().level == logging.INFO


def test_configure_logging_writes_fresh_log_file(tmp_path: Path, restore_logging: None) -> None:
    log_file = tmp_path / "logs" / "client.log"
    log_file.parent.mkdir()
    log_file.write_text("stale\n", encoding="utf-8")

    configure_logging("INFO", log_file)
    logging.getLogger("apiclient.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    text = log_file.read_text(encoding="utf-8")
    assert "stale" not in text
    assert "INFO | apiclient.test | hello" in text


def test_configure_logging_creates_missing_directories(tmp_path: Path, restore_logging: None) -> None:
    log_file = tmp_path / "nested" / "dir" / "client.log"

    configure_logging("INFO", str(log_file))

    assert log_file.parent.is_dir()


@pytest.mark.asyncio
async def test_create_client_applies_settings_log_level(restore_logging: None) -> None:
    settings = DummySettings(base_url="https://api.example.com", log_level="WARNING")

    client = create_client(settings, setup_logging=True)
    await client.close()

    assert logging.getLogger().level == logging.WARNING


@pytest.mark.asyncio
async def test_create_client_leaves_logging_alone_by_default(restore_logging: None) -> None:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    client = create_client(DummySettings(base_url="https://api.example.com", log_level="DEBUG"))
    await client.close()

    assert root.handlers == handlers
    assert root.level == level
