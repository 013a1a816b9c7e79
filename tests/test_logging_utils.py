"""Tests for logging helpers."""

import logging

from common.logging_utils import (
    Timer,
    _FILE_HANDLER_FLAG,
    _HANDLER_FLAG,
    add_file_handler,
    configure_logging,
    extra_context,
    is_debug_enabled,
    safe_url,
)
from constants import Constants


def _flagged(flag):
    return [h for h in logging.getLogger().handlers if getattr(h, flag, False)]


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    configure_logging("WARNING")
    assert len(_flagged(_HANDLER_FLAG)) == 1
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_reads_env(monkeypatch):
    monkeypatch.setenv(Constants.LOG_LEVEL_ENV_VAR, "error")
    configure_logging()
    assert logging.getLogger().level == logging.ERROR


def test_configure_logging_unknown_level_falls_back_to_info():
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_file_handler(tmp_path):
    configure_logging("INFO")
    log_path = tmp_path / "debdep.log"
    handler = add_file_handler(str(log_path))
    logging.getLogger("debdep.test").info("hello file")
    handler.flush()
    assert _flagged(_FILE_HANDLER_FLAG) == [handler]
    assert "hello file" in log_path.read_text(encoding="utf-8")


def test_is_debug_enabled():
    logger = logging.getLogger("debdep.test.debug")
    logger.setLevel(logging.DEBUG)
    assert is_debug_enabled(logger)
    logger.setLevel(logging.INFO)
    assert not is_debug_enabled(logger)


def test_extra_context_drops_none():
    assert extra_context(event="parse", target=None, count=0) == {"event": "parse", "count": 0}


def test_safe_url():
    assert safe_url("https://u:p@example.org:8443/a/b.deb?x=1#f") == "https://example.org:8443/a/b.deb"


def test_timer():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0.0
