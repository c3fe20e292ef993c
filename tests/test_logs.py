import logging
from pathlib import Path

import pytest

from wherehouse.logs import LOG_ENV, get_data_dir, initialize_logging, trace_dbg


@pytest.fixture
def app_logger():
    log = logging.getLogger("wherehouse")
    yield log
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.setLevel(logging.NOTSET)


def _read(log, path):
    for handler in log.handlers:
        handler.flush()
    return path.read_text(encoding="utf-8")


def test_data_dir_is_local_hidden_folder():
    assert get_data_dir() == Path(".") / ".data"


def test_initialize_creates_log_file(tmp_path, monkeypatch, app_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(LOG_ENV, raising=False)
    path = initialize_logging()
    assert (tmp_path / path).is_file()
    assert path.name == "wherehouse.log"
    assert app_logger.level == logging.INFO


def test_messages_reach_the_file(tmp_path, monkeypatch, app_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(LOG_ENV, raising=False)
    path = initialize_logging()
    app_logger.info("initialized logging")
    app_logger.debug("hidden detail")
    text = _read(app_logger, tmp_path / path)
    assert "initialized logging" in text
    assert "hidden detail" not in text


def test_level_from_environment(tmp_path, monkeypatch, app_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(LOG_ENV, "debug")
    path = initialize_logging()
    app_logger.debug("visible detail")
    assert "visible detail" in _read(app_logger, tmp_path / path)
    assert app_logger.level == logging.DEBUG


def test_target_directive_for_other_crate_is_ignored(tmp_path, monkeypatch, app_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(LOG_ENV, "other=error,wherehouse=warn")
    path = initialize_logging()
    app_logger.info("info line")
    app_logger.warning("warning line")
    text = _read(app_logger, tmp_path / path)
    assert "warning line" in text
    assert "info line" not in text
    assert app_logger.level == logging.WARNING


def test_reinitializing_keeps_single_handler(tmp_path, monkeypatch, app_logger):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(LOG_ENV, raising=False)
    first = initialize_logging()
    second = initialize_logging()
    assert first == second
    app_logger.info("only once")
    assert _read(app_logger, tmp_path / second).count("only once") == 1
    assert len(app_logger.handlers) == 1


def test_trace_dbg_returns_and_logs_value(caplog):
    caplog.set_level(logging.DEBUG, logger="wherehouse")
    value = {"query": "wget"}
    assert trace_dbg(value) is value
    assert "wget" in caplog.text
    assert caplog.records[-1].levelno == logging.DEBUG


def test_trace_dbg_custom_level(caplog):
    caplog.set_level(logging.DEBUG, logger="wherehouse")
    assert trace_dbg(7, logging.WARNING) == 7
    assert caplog.records[-1].levelno == logging.WARNING