import json
import logging
import sys

import pytest

from stdout2prom.utils.logging_utils import DEFAULT_FORMAT, MINIMAL_CONSOLE_FORMAT, JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


def _console(root):
    return [h for h in root.handlers if type(h) is logging.StreamHandler][0]


def test_console_goes_to_stderr(monkeypatch):
    monkeypatch.delenv("STDOUT2PROM_VERBOSE_CONSOLE", raising=False)
    monkeypatch.delenv("STDOUT2PROM_JSON_LOGS", raising=False)
    root = setup_logging("debug")
    console = _console(root)
    assert console.stream is sys.stderr
    assert root.level == logging.DEBUG
    assert console.formatter._fmt == MINIMAL_CONSOLE_FORMAT


def test_verbose_console_env(monkeypatch):
    monkeypatch.setenv("STDOUT2PROM_VERBOSE_CONSOLE", "1")
    root = setup_logging()
    assert _console(root).formatter._fmt == DEFAULT_FORMAT


def test_json_console_env(monkeypatch):
    monkeypatch.setenv("STDOUT2PROM_JSON_LOGS", "yes")
    root = setup_logging()
    assert isinstance(_console(root).formatter, JsonFormatter)


def test_json_formatter_payload():
    record = logging.LogRecord("stdout2prom.x", logging.WARNING, __file__, 1, "bad %s", ("line",), None)
    record.metric = "hits"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "bad line"
    assert payload["level"] == "WARNING"
    assert payload["metric"] == "hits"


def test_log_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    root = setup_logging("INFO", log_file=str(log_file))
    logging.getLogger("stdout2prom.test").info("hello file")
    for h in root.handlers:
        h.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
