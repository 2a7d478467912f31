import logging

import pytest

from visor_api import server
from visor_api.logging_setup import setup_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path, restore_root_logging):
    log_file = tmp_path / "logs" / "visor.log"
    setup_logging(console_level="WARNING", log_file=log_file)
    logging.getLogger("visor_api.test").debug("hello from the test")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello from the test" in log_file.read_text(encoding="utf-8")


def test_main_runs_uvicorn_on_loopback(monkeypatch, tmp_path, restore_root_logging):
    monkeypatch.setenv("VISOR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("VISOR_PORT", "9123")
    monkeypatch.delenv("VISOR_LOG_FILE", raising=False)
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(server.uvicorn, "run", fake_run)
    server.main()

    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9123
    assert calls["app"].state.settings.data_file == tmp_path / "data.json"
