import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from visor_api.events import ChangeNotifier
from visor_api.main import create_app
from visor_api.service import DocumentService
from visor_api.settings import Settings
from visor_api.store import JsonFileStore


def make_settings(data_dir: Path, **overrides) -> Settings:
    values = dict(
        data_dir=data_dir,
        port=8745,
        cors_allow_origins=["*"],
        unique_slugs=True,
        log_level="INFO",
        log_file=None,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path / "visor")


@pytest.fixture
def data_file(settings) -> Path:
    return settings.data_file


@pytest.fixture
def write_document(data_file):
    """Seed the on-disk document with a raw JSON-able object."""

    def _write(doc) -> None:
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text(json.dumps(doc, indent=2), encoding="utf-8")

    return _write


@pytest.fixture
def read_document(data_file):
    def _read():
        return json.loads(data_file.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


@pytest.fixture
def service(data_file, notifier) -> DocumentService:
    return DocumentService(JsonFileStore(data_file), notifier)


@pytest.fixture
def client(service, settings) -> TestClient:
    return TestClient(create_app(service=service, settings=settings))
