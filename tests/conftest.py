import os

os.environ.setdefault("PYTEST_RUNNING", "1")

import pytest
from fastapi.testclient import TestClient

from wardrobo.db import database, models
from wardrobo.services import (
    reset_filter_extraction_service_for_tests,
    reset_image_storage_for_tests,
    reset_vision_tagging_service_for_tests,
)
from wardrobo.utils.feature_flags import refresh_feature_flag_cache

_ISOLATED_ENV = [
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_CHAT_MODEL",
    "OPENAI_VISION_MODEL",
    "BLOB_READ_WRITE_TOKEN",
    "BLOB_API_URL",
    "LLM_FEATURES_ENABLED",
    "VISION_TAGGING_ENABLED",
]


@pytest.fixture(scope="session", autouse=True)
def _schema():
    models.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with database.engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(autouse=True)
def _isolated_services(monkeypatch, tmp_path):
    """Fresh env-derived singletons per test; uploads land in a temp dir."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    refresh_feature_flag_cache()
    reset_filter_extraction_service_for_tests()
    reset_vision_tagging_service_for_tests()
    reset_image_storage_for_tests()
    yield
    refresh_feature_flag_cache()
    reset_filter_extraction_service_for_tests()
    reset_vision_tagging_service_for_tests()
    reset_image_storage_for_tests()


@pytest.fixture
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from wardrobo.api.main import app

    return TestClient(app)


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            import requests

            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


def chat_reply(content):
    return FakeResponse({"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_chat_reply():
    return chat_reply


@pytest.fixture
def item_factory(db_session):
    """Insert a clothing item directly; keyword overrides map onto model columns."""
    def _make(**overrides):
        fields = {
            "name": "Plain Tee",
            "category": "TOP",
            "colors": [],
            "sizes": [],
            "materials": [],
        }
        fields.update(overrides)
        item = models.ClothingItem(**fields)
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item

    return _make
