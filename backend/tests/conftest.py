from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from backend.config import Settings, get_settings
from backend.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        upload_dir=os.path.join(tmp_path, "uploads"),
        max_upload_bytes=1024 * 1024,
        max_json_bytes=64 * 1024,
        max_reference_chars=1000,
        tutor_max_turns=10,
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def client(app, fake_llm):
    with TestClient(app) as c:
        yield c


def uploaded_files(settings: Settings) -> list:
    if not os.path.isdir(settings.upload_dir):
        return []
    return os.listdir(settings.upload_dir)


@pytest.fixture
def leftover_uploads(settings):
    return lambda: uploaded_files(settings)
