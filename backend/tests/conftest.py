"""
Pytest fixtures shared across the test suite.
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from services.token_protector import TokenProtector


@pytest.fixture(autouse=True)
def reset_sse_app_status():
    """sse-starlette keeps an exit event bound to the first event loop it saw."""
    from sse_starlette.sse import AppStatus
    AppStatus.should_exit_event = None
    yield


@pytest.fixture
def protector():
    return TokenProtector(["Duxa Platform", "DUXA", "POS", "QR", "API", "URL", "SEO"])


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        i18n_dir=str(tmp_path / "i18n"),
        batch_delay_ms=0,
        free_provider_delay_ms=0,
        azure_api_key="",
        deepl_api_key="",
        openai_api_key="",
        gemini_api_key="",
    )


@pytest.fixture
def client(test_settings):
    from main import app

    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
