"""Shared test configuration and pytest markers."""

import pytest

from api.router import limiter
from config import settings
from services import gemini_client, job_recommender


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Run every test without an API key, rate limits or cached state."""
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(settings, "mock_embeddings_enabled", True)
    monkeypatch.setattr(gemini_client, "_client", None)
    limiter.enabled = False
    job_recommender.load_jobs.cache_clear()
    yield
    limiter.enabled = True
