"""
Shared fixtures for unit tests.

Gemini is never called: agents receive a client factory returning a mock whose
``aio.models.generate_content`` is an AsyncMock.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from pathway_advisor.models.config import Settings
from pathway_advisor.models.profile import LanguageTestDetails, UserProfile


API_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "REACT_APP_GEMINI_API_KEY")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Gemini-related environment variables.

    Each key is set before deletion so monkeypatch also removes values that
    load_dotenv or a saved credential add during the test.
    """
    for key in API_KEY_VARS + ("GEMINI_MODEL", "FILE_READ_TIMEOUT", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)


@pytest.fixture
def settings() -> Settings:
    """Settings with a dummy API key."""
    return Settings(gemini_api_key="test-api-key", file_read_timeout=5)


def make_fake_client(text=None, side_effect=None) -> MagicMock:
    """Build a stand-in for google.genai.Client returning ``text``."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text), side_effect=side_effect
    )
    return client


@pytest.fixture
def fake_client_factory():
    """Return a helper producing (factory, client) pairs."""

    def _build(text=None, side_effect=None):
        client = make_fake_client(text=text, side_effect=side_effect)
        return (lambda settings: client), client

    return _build


@pytest.fixture
def ielts_details() -> LanguageTestDetails:
    """IELTS result with distinct band scores."""
    return LanguageTestDetails(
        test_type="IELTS",
        overall_score=7,
        reading=7,
        writing=6,
        listening=8,
        speaking=7,
    )


@pytest.fixture
def sample_profile(ielts_details) -> UserProfile:
    """Fully populated skilled-worker profile."""
    return UserProfile(
        name="Priya Sharma",
        age=29,
        country_of_residence="India",
        education_level="Master's",
        field_of_study="Computer Science",
        work_experience_years=4,
        savings=25000,
        settlement_funds=15000,
        language_details=ielts_details,
    )
