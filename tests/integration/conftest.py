"""
Integration Test Configuration

Live Gemini tests need a real API key. They are skipped when no key is
configured and whenever CI=true, so CI never spends quota.
"""

import os

import pytest

from pathway_advisor.models.config import Settings


@pytest.fixture
def is_ci_environment() -> bool:
    """
    Detect if tests are running in CI environment.

    Returns:
        True if CI environment variable is set to 'true'
    """
    return os.getenv("CI", "").lower() == "true"


@pytest.fixture(autouse=True)
def skip_live_tests_in_ci(request, is_ci_environment):
    """
    Automatically skip integration tests when running in CI.

    Args:
        request: pytest request fixture
        is_ci_environment: Fixture indicating CI environment
    """
    if is_ci_environment and request.node.get_closest_marker("integration"):
        pytest.skip("Skipping live Gemini test in CI environment")


@pytest.fixture
def live_settings() -> Settings:
    """Settings from the environment; skips the test when no key is set."""
    settings = Settings.from_env()
    if not settings.gemini_api_key:
        pytest.skip("GEMINI_API_KEY not configured")
    return settings
