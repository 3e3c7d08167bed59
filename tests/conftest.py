"""Global pytest configuration and fixtures for all tests."""

import os

import pytest

from miniapp.config import Settings

TEST_CLIENT_ID = "123456789012345678"
TEST_CLIENT_SECRET = "test-client-secret-for-testing-only"  # NOSONAR - not a real secret


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars():
    """
    Set environment variables for testing.

    Provides dummy Discord credentials so code paths that read the
    environment never fail on missing configuration.

    These are NOT real credentials - just placeholders for testing.
    """
    original_env = {}

    test_env_vars = {
        "CLIENT_ID": TEST_CLIENT_ID,
        "CLIENT_SECRET": TEST_CLIENT_SECRET,
        "ENVIRONMENT": "test",
        "APP_NAME": "Test Mini App",
    }

    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def settings_factory():
    """Build Settings isolated from any .env file on disk."""

    def factory(**overrides) -> Settings:
        values = {
            "client_id": TEST_CLIENT_ID,
            "client_secret": TEST_CLIENT_SECRET,
            "app_name": "Test Mini App",
            "environment": "test",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture
def test_settings(settings_factory) -> Settings:
    """Non-production settings with test credentials."""
    return settings_factory()


@pytest.fixture
def production_settings(settings_factory, tmp_path) -> Settings:
    """Production settings serving a small built client from tmp_path."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html>index</html>", encoding="utf-8")
    (dist / "assets" / "app.js").write_text("console.log('app')", encoding="utf-8")
    return settings_factory(environment="production", client_dist_dir=str(dist))
