"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from ginny.core import config as config_module
from ginny.sync.datastore import JsonTransactionStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def store(temp_dir) -> JsonTransactionStore:
    """Empty transaction store in a temporary directory."""
    return JsonTransactionStore(temp_dir / "transactions")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data or a real mailbox
    monkeypatch.setenv("GINNY_ENV", "test")
    monkeypatch.setenv("GINNY_DATA_DIR", str(tmp_path / "ginny_data"))
    monkeypatch.delenv("EMAIL_USERNAME", raising=False)
    monkeypatch.delenv("EMAIL_CREDENTIALS_EXPIRE_AT", raising=False)
    monkeypatch.delenv("SYNC_MAX_RESULTS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Mock sensitive environment variables
    monkeypatch.setenv("EMAIL_PASSWORD", "test-password")

    # Drop any configuration cached by a previous test
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "parsing: Tests for bank email parsing")
    config.addinivalue_line("markers", "sync: Tests for email sync and storage")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
