"""Pytest configuration and shared fixtures."""

import os
import tempfile

# Keep config, data and logs out of the working tree. Must run before the
# package is imported because loggers are created at import time.
_TEST_HOME = tempfile.mkdtemp(prefix="carpool_tracker_tests_")
os.environ.setdefault("CARPOOL_TRACKER_HOME", _TEST_HOME)
os.environ.setdefault("CARPOOL_TRACKER_LOG_TO_FILE", "0")

import pytest  # noqa: E402

from carpool_tracker.config import reset_config  # noqa: E402
from carpool_tracker.logic import LogicManager  # noqa: E402
from carpool_tracker.storage import MemoryAddressBookStorage  # noqa: E402
from carpool_tracker.store.model import Model  # noqa: E402

from tests.fixtures.typical_data import get_typical_address_book  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that touch the filesystem")


@pytest.fixture
def empty_model() -> Model:
    """Model over an empty address book."""
    return Model()


@pytest.fixture
def typical_model() -> Model:
    """Model over the typical address book: seven passengers, one pool."""
    return Model(get_typical_address_book())


@pytest.fixture
def memory_storage() -> MemoryAddressBookStorage:
    return MemoryAddressBookStorage()


@pytest.fixture
def logic(typical_model, memory_storage) -> LogicManager:
    """LogicManager over the typical model, saving to memory."""
    return LogicManager(typical_model, memory_storage)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the configuration at a fresh home directory for one test."""
    monkeypatch.setenv("CARPOOL_TRACKER_HOME", str(tmp_path))
    monkeypatch.delenv("CARPOOL_TRACKER_DATA_FILE", raising=False)
    monkeypatch.delenv("CARPOOL_TRACKER_DEBUG", raising=False)
    monkeypatch.setenv("CARPOOL_TRACKER_LOG_TO_FILE", "0")
    reset_config()
    yield tmp_path
    reset_config()
