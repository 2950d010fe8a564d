"""
Pytest configuration and shared fixtures for chronomatch testing.

Provides a fixed reference clock, temporary configuration directories and
the custom markers used across unit and integration tests.
"""

from pathlib import Path

import pytest
import yaml

from chronomatch.core.config_manager import LoggingConfig
from chronomatch.core.logging_manager import LoggingManager
from chronomatch.processors.rules import default_interpreters

from .fixtures.sample_data import REFERENCE_TIME, SAMPLE_CONFIGURATIONS


@pytest.fixture
def fixed_time():
    """Tuesday 2019-01-01 09:00 UTC"""
    return REFERENCE_TIME


@pytest.fixture
def fixed_clock(fixed_time):
    """Clock that always returns the fixed reference time"""
    return lambda: fixed_time


@pytest.fixture
def counting_clock(fixed_time):
    """Clock that records how often it was sampled"""
    class CountingClock:
        def __init__(self):
            self.calls = 0

        def __call__(self):
            self.calls += 1
            return fixed_time

    return CountingClock()


@pytest.fixture
def interpreters():
    """Default rule interpreters in priority order"""
    return default_interpreters()


# Configuration Fixtures
@pytest.fixture
def temp_config_dir(tmp_path):
    """Temporary directory for test configuration files"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def write_config(temp_config_dir):
    """Write a YAML file into the temporary config directory"""
    def _write(name: str, data) -> Path:
        path = temp_config_dir / name
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path
    return _write


@pytest.fixture
def sample_configurations():
    return SAMPLE_CONFIGURATIONS


# Test Environment Setup
@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Keep the host environment and earlier tests out of each test"""
    import os
    for key in list(os.environ):
        if key.startswith("CHRONOMATCH_"):
            monkeypatch.delenv(key)

    yield

    # Drop handlers installed through LoggingManager.configure
    LoggingManager.configure(LoggingConfig(log_to_console=False))


# Custom pytest markers
def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


# Test Collection Hooks
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file location"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
