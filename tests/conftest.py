"""
Pytest configuration and shared fixtures for numdate testing.

Provides engines, temporary configuration directories and logging
restoration shared by unit and integration tests.
"""

from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from numdate import new_engine
from numdate.core.config_manager import LoggingConfig
from numdate.core.logging_manager import LoggingManager


@pytest.fixture(scope="session")
def engine():
    """Engine without 2 digit year support"""
    return new_engine()


@pytest.fixture(scope="session")
def engine_1900():
    """Engine resolving 2 digit years within 1900-1999"""
    return new_engine(1900)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML files into a temporary configuration directory"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    
    def _write(name: str, data: Dict[str, Any]) -> Path:
        path = config_dir / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path
    
    _write.config_dir = config_dir
    return _write


@pytest.fixture
def clean_env(monkeypatch):
    """Remove NUMDATE_* variables so configuration tests are hermetic"""
    import os
    for key in list(os.environ):
        if key.startswith("NUMDATE_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def restore_logging():
    """Put the package logger back to its unconfigured state"""
    yield LoggingManager()
    LoggingManager().configure(LoggingConfig(level="INFO", log_to_console=False))
