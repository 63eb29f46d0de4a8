"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, and
provides hermetic configuration sources for tests.
"""
import sys
from pathlib import Path

import pytest
import structlog

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.source import ConfigSource, reset_default_source


@pytest.fixture(autouse=True)
def fresh_process_state():
    """Forget the process-wide config source and logging setup around each test."""
    reset_default_source()
    yield
    reset_default_source()
    structlog.reset_defaults()


@pytest.fixture
def make_source(tmp_path):
    """
    Factory for a ConfigSource over a dict environment and an optional .env file.

    Usage:
        source = make_source({"FKS_SERVICE_PORT": "9090"}, env_file="DATABASE_NAME=x\n")
    """
    def _make(environ=None, env_file=None):
        path = None
        if env_file is not None:
            path = tmp_path / ".env"
            path.write_text(env_file, encoding="utf-8")
        return ConfigSource(env_file=path, environ=dict(environ or {}))

    return _make
