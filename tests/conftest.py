"""
Module: conftest.py

Author: Michael Economou
Date: 2026-10-12

Global pytest configuration and fixtures for the sleeptracker test suite.
Every test gets its own data directory and starts without a shared database.
"""

import os
import sys

# Add project root to sys.path so 'sleeptracker' imports without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from sleeptracker.core.application_context import ApplicationContext, ComponentContext
from sleeptracker.infra.db.sleep_database import reset_sleep_database
from sleeptracker.utils.paths import AppPaths


def pytest_collection_modifyitems(session, config, items):
    """Skip local-only tests on CI."""
    _ = session
    _ = config

    if "CI" in os.environ or "GITHUB_ACTIONS" in os.environ:
        skip_local = pytest.mark.skip(reason="Local-only tests skipped on CI")
        for item in items:
            if "local_only" in item.keywords:
                item.add_marker(skip_local)


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Point the application at a temp data dir and drop the shared database."""
    data_dir = tmp_path / "user_data"
    monkeypatch.setenv("SLEEPTRACKER_DATA_DIR", str(data_dir))
    AppPaths.reset()
    reset_sleep_database()

    yield data_dir

    reset_sleep_database()
    AppPaths.reset()


@pytest.fixture
def app_context(tmp_path):
    """Application context rooted in a temp directory."""
    return ApplicationContext(tmp_path / "app")


@pytest.fixture
def screen_context(app_context):
    """Short-lived component context bound to ``app_context``."""
    return ComponentContext(app_context, name="sleep_tracker_screen")
