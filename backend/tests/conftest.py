# backend/tests/conftest.py
"""
Pytest configuration for notifeed backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import notifeed.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., FEED_URL).
- Clears lru_cache'd settings / services between tests so that
  monkeypatched environment variables are picked up.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("FEED_URL", "https://feeds.example.com/feed")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _reset_cached_settings():
    from notifeed.feed.config import get_feed_settings
    from notifeed.feed.router import get_feed_service
    from notifeed.github.config import get_github_settings

    get_feed_settings.cache_clear()
    get_github_settings.cache_clear()
    get_feed_service.cache_clear()
    yield
    get_feed_settings.cache_clear()
    get_github_settings.cache_clear()
    get_feed_service.cache_clear()
