"""Root test fixtures shared across all test types.

This conftest sets up the environment before any app import.
Store-backed fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
# Placeholder URL so settings load at import time; integration tests build
# their own store on a temporary SQLite file.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ruff: noqa: E402 - Imports must be after env var setup
from src.research_notes.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()
