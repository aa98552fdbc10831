"""
Unit test fixtures.

Isolates unit tests from LITWEAVE_* environment variables and .env files
so that they see the real defaults.

License: MIT
"""

import os

import pytest

CONFIG_ENV_VARS = [
    "LITWEAVE_ROOT_NAME",
    "LITWEAVE_ENCODING",
    "LITWEAVE_FALLBACK_COMMENT_TOKEN",
    "LITWEAVE_ANCHOR_FILLER",
    "LITWEAVE_PYGMENTS_STYLE",
    "LITWEAVE_WATCH_INTERVAL",
    "LITWEAVE_WATCH_RECENCY_WINDOW",
    "LITWEAVE_WATCH_MAX_RETRIES",
    "LITWEAVE_WATCH_RETRY_DELAY",
    "LITWEAVE_LOG_LEVEL",
    "LITWEAVE_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove config environment variables and run from a temp directory to
    avoid loading a .env file.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)
