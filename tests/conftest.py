"""
Root pytest configuration and fixtures for streamjson.

Provides common fixtures and test utilities for the test suite.
"""

import os
from pathlib import Path
import sys
from unittest.mock import MagicMock

import pytest


# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def callbacks():
    """StreamJsonCallbacks with a MagicMock in every slot."""
    from streamjson import StreamJsonCallbacks

    return StreamJsonCallbacks(
        on_text=MagicMock(),
        on_tool_use=MagicMock(),
        on_session_id=MagicMock(),
        on_usage=MagicMock(),
        on_error=MagicMock(),
    )


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables before each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("STREAMJSON_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)
