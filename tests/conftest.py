"""Pytest fixtures for codeful tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from codeful.config import Settings
from codeful.history.store import InMemoryChatStore
from codeful.render.code_block import CodeBlockPresenter


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    env_vars = {
        "GROQ_API_KEY": "",
        "HOST": "127.0.0.1",
        "PORT": "8765",
        "LOG_LEVEL": "DEBUG",
        "REVEAL_STEP_DELAY": "0",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(mock_env_vars) -> Settings:
    """Create Settings instance with mocked environment."""
    return Settings(_env_file=None)


@pytest.fixture
def groq_settings(mock_env_vars) -> Settings:
    """Settings with the Groq API key configured."""
    with patch.dict(os.environ, {**mock_env_vars, "GROQ_API_KEY": "test-key"}):
        return Settings(_env_file=None)


@pytest.fixture
def chat_store() -> InMemoryChatStore:
    return InMemoryChatStore(ttl=3600, maxsize=100)


@pytest.fixture
def clipboard():
    """Clipboard writer that records what was copied."""
    return MagicMock()


@pytest.fixture
def presenter(clipboard) -> CodeBlockPresenter:
    return CodeBlockPresenter(clipboard=clipboard)
