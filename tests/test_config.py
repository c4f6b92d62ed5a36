"""Tests for configuration module."""

import os
from unittest.mock import patch

from codeful.config import Settings


def test_settings_loads_from_env(settings: Settings):
    """Test that settings loads values from environment variables."""
    assert settings.host == "127.0.0.1"
    assert settings.port == 8765
    assert settings.log_level == "DEBUG"
    assert settings.reveal_step_delay == 0.0


def test_settings_has_model_defaults(settings: Settings):
    """Test that model API settings have correct defaults."""
    assert settings.groq_api_url == "https://api.groq.com/openai/v1"
    assert settings.groq_api_key == ""
    assert settings.model_name == "qwen/qwen3-32b"
    assert settings.max_tokens == 1500
    assert settings.temperature == 0.3
    assert settings.stream_responses is False


def test_settings_has_segmenter_defaults(settings: Settings):
    """Thinking tags default to <think></think>."""
    assert settings.think_open_tag == "<think>"
    assert settings.think_close_tag == "</think>"


def test_settings_has_history_defaults(settings: Settings):
    assert settings.history_ttl == 86400
    assert settings.history_maxsize == 1000
    assert settings.reveal_unit == "character"


def test_settings_has_logging_file_defaults(settings: Settings):
    """Test that file logging settings have correct defaults."""
    assert settings.log_file == ""
    assert settings.log_file_max_bytes == 10_485_760  # 10 MB
    assert settings.log_file_backup_count == 5


def test_settings_reads_api_key(mock_env_vars):
    with patch.dict(os.environ, {"GROQ_API_KEY": "gsk-123", "MODEL_NAME": "llama-3"}):
        settings = Settings(_env_file=None)
    assert settings.groq_api_key == "gsk-123"
    assert settings.model_name == "llama-3"
