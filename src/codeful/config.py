"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # Groq (OpenAI-compatible API; empty key = echo mode)
    groq_api_url: str = Field(
        "https://api.groq.com/openai/v1", alias="GROQ_API_URL",
        description="Base URL of the Groq OpenAI-compatible API.",
    )
    groq_api_key: str = Field(
        "", alias="GROQ_API_KEY",
        description="API key for Groq. Empty = echo mode, prompts are answered with themselves.",
    )
    model_name: str = Field(
        "qwen/qwen3-32b", alias="MODEL_NAME",
        description="Model name sent with every chat completion request.",
    )
    max_tokens: int = Field(
        1500, alias="MAX_TOKENS",
        description="Upper bound on tokens generated per response.",
    )
    temperature: float = Field(
        0.3, alias="TEMPERATURE",
        description="Sampling temperature for chat completions.",
    )
    request_timeout: float = Field(
        60.0, alias="REQUEST_TIMEOUT",
        description="HTTP request timeout in seconds for model API calls.",
    )
    stream_responses: bool = Field(
        False, alias="STREAM_RESPONSES",
        description="Request a streamed completion and buffer the deltas instead of a single response.",
    )

    # Response segmentation
    think_open_tag: str = Field(
        "<think>", alias="THINK_OPEN_TAG",
        description="Tag that opens the model's thinking trace.",
    )
    think_close_tag: str = Field(
        "</think>", alias="THINK_CLOSE_TAG",
        description="Tag that closes the model's thinking trace.",
    )

    # Typewriter reveal
    reveal_step_delay: float = Field(
        0.01, alias="REVEAL_STEP_DELAY",
        description="Seconds to wait between reveal snapshots.",
    )
    reveal_unit: str = Field(
        "character", alias="REVEAL_UNIT",
        description="Reveal step granularity: character, word or line.",
    )

    # Chat history
    history_ttl: int = Field(
        86400, alias="HISTORY_TTL",
        description="TTL in seconds for in-memory chat records. Chats expire after this period of inactivity.",
    )
    history_maxsize: int = Field(
        1000, alias="HISTORY_MAXSIZE",
        description="Max number of chats kept in memory. LRU eviction when exceeded.",
    )

    # Server
    host: str = Field(
        "127.0.0.1", alias="HOST",
        description="Host address the local view server binds to.",
    )
    port: int = Field(
        8765, alias="PORT",
        description="Port number for the local view server.",
    )

    # Logging
    log_level: str = Field(
        "INFO", alias="LOG_LEVEL",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL.",
    )
    log_file: str = Field(
        "", alias="LOG_FILE",
        description="Path to log file for file-based logging with rotation. Empty = console only.",
    )
    log_file_max_bytes: int = Field(
        10_485_760, alias="LOG_FILE_MAX_BYTES",
        description="Max size in bytes per log file before rotation. Default: 10 MB.",
    )
    log_file_backup_count: int = Field(
        5, alias="LOG_FILE_BACKUP_COUNT",
        description="Number of rotated backup log files to keep.",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
