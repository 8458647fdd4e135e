"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Say2Text settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive), except
    ``app_port`` which also honours the platform-provided ``PORT``.

    Attributes:
        api_base_url: Base URL of the transcription backend (includes ``/api``).
        capture_mode: "browser" (default) uses Streamlit's in-browser recorder,
            "device" records from an input device on the server host through
            PyAudio (the ``device`` extra).
        recording_filename: Synthetic filename given to in-memory recordings.
        recording_mime_type: Content type sent with in-memory recordings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Backend API ---
    api_base_url: str = "http://localhost:5000/api"
    request_timeout: float = 30.0  # list / delete
    upload_timeout: float = 300.0  # upload + server-side transcription
    upload_chunk_size: int = 64 * 1024  # bytes per progress step

    # --- Audio capture ---
    capture_mode: Literal["device", "browser"] = "browser"
    recording_filename: str = "recording.wav"
    recording_mime_type: str = "audio/wav"
    sample_rate: int = 16000
    channels: int = 1
    frames_per_buffer: int = 1024
    input_device_index: int | None = None  # None = system default input

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the Streamlit dev server
    app_port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "APP_PORT"))
    log_level: str = "INFO"  # Python logging level


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.
    """
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per process.

    ``logging.basicConfig`` is a no-op when handlers already exist, so
    Streamlit reruns calling this repeatedly do not stack handlers.
    """
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
