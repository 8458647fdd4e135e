"""Shared pytest fixtures for the Say2Text test suite.

Provides a mocked API client, a scriptable capture device, and sample
backend payloads so controller and UI-free logic can be tested without
a network or a microphone.
"""

import struct
from unittest.mock import MagicMock

import pytest

from say2text.core.config import get_settings
from say2text.core.exceptions import MicrophoneAccessError
from say2text.core.models import TranscriptionRecord
from say2text.services.audio.capture import AudioCapture
from say2text.services.state import AppState
from say2text.ui.api_client import APIClient

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env changes made by a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Backend payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def record_payload():
    """Wire-format record as returned by ``POST /transcribe``."""
    return {
        "_id": "1",
        "transcript": "hello",
        "mimeType": "audio/webm",
        "size": 3,
        "createdAt": "2026-01-05T09:30:00.000Z",
    }


def make_record(record_id: str, transcript: str = "text") -> TranscriptionRecord:
    return TranscriptionRecord.model_validate(
        {
            "_id": record_id,
            "transcript": transcript,
            "mimeType": "audio/wav",
            "size": 1024,
            "createdAt": "2026-01-05T09:30:00Z",
        }
    )


@pytest.fixture
def records():
    """Three records, most recent first."""
    return [make_record("c", "third"), make_record("b", "second"), make_record("a", "first")]


# ---------------------------------------------------------------------------
# Client / state
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client():
    """Create a mock implementing the APIClient interface."""
    return MagicMock(spec=APIClient)


@pytest.fixture
def state():
    return AppState()


# ---------------------------------------------------------------------------
# Audio fixtures
# ---------------------------------------------------------------------------


class FakeCapture(AudioCapture):
    """In-memory capture device; ``deny=True`` simulates a refused microphone."""

    def __init__(self, chunks: list[bytes] | None = None, deny: bool = False) -> None:
        super().__init__()
        self.deny = deny
        self.started = False
        self.stopped = False
        self._pending = list(chunks or [])

    def start(self) -> None:
        if self.deny:
            raise MicrophoneAccessError()
        self.started = True
        self.running = True
        for chunk in self._pending:
            self.add_chunk(chunk)

    def stop(self) -> None:
        self.stopped = True
        self.running = False


@pytest.fixture
def sample_pcm_bytes():
    """Generate 0.1 second of a 440Hz square-ish wave (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    samples = [8000 if (i // 18) % 2 == 0 else -8000 for i in range(1600)]
    return struct.pack(f"<{len(samples)}h", *samples)


@pytest.fixture
def make_capture():
    """Factory fixture: ``make_capture(chunks=[...], deny=False)`` -> FakeCapture."""
    created: list[FakeCapture] = []

    def _make(chunks: list[bytes] | None = None, deny: bool = False) -> FakeCapture:
        capture = FakeCapture(chunks=chunks, deny=deny)
        created.append(capture)
        return capture

    _make.created = created
    return _make
