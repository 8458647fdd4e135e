"""Microphone capture for a single recording session.

A capture object owns the input device between ``start()`` and ``stop()``
and accumulates raw PCM chunks delivered by the device callback.
"""

import logging
import threading
from abc import ABC, abstractmethod

from say2text.core.config import Settings, get_settings
from say2text.core.exceptions import EmptyRecordingError, MicrophoneAccessError
from say2text.services.audio.processor import AudioProcessor

logger = logging.getLogger(__name__)


class AudioCapture(ABC):
    """Abstract base class for audio capture.

    Subclasses acquire the device in ``start()`` and release it in
    ``stop()``; captured data is pushed through ``add_chunk()``.
    """

    def __init__(self, processor: AudioProcessor | None = None) -> None:
        self.processor = processor or AudioProcessor()
        self.running = False
        self._chunks: list[bytes] = []
        self._lock = threading.Lock()

    @abstractmethod
    def start(self) -> None:
        """Acquire the input device and begin capturing.

        Raises:
            MicrophoneAccessError: If the device cannot be opened.
        """

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing and release the input device. Safe to call twice."""

    def add_chunk(self, data: bytes) -> None:
        """Append one captured chunk; empty chunks are dropped."""
        if not data:
            return
        with self._lock:
            self._chunks.append(bytes(data))

    @property
    def chunk_count(self) -> int:
        with self._lock:
            return len(self._chunks)

    def get_audio(self) -> bytes:
        """All captured PCM bytes, in capture order."""
        with self._lock:
            return b"".join(self._chunks)

    def to_wav(self) -> bytes:
        """Join captured chunks into one WAV payload.

        Raises:
            EmptyRecordingError: If nothing was captured.
        """
        pcm = self.get_audio()
        if len(pcm) < self.processor.frame_size:
            raise EmptyRecordingError()
        return self.processor.to_wav_bytes(pcm)


class MicrophoneCapture(AudioCapture):
    """Capture audio from an input device using PyAudio."""

    def __init__(
        self,
        processor: AudioProcessor | None = None,
        device_index: int | None = None,
        frames_per_buffer: int = 1024,
    ) -> None:
        """
        Args:
            processor: Describes the PCM format (rate, width, channels).
            device_index: Specific input device index, or None for default.
            frames_per_buffer: Frames delivered per device callback.
        """
        super().__init__(processor)
        self.device_index = device_index
        self.frames_per_buffer = frames_per_buffer
        self._pyaudio = None
        self._stream = None

    def start(self) -> None:
        try:
            import pyaudio
        except ImportError:
            raise MicrophoneAccessError(
                "Microphone access denied: PyAudio is not installed "
                "(install the 'device' extra or set CAPTURE_MODE=browser)."
            ) from None

        self._pyaudio = pyaudio.PyAudio()
        try:
            if self.device_index is None:
                # Raises OSError when the host has no default input device
                self._pyaudio.get_default_input_device_info()
            self._stream = self._pyaudio.open(
                format=pyaudio.get_format_from_width(self.processor.sample_width),
                channels=self.processor.channels,
                rate=self.processor.sample_rate,
                input=True,
                input_device_index=self.device_index,
                frames_per_buffer=self.frames_per_buffer,
                stream_callback=self._audio_callback,
            )
            self._stream.start_stream()
        except OSError as exc:
            logger.error("Microphone start failed: %s", exc)
            self._release()
            raise MicrophoneAccessError() from exc

        self.running = True
        logger.info(
            "Microphone capture started (%d Hz, %d ch)",
            self.processor.sample_rate,
            self.processor.channels,
        )

    def _audio_callback(self, in_data, frame_count, time_info, status):
        import pyaudio

        self.add_chunk(in_data)
        return (None, pyaudio.paContinue)

    def stop(self) -> None:
        if not self.running and self._pyaudio is None:
            return
        self.running = False
        self._release()
        logger.info("Microphone capture stopped (%d chunks)", self.chunk_count)

    def _release(self) -> None:
        if self._stream is not None:
            try:
                self._stream.stop_stream()
                self._stream.close()
            except OSError as exc:
                logger.warning("Error closing input stream: %s", exc)
            self._stream = None
        if self._pyaudio is not None:
            self._pyaudio.terminate()
            self._pyaudio = None


def create_capture(settings: Settings | None = None) -> AudioCapture:
    """Build the configured microphone capture for one session."""
    settings = settings or get_settings()
    processor = AudioProcessor(
        sample_rate=settings.sample_rate,
        channels=settings.channels,
    )
    return MicrophoneCapture(
        processor=processor,
        device_index=settings.input_device_index,
        frames_per_buffer=settings.frames_per_buffer,
    )
