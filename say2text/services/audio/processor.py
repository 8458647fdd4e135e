"""Packs captured PCM frames into a WAV container for upload."""

import io
import wave


class AudioProcessor:
    """Handles PCM audio data conversion.

    Captured frames are raw 16-bit PCM; the backend expects a named audio
    file, so a finished session is wrapped in an in-memory WAV container.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        sample_width: int = 2,
        channels: int = 1,
    ) -> None:
        """Initialize the audio processor.

        Args:
            sample_rate: Audio sample rate in Hz (default: 16 kHz).
            sample_width: Bytes per sample (2 = 16-bit signed PCM).
            channels: Number of audio channels (1 = mono).
        """
        self.sample_rate = sample_rate
        self.sample_width = sample_width
        self.channels = channels

    @property
    def frame_size(self) -> int:
        return self.sample_width * self.channels

    def duration_seconds(self, pcm_data: bytes) -> float:
        """Playback length of raw PCM bytes in seconds."""
        return len(pcm_data) / (self.sample_rate * self.frame_size)

    def to_wav_bytes(self, pcm_data: bytes) -> bytes:
        """Wrap raw PCM bytes in a WAV container held in memory.

        Trailing bytes that do not fill a whole frame are dropped.

        Raises:
            ValueError: If pcm_data is empty.
        """
        if not pcm_data:
            raise ValueError("Cannot encode empty PCM data as WAV")
        usable = len(pcm_data) - (len(pcm_data) % self.frame_size)
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data[:usable])
        return buf.getvalue()
