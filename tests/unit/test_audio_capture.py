"""Tests for microphone capture and WAV packing.

PyAudio is replaced with a MagicMock module so the device lifecycle
(open, callback, release) can be checked without audio hardware.
"""

import io
import sys
import wave
from unittest.mock import MagicMock, patch

import pytest

from say2text.core.config import Settings
from say2text.core.exceptions import EmptyRecordingError, MicrophoneAccessError
from say2text.services.audio import AudioProcessor, MicrophoneCapture, create_capture


@pytest.fixture
def processor():
    return AudioProcessor(sample_rate=16000, sample_width=2, channels=1)


@pytest.fixture
def fake_pyaudio():
    """A stand-in ``pyaudio`` module with one working default input device."""
    module = MagicMock()
    module.paContinue = 0
    module.get_format_from_width.return_value = 8  # paInt16
    instance = MagicMock()
    module.PyAudio.return_value = instance
    with patch.dict(sys.modules, {"pyaudio": module}):
        yield module


class TestAudioProcessor:
    """Verify WAV packing of raw PCM."""

    def test_wav_header_and_frames(self, processor, sample_pcm_bytes):
        wav = processor.to_wav_bytes(sample_pcm_bytes)

        with wave.open(io.BytesIO(wav), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 16000
            assert wf.readframes(wf.getnframes()) == sample_pcm_bytes

    def test_partial_frame_is_dropped(self, processor):
        wav = processor.to_wav_bytes(b"\x01\x02\x03")

        with wave.open(io.BytesIO(wav), "rb") as wf:
            assert wf.getnframes() == 1

    def test_empty_raises(self, processor):
        with pytest.raises(ValueError):
            processor.to_wav_bytes(b"")

    def test_duration(self, processor, sample_pcm_bytes):
        # 1600 samples at 16 kHz
        assert processor.duration_seconds(sample_pcm_bytes) == pytest.approx(0.1)


class TestChunkAccumulation:
    """Verify chunks collected by a capture are joined in order."""

    def test_chunks_joined_in_order(self):
        capture = MicrophoneCapture()
        capture.add_chunk(b"\x01\x00")
        capture.add_chunk(b"")
        capture.add_chunk(b"\x02\x00")

        assert capture.chunk_count == 2
        assert capture.get_audio() == b"\x01\x00\x02\x00"

    def test_to_wav_without_frames(self):
        capture = MicrophoneCapture()
        capture.add_chunk(b"\x01")  # less than one 16-bit frame

        with pytest.raises(EmptyRecordingError):
            capture.to_wav()


class TestMicrophoneCapture:
    """Verify the PyAudio-backed device lifecycle."""

    def test_start_opens_input_stream(self, fake_pyaudio):
        capture = MicrophoneCapture(frames_per_buffer=512)

        capture.start()

        instance = fake_pyaudio.PyAudio.return_value
        kwargs = instance.open.call_args.kwargs
        assert kwargs["input"] is True
        assert kwargs["rate"] == 16000
        assert kwargs["channels"] == 1
        assert kwargs["frames_per_buffer"] == 512
        assert kwargs["input_device_index"] is None
        instance.open.return_value.start_stream.assert_called_once()
        assert capture.running is True

    def test_callback_collects_frames(self, fake_pyaudio):
        capture = MicrophoneCapture()
        capture.start()

        result = capture._audio_callback(b"\x10\x00", 1, {}, 0)

        assert result == (None, fake_pyaudio.paContinue)
        assert capture.get_audio() == b"\x10\x00"

    def test_stop_releases_device(self, fake_pyaudio):
        capture = MicrophoneCapture()
        capture.start()
        stream = fake_pyaudio.PyAudio.return_value.open.return_value

        capture.stop()
        capture.stop()  # second stop is harmless

        stream.stop_stream.assert_called_once()
        stream.close.assert_called_once()
        fake_pyaudio.PyAudio.return_value.terminate.assert_called_once()
        assert capture.running is False

    def test_device_error_is_access_denied(self, fake_pyaudio):
        instance = fake_pyaudio.PyAudio.return_value
        instance.open.side_effect = OSError("[Errno -9997] Invalid sample rate")

        capture = MicrophoneCapture()
        with pytest.raises(MicrophoneAccessError):
            capture.start()

        instance.terminate.assert_called_once()
        assert capture.running is False

    def test_no_default_input_device(self, fake_pyaudio):
        instance = fake_pyaudio.PyAudio.return_value
        instance.get_default_input_device_info.side_effect = OSError("No Default Input Device")

        with pytest.raises(MicrophoneAccessError) as exc_info:
            MicrophoneCapture().start()
        assert exc_info.value.detail == "Microphone access denied."
        instance.open.assert_not_called()

    def test_missing_pyaudio(self):
        with patch.dict(sys.modules, {"pyaudio": None}):
            with pytest.raises(MicrophoneAccessError) as exc_info:
                MicrophoneCapture().start()
        assert "PyAudio is not installed" in exc_info.value.detail


class TestCreateCapture:
    def test_uses_settings(self):
        settings = Settings(
            _env_file=None,
            sample_rate=44100,
            channels=2,
            input_device_index=3,
            frames_per_buffer=2048,
        )

        capture = create_capture(settings)

        assert isinstance(capture, MicrophoneCapture)
        assert capture.processor.sample_rate == 44100
        assert capture.processor.channels == 2
        assert capture.device_index == 3
        assert capture.frames_per_buffer == 2048
