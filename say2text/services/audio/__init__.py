"""
Audio module - microphone capture and WAV packing.
"""

from .capture import AudioCapture, MicrophoneCapture, create_capture
from .processor import AudioProcessor

__all__ = ["AudioCapture", "AudioProcessor", "MicrophoneCapture", "create_capture"]
