"""Voice-to-Text Studio: record or upload audio, transcribe it, browse history."""

__version__ = "0.1.0"
