"""Tests for the backend wire models."""

from datetime import UTC, datetime

from say2text.core.models import AudioFile, TranscriptionRecord


class TestTranscriptionRecord:
    def test_parses_wire_names(self, record_payload):
        record = TranscriptionRecord.model_validate(record_payload)

        assert record.id == "1"
        assert record.mime_type == "audio/webm"
        assert record.size == 3
        assert record.created_at == datetime(2026, 1, 5, 9, 30, tzinfo=UTC)

    def test_numeric_id_becomes_string(self):
        record = TranscriptionRecord.model_validate({"_id": 42, "transcript": "x"})
        assert record.id == "42"

    def test_optional_metadata_and_extra_fields(self):
        """Missing metadata defaults to None; unknown backend fields are ignored."""
        record = TranscriptionRecord.model_validate(
            {"_id": "a", "transcript": "t", "__v": 0, "language": "en"}
        )

        assert record.mime_type is None
        assert record.size is None
        assert record.created_at is None
        assert not hasattr(record, "language")

    def test_snake_case_construction(self):
        record = TranscriptionRecord(id="z", transcript="t", mime_type="audio/wav")
        assert record.mime_type == "audio/wav"


class TestAudioFile:
    def test_size(self):
        audio = AudioFile(filename="a.wav", content=b"1234", content_type="audio/wav")
        assert audio.size == 4

    def test_default_content_type(self):
        assert AudioFile(filename="a.bin", content=b"").content_type == "application/octet-stream"
