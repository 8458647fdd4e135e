"""
Recording/upload controller and history manager.

Every mutation of ``AppState`` goes through ``TranscriptionController``.
Lifecycle: idle -> recording -> (stopped) -> uploading -> idle.
File uploads skip the recording states.

Failures never propagate to the UI as exceptions except the two guard
errors (``RecordingAlreadyActiveError``, ``UploadInProgressError``). Everything
else is logged and queued on ``state.notices`` for the notification dialog.
"""

import logging
from collections.abc import Callable

from say2text.core.exceptions import (
    APIError,
    EmptyRecordingError,
    MicrophoneAccessError,
    RecordingAlreadyActiveError,
    UploadInProgressError,
)
from say2text.core.models import AudioFile, TranscriptionRecord
from say2text.services.audio.capture import AudioCapture, create_capture
from say2text.services.state import TRANSCRIBING_TEXT, AppState
from say2text.ui.api_client import APIClient, upload_percent

logger = logging.getLogger(__name__)

UPLOAD_FAILED = "Upload/transcription failed"
LOAD_FAILED = "Failed to load history"
DELETE_FAILED = "Delete failed"

PercentCallback = Callable[[int], None]


class TranscriptionController:
    """Drives capture, upload, and history operations against an ``AppState``."""

    def __init__(
        self,
        client: APIClient,
        capture_factory: Callable[[], AudioCapture] = create_capture,
    ) -> None:
        self._client = client
        self._capture_factory = capture_factory

    # -- history --

    def load_history(self, state: AppState, force: bool = False) -> None:
        """Populate history from the backend; runs once per session unless forced."""
        if state.history_loaded and not force:
            return
        state.history_loaded = True
        try:
            records = self._client.list_transcriptions()
        except APIError as exc:
            logger.error("Loading history failed: %s", exc.message)
            state.notify(LOAD_FAILED)
            return

        state.history = records
        if state.selected_id is not None and state.find(state.selected_id) is None:
            state.reset_display()
        logger.info("Loaded %d transcriptions", len(records))

    def refresh_history(self, state: AppState) -> None:
        self.load_history(state, force=True)

    def switch_backend(self, state: AppState) -> None:
        """Drop records from the previous backend, then load from the current one.

        History stays empty if the new backend cannot be listed.
        """
        state.history = []
        state.reset_display()
        self.load_history(state, force=True)

    def select(self, state: AppState, record_id: str) -> None:
        record = state.find(record_id)
        if record is None:
            logger.debug("Ignoring selection of unknown record %s", record_id)
            return
        state.show(record)

    def delete(self, state: AppState, record_id: str) -> bool:
        """Delete on the backend, then locally. Returns True on success."""
        try:
            self._client.delete_transcription(record_id)
        except APIError as exc:
            logger.error("Deleting %s failed: %s", record_id, exc.message)
            state.notify(DELETE_FAILED)
            return False

        state.history = [r for r in state.history if r.id != record_id]
        if state.selected_id == record_id:
            state.reset_display()
        return True

    def clear_history(self, state: AppState) -> None:
        """Forget the local history only; records stay on the backend."""
        state.history = []
        state.reset_display()

    # -- recording --

    def start_recording(self, state: AppState) -> bool:
        """Open the microphone and begin a session. Returns True if recording.

        Raises:
            RecordingAlreadyActiveError: A session is already open.
            UploadInProgressError: An upload is in flight.
        """
        if state.upload.recording or state.capture is not None:
            raise RecordingAlreadyActiveError()
        if state.upload.uploading:
            raise UploadInProgressError()

        capture = self._capture_factory()
        try:
            capture.start()
        except MicrophoneAccessError as exc:
            logger.warning("Microphone unavailable: %s", exc.detail)
            state.notify(exc.detail)
            return False

        state.capture = capture
        state.upload.recording = True
        return True

    def stop_recording(
        self,
        state: AppState,
        on_progress: PercentCallback | None = None,
    ) -> TranscriptionRecord | None:
        """Release the microphone and submit what was captured."""
        capture = state.capture
        if capture is None:
            state.upload.recording = False
            return None

        capture.stop()
        state.capture = None
        state.upload.recording = False

        logger.info(
            "Captured %.1f s of audio", capture.processor.duration_seconds(capture.get_audio())
        )
        try:
            payload = capture.to_wav()
        except EmptyRecordingError as exc:
            state.notify(exc.detail)
            return None
        return self.submit(state, payload, on_progress)

    # -- upload --

    def upload_file(
        self,
        state: AppState,
        audio: AudioFile,
        on_progress: PercentCallback | None = None,
    ) -> TranscriptionRecord | None:
        return self.submit(state, audio, on_progress)

    def submit(
        self,
        state: AppState,
        audio: AudioFile | bytes,
        on_progress: PercentCallback | None = None,
    ) -> TranscriptionRecord | None:
        """Upload ``audio`` and make the resulting record the selected one.

        ``on_progress`` receives whole percentages, strictly increasing.
        Returns the new record, or None when the upload failed.

        Raises:
            UploadInProgressError: Another upload is still running.
        """
        if state.upload.uploading:
            raise UploadInProgressError()

        state.upload.uploading = True
        state.upload.progress = 0
        state.text = TRANSCRIBING_TEXT

        def _report(loaded: int, total: int) -> None:
            percent = upload_percent(loaded, total)
            if percent is None or percent <= state.upload.progress:
                return
            state.upload.progress = percent
            if on_progress is not None:
                on_progress(percent)

        try:
            record = self._client.transcribe(audio, on_progress=_report)
        except APIError as exc:
            logger.error("Transcription failed: %s", exc.message)
            state.notify(exc.backend_message or UPLOAD_FAILED)
            state.reset_display()
            return None
        finally:
            state.upload.reset()

        state.history.insert(0, record)
        state.show(record)
        logger.info("Transcribed %s into record %s", getattr(audio, "filename", "buffer"), record.id)
        return record
