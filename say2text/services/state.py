"""
Session state for one client: history, selection, displayed text, upload.

The controller is the only writer; the UI reads it to render. Streamlit
keeps one ``AppState`` per browser session in ``st.session_state``.
"""

from dataclasses import dataclass, field

from say2text.core.models import TranscriptionRecord
from say2text.services.audio.capture import AudioCapture

PLACEHOLDER_TEXT = "Your transcribed text will appear here..."
TRANSCRIBING_TEXT = "Transcribing... please wait..."


@dataclass
class UploadState:
    """Transient recording/upload flags. Idle after every upload attempt."""

    recording: bool = False
    uploading: bool = False
    progress: int = 0

    @property
    def busy(self) -> bool:
        return self.recording or self.uploading

    def reset(self) -> None:
        self.uploading = False
        self.progress = 0


@dataclass
class AppState:
    """Everything the UI renders, in one explicit object."""

    history: list[TranscriptionRecord] = field(default_factory=list)
    selected_id: str | None = None
    text: str = PLACEHOLDER_TEXT
    upload: UploadState = field(default_factory=UploadState)
    notices: list[str] = field(default_factory=list)
    history_loaded: bool = False
    capture: AudioCapture | None = None

    def find(self, record_id: str) -> TranscriptionRecord | None:
        return next((r for r in self.history if r.id == record_id), None)

    @property
    def selected(self) -> TranscriptionRecord | None:
        if self.selected_id is None:
            return None
        return self.find(self.selected_id)

    def show(self, record: TranscriptionRecord) -> None:
        """Display ``record`` in the transcript viewer and mark it selected."""
        self.selected_id = record.id
        self.text = record.transcript

    def reset_display(self) -> None:
        self.selected_id = None
        self.text = PLACEHOLDER_TEXT

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def pop_notice(self) -> str | None:
        return self.notices.pop(0) if self.notices else None
