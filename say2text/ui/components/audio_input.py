"""
Audio input card — file upload, microphone recording, upload progress.

States: idle -> recording -> uploading -> idle
"""

import logging

import streamlit as st

from say2text.core.exceptions import Say2TextError
from say2text.core.models import AudioFile
from say2text.services.controller import TranscriptionController
from say2text.services.state import AppState

logger = logging.getLogger(__name__)

AUDIO_TYPES = ["wav", "mp3", "m4a", "mp4", "aac", "ogg", "oga", "opus", "webm", "flac"]

# Bumped after each submission so the uploader / browser recorder widgets
# come back empty instead of resubmitting their last value on rerun.
_NONCE_KEY = "input_nonce"


def _nonce() -> int:
    return st.session_state.setdefault(_NONCE_KEY, 0)


def _reset_inputs() -> None:
    st.session_state[_NONCE_KEY] = _nonce() + 1


def _progress_reporter():
    """Create a progress bar and return the callback that drives it."""
    bar = st.progress(0, text="Uploading...")

    def _update(percent: int) -> None:
        bar.progress(percent, text=f"Uploading... {percent}%")

    return _update


def _guarded(state: AppState, action, *args, **kwargs):
    """Run a controller action, turning guard errors into notices."""
    try:
        return action(*args, **kwargs)
    except Say2TextError as exc:
        logger.warning("%s refused: %s", getattr(action, "__name__", "action"), exc.detail)
        state.notify(exc.detail)
        return None


def render_audio_input(
    state: AppState,
    controller: TranscriptionController,
    capture_mode: str = "browser",
) -> None:
    """Render upload and record controls based on current state."""
    with st.container(border=True):
        st.subheader(":material/mic: Audio Input")

        uploading = state.upload.uploading
        recording = state.upload.recording

        uploaded = st.file_uploader(
            "Upload Audio",
            type=AUDIO_TYPES,
            disabled=uploading or recording,
            key=f"upload_{_nonce()}",
        )
        if uploaded is not None:
            audio = AudioFile(
                filename=uploaded.name,
                content=uploaded.getvalue(),
                content_type=uploaded.type or "application/octet-stream",
            )
            _reset_inputs()
            _guarded(state, controller.upload_file, state, audio, _progress_reporter())
            st.rerun()

        if capture_mode == "browser":
            _render_browser_recorder(state, controller, disabled=uploading)
        else:
            _render_device_recorder(state, controller, disabled=uploading)


def _render_device_recorder(
    state: AppState,
    controller: TranscriptionController,
    disabled: bool,
) -> None:
    """Start/stop buttons driving the local input device."""
    if not state.upload.recording:
        if st.button(
            "Start Recording",
            icon=":material/mic:",
            type="primary",
            disabled=disabled,
            key="start_recording",
        ):
            _guarded(state, controller.start_recording, state)
            st.rerun()
        return

    st.info("Recording... press **Stop Recording** when you are done.")
    if st.button("Stop Recording", icon=":material/mic_off:", key="stop_recording"):
        _guarded(state, controller.stop_recording, state, _progress_reporter())
        st.rerun()


def _render_browser_recorder(
    state: AppState,
    controller: TranscriptionController,
    disabled: bool,
) -> None:
    """Streamlit's in-browser recorder; the finished clip is submitted as a buffer."""
    clip = st.audio_input("Record audio", disabled=disabled, key=f"mic_{_nonce()}")
    if clip is not None:
        _reset_inputs()
        _guarded(state, controller.submit, state, clip.getvalue(), _progress_reporter())
        st.rerun()
