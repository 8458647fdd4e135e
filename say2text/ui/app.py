"""
Voice-to-Text Studio — Streamlit entry point.

Run with: ``say2text`` (see ``say2text.cli``) or
``streamlit run say2text/ui/app.py``.
"""

from datetime import datetime

import streamlit as st

from say2text.core.config import configure_logging, get_settings
from say2text.services.controller import TranscriptionController
from say2text.services.state import AppState
from say2text.ui.api_client import connection_status, get_api_client
from say2text.ui.components.audio_input import render_audio_input
from say2text.ui.components.history import render_history
from say2text.ui.components.notices import render_notices
from say2text.ui.components.transcript_view import render_transcript

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Voice-to-Text Studio",
    page_icon="\U0001f3a4",
    layout="wide",
)

configure_logging()
settings = get_settings()

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": settings.api_base_url,
    "history_source": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState()

state: AppState = st.session_state.app_state

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f3a4 Voice-to-Text Studio")
    st.caption("Convert your voice into words")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help=f"Base URL of the transcription API (default: {settings.api_base_url})",
    )

    client = get_api_client(st.session_state.api_base_url)
    controller = TranscriptionController(client)

    if st.button("Reload history", icon=":material/refresh:", disabled=state.upload.busy):
        connection_status.clear()
        controller.refresh_history(state)

    _conn_ok, _conn_msg = connection_status(client.base_url)
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# History is fetched once per session, and again whenever the backend changes.
if st.session_state.history_source != client.base_url:
    st.session_state.history_source = client.base_url
    controller.switch_backend(state)

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
st.title("\U0001f3a4 Voice-to-Text Studio")
st.caption("Convert your voice into words with AI precision")

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
col_main, col_side = st.columns([2, 1], gap="large")

with col_main:
    render_audio_input(state, controller, capture_mode=settings.capture_mode)
    render_transcript(state)

with col_side:
    with st.container(border=True):
        st.markdown("_“Transform your voice into powerful words”_")
    render_history(state, controller)

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.divider()
st.caption(
    f"© {datetime.now().year} Voice-to-Text Studio. "
    "Transform speech into text with precision."
)

render_notices(state)
