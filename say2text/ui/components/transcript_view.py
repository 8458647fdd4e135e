"""
Transcript viewer card.
"""

import streamlit as st

from say2text.services.state import AppState


def render_transcript(state: AppState) -> None:
    """Show the displayed text with copy (built into ``st.code``) and download."""
    with st.container(border=True):
        st.subheader("Transcribed Text")
        st.code(state.text, language=None, wrap_lines=True)

        selected = state.selected
        if selected is not None and not state.upload.uploading:
            st.download_button(
                "Download .txt",
                data=selected.transcript,
                file_name=f"transcription-{selected.id}.txt",
                mime="text/plain",
                icon=":material/download:",
                key="download_transcript",
            )
