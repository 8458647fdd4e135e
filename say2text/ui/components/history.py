"""
History card — past transcriptions with select, delete, and clear.
"""

import streamlit as st

from say2text.core.models import TranscriptionRecord
from say2text.services.controller import TranscriptionController
from say2text.services.state import AppState
from say2text.ui.utils import format_size, format_timestamp, preview_text


def render_history_item(
    record: TranscriptionRecord,
    state: AppState,
    controller: TranscriptionController,
) -> None:
    """Render a single history entry as a bordered card."""
    selected = record.id == state.selected_id

    with st.container(border=True):
        col_badge, col_open, col_delete = st.columns([3, 1, 1])
        with col_badge:
            st.markdown(f":violet-background[{record.mime_type or 'audio'}]")
        with col_open:
            if st.button(
                ":material/visibility:",
                key=f"select_{record.id}",
                help="Show transcript",
                type="primary" if selected else "secondary",
            ):
                controller.select(state, record.id)
                st.rerun()
        with col_delete:
            if st.button(":material/delete:", key=f"delete_{record.id}", help="Delete"):
                controller.delete(state, record.id)
                st.rerun()

        st.write(preview_text(record.transcript) or "_(empty transcript)_")
        st.caption(f"{format_timestamp(record.created_at)} • {format_size(record.size)}")


def render_history(state: AppState, controller: TranscriptionController) -> None:
    """Render the history list with a count header and clear button."""
    with st.container(border=True):
        col_title, col_clear = st.columns([4, 1])
        with col_title:
            st.subheader(f":material/schedule: History ({len(state.history)})")
        with col_clear:
            if state.history and st.button(
                ":material/delete_sweep:",
                key="clear_history",
                help="Clear history (records stay on the server)",
            ):
                controller.clear_history(state)
                st.rerun()

        if not state.history:
            st.caption("No transcriptions yet.")
            return

        with st.container(height=400):
            for record in state.history:
                render_history_item(record, state, controller)
