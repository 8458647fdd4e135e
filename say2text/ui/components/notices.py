"""
Blocking notification dialog for queued notices.
"""

import streamlit as st

from say2text.services.state import AppState


@st.dialog("Notice")
def _notice_dialog(message: str) -> None:
    st.write(message)
    if st.button("OK", type="primary"):
        st.rerun()


def render_notices(state: AppState) -> None:
    """Open a modal for the oldest pending notice, if any.

    Streamlit allows one dialog per run; remaining notices show on the
    rerun triggered by dismissing this one.
    """
    message = state.pop_notice()
    if message is not None:
        _notice_dialog(message)
