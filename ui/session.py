import streamlit as st

import db
from services.workspace import Workspace


def force_rerun():
    fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if fn:
        fn()


def get_workspace() -> Workspace:
    if "workspace" not in st.session_state:
        st.session_state["workspace"] = Workspace.from_state(db.load_or_seed())
    return st.session_state["workspace"]


def persist(ws: Workspace) -> None:
    db.save_state(ws.to_state())


def flush_notifications(ws: Workspace) -> None:
    """Show unread notifications as toasts once."""
    for n in reversed(ws.notifier.items):
        if not n.read:
            st.toast(n.message)
    ws.notifier.mark_all_read()
