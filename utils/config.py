# utils/config.py
import os


def get_setting(name: str, default=None):
    """Look a setting up in Streamlit secrets first, then the environment."""
    try:
        import streamlit as st
        value = st.secrets.get(name)
    except Exception:
        # no secrets.toml, or not running under streamlit
        value = None
    if value in (None, ""):
        value = os.getenv(name)
    return value if value not in (None, "") else default
