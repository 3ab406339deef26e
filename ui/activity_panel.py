import streamlit as st
import pandas as pd


def render_activity_panel(ws):
    st.subheader("Audit Log")
    rows = [{"Timestamp": e.timestamp, "User": ws.users.display_name(e.user_id),
             "Action": e.action, "Details": e.details} for e in ws.audit.entries]
    st.dataframe(pd.DataFrame(rows, columns=["Timestamp", "User", "Action", "Details"]),
                 use_container_width=True, hide_index=True)
