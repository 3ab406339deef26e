import streamlit as st
import pandas as pd

from models.repository_item import ITEM_TYPES
from ui.session import force_rerun, persist


def render_repository_panel(ws, user):
    st.subheader("File Repository")
    with st.form("new_item", clear_on_submit=True):
        name = st.text_input("Name")
        url = st.text_input("URL")
        item_type = st.selectbox("Type", ITEM_TYPES)
        add_btn = st.form_submit_button("Add")
    if add_btn and name and url:
        ws.add_file(user.id, name, url, item_type)
        persist(ws)
        force_rerun()

    items = ws.files.items
    if not items:
        st.info("Repository is empty.")
        return
    st.dataframe(pd.DataFrame([{"Name": i.name, "Type": i.item_type, "URL": i.url,
                                "Added by": ws.users.display_name(i.uploaded_by),
                                "Added": i.created_at.date()} for i in items]),
                 use_container_width=True, hide_index=True)
    picked = st.selectbox("Item", items, format_func=lambda i: i.name, key="repo_pick")
    new_name = st.text_input("Rename to", value=picked.name, key=f"repo_rename_{picked.id}")
    c1, c2 = st.columns(2)
    if c1.button("Save name") and new_name.strip() and new_name.strip() != picked.name:
        ws.edit_file(user.id, picked.id, name=new_name.strip())
        persist(ws)
        force_rerun()
    if c2.button("Delete item"):
        ws.delete_file(user.id, picked.id)
        persist(ws)
        force_rerun()
