import asyncio
import streamlit as st

from services.ai_content import generate_documentation, generate_email


def render_ai_panel():
    st.subheader("AI Studio")
    email_tab, docs_tab = st.tabs(["Email", "Documentation"])
    with email_tab:
        with st.form("ai_email"):
            recipient = st.text_input("Recipient")
            topic = st.text_area("Topic")
            tone = st.selectbox("Tone", ["Professional", "Friendly", "Urgent", "Formal"])
            go = st.form_submit_button("Draft email")
        if go and topic:
            with st.spinner("Drafting..."):
                st.session_state["ai_email"] = asyncio.run(generate_email(recipient, topic, tone))
        if st.session_state.get("ai_email"):
            st.text_area("Draft", st.session_state["ai_email"], height=260)
    with docs_tab:
        with st.form("ai_docs"):
            title = st.text_input("Title")
            notes = st.text_area("Context / notes")
            doc_format = st.selectbox("Format", ["Markdown", "Confluence", "Plain text"])
            toc = st.checkbox("Include table of contents")
            go_docs = st.form_submit_button("Generate")
        if go_docs and title:
            with st.spinner("Writing..."):
                st.session_state["ai_docs"] = asyncio.run(generate_documentation(title, notes, doc_format, toc))
        if st.session_state.get("ai_docs"):
            st.markdown(st.session_state["ai_docs"])
