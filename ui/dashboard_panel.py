import asyncio
import streamlit as st

from services.ai_content import generate_daily_standup
from utils.progress import completion_rate, workload_summary


def render_dashboard(ws, user):
    stats = workload_summary(ws.tasks.tasks, user.id)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Pending Tasks", stats["pending"])
    c2.metric("BAU Workload", stats["bau"])
    c3.metric("Completed", stats["completed"])
    c4.metric("Completion Rate", f"{completion_rate(ws.tasks.tasks, user.id):.0f}%")

    left, right = st.columns(2)
    with left:
        st.subheader("AI Standup Generator")
        if st.button("Generate Report", key="standup_btn"):
            with st.spinner("Generating..."):
                st.session_state["standup"] = asyncio.run(
                    generate_daily_standup(ws.audit.for_user(user.id), user.name))
        st.write(st.session_state.get("standup")
                 or "Click 'Generate Report' to create a summary of your recent activities.")
    with right:
        st.subheader("Recent Activity")
        for log in ws.audit.entries[:5]:
            st.markdown(f"**{ws.users.display_name(log.user_id)}** {log.action}  \n"
                        f"{log.details}  \n_{log.timestamp:%Y-%m-%d %H:%M}_")
