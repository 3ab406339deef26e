# main.py

#============================================================#
#                     Nexus BA Workspace                     #
#============================================================#
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Task tracking for business analysts with     #
#               recurring BAU work, leave planning and       #
#               coverage hand-over (SQLite/Postgres powered) #
#============================================================#

import logging

import streamlit as st

from services.users import THEMES
from ui.activity_panel import render_activity_panel
from ui.ai_panel import render_ai_panel
from ui.dashboard_panel import render_dashboard
from ui.leave_panel import render_leave_panel
from ui.repository_panel import render_repository_panel
from ui.session import flush_notifications, force_rerun, get_workspace, persist
from ui.tasks_panel import render_tasks_panel

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(
    page_title="Nexus - BA Workspace",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ======================  GLOBAL CSS  ======================
st.markdown("""
<style>
:root{ --nexus-accent:#0f766e; --nexus-muted:#f1f5f4; --nexus-ink:#1f2937; }
.stTabs [role="tablist"]{gap:6px;margin-bottom:12px;}
.stTabs [role="tab"]{background:var(--nexus-muted);color:var(--nexus-ink);border-radius:8px;padding:8px 14px;font-weight:600;}
.stTabs [role="tab"][aria-selected="true"]{background:var(--nexus-accent);color:#fff;}
div[data-testid="stMetric"]{background:var(--nexus-muted);border-radius:10px;padding:10px 14px;}
</style>
""", unsafe_allow_html=True)

ws = get_workspace()


# ======================  AUTH GATE  ======================
def full_screen_login():
    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown("<h2 style='text-align:center;'>Nexus BA Workspace</h2>", unsafe_allow_html=True)
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Your email", placeholder="you@example.com")
            name = st.text_input("Your name (optional)")
            submitted = st.form_submit_button("Sign in / Continue", use_container_width=True)
        if submitted:
            if not email:
                st.warning("Please enter your email.")
            else:
                user, created = ws.users.sign_in(name, email)
                ws.notifier.notify(f"Welcome to Nexus, {user.name}!" if created else f"Welcome back, {user.name}!",
                                   "success")
                persist(ws)
                st.session_state["user_id"] = user.id
                force_rerun()


user = ws.users.get(st.session_state.get("user_id") or "")
if not user:
    full_screen_login()
    st.stop()

with st.sidebar:
    st.caption(f"Signed in as **{user.email}**")
    st.write(f"{user.name} · {user.role}")
    others = ws.users.users
    switch_to = st.selectbox("Simulate user switch", others, format_func=lambda u: u.name,
                             index=next((i for i, u in enumerate(others) if u.id == user.id), 0))
    if switch_to.id != user.id:
        ws.audit.record(switch_to.id, "Login", f"Switched to user {switch_to.name}", entity_type="User")
        persist(ws)
        st.session_state["user_id"] = switch_to.id
        force_rerun()
    with st.expander("Profile"):
        new_name = st.text_input("Name", value=user.name, key="profile_name")
        new_role = st.text_input("Role", value=user.role, key="profile_role")
        themes = list(THEMES)
        theme = st.selectbox("Theme", themes, index=themes.index(user.theme_preference)
                             if user.theme_preference in themes else 2, key="profile_theme")
        if st.button("Save profile"):
            ws.users.update_profile(user.id, name=new_name.strip() or user.name, role=new_role,
                                    theme_preference=theme)
            persist(ws)
            force_rerun()
    if st.button("Log out"):
        st.session_state.pop("user_id", None)
        force_rerun()

flush_notifications(ws)

# ---------- Tabs ----------
tabs = st.tabs(["Dashboard", "My Tasks", "All Tasks", "Leave", "Repository", "AI Studio", "Activity"])

with tabs[0]:
    render_dashboard(ws, user)
with tabs[1]:
    render_tasks_panel(ws, user, only_mine=True)
with tabs[2]:
    render_tasks_panel(ws, user)
with tabs[3]:
    render_leave_panel(ws, user)
with tabs[4]:
    render_repository_panel(ws, user)
with tabs[5]:
    render_ai_panel()
with tabs[6]:
    render_activity_panel(ws)
