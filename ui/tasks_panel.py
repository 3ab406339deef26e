import asyncio
import streamlit as st
from datetime import date

from models.task import TaskFrequency, TaskPriority, TaskStatus, TaskType
from services.ai_content import enhance_task_description
from services.errors import NotFoundError
from ui.session import force_rerun, persist
from utils.timeline import tasks_frame

STATUS_ORDER = [s.value for s in TaskStatus]


def _new_task_form(ws, user, prefix):
    users = ws.users.users
    with st.form(f"new_task_{prefix}", clear_on_submit=True):
        t_title = st.text_input("Task title")
        t_desc = st.text_area("Description")
        c1, c2, c3 = st.columns(3)
        t_type = c1.selectbox("Type", [t.value for t in TaskType])
        t_freq = c2.selectbox("Frequency (BAU only)", [f.value for f in TaskFrequency])
        t_priority = c3.selectbox("Priority", [p.value for p in TaskPriority], index=1)
        c4, c5, c6 = st.columns(3)
        t_due = c4.date_input("Due", value=date.today())
        t_time = c5.text_input("Time (HH:MM)", value="")
        t_assignee = c6.selectbox("Assignee", users, format_func=lambda u: u.name,
                                  index=next((i for i, u in enumerate(users) if u.id == user.id), 0))
        t_files = st.multiselect("Attachments", ws.files.items, format_func=lambda f: f.name)
        submit = st.form_submit_button("Add task")
    if submit and t_title:
        ws.save_task(user.id, title=t_title.strip(), description=t_desc, task_type=t_type,
                     frequency=t_freq if t_type == TaskType.BAU.value else None,
                     priority=t_priority, assignee_id=t_assignee.id, due_date=t_due,
                     due_time=t_time.strip() or None, file_ids=[f.id for f in t_files])
        persist(ws)
        force_rerun()


def render_tasks_panel(ws, user, only_mine: bool = False):
    st.subheader("My Tasks" if only_mine else "All Tasks")
    prefix = "mine" if only_mine else "all"
    _new_task_form(ws, user, prefix)
    render_description_helper(prefix)

    tasks = ws.tasks.tasks_for(user.id) if only_mine else ws.tasks.tasks
    if not tasks:
        st.info("No tasks yet.")
        return
    st.dataframe(tasks_frame(tasks, ws.users.users), use_container_width=True, hide_index=True)

    for t in sorted(tasks, key=lambda t: t.due_date):
        label = f"{t.title} · {t.status.value} · due {t.due_date}"
        if t.frequency:
            label += f" ({t.frequency.value})"
        with st.expander(label):
            st.write(t.description or "-")
            c1, c2, c3, c4 = st.columns([2, 2, 1, 1])
            new_status = c1.selectbox("Status", STATUS_ORDER, index=STATUS_ORDER.index(t.status.value),
                                      key=f"{prefix}_st_{t.id}")
            users = ws.users.users
            owner = c2.selectbox("Assignee", users, format_func=lambda u: u.name,
                                 index=next((i for i, u in enumerate(users) if u.id == t.assignee_id), 0),
                                 key=f"{prefix}_as_{t.id}")
            if c3.button("Save", key=f"{prefix}_sv_{t.id}"):
                try:
                    if owner.id != t.assignee_id:
                        ws.save_task(user.id, t.id, assignee_id=owner.id)
                    if new_status != t.status.value:
                        ws.move_task(user.id, t.id, new_status)
                except NotFoundError as e:
                    st.error(str(e))
                else:
                    persist(ws)
                    force_rerun()
            if c4.button("Delete", key=f"{prefix}_del_{t.id}"):
                ws.delete_task(user.id, t.id)
                persist(ws)
                force_rerun()


def render_description_helper(prefix: str = "ai"):
    with st.expander("✨ Suggest a description with AI"):
        title = st.text_input("Task title", key=f"{prefix}_enhance_title")
        kind = st.selectbox("Type", [t.value for t in TaskType], key=f"{prefix}_enhance_type")
        if st.button("Suggest", key=f"{prefix}_enhance_btn") and title:
            with st.spinner("Thinking..."):
                st.session_state[f"{prefix}_enhance"] = asyncio.run(enhance_task_description(title, kind))
        suggestion = st.session_state.get(f"{prefix}_enhance")
        if suggestion:
            st.write(suggestion["description"])
            st.caption(f"Suggested priority: {suggestion['priority']}")
            for step in suggestion["subtasks"]:
                st.markdown(f"- {step}")
