import streamlit as st
import plotly.express as px
from datetime import date

from models.leave import LeaveRecord, LeaveType
from services.errors import InvalidWindowError, NotFoundError
from ui.session import force_rerun, persist
from utils.timeline import leave_timeline_frame

LEAVE_TYPES = [t.value for t in LeaveType]


def _coverage_picks(ws, user, start, end) -> dict:
    """Conflict preview for the window being edited, with one assignee pick per entry."""
    try:
        conflicts = ws.conflicts_for(user.id, start, end)
    except InvalidWindowError as e:
        st.error(str(e))
        return {}
    if not conflicts:
        st.caption("No tasks fall inside this window.")
        return {}

    st.markdown("**Tasks due while you are away**")
    users = ws.users.users
    me = next((i for i, u in enumerate(users) if u.id == user.id), 0)
    choices = {}
    for c in conflicts:
        preview = c.as_task()
        label = f"{preview.due_date:%a %d %b} · {preview.title} · {preview.priority.value}"
        if c.is_virtual:
            label += " (future occurrence)"
        # window in the key so picks reset when the dates change
        pick = st.selectbox(label, users, index=me, format_func=lambda u: u.name,
                            key=f"cov_{start}_{end}_{c.key}")
        choices[c.key] = pick.id
    return choices


def _leave_form(ws, user, editing):
    key = editing.id if editing else "new"
    c1, c2 = st.columns(2)
    start = c1.date_input("Start", value=editing.start_date if editing else date.today(), key=f"lv_start_{key}")
    end = c2.date_input("End", value=editing.end_date if editing else date.today(), key=f"lv_end_{key}")
    leave_type = st.selectbox("Type", LEAVE_TYPES,
                              index=LEAVE_TYPES.index(editing.leave_type.value) if editing else 0,
                              key=f"lv_type_{key}")
    reason = st.text_input("Reason", value=editing.reason if editing else "", key=f"lv_reason_{key}")

    choices = _coverage_picks(ws, user, start, end)

    if st.button("Update leave" if editing else "Book leave", key=f"lv_save_{key}"):
        if end < start:
            st.warning("End date must be on or after start date.")
            return
        if editing:
            data = editing.model_dump()
            data.update(start_date=start, end_date=end, leave_type=LeaveType(leave_type), reason=reason)
            leave = LeaveRecord(**data)
        else:
            leave = LeaveRecord(user_id=user.id, start_date=start, end_date=end,
                                leave_type=LeaveType(leave_type), reason=reason)
        try:
            result = ws.book_leave(user.id, leave, choices)
        except (InvalidWindowError, NotFoundError) as e:
            st.error(str(e))
            return
        persist(ws)
        st.session_state.pop("editing_leave_id", None)
        st.success(result.summary)
        force_rerun()


def render_leave_panel(ws, user):
    st.subheader("Leave Tracker")
    editing = ws.leaves.get(st.session_state.get("editing_leave_id") or "")
    with st.expander("Edit leave" if editing else "Plan leave", expanded=editing is not None):
        _leave_form(ws, user, editing)
        if editing and st.button("Stop editing"):
            st.session_state.pop("editing_leave_id", None)
            force_rerun()

    mine = ws.leaves.for_user(user.id)
    if not mine:
        st.info("No leave booked yet.")
    for l in mine:
        c1, c2, c3 = st.columns([4, 1, 1])
        c1.write(f"**{l.leave_type.value}** · {l.start_date} → {l.end_date} · "
                 f"{l.duration_days} days · {l.status.value} · {l.reason or '-'}")
        if c2.button("Edit", key=f"lv_edit_{l.id}"):
            st.session_state["editing_leave_id"] = l.id
            force_rerun()
        if c3.button("Cancel", key=f"lv_cancel_{l.id}"):
            ws.cancel_leave(user.id, l.id)
            persist(ws)
            force_rerun()

    st.markdown("---")
    st.subheader("Team calendar")
    df = leave_timeline_frame(ws.leaves.leaves, ws.users.users)
    if df.empty:
        st.caption("Nobody has leave booked.")
        return
    fig = px.timeline(df, x_start="Start", x_end="Finish", y="Person", color="Type",
                      hover_data=["Days", "Reason"])
    fig.update_yaxes(autorange="reversed", title=None)
    fig.update_layout(margin=dict(l=20, r=20, t=10, b=30), height=320)
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})
