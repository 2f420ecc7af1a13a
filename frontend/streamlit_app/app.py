import os
from datetime import datetime, time

import streamlit as st

from taskdeck.client.api import TaskdeckClient
from taskdeck.client.state import ALL, STATUS_CHOICES, BoardState

API = os.getenv("API_URL", "http://localhost:2022/api/v1")
PRIORITIES = ["low", "medium", "high"]

st.set_page_config(page_title="Taskdeck", layout="centered")
st.title("Taskdeck")

if "board" not in st.session_state:
    st.session_state.board = BoardState(TaskdeckClient(API))
    st.session_state.board.reload()
board: BoardState = st.session_state.board


def _due(date_value, time_value):
    if not date_value:
        return None
    return datetime.combine(date_value, time_value or time(0, 0))


stats = board.stats()
c1, c2, c3 = st.columns(3)
c1.metric("Total", stats["total"])
c2.metric("Completed", stats["completed"])
c3.metric("Pending", stats["pending"])

def _clear_filters():
    st.session_state.status_filter = ALL
    st.session_state.priority_filter = ALL
    st.session_state.category_filter = ALL
    board.clear_filters()


with st.sidebar:
    st.subheader("Filters")
    status = st.selectbox("Status", STATUS_CHOICES, key="status_filter")
    priority = st.selectbox("Priority", [ALL] + PRIORITIES, key="priority_filter")
    category = st.selectbox("Category", [ALL] + board.categories, key="category_filter")
    if (status, priority, category) != (board.status_filter, board.priority_filter, board.category_filter):
        board.set_filters(status=status, priority=priority, category=category)
        st.rerun()
    st.button("Clear filters", on_click=_clear_filters)
    if st.button("Refresh"):
        board.reload()

with st.expander("New task"):
    with st.form("create", clear_on_submit=True):
        title = st.text_input("Title")
        description = st.text_area("Description")
        new_priority = st.selectbox("Priority", PRIORITIES, index=1)
        new_category = st.text_input("Category")
        due_day = st.date_input("Due date", value=None)
        due_time = st.time_input("Due time", value=None)
        if st.form_submit_button("Create"):
            board.create(
                title,
                description=description or None,
                priority=new_priority,
                category=new_category or None,
                due_date=_due(due_day, due_time),
            )
            st.rerun()

if board.error:
    st.error(board.error)

overdue = {t.id for t in board.overdue()}
if not board.tasks:
    st.info("No tasks.")

for task in board.tasks:
    with st.container(border=True):
        left, mid, right = st.columns([6, 1, 1])
        label = f"~~{task.title}~~" if task.completed else f"**{task.title}**"
        left.markdown(f"{label}  \n`{task.priority.value}`"
                      + (f" · {task.category}" if task.category else "")
                      + (f" · due {task.due_date:%Y-%m-%d %H:%M}" if task.due_date else "")
                      + (" · :red[overdue]" if task.id in overdue else ""))
        if task.description:
            left.caption(task.description)
        if mid.button("Undo" if task.completed else "Done", key=f"toggle-{task.id}"):
            board.toggle(task.id)
            st.rerun()
        if right.button("Delete", key=f"delete-{task.id}"):
            board.delete(task.id)
            st.rerun()
        with st.expander("Edit"):
            with st.form(f"edit-{task.id}"):
                e_title = st.text_input("Title", value=task.title)
                e_description = st.text_area("Description", value=task.description or "")
                e_priority = st.selectbox("Priority", PRIORITIES, index=PRIORITIES.index(task.priority.value))
                e_category = st.text_input("Category", value=task.category or "")
                e_day = st.date_input("Due date", value=task.due_date.date() if task.due_date else None)
                e_time = st.time_input("Due time", value=task.due_date.time() if task.due_date else None)
                if st.form_submit_button("Save"):
                    board.update(
                        task.id,
                        title=e_title,
                        description=e_description or None,
                        priority=e_priority,
                        category=e_category or None,
                        due_date=_due(e_day, e_time),
                    )
                    st.rerun()
