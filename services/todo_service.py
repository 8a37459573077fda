"""Todo operations and the task status rollup they drive."""

from __future__ import annotations

import logging
from typing import Any

from database import db
from forms import TodoForm, bind_payload
from models.task import Task, TaskStatus
from models.todo import Todo
from services.progress_service import update_progress
from services.store import fetch_or_raise, id_in_range, unit_of_work

logger = logging.getLogger(__name__)


def rollup_task_status(task: Task) -> bool:
    """Derive the task's status from its todos.

    The task is complete when none of its todos is still in progress. A task
    without todos keeps its status; only explicit task updates change it.

    Returns:
        True when the task status changed.
    """
    todos = Todo.query.filter_by(task_id=task.id)
    if todos.count() == 0:
        return False
    incomplete = todos.filter(Todo.status == TaskStatus.IN_PROGRESS.value).count()
    status = TaskStatus.COMPLETE if incomplete == 0 else TaskStatus.IN_PROGRESS
    if task.status_enum == status:
        return False
    task.status_enum = status
    logger.info("Task %s is now %s", task.id, status.value)
    return True


def _rollup(task: Task) -> None:
    rollup_task_status(task)
    db.session.flush()
    update_progress(task.project_id)


def list_todos(task_id: int | None = None) -> list[Todo]:
    """Return todos newest first, optionally limited to one task."""

    with unit_of_work("listing todos", commit=False):
        query = Todo.query
        if task_id is not None:
            if not id_in_range(task_id):
                return []
            query = query.filter_by(task_id=task_id)
        return query.order_by(Todo.created_at.desc(), Todo.id.desc()).all()


def get_todo(todo_id: int) -> Todo:
    with unit_of_work(f"loading todo {todo_id}", commit=False):
        return fetch_or_raise(Todo, todo_id)


def create_todo(payload: Any) -> Todo:
    with unit_of_work("creating todo"):
        form = bind_payload(TodoForm, payload)
        task = fetch_or_raise(Task, form.task_id.data)
        todo = Todo(name=form.name.data, status=form.status.data)
        task.todos.append(todo)
        db.session.add(todo)
    return todo


def update_todo(todo_id: int, payload: Any) -> Todo:
    """Apply a partial update to a todo.

    A status change rolls the parent task's status up from its todos and
    refreshes the project's progress. Moving the todo to another task rolls
    up both tasks.
    """
    with unit_of_work(f"updating todo {todo_id}"):
        todo = fetch_or_raise(Todo, todo_id)
        form = bind_payload(TodoForm, payload, current=todo.to_dict())

        previous_task = todo.task
        if form.task_id.data != todo.task_id:
            todo.task = fetch_or_raise(Task, form.task_id.data)
        todo.name = form.name.data
        todo.status = form.status.data
        db.session.flush()

        if todo.task is not previous_task:
            _rollup(previous_task)
            _rollup(todo.task)
        elif "status" in payload:
            _rollup(todo.task)

    return todo


def delete_todo(todo_id: int) -> dict[str, Any]:
    with unit_of_work(f"deleting todo {todo_id}"):
        todo = fetch_or_raise(Todo, todo_id)
        snapshot = todo.to_dict()
        todo.task.todos.remove(todo)
        db.session.delete(todo)
    return {"deleted_todo": snapshot}
