"""Task operations and the cascades they trigger on todos and projects."""

from __future__ import annotations

import logging
from typing import Any

from database import db
from forms import TaskForm, bind_payload
from models.project import Project
from models.task import Task, TaskStatus
from models.team_member import TeamMember
from services.progress_service import update_progress
from services.store import fetch_or_raise, id_in_range, unit_of_work

logger = logging.getLogger(__name__)


def list_tasks(project_id: int | None = None) -> list[Task]:
    """Return tasks newest first, optionally limited to one project."""

    with unit_of_work("listing tasks", commit=False):
        query = Task.query
        if project_id is not None:
            if not id_in_range(project_id):
                return []
            query = query.filter_by(project_id=project_id)
        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_task(task_id: int) -> Task:
    with unit_of_work(f"loading task {task_id}", commit=False):
        return fetch_or_raise(Task, task_id)


def create_task(payload: Any) -> Task:
    """Create a task, append it to its project and refresh the project's progress."""

    with unit_of_work("creating task"):
        form = bind_payload(TaskForm, payload)
        project = fetch_or_raise(Project, form.project_id.data)
        member = fetch_or_raise(TeamMember, form.assigned_team_member_id.data, "Team member")

        with db.session.no_autoflush:
            task = Task(
                name=form.name.data,
                status=form.status.data,
                assigned_team_member=member,
            )
            project.tasks.append(task)
            db.session.add(task)
        db.session.flush()
        update_progress(project.id)

    logger.info("Created task %s in project %s", task.id, project.id)
    return task


def update_task(task_id: int, payload: Any) -> Task:
    """Apply a partial update to a task.

    Setting the status to complete also completes every todo of the task.
    Moving the task to another project refreshes both projects' progress.
    """
    with unit_of_work(f"updating task {task_id}"):
        task = fetch_or_raise(Task, task_id)
        form = bind_payload(TaskForm, payload, current=task.to_dict())

        previous_project = task.project
        previous_status = task.status

        if form.project_id.data != task.project_id:
            task.project = fetch_or_raise(Project, form.project_id.data)
        if form.assigned_team_member_id.data != task.assigned_team_member_id:
            task.assigned_team_member = fetch_or_raise(
                TeamMember, form.assigned_team_member_id.data, "Team member"
            )
        task.name = form.name.data
        task.status = form.status.data

        if "status" in payload and task.status_enum == TaskStatus.COMPLETE:
            completed = task.complete_todos()
            if completed:
                logger.info("Completed %s todos of task %s", completed, task.id)

        moved = task.project is not previous_project
        if moved or task.status != previous_status:
            db.session.flush()
            update_progress(task.project.id)
            if moved:
                update_progress(previous_project.id)

    return task


def delete_task(task_id: int) -> dict[str, Any]:
    """Delete a task and its todos, then refresh the owning project's progress."""

    with unit_of_work(f"deleting task {task_id}"):
        task = fetch_or_raise(Task, task_id)
        project = task.project
        snapshot = task.to_dict()
        todo_count = len(task.todos)

        project.tasks.remove(task)
        db.session.delete(task)
        db.session.flush()
        update_progress(project.id)

    logger.info("Deleted task %s and %s todos from project %s", task_id, todo_count, project.id)
    return {"deleted_task": snapshot, "deleted_todos": todo_count}
