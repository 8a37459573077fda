"""Project operations, including the cascading delete and progress recalculation."""

from __future__ import annotations

import logging
from typing import Any

from database import db
from forms import ProjectForm, bind_payload
from models.client import Client
from models.project import Project
from models.task import Task
from models.todo import Todo
from services.progress_service import update_progress
from services.store import fetch_or_raise, unit_of_work

logger = logging.getLogger(__name__)


def list_projects() -> list[Project]:
    with unit_of_work("listing projects", commit=False):
        return Project.query.order_by(Project.created_at.desc(), Project.id.desc()).all()


def get_project(project_id: int) -> Project:
    with unit_of_work(f"loading project {project_id}", commit=False):
        return fetch_or_raise(Project, project_id)


def create_project(payload: Any) -> Project:
    """Create a project for an existing client. Progress always starts at 0."""

    with unit_of_work("creating project"):
        form = bind_payload(ProjectForm, payload)
        client = fetch_or_raise(Client, form.client_id.data)
        project = Project(
            name=form.name.data,
            start_date=form.start_date.data,
            end_date=form.end_date.data,
            progress=0,
            client=client,
        )
        db.session.add(project)
        db.session.flush()

    logger.info("Created project %s (%s)", project.name, project.id)
    return project


def update_project(project_id: int, payload: Any) -> Project:
    """Apply a partial update to a project.

    ``progress`` is derived from the project's tasks, so a value supplied in
    the payload is ignored.
    """
    with unit_of_work(f"updating project {project_id}"):
        project = fetch_or_raise(Project, project_id)
        form = bind_payload(ProjectForm, payload, current=project.to_dict())
        if "progress" in payload:
            logger.debug("Ignoring progress supplied for project %s", project_id)

        if form.client_id.data != project.client_id:
            project.client = fetch_or_raise(Client, form.client_id.data)
        project.name = form.name.data
        project.start_date = form.start_date.data
        project.end_date = form.end_date.data

    return project


def recalculate_progress(project_id: int) -> Project:
    """Recount the project's tasks and persist the resulting progress."""

    with unit_of_work(f"recalculating progress for project {project_id}"):
        project = fetch_or_raise(Project, project_id)
        update_progress(project.id)

    logger.info("Recalculated progress for project %s: %s%%", project.id, project.progress)
    return project


def delete_project(project_id: int) -> dict[str, Any]:
    """Delete a project together with its tasks and their todos.

    Everything is removed in one transaction: on failure nothing is deleted.
    """
    with unit_of_work(f"deleting project {project_id}"):
        project = fetch_or_raise(Project, project_id)
        snapshot = project.to_dict()
        task_count = Task.query.filter_by(project_id=project.id).count()
        todo_count = (
            Todo.query.join(Task, Todo.task_id == Task.id)
            .filter(Task.project_id == project.id)
            .count()
        )
        db.session.delete(project)
        db.session.flush()

    logger.info(
        "Deleted project %s with %s tasks and %s todos",
        project_id,
        task_count,
        todo_count,
    )
    return {
        "deleted_project": snapshot,
        "deleted_tasks": task_count,
        "deleted_todos": todo_count,
    }
