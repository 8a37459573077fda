"""Project progress derived from the completion state of its tasks.

Progress is never incremented: every update recounts the project's current
tasks, so concurrent recalculations converge on a consistent percentage.
"""

from __future__ import annotations

import logging

from database import db
from models.project import Project
from models.task import Task, TaskStatus

logger = logging.getLogger(__name__)


def percentage(completed: int, total: int) -> int:
    """Return ``completed / total`` as a whole percentage, rounding halves up."""

    if total <= 0:
        return 0
    # floor(100 * completed / total + 0.5) in integer arithmetic
    return (200 * completed + total) // (2 * total)


def _count_tasks(project_id: int) -> tuple[int, int]:
    query = Task.query.filter_by(project_id=project_id)
    total = query.count()
    if total == 0:
        return 0, 0
    completed = query.filter(Task.status == TaskStatus.COMPLETE.value).count()
    return completed, total


def calculate_progress(project_id: int) -> int:
    """Return the completion percentage of a project without persisting it."""

    completed, total = _count_tasks(project_id)
    return percentage(completed, total)


def update_progress(project_id: int | None) -> int | None:
    """Recount the project's tasks and store the result on the project.

    Runs inside the caller's unit of work. A missing project is skipped and
    logged rather than raised, since progress is a side effect of some other
    change that should not fail because of it.

    Returns:
        The stored percentage, or None when the project does not exist.
    """
    if project_id is None:
        return None
    project = db.session.get(Project, project_id)
    if project is None:
        logger.warning("Skipping progress update: project %s not found", project_id)
        return None

    completed, total = _count_tasks(project_id)
    project.progress = percentage(completed, total)
    db.session.flush()
    logger.info(
        "Updated project %s progress: %s%% (%s/%s tasks completed)",
        project_id,
        project.progress,
        completed,
        total,
    )
    return project.progress
