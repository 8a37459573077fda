"""Summary figures for the dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from models.project import Project
from models.task import Task, TaskStatus
from models.team_member import TeamMember
from services.hydration import hydrate_all
from services.store import unit_of_work

RECENT_ITEMS_LIMIT = 5


def build_dashboard_summary(now: datetime | None = None, limit: int = RECENT_ITEMS_LIMIT) -> dict[str, Any]:
    """Return project/task/team counts and the most recently created items.

    A project counts as active while its end date is after ``now``.
    """
    now = now or datetime.utcnow()
    with unit_of_work("building dashboard summary", commit=False):
        recent_projects = (
            Project.query.order_by(Project.created_at.desc(), Project.id.desc()).limit(limit).all()
        )
        recent_tasks = Task.query.order_by(Task.created_at.desc(), Task.id.desc()).limit(limit).all()
        return {
            "total_projects": Project.query.count(),
            "active_projects": Project.query.filter(Project.end_date > now).count(),
            "total_tasks": Task.query.count(),
            "completed_tasks": Task.query.filter_by(status=TaskStatus.COMPLETE.value).count(),
            "team_members": TeamMember.query.count(),
            "recent_projects": hydrate_all(recent_projects, ("client",)),
            "recent_tasks": hydrate_all(recent_tasks, ("project", "assigned_team_member")),
        }
