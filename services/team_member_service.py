"""Team member operations."""

from __future__ import annotations

import logging
from typing import Any

from database import db
from forms import TeamMemberForm, bind_payload
from models.task import Task
from models.team_member import TeamMember
from services.errors import IntegrityViolationError
from services.store import fetch_or_raise, unit_of_work

logger = logging.getLogger(__name__)


def list_team_members() -> list[TeamMember]:
    with unit_of_work("listing team members", commit=False):
        return TeamMember.query.order_by(TeamMember.created_at.desc(), TeamMember.id.desc()).all()


def get_team_member(member_id: int) -> TeamMember:
    with unit_of_work(f"loading team member {member_id}", commit=False):
        return fetch_or_raise(TeamMember, member_id, "Team member")


def create_team_member(payload: Any) -> TeamMember:
    with unit_of_work("creating team member"):
        form = bind_payload(TeamMemberForm, payload)
        member = TeamMember(name=form.name.data, role=form.role.data, email=form.email.data)
        db.session.add(member)
    return member


def update_team_member(member_id: int, payload: Any) -> TeamMember:
    with unit_of_work(f"updating team member {member_id}"):
        member = fetch_or_raise(TeamMember, member_id, "Team member")
        form = bind_payload(TeamMemberForm, payload, current=member.to_dict(), member=member)
        member.name = form.name.data
        member.role = form.role.data
        member.email = form.email.data
    return member


def delete_team_member(member_id: int) -> dict[str, Any]:
    """Delete a team member no task is assigned to."""

    with unit_of_work(f"deleting team member {member_id}"):
        member = fetch_or_raise(TeamMember, member_id, "Team member")
        assigned = Task.query.filter_by(assigned_team_member_id=member.id).count()
        if assigned:
            raise IntegrityViolationError(
                "Cannot delete team member assigned to tasks. Reassign tasks first."
            )
        snapshot = member.to_dict()
        db.session.delete(member)

    logger.info("Deleted team member %s", member_id)
    return {"deleted_team_member": snapshot}
