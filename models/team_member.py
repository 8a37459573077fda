"""Team members are the people Tasks are assigned to."""
from __future__ import annotations
from datetime import datetime
from enum import StrEnum

from database import db


class TeamMemberRole(StrEnum):
    """Roles a team member can hold."""

    PROJECT_MANAGER = "Project Manager"
    BACKEND_DEVELOPER = "Backend Developer"
    FRONTEND_DEVELOPER = "Frontend Developer"


class TeamMember(db.Model):
    __tablename__ = "team_member"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(40), nullable=False, index=True)
    email = db.Column(db.String(254), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    tasks = db.relationship("Task", back_populates="assigned_team_member", lazy=True)

    @property
    def role_enum(self) -> TeamMemberRole:
        """Return the role as an enum value."""

        return TeamMemberRole(self.role)

    @role_enum.setter
    def role_enum(self, value: TeamMemberRole) -> None:
        self.role = value.value

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<TeamMember {self.email}>"
