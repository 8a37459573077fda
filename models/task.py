"""A task represent an objective that needs to be completed within a Project

A Task belongs to one Project and is assigned to one TeamMember
A Task can contain multiple Todos
Completing a Task completes all its Todos
A Task is complete once all its Todos are complete (see services.todo_service)

"""
from __future__ import annotations
from datetime import datetime
from enum import StrEnum

from database import db


class TaskStatus(StrEnum):
    """Completion states shared by tasks and todos."""

    COMPLETE = "complete"
    IN_PROGRESS = "in progress"


class Task(db.Model):
    __tablename__ = "task"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    status = db.Column(
        db.String(20),
        nullable=False,
        default=TaskStatus.IN_PROGRESS.value,
        server_default=TaskStatus.IN_PROGRESS.value,
        index=True,
    )
    project_id = db.Column(
        db.Integer,
        db.ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    assigned_team_member_id = db.Column(
        db.Integer,
        db.ForeignKey("team_member.id"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    project = db.relationship("Project", back_populates="tasks")
    assigned_team_member = db.relationship("TeamMember", back_populates="tasks")
    todos = db.relationship(
        "Todo",
        back_populates="task",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="Todo.id",
    )

    @property
    def status_enum(self) -> TaskStatus:
        """Return the status as an enum value."""

        return TaskStatus(self.status)

    @status_enum.setter
    def status_enum(self, value: TaskStatus) -> None:
        self.status = value.value

    @property
    def is_complete(self) -> bool:
        return self.status_enum == TaskStatus.COMPLETE

    def complete_todos(self) -> int:
        """Mark every todo of the task complete and return how many changed."""

        changed = 0
        for todo in self.todos:
            if todo.status_enum != TaskStatus.COMPLETE:
                todo.status_enum = TaskStatus.COMPLETE
                changed += 1
        return changed

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "project_id": self.project_id,
            "assigned_team_member_id": self.assigned_team_member_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Task {self.name}>"
