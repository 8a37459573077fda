"""A Project is a body of work delivered for a Client.

A Project belongs to one Client
A Project contains multiple Tasks, kept in the order they were added
A Project's progress is derived from its Tasks and never edited directly
Deleting a Project deletes its Tasks and their Todos

"""
from __future__ import annotations
from datetime import datetime

from database import db


class Project(db.Model):
    __tablename__ = "project"

    __table_args__ = (
        db.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_project_progress_range"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    start_date = db.Column(db.DateTime, nullable=False, index=True)
    end_date = db.Column(db.DateTime, nullable=False, index=True)
    progress = db.Column(db.Integer, nullable=False, default=0, server_default="0", index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("client.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    client = db.relationship("Client", back_populates="projects")
    tasks = db.relationship(
        "Task",
        back_populates="project",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="Task.id",
    )

    @property
    def task_ids(self) -> list[int]:
        return [task.id for task in self.tasks]

    def is_active(self, now: datetime | None = None) -> bool:
        """True while the project's end date is still ahead."""

        return self.end_date > (now or datetime.utcnow())

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "progress": self.progress,
            "client_id": self.client_id,
            "tasks": self.task_ids,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Project {self.name}>"
