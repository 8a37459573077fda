"""A Todo is a checklist item belonging to a Task."""
from __future__ import annotations
from datetime import datetime

from database import db
from models.task import TaskStatus


class Todo(db.Model):
    __tablename__ = "todo"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    status = db.Column(
        db.String(20),
        nullable=False,
        default=TaskStatus.IN_PROGRESS.value,
        server_default=TaskStatus.IN_PROGRESS.value,
        index=True,
    )
    task_id = db.Column(
        db.Integer,
        db.ForeignKey("task.id", ondelete="CASCADE"),
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

    task = db.relationship("Task", back_populates="todos")

    @property
    def status_enum(self) -> TaskStatus:
        return TaskStatus(self.status)

    @status_enum.setter
    def status_enum(self, value: TaskStatus) -> None:
        self.status = value.value

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "task_id": self.task_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Todo {self.name}>"
