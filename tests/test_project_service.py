from datetime import datetime
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from database import db
from models.project import Project
from models.task import Task
from models.todo import Todo
from services import project_service
from services.errors import NotFoundError, StoreUnavailableError, ValidationFailure
from tests.utils.app_case import AppTestCase


class ProjectServiceTestCase(AppTestCase):
    def setUp(self):
        super().setUp()
        self.acme = self.make_client(name="Acme Foods")

    def _payload(self, **overrides):
        payload = {
            "name": "Warehouse portal",
            "start_date": "2026-02-01T09:00:00",
            "end_date": "2026-08-31T17:00:00",
            "client_id": self.acme.id,
        }
        payload.update(overrides)
        return payload

    def test_create_starts_at_zero_progress(self):
        project = project_service.create_project(self._payload(progress=80))

        self.assertEqual(project.progress, 0)
        self.assertEqual(project.client_id, self.acme.id)
        self.assertEqual(project.start_date, datetime(2026, 2, 1, 9, 0))
        self.assertEqual(project.task_ids, [])

    def test_create_accepts_utc_timestamps(self):
        project = project_service.create_project(
            self._payload(start_date="2026-02-01T09:00:00.000Z", end_date="2026-03-01T09:00:00Z")
        )
        self.assertEqual(project.end_date, datetime(2026, 3, 1, 9, 0))

    def test_end_date_must_follow_start_date(self):
        for end_date in ("2026-01-15T00:00:00", "2026-02-01T09:00:00"):
            with self.subTest(end_date=end_date):
                with self.assertRaises(ValidationFailure) as ctx:
                    project_service.create_project(self._payload(end_date=end_date))
                self.assertIn("end_date", ctx.exception.errors)
        self.assertEqual(Project.query.count(), 0)

    def test_malformed_date_is_rejected(self):
        with self.assertRaises(ValidationFailure) as ctx:
            project_service.create_project(self._payload(start_date="next tuesday"))
        self.assertIn("start_date", ctx.exception.errors)

    def test_create_requires_existing_client(self):
        with self.assertRaises(NotFoundError) as ctx:
            project_service.create_project(self._payload(client_id=9999))
        self.assertEqual(ctx.exception.message, "Client not found")
        self.assertEqual(Project.query.count(), 0)

    def test_update_ignores_supplied_progress(self):
        project = project_service.create_project(self._payload())

        project = project_service.update_project(project.id, {"name": "Portal v2", "progress": 90})

        self.assertEqual(project.name, "Portal v2")
        self.assertEqual(project.progress, 0)

    def test_partial_update_keeps_other_fields(self):
        project = project_service.create_project(self._payload())

        project = project_service.update_project(project.id, {"end_date": "2026-12-31"})

        self.assertEqual(project.name, "Warehouse portal")
        self.assertEqual(project.start_date, datetime(2026, 2, 1, 9, 0))
        self.assertEqual(project.end_date, datetime(2026, 12, 31))

    def test_update_validates_against_stored_dates(self):
        project = project_service.create_project(self._payload())

        with self.assertRaises(ValidationFailure):
            project_service.update_project(project.id, {"end_date": "2026-01-01"})
        self.assertEqual(
            db.session.get(Project, project.id).end_date, datetime(2026, 8, 31, 17, 0)
        )

    def test_update_can_switch_client(self):
        project = project_service.create_project(self._payload())
        globex = self.make_client(name="Globex")

        project = project_service.update_project(project.id, {"client_id": globex.id})

        self.assertEqual(project.client.name, "Globex")

    def test_get_missing_project(self):
        with self.assertRaises(NotFoundError):
            project_service.get_project(9999)

    def test_delete_cascades_to_tasks_and_todos(self):
        project = project_service.create_project(self._payload())
        keeper = project_service.create_project(self._payload(name="Keeper"))
        member = self.make_team_member()
        first = self.make_task(project, member)
        second = self.make_task(project, member)
        kept_task = self.make_task(keeper, member)
        for task in (first, first, second):
            self.make_todo(task)
        self.make_todo(kept_task)

        result = project_service.delete_project(project.id)

        self.assertEqual(result["deleted_project"]["id"], project.id)
        self.assertEqual(result["deleted_tasks"], 2)
        self.assertEqual(result["deleted_todos"], 3)
        self.assertIsNone(db.session.get(Project, project.id))
        self.assertEqual([task.id for task in Task.query.all()], [kept_task.id])
        self.assertEqual(Todo.query.count(), 1)

    def test_delete_missing_project(self):
        with self.assertRaises(NotFoundError):
            project_service.delete_project(9999)

    def test_failed_delete_leaves_everything_in_place(self):
        project = project_service.create_project(self._payload())
        task = self.make_task(project)
        self.make_todo(task)
        self.make_todo(task)

        failure = OperationalError("COMMIT", {}, Exception("database is locked"))
        with patch.object(Session, "commit", side_effect=failure):
            with self.assertRaises(StoreUnavailableError):
                project_service.delete_project(project.id)

        self.assertIsNotNone(db.session.get(Project, project.id))
        self.assertEqual(Task.query.filter_by(project_id=project.id).count(), 1)
        self.assertEqual(Todo.query.count(), 2)

    def test_list_projects_newest_first(self):
        older = project_service.create_project(self._payload(name="Older"))
        newer = project_service.create_project(self._payload(name="Newer"))

        ids = [project.id for project in project_service.list_projects()]

        self.assertEqual(ids, [newer.id, older.id])
