import warnings
from unittest.mock import patch

from sqlalchemy.exc import OperationalError, SAWarning
from sqlalchemy.orm import Session

from database import db
from models.project import Project
from models.task import Task
from models.todo import Todo
from services import task_service
from services.errors import NotFoundError, StoreUnavailableError, ValidationFailure
from tests.utils.app_case import AppTestCase


class TaskServiceTestCase(AppTestCase):
    def setUp(self):
        super().setUp()
        self.project = self.make_project()
        self.member = self.make_team_member()

    def _project(self, project_id=None):
        return db.session.get(Project, project_id or self.project.id)

    def test_tasks_are_appended_in_creation_order(self):
        created = [self.make_task(self.project, self.member) for _ in range(3)]

        self.assertEqual(self._project().task_ids, [task.id for task in created])
        self.assertTrue(all(task.status == "in progress" for task in created))

    def test_create_task_refreshes_progress(self):
        self.make_task(self.project, self.member)
        self.make_task(self.project, self.member, status="complete")

        self.assertEqual(self._project().progress, 50)

    def test_create_task_requires_existing_project(self):
        with self.assertRaises(NotFoundError) as ctx:
            task_service.create_task(
                {"name": "Orphan", "project_id": 9999, "assigned_team_member_id": self.member.id}
            )
        self.assertEqual(ctx.exception.message, "Project not found")
        self.assertEqual(Task.query.count(), 0)

    def test_create_task_requires_existing_team_member(self):
        with self.assertRaises(NotFoundError) as ctx:
            task_service.create_task(
                {"name": "Unassigned", "project_id": self.project.id, "assigned_team_member_id": 9999}
            )
        self.assertEqual(ctx.exception.message, "Team member not found")
        self.assertEqual(self._project().task_ids, [])

    def test_create_task_validation_errors(self):
        with self.assertRaises(ValidationFailure) as ctx:
            task_service.create_task(
                {
                    "name": "   ",
                    "status": "done",
                    "project_id": "abc",
                    "assigned_team_member_id": self.member.id,
                }
            )
        errors = ctx.exception.errors
        self.assertIn("name", errors)
        self.assertIn("status", errors)
        self.assertIn("project_id", errors)

    def test_non_object_payload_is_rejected(self):
        with self.assertRaises(ValidationFailure):
            task_service.create_task(["not", "an", "object"])

    def test_completing_task_completes_its_todos(self):
        task = self.make_task(self.project, self.member)
        for _ in range(3):
            self.make_todo(task)

        task_service.update_task(task.id, {"status": "complete"})

        statuses = {todo.status for todo in Todo.query.filter_by(task_id=task.id)}
        self.assertEqual(statuses, {"complete"})
        self.assertEqual(self._project().progress, 100)

    def test_reopening_task_leaves_todos_complete(self):
        task = self.make_task(self.project, self.member)
        self.make_todo(task)
        self.make_todo(task)
        task_service.update_task(task.id, {"status": "complete"})

        task = task_service.update_task(task.id, {"status": "in progress"})

        self.assertEqual(task.status, "in progress")
        statuses = {todo.status for todo in Todo.query.filter_by(task_id=task.id)}
        self.assertEqual(statuses, {"complete"})
        self.assertEqual(self._project().progress, 0)

    def test_rename_keeps_status_and_progress(self):
        task = self.make_task(self.project, self.member, status="complete")

        task = task_service.update_task(task.id, {"name": "Renamed"})

        self.assertEqual(task.name, "Renamed")
        self.assertEqual(task.status, "complete")
        self.assertEqual(self._project().progress, 100)

    def test_reassign_to_missing_member(self):
        task = self.make_task(self.project, self.member)

        with self.assertRaises(NotFoundError):
            task_service.update_task(task.id, {"assigned_team_member_id": 9999})
        self.assertEqual(db.session.get(Task, task.id).assigned_team_member_id, self.member.id)

    def test_update_missing_task(self):
        with self.assertRaises(NotFoundError):
            task_service.update_task(9999, {"name": "Ghost"})

    def test_delete_task_removes_todos_and_refreshes_progress(self):
        done = self.make_task(self.project, self.member, status="complete")
        open_task = self.make_task(self.project, self.member)
        self.make_todo(open_task)
        self.make_todo(open_task)
        self.assertEqual(self._project().progress, 50)

        result = task_service.delete_task(open_task.id)

        self.assertEqual(result["deleted_task"]["id"], open_task.id)
        self.assertEqual(result["deleted_todos"], 2)
        self.assertEqual(Todo.query.count(), 0)
        self.assertEqual(self._project().task_ids, [done.id])
        self.assertEqual(self._project().progress, 100)

    def test_moving_task_refreshes_both_projects(self):
        other = self.make_project(name="Mobile app")
        moving = self.make_task(self.project, self.member, status="complete")
        self.make_task(self.project, self.member)
        self.make_task(other, self.member)
        self.assertEqual(self._project().progress, 50)
        self.assertEqual(self._project(other.id).progress, 0)

        task_service.update_task(moving.id, {"project_id": other.id})

        self.assertEqual(self._project().progress, 0)
        self.assertEqual(self._project(other.id).progress, 50)
        self.assertNotIn(moving.id, self._project().task_ids)
        self.assertIn(moving.id, self._project(other.id).task_ids)

    def test_list_tasks_filters_by_project(self):
        other = self.make_project(name="Mobile app")
        mine = self.make_task(self.project, self.member)
        self.make_task(other, self.member)

        self.assertEqual([task.id for task in task_service.list_tasks(self.project.id)], [mine.id])
        self.assertEqual(len(task_service.list_tasks()), 2)

    def test_failed_commit_rolls_back_task_delete(self):
        self.make_task(self.project, self.member, status="complete")
        task = self.make_task(self.project, self.member)
        self.make_todo(task)
        task_id = task.id

        failure = OperationalError("COMMIT", {}, Exception("database is locked"))
        with patch.object(Session, "commit", side_effect=failure):
            with self.assertRaises(StoreUnavailableError) as ctx:
                task_service.delete_task(task_id)

        self.assertTrue(ctx.exception.retryable)
        self.assertIsNotNone(db.session.get(Task, task_id))
        self.assertEqual(Todo.query.filter_by(task_id=task_id).count(), 1)
        self.assertEqual(self._project().progress, 50)

    def test_out_of_range_ids_are_rejected(self):
        for project_id in (10**30, 0, -4):
            with self.subTest(project_id=project_id):
                with self.assertRaises(ValidationFailure) as ctx:
                    task_service.create_task(
                        {
                            "name": "Overflow",
                            "project_id": project_id,
                            "assigned_team_member_id": self.member.id,
                        }
                    )
                self.assertIn("project_id", ctx.exception.errors)
        self.assertEqual(Task.query.count(), 0)

    def test_lookup_of_unstorable_id_is_not_found(self):
        with self.assertRaises(NotFoundError):
            task_service.get_task(10**30)
        self.assertEqual(task_service.list_tasks(project_id=10**30), [])

    def test_create_task_emits_no_session_warnings(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.make_task(self.project, self.member)

        session_warnings = [w for w in caught if issubclass(w.category, SAWarning)]
        self.assertEqual(session_warnings, [])
        self.assertEqual(len(self._project().task_ids), 1)
