from unittest import mock

from django.db import OperationalError
from django.db.models.query import QuerySet
from django.test import TestCase

from apps.core.errors import NotFoundError, StorageError, ValidationError
from apps.projects.adapters.orm_repositories import DjangoProjectRepository
from apps.projects.domain.entities import ProjectEntity
from apps.projects.models import Project as ProjectModel
from apps.projects.services.project_service import ProjectService
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.application.use_cases import CreateTaskInput, CreateTaskUseCase
from apps.tasks.domain.entities import TaskEntity


class ProjectRepositoryTests(TestCase):

    def setUp(self):
        self.repo = DjangoProjectRepository()

    def test_round_trip(self):
        created = self.repo.create(ProjectEntity(id=None, name="Home", description="Chores"))
        fetched = self.repo.get_by_id(created.id)

        self.assertEqual(fetched.name, "Home")
        self.assertEqual(fetched.description, "Chores")
        self.assertIsNone(fetched.parent_project_id)
        self.assertIsNotNone(fetched.id)
        self.assertIsNotNone(fetched.creation_date)
        self.assertIsNotNone(fetched.last_modified_date)

    def test_get_by_name(self):
        created = self.repo.create(ProjectEntity(id=None, name="Work"))
        self.assertEqual(self.repo.get_by_name("Work").id, created.id)

        with self.assertRaises(NotFoundError):
            self.repo.get_by_name("Nope")

    def test_duplicate_name_is_storage_error(self):
        self.repo.create(ProjectEntity(id=None, name="Work"))

        with self.assertRaises(StorageError) as ctx:
            self.repo.create(ProjectEntity(id=None, name="Work"))
        self.assertEqual(ctx.exception.operation, "create")

        # Połączenie nadal działa po odrzuconym zapisie
        self.assertEqual(len(self.repo.list_all()), 1)

    def test_list_by_parent_returns_direct_children_only(self):
        root = self.repo.create(ProjectEntity(id=None, name="Root"))
        child = self.repo.create(ProjectEntity(id=None, name="Child", parent_project_id=root.id))
        self.repo.create(ProjectEntity(id=None, name="Grandchild", parent_project_id=child.id))

        self.assertEqual([p.name for p in self.repo.list_by_parent(root.id)], ["Child"])

    def test_update_refreshes_timestamp(self):
        project = self.repo.create(ProjectEntity(id=None, name="Home"))
        before = project.last_modified_date

        project.description = "Updated"
        updated = self.repo.update(project)

        self.assertEqual(updated.description, "Updated")
        self.assertGreaterEqual(updated.last_modified_date, before)

    def test_update_and_delete_missing(self):
        with self.assertRaises(NotFoundError):
            self.repo.update(ProjectEntity(id=404, name="Ghost"))
        with self.assertRaises(NotFoundError):
            self.repo.delete(404)

    def test_read_failures_are_storage_errors(self):
        locked = OperationalError("database is locked")

        with mock.patch.object(ProjectModel.objects, 'get', side_effect=locked):
            with self.assertRaises(StorageError) as ctx:
                self.repo.get_by_id(1)
            self.assertEqual(ctx.exception.operation, "get")
            self.assertEqual(ctx.exception.entity_id, 1)
            with self.assertRaises(StorageError):
                self.repo.get_by_name("Home")

        with mock.patch.object(QuerySet, '__iter__', side_effect=locked):
            with self.assertRaises(StorageError):
                self.repo.list_all()
            with self.assertRaises(StorageError) as ctx:
                self.repo.list_by_parent(7)
            self.assertEqual(ctx.exception.entity_id, 7)

    def test_delete_does_not_cascade(self):
        root = self.repo.create(ProjectEntity(id=None, name="Root"))
        self.repo.create(ProjectEntity(id=None, name="Child", parent_project_id=root.id))

        with self.assertRaises(StorageError):
            self.repo.delete(root.id)
        self.assertEqual(self.repo.get_by_id(root.id).name, "Root")


class ProjectServiceTests(TestCase):

    def setUp(self):
        self.repo = DjangoProjectRepository()
        self.task_repo = DjangoTaskRepository()
        self.service = ProjectService(self.repo, self.task_repo)

    def test_create_with_parent_by_name_and_id(self):
        home = self.service.create_project("Home")
        garden = self.service.create_project("Garden", parent_identifier="Home")
        shed = self.service.create_project("Shed", parent_identifier=str(garden.id))

        self.assertEqual(garden.parent_project_id, home.id)
        self.assertEqual(shed.parent_project_id, garden.id)

    def test_create_requires_name(self):
        with self.assertRaises(ValidationError):
            self.service.create_project("   ")

    def test_create_with_unknown_parent(self):
        with self.assertRaises(NotFoundError):
            self.service.create_project("Orphan", parent_identifier="Missing")
        with self.assertRaises(NotFoundError):
            self.service.create_project("Orphan", parent_identifier="999")

    def test_edit_keeps_unspecified_fields(self):
        project = self.service.create_project("Home", description="Chores")
        edited = self.service.edit_project(project.id, name="House")

        self.assertEqual(edited.name, "House")
        self.assertEqual(edited.description, "Chores")

    def test_edit_rejects_cycles(self):
        root = self.service.create_project("Root")
        child = self.service.create_project("Child", parent_identifier="Root")

        with self.assertRaises(ValidationError):
            self.service.edit_project(root.id, parent_identifier=str(root.id))
        with self.assertRaises(ValidationError):
            self.service.edit_project(root.id, parent_identifier="Child")

        moved = self.service.edit_project(child.id, parent_identifier="Root")
        self.assertEqual(moved.parent_project_id, root.id)

    def test_remove_three_levels(self):
        root = self.service.create_project("Root")
        child = self.service.create_project("Child", parent_identifier="Root")
        grandchild = self.service.create_project("Grandchild", parent_identifier="Child")
        other = self.service.create_project("Other")

        removed = self.service.remove_project(root.id)

        self.assertEqual(removed, [grandchild.id, child.id, root.id])
        for project_id in removed:
            with self.assertRaises(NotFoundError):
                self.repo.get_by_id(project_id)
        self.assertEqual(self.repo.get_by_id(other.id).name, "Other")

    def test_remove_single_project(self):
        project = self.service.create_project("Solo")
        self.assertEqual(self.service.remove_project(project.id), [project.id])

    def test_remove_missing_project(self):
        with self.assertRaises(NotFoundError):
            self.service.remove_project(12345)

    def test_remove_purges_tasks_of_every_removed_project(self):
        root = self.service.create_project("Root")
        child = self.service.create_project("Child", parent_identifier="Root")
        keep = self.service.create_project("Keep")

        top = self.task_repo.create(TaskEntity(id=None, name="Top", project_id=root.id))
        sub = self.task_repo.create(
            TaskEntity(id=None, name="Sub", project_id=root.id, parent_task_id=top.id)
        )
        child_task = self.task_repo.create(TaskEntity(id=None, name="Child task", project_id=child.id))
        kept = self.task_repo.create(TaskEntity(id=None, name="Kept", project_id=keep.id))

        self.service.remove_project(root.id)

        for task_id in (top.id, sub.id, child_task.id):
            with self.assertRaises(NotFoundError):
                self.task_repo.get_by_id(task_id)
        self.assertEqual(self.task_repo.get_by_id(kept.id).name, "Kept")

    def test_remove_leaves_tasks_of_other_projects(self):
        home = self.service.create_project("Home")
        work = self.service.create_project("Work")
        use_case = CreateTaskUseCase(self.task_repo, self.repo)

        home_task = use_case.execute(CreateTaskInput(name="Home task", project="Home"))
        with self.assertRaises(ValidationError):
            use_case.execute(CreateTaskInput(
                name="Work task", project="Work", parent_task=str(home_task.id)
            ))
        work_task = use_case.execute(CreateTaskInput(name="Work task", project="Work"))

        self.service.remove_project(home.id)

        self.assertEqual(self.repo.get_by_id(work.id).name, "Work")
        self.assertEqual([t.id for t in self.task_repo.list_by_project(work.id)], [work_task.id])
