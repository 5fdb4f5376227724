import sys
from datetime import datetime, timedelta

from django.test import SimpleTestCase

from apps.core.domain.forest import build_forest
from apps.core.presentation.formatting import (
    PastDue,
    format_date,
    past_due_status,
    past_due_text,
    priority_label,
    wrap_text,
)
from apps.core.presentation.rendering import render_to_text
from apps.core.presentation.tables import project_table, task_table
from apps.core.presentation.trees import project_tree, task_tree
from apps.projects.domain.entities import ProjectEntity
from apps.tasks.domain.entities import Priority, TaskEntity


class PastDueTests(SimpleTestCase):

    def setUp(self):
        self.now = datetime(2024, 9, 11, 14, 30)
        self.yesterday = self.now - timedelta(days=1)

    def test_overdue_when_not_completed(self):
        self.assertEqual(past_due_status(self.yesterday, False, self.now), PastDue.OVERDUE)

    def test_completed_task_was_due(self):
        self.assertEqual(past_due_status(self.yesterday, True, self.now), PastDue.WAS_DUE)

    def test_future_or_missing_due_date(self):
        tomorrow = self.now + timedelta(days=1)
        self.assertEqual(past_due_status(tomorrow, False, self.now), PastDue.NOT_DUE)
        self.assertEqual(past_due_status(None, False, self.now), PastDue.NOT_DUE)

    def test_defaults_to_wall_clock(self):
        self.assertEqual(past_due_status(datetime(2000, 1, 1), False), PastDue.OVERDUE)

    def test_markers_are_distinct(self):
        overdue = past_due_text(self.yesterday, False, self.now)
        was_due = past_due_text(self.yesterday, True, self.now)
        self.assertEqual(overdue.plain, "yes")
        self.assertEqual(was_due.plain, "was due")
        self.assertIn("red", str(overdue.style))


class FormattingTests(SimpleTestCase):

    def test_wrap_text(self):
        text = "This is a very long sentence that needs to be wrapped."
        self.assertEqual(
            wrap_text(text, 20),
            "This is a very long\nsentence that needs\nto be wrapped.",
        )
        self.assertEqual(wrap_text("short", 20), "short")
        self.assertEqual(wrap_text(None, 20), "")

    def test_format_date(self):
        self.assertEqual(format_date(datetime(2024, 9, 11, 14, 30)), "2024-09-11 14:30")
        self.assertEqual(format_date(None), "None")

    def test_priority_label(self):
        self.assertEqual(priority_label(Priority.HIGH), "High")
        self.assertEqual(priority_label(3), "Low")
        self.assertEqual(priority_label(17), "None")


class RenderingTests(SimpleTestCase):

    def setUp(self):
        self.projects = [
            ProjectEntity(id=1, name="Home"),
            ProjectEntity(id=2, name="Garden", parent_project_id=1),
            ProjectEntity(id=3, name="Kitchen", parent_project_id=1),
        ]
        self.tasks = [
            TaskEntity(id=1, name="Mow lawn", project_id=2, due_date=datetime(2000, 1, 1)),
            TaskEntity(id=2, name="Buy [seeds]", project_id=2, parent_task_id=1,
                       priority=Priority.HIGH),
        ]

    def test_project_table(self):
        output = render_to_text(project_table(self.projects), width=200)
        self.assertIn("Child Of", output)
        self.assertIn("Garden", output)
        self.assertIn("Parent", output)
        self.assertIn("Child", output)

    def test_task_table(self):
        output = render_to_text(task_table(self.tasks, {2: "Garden"}), width=250)
        self.assertIn("Mow lawn", output)
        self.assertIn("Buy [seeds]", output)
        self.assertIn("2000-01-01 00:00", output)
        self.assertIn("High", output)
        self.assertIn("yes", output)

    def test_project_tree_marks_last_child(self):
        output = render_to_text(project_tree(build_forest(self.projects)), width=120)
        self.assertIn("Home (ID: 1)", output)
        self.assertIn("├── Garden (ID: 2)", output)
        self.assertIn("└── Kitchen (ID: 3)", output)

    def test_tree_keeps_sibling_order(self):
        tree = project_tree(build_forest(self.projects))
        [home] = tree.children
        self.assertEqual([c.label.plain for c in home.children],
                         ["Garden (ID: 2)", "Kitchen (ID: 3)"])

    def test_deep_tree_is_built_without_recursion(self):
        depth = sys.getrecursionlimit() * 2
        chain = [ProjectEntity(id=1, name="P1")] + [
            ProjectEntity(id=i, name=f"P{i}", parent_project_id=i - 1)
            for i in range(2, depth + 1)
        ]

        branch = project_tree(build_forest(chain))
        levels = 0
        while branch.children:
            [branch] = branch.children
            levels += 1

        self.assertEqual(levels, depth)
        self.assertEqual(branch.label.plain, f"P{depth} (ID: {depth})")

    def test_task_tree_includes_details(self):
        output = render_to_text(task_tree(build_forest(self.tasks)), width=120)
        self.assertIn("Mow lawn (ID: 1)", output)
        self.assertIn("Buy [seeds] (ID: 2)", output)
        self.assertIn("Priority: High", output)
