from datetime import datetime
from pathlib import Path
from unittest import mock

from django.test import SimpleTestCase

from apps.core.errors import NotFoundError, ValidationError
from apps.core.validation import is_numeric, parse_due_date, parse_id, require_name
from clido.settings import get_db_path


class ParseIdTests(SimpleTestCase):

    def test_numeric_values(self):
        self.assertEqual(parse_id("12"), 12)
        self.assertEqual(parse_id(" 7 "), 7)
        self.assertEqual(parse_id(3), 3)

    def test_rejects_non_numeric_and_zero(self):
        for value in ("abc", "", None, "-1", "1.5", "0", True):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    parse_id(value)

    def test_is_numeric(self):
        self.assertTrue(is_numeric("42"))
        self.assertFalse(is_numeric("Home"))
        self.assertFalse(is_numeric(None))


class DueDateTests(SimpleTestCase):

    def test_cli_format(self):
        self.assertEqual(parse_due_date("2024-09-11 14:30"), datetime(2024, 9, 11, 14, 30))

    def test_date_only(self):
        self.assertEqual(parse_due_date("2024-09-11"), datetime(2024, 9, 11))

    def test_empty_means_no_due_date(self):
        self.assertIsNone(parse_due_date(""))
        self.assertIsNone(parse_due_date(None))

    def test_invalid(self):
        with self.assertRaises(ValidationError):
            parse_due_date("someday")


class MiscTests(SimpleTestCase):

    def test_require_name(self):
        self.assertEqual(require_name("  Home ", "project"), "Home")
        with self.assertRaisesMessage(ValidationError, "Task name is required."):
            require_name("", "task")

    def test_not_found_message(self):
        error = NotFoundError("task", 5)
        self.assertEqual(str(error), "Task '5' not found")
        self.assertEqual(error.identifier, 5)

    def test_db_path_override(self):
        with mock.patch.dict('os.environ', {'CLIDO_DB_PATH': '/tmp/clido-test.db'}):
            self.assertEqual(get_db_path(), Path('/tmp/clido-test.db'))

    def test_db_path_default(self):
        with mock.patch.dict('os.environ', {}, clear=False) as env:
            env.pop('CLIDO_DB_PATH', None)
            path = get_db_path()
        self.assertEqual(path.name, 'data.db')
        self.assertEqual(path.parent.name, 'clido')
