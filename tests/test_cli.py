"""
Tests for the command line entry point.

Every test points COURSEMANAGER_DATA_DIR at a temporary directory and disables
the log file, so running the suite never touches real data or ./logs.
"""

import io
import os
import runpy
import tempfile
import unittest
import uuid
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from coursemanager.cli import main
from coursemanager.config import get_settings


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = Path(tmp.name)

        env = mock.patch.dict(
            os.environ,
            {
                "COURSEMANAGER_DATA_DIR": str(self.data_dir),
                "COURSEMANAGER_LOG_FILE": "",
                "COURSEMANAGER_LOG_LEVEL": "CRITICAL",
                "COURSEMANAGER_SEED": "",
            },
        )
        env.start()
        self.addCleanup(env.stop)
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)

    def run_cli(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main(list(argv))
        return ctx.exception.code, out.getvalue()

    def add_course(self, code: str = "CS101") -> uuid.UUID:
        code_, out = self.run_cli(
            "courses", "add", "--code", code, "--title", "Intro", "--credits", "3",
            "--max-enrollment", "30", "--department", "CS",
        )
        self.assertEqual(code_, 0, out)
        return uuid.UUID(out.strip().splitlines()[-1].removeprefix("ID: "))

    def add_instructor(self, email: str = "a@b.com") -> uuid.UUID:
        code, out = self.run_cli(
            "instructors", "add", "--first-name", "A", "--last-name", "B", "--email", email, "--department", "CS",
        )
        self.assertEqual(code, 0, out)
        return uuid.UUID(out.strip().splitlines()[-1].removeprefix("ID: "))

    def test_missing_command_is_usage_error(self) -> None:
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_python_dash_m_entry_point(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out), mock.patch("sys.argv", ["coursemanager", "courses", "list"]):
            with self.assertRaises(SystemExit) as ctx:
                runpy.run_module("coursemanager", run_name="__main__")
        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(out.getvalue().strip(), "No courses found.")

    def test_empty_list(self) -> None:
        code, out = self.run_cli("courses", "list")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "No courses found.")

    def test_add_prints_event_and_id(self) -> None:
        course_id = self.add_course()
        self.assertTrue((self.data_dir / "courses.json").exists())

        code, out = self.run_cli("courses", "list")
        self.assertEqual(code, 0)
        self.assertIn("CS101 | Intro | CS | 3 cr | max 30", out)
        self.assertIn(str(course_id), out)

    def test_add_event_line(self) -> None:
        code, out = self.run_cli(
            "courses", "add", "--code", "CS101", "--title", "Intro", "--credits", "3",
            "--max-enrollment", "30", "--department", "CS",
        )
        self.assertEqual(out.splitlines()[0], "Course CS101: Added")

    def test_invalid_course_exits_nonzero(self) -> None:
        code, out = self.run_cli("courses", "add", "--code", "CS101")
        self.assertEqual(code, 1)
        self.assertIn("Error: Course validation failed:", out)
        self.assertIn("Course title is required", out)
        self.assertFalse((self.data_dir / "courses.json").exists())

    def test_view_by_code_and_by_id(self) -> None:
        course_id = self.add_course()
        for ref in ("cs101", str(course_id)):
            code, out = self.run_cli("courses", "view", ref)
            self.assertEqual(code, 0)
            self.assertIn("Code:           CS101", out)
            self.assertIn("(none)", out)

    def test_view_unknown_code(self) -> None:
        code, out = self.run_cli("courses", "view", "NOPE1")
        self.assertEqual(code, 1)
        self.assertEqual(out.strip(), "Error: Course with code NOPE1 not found")

    def test_update(self) -> None:
        self.add_course()
        code, out = self.run_cli("courses", "update", "CS101")
        self.assertEqual((code, out.strip()), (0, "Nothing to update."))

        code, out = self.run_cli("courses", "update", "CS101", "--title", "Renamed", "--credits", "4")
        self.assertEqual(code, 0)
        self.assertIn("Course CS101: Updated", out)

        _, out = self.run_cli("courses", "view", "CS101")
        self.assertIn("Title:          Renamed", out)
        self.assertIn("Credits:        4", out)

    def test_delete(self) -> None:
        self.add_course()
        code, out = self.run_cli("courses", "delete", "CS101")
        self.assertEqual(code, 0)
        self.assertIn("Course CS101: Deleted", out)
        _, out = self.run_cli("courses", "list")
        self.assertEqual(out.strip(), "No courses found.")

    def test_assign_flow(self) -> None:
        self.add_course()
        instructor_id = self.add_instructor()

        code, out = self.run_cli("instructors", "assign", str(instructor_id), "CS101")
        self.assertEqual(code, 0)
        self.assertIn("Instructor A B: Assigned to course CS101", out)

        code, out = self.run_cli("instructors", "assign", str(instructor_id), "CS101")
        self.assertEqual((code, out.strip()), (0, "Already assigned to course CS101."))

        _, out = self.run_cli("courses", "by-instructor", str(instructor_id))
        self.assertIn("CS101 | Intro", out)

        _, out = self.run_cli("instructors", "by-course", "CS101")
        self.assertIn("A B | a@b.com", out)

        code, out = self.run_cli("instructors", "unassign", str(instructor_id), "CS101")
        self.assertIn("Removed from course CS101", out)

        code, out = self.run_cli("instructors", "unassign", str(instructor_id), "CS101")
        self.assertEqual((code, out.strip()), (0, "Not assigned to course CS101."))

    def test_fifth_assignment_fails(self) -> None:
        instructor_id = self.add_instructor()
        for n in range(5):
            self.add_course(f"CS10{n}")
        for n in range(4):
            code, _ = self.run_cli("instructors", "assign", str(instructor_id), f"CS10{n}")
            self.assertEqual(code, 0)

        code, out = self.run_cli("instructors", "assign", str(instructor_id), "CS104")
        self.assertEqual(code, 1)
        self.assertIn("more than 4 courses", out)

    def test_invalid_id(self) -> None:
        code, out = self.run_cli("instructors", "view", "not-a-uuid")
        self.assertEqual((code, out.strip()), (1, "Please enter a valid ID."))

    def test_unknown_instructor(self) -> None:
        missing = uuid.uuid4()
        code, out = self.run_cli("instructors", "delete", str(missing))
        self.assertEqual(code, 1)
        self.assertIn(str(missing), out)

    def test_instructor_update_flags(self) -> None:
        instructor_id = self.add_instructor()
        code, _ = self.run_cli("instructors", "update", str(instructor_id), "--active", "no", "--office", "R 12")
        self.assertEqual(code, 0)

        _, out = self.run_cli("instructors", "view", str(instructor_id))
        self.assertIn("Status:     Inactive, Full-time", out)
        self.assertIn("Office:     R 12", out)

    def test_by_department_empty(self) -> None:
        _, out = self.run_cli("instructors", "by-department", "History")
        self.assertEqual(out.strip(), "No instructors found in department: History")

    def test_seed(self) -> None:
        code, out = self.run_cli("seed")
        self.assertEqual(code, 0)
        self.assertIn("Sample data created.", out)

        _, out = self.run_cli("seed")
        self.assertEqual(out.strip(), "Data already exists. Nothing to do.")

    def test_data_dir_option_overrides_environment(self) -> None:
        other = self.data_dir / "other"
        code, _ = self.run_cli(
            "--data-dir", str(other), "courses", "add", "--code", "X1", "--title", "T",
            "--credits", "1", "--max-enrollment", "1", "--department", "D",
        )
        self.assertEqual(code, 0)
        self.assertTrue((other / "courses.json").exists())
        self.assertFalse((self.data_dir / "courses.json").exists())

    def test_corrupt_file_reports_error(self) -> None:
        (self.data_dir / "courses.json").write_text("[oops", encoding="utf-8")
        code, out = self.run_cli("courses", "list")
        self.assertEqual(code, 1)
        self.assertIn("An error occurred: Failed to initialize repository", out)


if __name__ == "__main__":
    unittest.main()
