"""
Scripted runs of the interactive menu.

Input comes from a list of answers fed to the prompt function; output is
captured with a rich Console writing into a StringIO.
"""

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rich.console import Console

from coursemanager import interactive
from coursemanager.app import build_services
from coursemanager.model import Course, Instructor


class TestInteractive(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.ctx = build_services(Path(tmp.name))
        self.out = io.StringIO()

    def run_with(self, answers: list[str]) -> str:
        console = Console(file=self.out, width=200, color_system=None)
        with mock.patch.object(interactive, "console", console), mock.patch.object(
            interactive, "_prompt", side_effect=answers
        ):
            interactive.run_interactive(self.ctx)
        return self.out.getvalue()

    def test_exit(self) -> None:
        out = self.run_with(["0"])
        self.assertIn("courses=0", out)
        self.assertIn("Bye.", out)

    def test_add_course(self) -> None:
        answers = [
            "1", "3",
            "CS101", "Intro", "", "Computer Science", "abc", "3", "30",
            "0", "0",
        ]
        out = self.run_with(answers)

        course = self.ctx.courses.get_course_by_code("CS101")
        self.assertEqual(course.credits, 3)
        self.assertEqual(course.max_enrollment, 30)
        self.assertIn("Please enter a valid number between 1 and 12.", out)
        self.assertIn("Course CS101 added", out)

    def test_validation_error_is_printed_and_loop_continues(self) -> None:
        self.ctx.courses.add_course(
            Course(code="CS101", title="Intro", credits=3, max_enrollment=30, department="CS")
        )
        answers = ["1", "3", "cs101", "Dup", "", "CS", "3", "30", "0", "0"]
        out = self.run_with(answers)

        self.assertIn("Error:", out)
        self.assertIn("already exists", out)
        self.assertEqual(len(self.ctx.courses.get_all_courses()), 1)

    def test_assign_from_menu(self) -> None:
        course = self.ctx.courses.add_course(
            Course(code="CS101", title="Intro", credits=3, max_enrollment=30, department="CS")
        )
        instructor = self.ctx.instructors.add_instructor(
            Instructor(first_name="Ada", last_name="Lovelace", email="ada@uni.edu", department="CS")
        )
        # instructors menu -> assign -> pick instructor 1 -> pick course 1
        out = self.run_with(["2", "7", "1", "1", "0", "0"])

        self.assertIn("Assigned Ada Lovelace to CS101.", out)
        self.assertEqual(self.ctx.courses.get_course_by_id(course.id).instructor_ids, [instructor.id])

    def test_delete_needs_confirmation(self) -> None:
        self.ctx.courses.add_course(
            Course(code="CS101", title="Intro", credits=3, max_enrollment=30, department="CS")
        )
        self.run_with(["1", "5", "1", "n", "0", "0"])
        self.assertEqual(len(self.ctx.courses.get_all_courses()), 1)

        self.run_with(["1", "5", "1", "y", "0", "0"])
        self.assertEqual(self.ctx.courses.get_all_courses(), [])

    def test_markup_in_names_is_shown_verbatim(self) -> None:
        self.ctx.courses.add_course(
            Course(code="CS101", title="[bold]Intro[/bold]", credits=3, max_enrollment=30, department="CS")
        )
        out = self.run_with(["1", "1", "0", "0"])
        self.assertIn("[bold]Intro[/bold]", out)


if __name__ == "__main__":
    unittest.main()
