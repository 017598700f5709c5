"""
Tests for the course and instructor repositories (lookups + link bookkeeping).
"""

import dataclasses
import tempfile
import unittest
import uuid
from pathlib import Path
from unittest import mock

from coursemanager.errors import DataOperationError, EntityNotFoundError, ValidationError
from coursemanager.model import Course, Instructor
from coursemanager.repositories import CourseRepository, InstructorRepository


class TestCourseRepository(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = Path(tmp.name)
        self.repo = CourseRepository(self.data_dir)
        self.cs101 = self.repo.add(
            Course(code="CS101", title="Intro", credits=3, max_enrollment=30, department="Computer Science")
        )
        self.math = self.repo.add(
            Course(code="MATH101", title="Calculus", credits=4, max_enrollment=35, department="Mathematics")
        )

    def test_file_name(self) -> None:
        self.assertEqual(self.repo.file_path, self.data_dir / "courses.json")
        self.assertTrue(self.repo.file_path.exists())

    def test_get_by_code_is_case_insensitive(self) -> None:
        self.assertEqual(self.repo.get_by_code("cs101").id, self.cs101.id)

    def test_get_by_code_unknown(self) -> None:
        with self.assertRaises(EntityNotFoundError) as ctx:
            self.repo.get_by_code("NOPE1")
        self.assertEqual(str(ctx.exception), "Course with code NOPE1 not found")

    def test_duplicate_code_rejected_before_write(self) -> None:
        before = self.repo.file_path.read_bytes()
        with self.assertRaises(ValidationError) as ctx:
            self.repo.add(Course(code="Cs101", title="Other", credits=1, max_enrollment=1, department="X"))
        self.assertIn("already exists", str(ctx.exception))
        self.assertEqual(self.repo.file_path.read_bytes(), before)

    def test_get_by_department(self) -> None:
        found = self.repo.get_by_department("computer science")
        self.assertEqual([c.id for c in found], [self.cs101.id])
        self.assertEqual(self.repo.get_by_department("Computer"), [])

    def test_get_by_instructor(self) -> None:
        iid = uuid.uuid4()
        self.repo.update(dataclasses.replace(self.math, instructor_ids=[iid]))
        self.assertEqual([c.code for c in self.repo.get_by_instructor(iid)], ["MATH101"])
        self.assertEqual(self.repo.get_by_instructor(uuid.uuid4()), [])


class TestInstructorRepository(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = Path(tmp.name)
        self.repo = InstructorRepository(self.data_dir)
        self.ada = self.repo.add(
            Instructor(first_name="Ada", last_name="Lovelace", email="Ada@Uni.edu", department="CS")
        )

    def test_file_name(self) -> None:
        self.assertEqual(self.repo.file_path, self.data_dir / "instructors.json")

    def test_get_by_email_case_insensitive(self) -> None:
        self.assertEqual(self.repo.get_by_email("ada@uni.EDU").id, self.ada.id)

    def test_get_by_email_unknown(self) -> None:
        with self.assertRaises(EntityNotFoundError) as ctx:
            self.repo.get_by_email("x@y.z")
        self.assertIn("x@y.z", str(ctx.exception))

    def test_assign_and_remove(self) -> None:
        course_id = uuid.uuid4()
        self.assertFalse(self.repo.is_assigned_to_course(self.ada.id, course_id))

        self.assertTrue(self.repo.assign_to_course(self.ada.id, course_id))
        self.assertTrue(self.repo.is_assigned_to_course(self.ada.id, course_id))
        self.assertEqual([i.id for i in self.repo.get_by_course(course_id)], [self.ada.id])

        reloaded = InstructorRepository(self.data_dir)
        self.assertEqual(reloaded.get_by_id(self.ada.id).course_ids, [course_id])

        self.assertTrue(self.repo.remove_from_course(self.ada.id, course_id))
        self.assertEqual(self.repo.get_by_id(self.ada.id).course_ids, [])

    def test_assign_twice_is_noop(self) -> None:
        course_id = uuid.uuid4()
        self.repo.assign_to_course(self.ada.id, course_id)
        before = self.repo.file_path.read_bytes()

        self.assertFalse(self.repo.assign_to_course(self.ada.id, course_id))
        self.assertEqual(self.repo.get_by_id(self.ada.id).course_ids, [course_id])
        self.assertEqual(self.repo.file_path.read_bytes(), before)

    def test_remove_missing_is_noop(self) -> None:
        before = self.repo.file_path.read_bytes()
        self.assertFalse(self.repo.remove_from_course(self.ada.id, uuid.uuid4()))
        self.assertEqual(self.repo.file_path.read_bytes(), before)

    def test_fifth_course_rejected(self) -> None:
        for _ in range(4):
            self.assertTrue(self.repo.assign_to_course(self.ada.id, uuid.uuid4()))

        with self.assertRaises(ValidationError) as ctx:
            self.repo.assign_to_course(self.ada.id, uuid.uuid4())
        self.assertIn("more than 4 courses", str(ctx.exception))
        self.assertEqual(len(self.repo.get_by_id(self.ada.id).course_ids), 4)

    def test_unknown_instructor(self) -> None:
        missing = uuid.uuid4()
        with self.assertRaises(EntityNotFoundError):
            self.repo.assign_to_course(missing, uuid.uuid4())
        with self.assertRaises(EntityNotFoundError):
            self.repo.is_assigned_to_course(missing, uuid.uuid4())

    def test_failed_save_leaves_stored_record_untouched(self) -> None:
        course_id = uuid.uuid4()
        with mock.patch("coursemanager.storage.os.replace", side_effect=OSError("boom")):
            with self.assertRaises(DataOperationError):
                self.repo.assign_to_course(self.ada.id, course_id)
        self.assertEqual(self.repo.get_by_id(self.ada.id).course_ids, [])
        self.assertEqual(self.repo.get_by_id(self.ada.id), self.ada)


if __name__ == "__main__":
    unittest.main()
