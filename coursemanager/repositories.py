"""
Concrete repositories for courses and instructors.

Both build on JsonFileRepository and add the lookups the services need.
Lookups on strings (code, department, email) are case-insensitive exact matches.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import uuid
from pathlib import Path
from operator import attrgetter

from coursemanager.errors import EntityNotFoundError, ValidationError
from coursemanager.model import (
    MAX_COURSES_PER_INSTRUCTOR,
    Course,
    Instructor,
    course_from_dict,
    instructor_from_dict,
    to_dict,
)
from coursemanager.storage import JsonFileRepository

logger = logging.getLogger(__name__)

COURSES_FILE = "courses.json"
INSTRUCTORS_FILE = "instructors.json"


def _same_text(a: str, b: str) -> bool:
    return (a or "").casefold() == (b or "").casefold()


class CourseRepository(JsonFileRepository[Course]):
    """Courses stored in <data_dir>/courses.json."""

    def __init__(self, data_dir: str | Path) -> None:
        super().__init__(
            Path(data_dir) / COURSES_FILE,
            "Course",
            key=attrgetter("id"),
            encode=to_dict,
            decode=course_from_dict,
        )

    def add(self, entity: Course) -> Course:
        if entity is not None and any(_same_text(c.code, entity.code) for c in self._entities):
            raise ValidationError(f"Course with code {entity.code} already exists")
        return super().add(entity)

    def get_by_code(self, code: str) -> Course:
        for c in self._entities:
            if _same_text(c.code, code):
                return copy.deepcopy(c)
        raise EntityNotFoundError("Course", code, field="code")

    def get_by_department(self, department: str) -> list[Course]:
        return [copy.deepcopy(c) for c in self._entities if _same_text(c.department, department)]

    def get_by_instructor(self, instructor_id: uuid.UUID) -> list[Course]:
        return [copy.deepcopy(c) for c in self._entities if instructor_id in c.instructor_ids]


class InstructorRepository(JsonFileRepository[Instructor]):
    """Instructors stored in <data_dir>/instructors.json."""

    def __init__(self, data_dir: str | Path) -> None:
        super().__init__(
            Path(data_dir) / INSTRUCTORS_FILE,
            "Instructor",
            key=attrgetter("id"),
            encode=to_dict,
            decode=instructor_from_dict,
        )

    def get_by_department(self, department: str) -> list[Instructor]:
        return [copy.deepcopy(i) for i in self._entities if _same_text(i.department, department)]

    def get_by_course(self, course_id: uuid.UUID) -> list[Instructor]:
        return [copy.deepcopy(i) for i in self._entities if course_id in i.course_ids]

    def get_by_email(self, email: str) -> Instructor:
        for i in self._entities:
            if _same_text(i.email, email):
                return copy.deepcopy(i)
        raise EntityNotFoundError("Instructor", email, field="email")

    def assign_to_course(self, instructor_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        """
        Add course_id to the instructor's course list.

        Returns False (and writes nothing) if it is already there.
        Raises ValidationError if the instructor already teaches the maximum.
        """
        instructor = self.get_by_id(instructor_id)
        if course_id in instructor.course_ids:
            return False

        if len(instructor.course_ids) >= MAX_COURSES_PER_INSTRUCTOR:
            raise ValidationError(
                f"Instructor cannot be assigned to more than {MAX_COURSES_PER_INSTRUCTOR} courses"
            )

        logger.debug("Adding course %s to instructor %s", course_id, instructor_id)
        self.update(dataclasses.replace(instructor, course_ids=[*instructor.course_ids, course_id]))
        return True

    def remove_from_course(self, instructor_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        """
        Remove course_id from the instructor's course list.

        Returns False (and writes nothing) if it was not there.
        """
        instructor = self.get_by_id(instructor_id)
        if course_id not in instructor.course_ids:
            return False

        logger.debug("Removing course %s from instructor %s", course_id, instructor_id)
        self.update(
            dataclasses.replace(instructor, course_ids=[c for c in instructor.course_ids if c != course_id])
        )
        return True

    def is_assigned_to_course(self, instructor_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        return course_id in self.get_by_id(instructor_id).course_ids
