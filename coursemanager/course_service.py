"""
Course service: validation + CourseRepository + change notifications.

Error policy:
- EntityNotFoundError / ValidationError pass through unchanged (logged as warnings)
- anything else is wrapped in DataOperationError (logged with traceback)
- subscribers of `course_changed` run after the write, outside that wrapping
"""

from __future__ import annotations

import logging
import uuid

from coursemanager.errors import (
    DataOperationError,
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from coursemanager.events import ADDED, DELETED, UPDATED, CourseChangedEvent, EventHook
from coursemanager.model import (
    CODE_MAX_LEN,
    DEPARTMENT_MAX_LEN,
    DESCRIPTION_MAX_LEN,
    MAX_CREDITS,
    MAX_ENROLLMENT,
    MIN_CREDITS,
    MIN_ENROLLMENT,
    TITLE_MAX_LEN,
    Course,
)
from coursemanager.repositories import CourseRepository

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def validate_course(course: Course) -> None:
    """
    Check every rule and raise one ValidationError listing all violations.
    """
    if course is None:
        raise InvalidArgumentError("course cannot be None")

    errors: list[str] = []

    if _blank(course.code):
        errors.append("Course code is required")
    elif len(course.code) > CODE_MAX_LEN:
        errors.append(f"Course code cannot exceed {CODE_MAX_LEN} characters")

    if _blank(course.title):
        errors.append("Course title is required")
    elif len(course.title) > TITLE_MAX_LEN:
        errors.append(f"Course title cannot exceed {TITLE_MAX_LEN} characters")

    if course.credits < MIN_CREDITS:
        errors.append("Credits must be greater than zero")
    elif course.credits > MAX_CREDITS:
        errors.append(f"Credits cannot exceed {MAX_CREDITS}")

    if course.max_enrollment < MIN_ENROLLMENT:
        errors.append("Maximum enrollment must be greater than zero")
    elif course.max_enrollment > MAX_ENROLLMENT:
        errors.append(f"Maximum enrollment cannot exceed {MAX_ENROLLMENT} students")

    if _blank(course.department):
        errors.append("Department is required")
    elif len(course.department) > DEPARTMENT_MAX_LEN:
        errors.append(f"Department name cannot exceed {DEPARTMENT_MAX_LEN} characters")

    if course.description and len(course.description) > DESCRIPTION_MAX_LEN:
        errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LEN} characters")

    if errors:
        logger.warning("Course validation failed: %s - Errors: %s", course.code, ", ".join(errors))
        raise ValidationError(errors, prefix="Course validation failed")


class CourseService:
    def __init__(self, course_repository: CourseRepository) -> None:
        if course_repository is None:
            raise InvalidArgumentError("course_repository cannot be None")
        self._courses = course_repository
        self.course_changed: EventHook[CourseChangedEvent] = EventHook()

    def validate(self, course: Course) -> None:
        validate_course(course)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_courses(self) -> list[Course]:
        try:
            logger.debug("Getting all courses")
            return self._courses.get_all()
        except Exception as exc:
            logger.exception("Error getting all courses")
            raise DataOperationError("Failed to retrieve courses") from exc

    def get_course_by_id(self, course_id: uuid.UUID) -> Course:
        try:
            logger.debug("Getting course by ID: %s", course_id)
            return self._courses.get_by_id(course_id)
        except EntityNotFoundError:
            logger.warning("Course not found with ID: %s", course_id)
            raise
        except Exception as exc:
            logger.exception("Error getting course by ID: %s", course_id)
            raise DataOperationError(f"Failed to retrieve course with ID {course_id}") from exc

    def get_course_by_code(self, code: str) -> Course:
        if _blank(code):
            raise InvalidArgumentError("Course code cannot be null or empty")
        try:
            logger.debug("Getting course by code: %s", code)
            return self._courses.get_by_code(code)
        except EntityNotFoundError:
            logger.warning("Course not found with code: %s", code)
            raise
        except Exception as exc:
            logger.exception("Error getting course by code: %s", code)
            raise DataOperationError(f"Failed to retrieve course with code {code}") from exc

    def get_courses_by_department(self, department: str) -> list[Course]:
        if _blank(department):
            raise InvalidArgumentError("Department cannot be null or empty")
        try:
            logger.debug("Getting courses by department: %s", department)
            return self._courses.get_by_department(department)
        except Exception as exc:
            logger.exception("Error getting courses by department: %s", department)
            raise DataOperationError(f"Failed to retrieve courses for department {department}") from exc

    def get_courses_by_instructor(self, instructor_id: uuid.UUID) -> list[Course]:
        if instructor_id is None:
            raise InvalidArgumentError("instructor_id cannot be None")
        try:
            logger.debug("Getting courses by instructor: %s", instructor_id)
            return self._courses.get_by_instructor(instructor_id)
        except Exception as exc:
            logger.exception("Error getting courses by instructor: %s", instructor_id)
            raise DataOperationError(f"Failed to retrieve courses for instructor {instructor_id}") from exc

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _ensure_code_free(self, course: Course) -> None:
        """
        Raise ValidationError if a *different* course already uses this code.
        Every stored course is checked, not only the first code match.
        """
        code = course.code.casefold()
        if any(c.id != course.id and c.code.casefold() == code for c in self._courses.get_all()):
            logger.warning("Another course with code %s already exists", course.code)
            raise ValidationError(f"Another course with code {course.code} already exists")

    def add_course(self, course: Course) -> Course:
        if course is None:
            raise InvalidArgumentError("course cannot be None")
        validate_course(course)

        try:
            self._ensure_code_free(course)
            logger.info("Adding new course: %s - %s", course.code, course.title)
            added = self._courses.add(course)
        except ValidationError:
            raise
        except Exception as exc:
            logger.exception("Error adding course: %s - %s", course.code, course.title)
            raise DataOperationError("Failed to add course") from exc

        self._on_course_changed(added, ADDED)
        return added

    def update_course(self, course: Course) -> Course:
        if course is None:
            raise InvalidArgumentError("course cannot be None")
        validate_course(course)

        try:
            # raises EntityNotFoundError for unknown ids
            self._courses.get_by_id(course.id)
            self._ensure_code_free(course)
            logger.info("Updating course: %s - %s - %s", course.id, course.code, course.title)
            updated = self._courses.update(course)
        except EntityNotFoundError:
            logger.warning("Course not found for update: %s", course.id)
            raise
        except ValidationError:
            raise
        except Exception as exc:
            logger.exception("Error updating course: %s", course.id)
            raise DataOperationError(f"Failed to update course with ID {course.id}") from exc

        self._on_course_changed(updated, UPDATED)
        return updated

    def delete_course(self, course_id: uuid.UUID) -> None:
        """
        Delete a course. Instructors that reference it keep the id in
        their course_ids (no cascade).
        """
        try:
            course = self._courses.get_by_id(course_id)
            logger.info("Deleting course: %s - %s - %s", course_id, course.code, course.title)
            self._courses.delete(course_id)
        except EntityNotFoundError:
            logger.warning("Course not found for deletion: %s", course_id)
            raise
        except Exception as exc:
            logger.exception("Error deleting course: %s", course_id)
            raise DataOperationError(f"Failed to delete course with ID {course_id}") from exc

        self._on_course_changed(course, DELETED)

    def _on_course_changed(self, course: Course, action: str) -> None:
        logger.debug("Raising course_changed: %s, %s, action: %s", course.id, course.code, action)
        self.course_changed.emit(CourseChangedEvent(course.id, course.code, course.title, action))
