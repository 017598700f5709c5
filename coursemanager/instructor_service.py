"""
Instructor service: validation + both repositories + change notifications.

Besides CRUD it owns the many-to-many link between instructors and courses:

    instructor.course_ids  contains course.id
    course.instructor_ids  contains instructor.id

Both sides live in different files and are written one after the other
(instructor first, then course). There is no rollback: if the second write
fails, the two files disagree until the link is assigned/removed again.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid

from coursemanager.errors import (
    DataOperationError,
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from coursemanager.events import ADDED, DELETED, UPDATED, EventHook, InstructorChangedEvent
from coursemanager.model import MAX_COURSES_PER_INSTRUCTOR, Course, Instructor
from coursemanager.repositories import CourseRepository, InstructorRepository

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def validate_instructor(instructor: Instructor) -> None:
    if instructor is None:
        raise InvalidArgumentError("instructor cannot be None")

    errors: list[str] = []

    if _blank(instructor.first_name):
        errors.append("First name is required")
    if _blank(instructor.last_name):
        errors.append("Last name is required")

    if _blank(instructor.email):
        errors.append("Email is required")
    elif "@" not in instructor.email:
        errors.append("Email must be a valid email address")

    if _blank(instructor.department):
        errors.append("Department is required")

    # same limit as InstructorRepository.assign_to_course, for records written whole
    if len(set(instructor.course_ids)) > MAX_COURSES_PER_INSTRUCTOR:
        errors.append(f"Instructor cannot be assigned to more than {MAX_COURSES_PER_INSTRUCTOR} courses")

    if errors:
        logger.warning("Instructor validation failed: %s - Errors: %s", instructor.email, ", ".join(errors))
        raise ValidationError(errors, prefix="Instructor validation failed")


class InstructorService:
    def __init__(self, instructor_repository: InstructorRepository, course_repository: CourseRepository) -> None:
        if instructor_repository is None:
            raise InvalidArgumentError("instructor_repository cannot be None")
        if course_repository is None:
            raise InvalidArgumentError("course_repository cannot be None")
        self._instructors = instructor_repository
        self._courses = course_repository
        self.instructor_changed: EventHook[InstructorChangedEvent] = EventHook()

    def validate(self, instructor: Instructor) -> None:
        validate_instructor(instructor)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_instructors(self) -> list[Instructor]:
        try:
            logger.debug("Getting all instructors")
            return self._instructors.get_all()
        except Exception as exc:
            logger.exception("Error getting all instructors")
            raise DataOperationError("Failed to retrieve instructors") from exc

    def get_instructor_by_id(self, instructor_id: uuid.UUID) -> Instructor:
        try:
            logger.debug("Getting instructor by ID: %s", instructor_id)
            return self._instructors.get_by_id(instructor_id)
        except EntityNotFoundError:
            logger.warning("Instructor not found with ID: %s", instructor_id)
            raise
        except Exception as exc:
            logger.exception("Error getting instructor by ID: %s", instructor_id)
            raise DataOperationError(f"Failed to retrieve instructor with ID {instructor_id}") from exc

    def get_instructor_by_email(self, email: str) -> Instructor:
        if _blank(email):
            raise InvalidArgumentError("Email cannot be null or empty")
        try:
            logger.debug("Getting instructor by email: %s", email)
            return self._instructors.get_by_email(email)
        except EntityNotFoundError:
            logger.warning("Instructor not found with email: %s", email)
            raise
        except Exception as exc:
            logger.exception("Error getting instructor by email: %s", email)
            raise DataOperationError(f"Failed to retrieve instructor with email {email}") from exc

    def get_instructors_by_department(self, department: str) -> list[Instructor]:
        if _blank(department):
            raise InvalidArgumentError("Department cannot be null or empty")
        try:
            logger.debug("Getting instructors by department: %s", department)
            return self._instructors.get_by_department(department)
        except Exception as exc:
            logger.exception("Error getting instructors by department: %s", department)
            raise DataOperationError(f"Failed to retrieve instructors for department {department}") from exc

    def get_instructors_by_course(self, course_id: uuid.UUID) -> list[Instructor]:
        if course_id is None:
            raise InvalidArgumentError("course_id cannot be None")
        try:
            logger.debug("Getting instructors by course: %s", course_id)
            return self._instructors.get_by_course(course_id)
        except Exception as exc:
            logger.exception("Error getting instructors by course: %s", course_id)
            raise DataOperationError(f"Failed to retrieve instructors for course {course_id}") from exc

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def add_instructor(self, instructor: Instructor) -> Instructor:
        if instructor is None:
            raise InvalidArgumentError("instructor cannot be None")
        validate_instructor(instructor)

        try:
            logger.info("Adding new instructor: %s", instructor.full_name)
            added = self._instructors.add(instructor)
        except ValidationError:
            raise
        except Exception as exc:
            logger.exception("Error adding instructor: %s", instructor.full_name)
            raise DataOperationError("Failed to add instructor") from exc

        self._on_instructor_changed(added, ADDED)
        return added

    def update_instructor(self, instructor: Instructor) -> Instructor:
        if instructor is None:
            raise InvalidArgumentError("instructor cannot be None")
        validate_instructor(instructor)

        try:
            self._instructors.get_by_id(instructor.id)
            logger.info("Updating instructor: %s - %s", instructor.id, instructor.full_name)
            updated = self._instructors.update(instructor)
        except EntityNotFoundError:
            logger.warning("Instructor not found for update: %s", instructor.id)
            raise
        except ValidationError:
            raise
        except Exception as exc:
            logger.exception("Error updating instructor: %s", instructor.id)
            raise DataOperationError(f"Failed to update instructor with ID {instructor.id}") from exc

        self._on_instructor_changed(updated, UPDATED)
        return updated

    def delete_instructor(self, instructor_id: uuid.UUID) -> None:
        """
        Delete an instructor. Courses keep the id in instructor_ids (no cascade).
        """
        try:
            instructor = self._instructors.get_by_id(instructor_id)
            logger.info("Deleting instructor: %s - %s", instructor_id, instructor.full_name)
            self._instructors.delete(instructor_id)
        except EntityNotFoundError:
            logger.warning("Instructor not found for deletion: %s", instructor_id)
            raise
        except Exception as exc:
            logger.exception("Error deleting instructor: %s", instructor_id)
            raise DataOperationError(f"Failed to delete instructor with ID {instructor_id}") from exc

        self._on_instructor_changed(instructor, DELETED)

    # ------------------------------------------------------------------
    # Relationship
    # ------------------------------------------------------------------

    def assign_instructor_to_course(self, instructor_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        """
        Link instructor and course on both sides.

        Returns False (no writes) if they are already linked on both sides.
        Raises ValidationError if the instructor already teaches the maximum
        number of courses; nothing is written in that case.
        """
        try:
            instructor = self._instructors.get_by_id(instructor_id)
            course = self._courses.get_by_id(course_id)

            if course_id in instructor.course_ids and instructor_id in course.instructor_ids:
                logger.warning("Instructor %s is already assigned to course %s", instructor_id, course_id)
                return False

            self._link(instructor, course)
            logger.info("Assigned instructor %s to course %s", instructor.full_name, course.code)
        except (EntityNotFoundError, ValidationError) as exc:
            logger.warning("%s", exc)
            raise
        except Exception as exc:
            logger.exception("Error assigning instructor %s to course %s", instructor_id, course_id)
            raise DataOperationError(f"Failed to assign instructor {instructor_id} to course {course_id}") from exc

        self._on_instructor_changed(instructor, f"Assigned to course {course.code}")
        return True

    def remove_instructor_from_course(self, instructor_id: uuid.UUID, course_id: uuid.UUID) -> bool:
        """
        Unlink instructor and course on both sides.

        Returns False (no writes) if the link is missing on either side.
        """
        try:
            instructor = self._instructors.get_by_id(instructor_id)
            course = self._courses.get_by_id(course_id)

            if course_id not in instructor.course_ids or instructor_id not in course.instructor_ids:
                logger.warning("Instructor %s is not assigned to course %s", instructor_id, course_id)
                return False

            self._unlink(instructor, course)
            logger.info("Removed instructor %s from course %s", instructor.full_name, course.code)
        except EntityNotFoundError as exc:
            logger.warning("%s", exc)
            raise
        except Exception as exc:
            logger.exception("Error removing instructor %s from course %s", instructor_id, course_id)
            raise DataOperationError(
                f"Failed to remove instructor {instructor_id} from course {course_id}"
            ) from exc

        self._on_instructor_changed(instructor, f"Removed from course {course.code}")
        return True

    def _link(self, instructor: Instructor, course: Course) -> None:
        # two independent writes; a failure in between is not compensated
        self._instructors.assign_to_course(instructor.id, course.id)
        if instructor.id not in course.instructor_ids:
            self._courses.update(dataclasses.replace(course, instructor_ids=[*course.instructor_ids, instructor.id]))

    def _unlink(self, instructor: Instructor, course: Course) -> None:
        self._instructors.remove_from_course(instructor.id, course.id)
        self._courses.update(
            dataclasses.replace(course, instructor_ids=[i for i in course.instructor_ids if i != instructor.id])
        )

    def _on_instructor_changed(self, instructor: Instructor, action: str) -> None:
        logger.debug("Raising instructor_changed: %s, action: %s", instructor.id, action)
        self.instructor_changed.emit(InstructorChangedEvent(instructor.id, instructor.full_name, action))
