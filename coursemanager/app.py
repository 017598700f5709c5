"""
Wiring: build repositories and services for one data directory.

Each repository is constructed once; both services hold references to the
same CourseRepository instance, so they always see the same in-memory list.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from coursemanager.course_service import CourseService
from coursemanager.instructor_service import InstructorService
from coursemanager.repositories import CourseRepository, InstructorRepository


@dataclass
class AppContext:
    data_dir: Path
    course_repository: CourseRepository
    instructor_repository: InstructorRepository
    courses: CourseService
    instructors: InstructorService


def build_services(data_dir: str | Path) -> AppContext:
    data_dir = Path(data_dir)
    course_repo = CourseRepository(data_dir)
    instructor_repo = InstructorRepository(data_dir)
    return AppContext(
        data_dir=data_dir,
        course_repository=course_repo,
        instructor_repository=instructor_repo,
        courses=CourseService(course_repo),
        instructors=InstructorService(instructor_repo, course_repo),
    )
