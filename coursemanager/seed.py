"""
Sample data for a fresh installation.

Only runs when both courses.json and instructors.json are empty, so it never
collides with codes an operator already entered.
"""

from __future__ import annotations

import logging

from coursemanager.app import AppContext
from coursemanager.model import Course, Instructor

logger = logging.getLogger(__name__)

DEPARTMENTS = ["Computer Science", "Mathematics", "Physics", "English", "History"]


def sample_instructors() -> list[Instructor]:
    return [
        Instructor(
            first_name="Mahi",
            last_name="Mansoori",
            email="mahi.mansoori@university.edu",
            phone="555-123-4567",
            department=DEPARTMENTS[0],
            title="Professor",
        ),
        Instructor(
            first_name="Emily",
            last_name="Johnson",
            email="emily.johnson@university.edu",
            phone="555-234-5678",
            department=DEPARTMENTS[0],
            title="Assistant Professor",
        ),
        Instructor(
            first_name="Michael",
            last_name="Brown",
            email="michael.brown@university.edu",
            phone="555-345-6789",
            department=DEPARTMENTS[1],
            title="Associate Professor",
        ),
        Instructor(
            first_name="Sarah",
            last_name="Davis",
            email="sarah.davis@university.edu",
            phone="555-456-7890",
            department=DEPARTMENTS[2],
            title="Professor",
        ),
        Instructor(
            first_name="Robert",
            last_name="Wilson",
            email="robert.wilson@university.edu",
            phone="555-567-8901",
            department=DEPARTMENTS[3],
            title="Professor",
        ),
    ]


def sample_courses() -> list[Course]:
    return [
        Course(
            code="CS101",
            title="Introduction to Computer Science",
            description="Fundamental concepts of programming and computer science",
            department=DEPARTMENTS[0],
            credits=3,
            max_enrollment=30,
        ),
        Course(
            code="CS201",
            title="Data Structures and Algorithms",
            description="Study of common data structures and algorithms",
            department=DEPARTMENTS[0],
            credits=4,
            max_enrollment=25,
        ),
        Course(
            code="MATH101",
            title="Calculus I",
            description="Introduction to differential calculus",
            department=DEPARTMENTS[1],
            credits=4,
            max_enrollment=35,
        ),
        Course(
            code="PHYS101",
            title="Introduction to Physics",
            description="Mechanics, energy, and thermodynamics",
            department=DEPARTMENTS[2],
            credits=4,
            max_enrollment=30,
        ),
        Course(
            code="ENG101",
            title="College Composition",
            description="Introduction to academic writing",
            department=DEPARTMENTS[3],
            credits=3,
            max_enrollment=25,
        ),
    ]


def ensure_initial_data(ctx: AppContext) -> bool:
    """
    Seed instructors, courses and one assignment per instructor.
    Returns False if there was existing data (nothing written).
    """
    if ctx.courses.get_all_courses() or ctx.instructors.get_all_instructors():
        logger.info("Existing data found. Skipping sample data initialization.")
        return False

    logger.info("Creating sample data...")

    instructors = [ctx.instructors.add_instructor(i) for i in sample_instructors()]
    courses = [ctx.courses.add_course(c) for c in sample_courses()]

    for instructor, course in zip(instructors, courses):
        ctx.instructors.assign_instructor_to_course(instructor.id, course.id)

    logger.info(
        "Sample data initialization complete. Created %d courses, %d instructors.",
        len(courses),
        len(instructors),
    )
    return True
