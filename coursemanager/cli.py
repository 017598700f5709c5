"""
CLI (Command Line Interface).

This module provides terminal commands for scripting and for quick edits, e.g.:

    coursemanager courses list
    coursemanager courses add --code CS101 --title "Intro" --credits 3 --max-enrollment 30 --department CS
    coursemanager courses view CS101
    coursemanager instructors add --first-name Ada --last-name Lovelace --email ada@uni.edu --department CS
    coursemanager instructors assign <instructor-id> CS101
    coursemanager seed
    coursemanager interactive

Courses can be referenced by ID or by code; instructors by ID.

Note:
- The interactive UI lives in coursemanager/interactive.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import uuid
from pathlib import Path
from typing import Any, Callable, Optional

from coursemanager.app import AppContext, build_services
from coursemanager.config import get_settings
from coursemanager.errors import (
    CourseManagerError,
    EntityNotFoundError,
    InvalidArgumentError,
    ValidationError,
)
from coursemanager.events import CourseChangedEvent, InstructorChangedEvent
from coursemanager.logs import configure_logging
from coursemanager.model import Course, Instructor
from coursemanager.seed import ensure_initial_data

logger = logging.getLogger(__name__)


class _BadId(Exception):
    pass


def _parse_id(text: str) -> uuid.UUID:
    try:
        return uuid.UUID((text or "").strip())
    except ValueError:
        raise _BadId(text) from None


def _resolve_course(ctx: AppContext, ref: str) -> Course:
    """
    Accept either a course ID or a course code.
    """
    ref = (ref or "").strip()
    try:
        course_id = uuid.UUID(ref)
    except ValueError:
        return ctx.courses.get_course_by_code(ref)
    return ctx.courses.get_course_by_id(course_id)


def _course_line(c: Course) -> str:
    return (
        f"{c.code} | {c.title} | {c.department} | {c.credits} cr | "
        f"max {c.max_enrollment} | {len(c.instructor_ids)} instructors | {c.id}"
    )


def _instructor_line(i: Instructor) -> str:
    status = "active" if i.is_active else "inactive"
    return f"{i.full_name} | {i.email} | {i.department} | {len(i.course_ids)} courses | {status} | {i.id}"


def _print_lines(lines: list[str], empty: str) -> None:
    if not lines:
        print(empty)
        return
    for line in lines:
        print(line)


# ---------------------------------------------------------------------------
# Course commands
# ---------------------------------------------------------------------------


def _cmd_course_list(args: argparse.Namespace, ctx: AppContext) -> int:
    _print_lines([_course_line(c) for c in ctx.courses.get_all_courses()], "No courses found.")
    return 0


def _cmd_course_view(args: argparse.Namespace, ctx: AppContext) -> int:
    c = _resolve_course(ctx, args.course)
    print(f"ID:             {c.id}")
    print(f"Code:           {c.code}")
    print(f"Title:          {c.title}")
    print(f"Description:    {c.description or '(none)'}")
    print(f"Department:     {c.department}")
    print(f"Credits:        {c.credits}")
    print(f"Max enrollment: {c.max_enrollment}")
    print(f"Created:        {c.created_date.isoformat(timespec='seconds')}")

    instructors = ctx.instructors.get_instructors_by_course(c.id)
    print("Instructors:")
    if not instructors:
        print("  (none)")
    for i in instructors:
        print(f"  - {i.full_name} ({i.email})")
    return 0


def _course_changes(args: argparse.Namespace) -> dict[str, Any]:
    mapping = {
        "code": args.code,
        "title": args.title,
        "description": args.description,
        "credits": args.credits,
        "max_enrollment": args.max_enrollment,
        "department": args.department,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def _cmd_course_add(args: argparse.Namespace, ctx: AppContext) -> int:
    course = Course(**_course_changes(args))
    added = ctx.courses.add_course(course)
    print(f"ID: {added.id}")
    return 0


def _cmd_course_update(args: argparse.Namespace, ctx: AppContext) -> int:
    current = _resolve_course(ctx, args.course)
    changes = _course_changes(args)
    if not changes:
        print("Nothing to update.")
        return 0
    ctx.courses.update_course(dataclasses.replace(current, **changes))
    return 0


def _cmd_course_delete(args: argparse.Namespace, ctx: AppContext) -> int:
    course = _resolve_course(ctx, args.course)
    ctx.courses.delete_course(course.id)
    return 0


def _cmd_course_by_department(args: argparse.Namespace, ctx: AppContext) -> int:
    courses = ctx.courses.get_courses_by_department(args.department)
    _print_lines([_course_line(c) for c in courses], f"No courses found in department: {args.department}")
    return 0


def _cmd_course_by_instructor(args: argparse.Namespace, ctx: AppContext) -> int:
    courses = ctx.courses.get_courses_by_instructor(_parse_id(args.instructor_id))
    _print_lines([_course_line(c) for c in courses], "No courses assigned.")
    return 0


# ---------------------------------------------------------------------------
# Instructor commands
# ---------------------------------------------------------------------------


def _cmd_instructor_list(args: argparse.Namespace, ctx: AppContext) -> int:
    _print_lines([_instructor_line(i) for i in ctx.instructors.get_all_instructors()], "No instructors found.")
    return 0


def _cmd_instructor_view(args: argparse.Namespace, ctx: AppContext) -> int:
    i = ctx.instructors.get_instructor_by_id(_parse_id(args.instructor_id))
    print(f"ID:         {i.id}")
    print(f"Name:       {i.full_name}")
    print(f"Title:      {i.title or '(none)'}")
    print(f"Email:      {i.email}")
    print(f"Phone:      {i.phone or '(none)'}")
    print(f"Department: {i.department}")
    print(f"Office:     {i.office_location or '(none)'}")
    print(f"Status:     {'Active' if i.is_active else 'Inactive'}, {'Full-time' if i.is_full_time else 'Part-time'}")
    print(f"Hired:      {i.hire_date.date().isoformat()}")

    courses = ctx.courses.get_courses_by_instructor(i.id)
    print("Courses:")
    if not courses:
        print("  (none)")
    for c in courses:
        print(f"  - {c.code} {c.title}")
    return 0


def _instructor_changes(args: argparse.Namespace) -> dict[str, Any]:
    mapping = {
        "first_name": args.first_name,
        "last_name": args.last_name,
        "email": args.email,
        "department": args.department,
        "title": args.title,
        "office_location": args.office,
        "phone": args.phone,
        "is_active": args.active,
        "is_full_time": args.full_time,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def _cmd_instructor_add(args: argparse.Namespace, ctx: AppContext) -> int:
    added = ctx.instructors.add_instructor(Instructor(**_instructor_changes(args)))
    print(f"ID: {added.id}")
    return 0


def _cmd_instructor_update(args: argparse.Namespace, ctx: AppContext) -> int:
    current = ctx.instructors.get_instructor_by_id(_parse_id(args.instructor_id))
    changes = _instructor_changes(args)
    if not changes:
        print("Nothing to update.")
        return 0
    ctx.instructors.update_instructor(dataclasses.replace(current, **changes))
    return 0


def _cmd_instructor_delete(args: argparse.Namespace, ctx: AppContext) -> int:
    ctx.instructors.delete_instructor(_parse_id(args.instructor_id))
    return 0


def _cmd_instructor_by_department(args: argparse.Namespace, ctx: AppContext) -> int:
    instructors = ctx.instructors.get_instructors_by_department(args.department)
    _print_lines([_instructor_line(i) for i in instructors], f"No instructors found in department: {args.department}")
    return 0


def _cmd_instructor_by_course(args: argparse.Namespace, ctx: AppContext) -> int:
    course = _resolve_course(ctx, args.course)
    instructors = ctx.instructors.get_instructors_by_course(course.id)
    _print_lines([_instructor_line(i) for i in instructors], f"No instructors assigned to {course.code}.")
    return 0


def _cmd_instructor_assign(args: argparse.Namespace, ctx: AppContext) -> int:
    instructor_id = _parse_id(args.instructor_id)
    course = _resolve_course(ctx, args.course)
    if not ctx.instructors.assign_instructor_to_course(instructor_id, course.id):
        print(f"Already assigned to course {course.code}.")
    return 0


def _cmd_instructor_unassign(args: argparse.Namespace, ctx: AppContext) -> int:
    instructor_id = _parse_id(args.instructor_id)
    course = _resolve_course(ctx, args.course)
    if not ctx.instructors.remove_instructor_from_course(instructor_id, course.id):
        print(f"Not assigned to course {course.code}.")
    return 0


# ---------------------------------------------------------------------------
# Misc commands
# ---------------------------------------------------------------------------


def _cmd_seed(args: argparse.Namespace, ctx: AppContext) -> int:
    if ensure_initial_data(ctx):
        print("Sample data created.")
    else:
        print("Data already exists. Nothing to do.")
    return 0


def _cmd_interactive(args: argparse.Namespace, ctx: AppContext) -> int:
    from coursemanager.interactive import run_interactive

    run_interactive(ctx)
    return 0


def _print_course_event(event: CourseChangedEvent) -> None:
    print(f"Course {event.code}: {event.action}")


def _print_instructor_event(event: InstructorChangedEvent) -> None:
    print(f"Instructor {event.name}: {event.action}")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _bool_arg(text: str) -> bool:
    value = text.strip().lower()
    if value in {"y", "yes", "true", "1"}:
        return True
    if value in {"n", "no", "false", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected yes/no, got {text!r}")


def _add_course_fields(p: argparse.ArgumentParser) -> None:
    p.add_argument("--code", type=str, help="Course code (e.g. CS101)")
    p.add_argument("--title", type=str)
    p.add_argument("--description", type=str)
    p.add_argument("--credits", type=int)
    p.add_argument("--max-enrollment", dest="max_enrollment", type=int)
    p.add_argument("--department", type=str)


def _add_instructor_fields(p: argparse.ArgumentParser) -> None:
    p.add_argument("--first-name", dest="first_name", type=str)
    p.add_argument("--last-name", dest="last_name", type=str)
    p.add_argument("--email", type=str)
    p.add_argument("--department", type=str)
    p.add_argument("--title", type=str, help="Academic title (e.g. Professor)")
    p.add_argument("--office", type=str)
    p.add_argument("--phone", type=str)
    p.add_argument("--active", type=_bool_arg, help="yes/no")
    p.add_argument("--full-time", dest="full_time", type=_bool_arg, help="yes/no")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursemanager", description="Course Manager CLI")
    parser.add_argument("--data-dir", type=str, help="Directory holding courses.json and instructors.json")
    parser.add_argument("--log-level", type=str, help="Console log level (DEBUG, INFO, WARNING, ERROR)")
    sub = parser.add_subparsers(dest="command", required=True)

    # courses
    p_courses = sub.add_parser("courses", help="Manage courses")
    csub = p_courses.add_subparsers(dest="action", required=True)

    csub.add_parser("list", help="List all courses").set_defaults(func=_cmd_course_list)

    p = csub.add_parser("view", help="Show course details")
    p.add_argument("course", type=str, help="Course ID or code")
    p.set_defaults(func=_cmd_course_view)

    p = csub.add_parser("add", help="Add a new course")
    _add_course_fields(p)
    p.set_defaults(func=_cmd_course_add)

    p = csub.add_parser("update", help="Update an existing course")
    p.add_argument("course", type=str, help="Course ID or code")
    _add_course_fields(p)
    p.set_defaults(func=_cmd_course_update)

    p = csub.add_parser("delete", help="Delete a course")
    p.add_argument("course", type=str, help="Course ID or code")
    p.set_defaults(func=_cmd_course_delete)

    p = csub.add_parser("by-department", help="Find courses by department")
    p.add_argument("department", type=str)
    p.set_defaults(func=_cmd_course_by_department)

    p = csub.add_parser("by-instructor", help="Find courses taught by an instructor")
    p.add_argument("instructor_id", type=str)
    p.set_defaults(func=_cmd_course_by_instructor)

    # instructors
    p_instr = sub.add_parser("instructors", help="Manage instructors")
    isub = p_instr.add_subparsers(dest="action", required=True)

    isub.add_parser("list", help="List all instructors").set_defaults(func=_cmd_instructor_list)

    p = isub.add_parser("view", help="Show instructor details")
    p.add_argument("instructor_id", type=str)
    p.set_defaults(func=_cmd_instructor_view)

    p = isub.add_parser("add", help="Add a new instructor")
    _add_instructor_fields(p)
    p.set_defaults(func=_cmd_instructor_add)

    p = isub.add_parser("update", help="Update an existing instructor")
    p.add_argument("instructor_id", type=str)
    _add_instructor_fields(p)
    p.set_defaults(func=_cmd_instructor_update)

    p = isub.add_parser("delete", help="Delete an instructor")
    p.add_argument("instructor_id", type=str)
    p.set_defaults(func=_cmd_instructor_delete)

    p = isub.add_parser("by-department", help="Find instructors by department")
    p.add_argument("department", type=str)
    p.set_defaults(func=_cmd_instructor_by_department)

    p = isub.add_parser("by-course", help="Find instructors teaching a course")
    p.add_argument("course", type=str, help="Course ID or code")
    p.set_defaults(func=_cmd_instructor_by_course)

    p = isub.add_parser("assign", help="Assign an instructor to a course")
    p.add_argument("instructor_id", type=str)
    p.add_argument("course", type=str, help="Course ID or code")
    p.set_defaults(func=_cmd_instructor_assign)

    p = isub.add_parser("unassign", help="Remove an instructor from a course")
    p.add_argument("instructor_id", type=str)
    p.add_argument("course", type=str, help="Course ID or code")
    p.set_defaults(func=_cmd_instructor_unassign)

    sub.add_parser("seed", help="Create sample data if the data directory is empty").set_defaults(func=_cmd_seed)
    sub.add_parser("interactive", help="Interactive menu mode").set_defaults(func=_cmd_interactive)

    return parser


def run(argv: Optional[list[str]] = None) -> int:
    """
    Parse args, build services and dispatch. Returns the exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, settings.log_file)

    data_dir = Path(args.data_dir) if args.data_dir else settings.data_dir
    handler: Callable[[argparse.Namespace, AppContext], int] = args.func

    try:
        ctx = build_services(data_dir)
        ctx.courses.course_changed.subscribe(_print_course_event)
        ctx.instructors.instructor_changed.subscribe(_print_instructor_event)

        if settings.seed_sample_data and args.command != "seed":
            ensure_initial_data(ctx)

        return handler(args, ctx)
    except _BadId:
        print("Please enter a valid ID.")
        return 1
    except (EntityNotFoundError, ValidationError, InvalidArgumentError) as exc:
        print(f"Error: {exc}")
        return 1
    except CourseManagerError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"An error occurred: {exc}")
        return 1


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Exits via SystemExit with the command's return code.
    """
    raise SystemExit(run(argv))
