"""
Interactive terminal UI built on rich.

Numbered menus over the course and instructor services. Tables and prompts
go through one module-level Console; user-entered text is escaped before it is
printed because rich treats [brackets] as markup.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Optional, TypeVar

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coursemanager.app import AppContext
from coursemanager.errors import CourseManagerError, EntityNotFoundError, InvalidArgumentError, ValidationError
from coursemanager.model import (
    CODE_MAX_LEN,
    MAX_CREDITS,
    MAX_ENROLLMENT,
    MIN_CREDITS,
    MIN_ENROLLMENT,
    Course,
    Instructor,
)

console = Console()

T = TypeVar("T")


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


# ---------------------------------------------------------------------------
# Input helpers (re-ask until the value is usable)
# ---------------------------------------------------------------------------


def _read_str(msg: str, default: Optional[str] = None, allow_empty: bool = False) -> str:
    while True:
        value = _prompt(msg).strip()
        if value:
            return value
        if default is not None:
            return default
        if allow_empty:
            return ""
        _println("Value cannot be empty. Please try again.")


def _read_int(msg: str, lo: int, hi: int, default: Optional[int] = None) -> int:
    while True:
        raw = _prompt(msg).strip()
        if not raw and default is not None:
            return default
        if raw.lstrip("-").isdigit() and lo <= int(raw) <= hi:
            return int(raw)
        _println(f"Please enter a valid number between {lo} and {hi}.")


def _read_yes_no(msg: str, default: Optional[bool] = None) -> bool:
    while True:
        raw = _prompt(f"{msg} (y/n): ").strip().lower()
        if not raw and default is not None:
            return default
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        _println("Please enter 'y' for yes or 'n' for no.")


def _pick(items: list[T], title: str, columns: list[str], row: Callable[[T], list[str]]) -> Optional[T]:
    """
    Show a numbered table and return the chosen item (None on blank input).
    """
    if not items:
        _println("Nothing to choose from.")
        return None

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    for col in columns:
        table.add_column(col)
    for i, item in enumerate(items, start=1):
        table.add_row(str(i), *row(item))
    console.print(table)

    while True:
        pick = _prompt("Enter number (blank = back): ").strip()
        if not pick:
            return None
        if not pick.isdigit():
            _println("Not a number.")
            continue
        idx = int(pick)
        if not (1 <= idx <= len(items)):
            _println("Out of range.")
            continue
        return items[idx - 1]


def _course_row(c: Course) -> list[str]:
    return [
        f"[bold cyan]{escape(c.code)}[/]",
        escape(c.title),
        escape(c.department),
        str(c.credits),
        f"[yellow]{len(c.instructor_ids)}[/]",
    ]


def _instructor_row(i: Instructor) -> list[str]:
    return [
        f"[magenta]{escape(i.full_name)}[/]",
        escape(i.email),
        escape(i.department),
        f"[yellow]{len(i.course_ids)}[/]",
    ]


COURSE_COLUMNS = ["Code", "Title", "Department", "Credits", "Instructors"]
INSTRUCTOR_COLUMNS = ["Name", "Email", "Department", "Courses"]


def _show_courses(courses: list[Course], title: str) -> None:
    if not courses:
        _println("No courses found.")
        return
    table = Table(title=title, box=box.SIMPLE)
    for col in COURSE_COLUMNS:
        table.add_column(col)
    for c in courses:
        table.add_row(*_course_row(c))
    console.print(table)


def _show_instructors(instructors: list[Instructor], title: str) -> None:
    if not instructors:
        _println("No instructors found.")
        return
    table = Table(title=title, box=box.SIMPLE)
    for col in INSTRUCTOR_COLUMNS:
        table.add_column(col)
    for i in instructors:
        table.add_row(*_instructor_row(i))
    console.print(table)


def _pick_course(ctx: AppContext) -> Optional[Course]:
    return _pick(ctx.courses.get_all_courses(), "Courses", COURSE_COLUMNS, _course_row)


def _pick_instructor(ctx: AppContext) -> Optional[Instructor]:
    return _pick(ctx.instructors.get_all_instructors(), "Instructors", INSTRUCTOR_COLUMNS, _instructor_row)


# ---------------------------------------------------------------------------
# Course flows
# ---------------------------------------------------------------------------


def _flow_view_course(ctx: AppContext) -> None:
    c = _pick_course(ctx)
    if c is None:
        return
    _println(f"\n[bold cyan]{escape(c.code)}[/] {escape(c.title)}")
    _println(f"Department: {escape(c.department)} | Credits: {c.credits} | Max enrollment: {c.max_enrollment}")
    _println(f"Description: {escape(c.description) or '(none)'}")
    _show_instructors(ctx.instructors.get_instructors_by_course(c.id), "Instructors")


def _read_course(current: Optional[Course] = None) -> Course:
    base = current or Course()
    keep = current is not None
    hint = " (blank = keep)" if keep else ""
    return dataclasses.replace(
        base,
        code=_read_str(f"Code (max {CODE_MAX_LEN} chars){hint}: ", base.code if keep else None),
        title=_read_str(f"Title{hint}: ", base.title if keep else None),
        description=_read_str("Description (optional): ", base.description if keep else None, allow_empty=True),
        department=_read_str(f"Department{hint}: ", base.department if keep else None),
        credits=_read_int(
            f"Credits ({MIN_CREDITS}-{MAX_CREDITS}){hint}: ", MIN_CREDITS, MAX_CREDITS, base.credits if keep else None
        ),
        max_enrollment=_read_int(
            f"Max enrollment ({MIN_ENROLLMENT}-{MAX_ENROLLMENT}){hint}: ",
            MIN_ENROLLMENT,
            MAX_ENROLLMENT,
            base.max_enrollment if keep else None,
        ),
    )


def _flow_add_course(ctx: AppContext) -> None:
    added = ctx.courses.add_course(_read_course())
    _println(f"Course {escape(added.code)} added (ID: {added.id}).")


def _flow_update_course(ctx: AppContext) -> None:
    c = _pick_course(ctx)
    if c is None:
        return
    ctx.courses.update_course(_read_course(c))
    _println("Course updated.")


def _flow_delete_course(ctx: AppContext) -> None:
    c = _pick_course(ctx)
    if c is None:
        return
    if _read_yes_no(f"Delete {escape(c.code)} {escape(c.title)}?", default=False):
        ctx.courses.delete_course(c.id)
        _println(f"Deleted: {escape(c.code)}")


def _flow_courses_by_department(ctx: AppContext) -> None:
    dept = _read_str("Department: ")
    _show_courses(ctx.courses.get_courses_by_department(dept), f"Courses in {escape(dept)}")


# ---------------------------------------------------------------------------
# Instructor flows
# ---------------------------------------------------------------------------


def _flow_view_instructor(ctx: AppContext) -> None:
    i = _pick_instructor(ctx)
    if i is None:
        return
    _println(f"\n[magenta]{escape(i.full_name)}[/] {escape(i.title)}")
    _println(
        f"Email: {escape(i.email)} | Phone: {escape(i.phone) or '-'} | Office: {escape(i.office_location) or '-'}"
    )
    _println(
        f"Department: {escape(i.department)} | {'Active' if i.is_active else 'Inactive'} | "
        f"{'Full-time' if i.is_full_time else 'Part-time'}"
    )
    _show_courses(ctx.courses.get_courses_by_instructor(i.id), "Courses")


def _read_instructor(current: Optional[Instructor] = None) -> Instructor:
    base = current or Instructor()
    keep = current is not None
    hint = " (blank = keep)" if keep else ""
    return dataclasses.replace(
        base,
        first_name=_read_str(f"First name{hint}: ", base.first_name if keep else None),
        last_name=_read_str(f"Last name{hint}: ", base.last_name if keep else None),
        email=_read_str(f"Email{hint}: ", base.email if keep else None),
        department=_read_str(f"Department{hint}: ", base.department if keep else None),
        title=_read_str("Title (optional): ", base.title if keep else None, allow_empty=True),
        office_location=_read_str("Office (optional): ", base.office_location if keep else None, allow_empty=True),
        phone=_read_str("Phone (optional): ", base.phone if keep else None, allow_empty=True),
        is_full_time=_read_yes_no("Full-time?", default=base.is_full_time),
        is_active=_read_yes_no("Active?", default=base.is_active),
    )


def _flow_add_instructor(ctx: AppContext) -> None:
    added = ctx.instructors.add_instructor(_read_instructor())
    _println(f"Instructor {escape(added.full_name)} added (ID: {added.id}).")


def _flow_update_instructor(ctx: AppContext) -> None:
    i = _pick_instructor(ctx)
    if i is None:
        return
    ctx.instructors.update_instructor(_read_instructor(i))
    _println("Instructor updated.")


def _flow_delete_instructor(ctx: AppContext) -> None:
    i = _pick_instructor(ctx)
    if i is None:
        return
    if _read_yes_no(f"Delete {escape(i.full_name)}?", default=False):
        ctx.instructors.delete_instructor(i.id)
        _println(f"Deleted: {escape(i.full_name)}")


def _flow_instructors_by_department(ctx: AppContext) -> None:
    dept = _read_str("Department: ")
    _show_instructors(ctx.instructors.get_instructors_by_department(dept), f"Instructors in {escape(dept)}")


def _flow_assign(ctx: AppContext) -> None:
    i = _pick_instructor(ctx)
    if i is None:
        return
    c = _pick_course(ctx)
    if c is None:
        return
    if ctx.instructors.assign_instructor_to_course(i.id, c.id):
        _println(f"Assigned {escape(i.full_name)} to {escape(c.code)}.")
    else:
        _println(f"Instructor '{escape(i.full_name)}' is already assigned to course '{escape(c.code)}'.")


def _flow_unassign(ctx: AppContext) -> None:
    i = _pick_instructor(ctx)
    if i is None:
        return
    courses = ctx.courses.get_courses_by_instructor(i.id)
    c = _pick(courses, f"Courses of {escape(i.full_name)}", COURSE_COLUMNS, _course_row)
    if c is None:
        return
    if ctx.instructors.remove_instructor_from_course(i.id, c.id):
        _println(f"Removed {escape(i.full_name)} from {escape(c.code)}.")
    else:
        _println(f"Instructor '{escape(i.full_name)}' is not assigned to course '{escape(c.code)}'.")


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------

Flow = Callable[[AppContext], None]

COURSE_MENU: dict[str, tuple[str, Flow]] = {
    "1": ("List all courses", lambda ctx: _show_courses(ctx.courses.get_all_courses(), "All courses")),
    "2": ("View course details", _flow_view_course),
    "3": ("Add new course", _flow_add_course),
    "4": ("Update existing course", _flow_update_course),
    "5": ("Delete course", _flow_delete_course),
    "6": ("Find courses by department", _flow_courses_by_department),
}

INSTRUCTOR_MENU: dict[str, tuple[str, Flow]] = {
    "1": ("List all instructors", lambda ctx: _show_instructors(ctx.instructors.get_all_instructors(), "All instructors")),
    "2": ("View instructor details", _flow_view_instructor),
    "3": ("Add new instructor", _flow_add_instructor),
    "4": ("Update existing instructor", _flow_update_instructor),
    "5": ("Delete instructor", _flow_delete_instructor),
    "6": ("Find instructors by department", _flow_instructors_by_department),
    "7": ("Assign instructor to course", _flow_assign),
    "8": ("Remove instructor from course", _flow_unassign),
}


def _run_flow(flow: Flow, ctx: AppContext) -> None:
    """
    Run one menu action; domain errors are printed, the loop keeps going.
    """
    try:
        flow(ctx)
    except (EntityNotFoundError, ValidationError, InvalidArgumentError) as exc:
        _println(f"[red]Error:[/] {escape(str(exc))}")
    except CourseManagerError as exc:
        _println(f"[red]An error occurred:[/] {escape(str(exc))}")


def _submenu(ctx: AppContext, title: str, entries: dict[str, tuple[str, Flow]]) -> None:
    while True:
        lines = "\n".join(f"[{key}] {label}" for key, (label, _) in entries.items())
        choice = _prompt(f"\n=== {title} ===\n{lines}\n[0] Back\nSelect: ").strip()
        if choice == "0":
            return
        entry = entries.get(choice)
        if entry is None:
            _println("Invalid choice.")
            continue
        _run_flow(entry[1], ctx)


def run_interactive(ctx: AppContext) -> None:
    """
    Interactive menu loop over the course and instructor services.
    """
    while True:
        _println("\n=== Course Manager (interactive) ===")
        _println(
            f"Data: {ctx.data_dir} | courses={len(ctx.courses.get_all_courses())} "
            f"| instructors={len(ctx.instructors.get_all_instructors())}"
        )

        choice = _prompt("\n[1] Course management\n[2] Instructor management\n[0] Exit\nSelect: ").strip()

        if choice == "0":
            _println("Bye.")
            return
        if choice == "1":
            _submenu(ctx, "Course management", COURSE_MENU)
        elif choice == "2":
            _submenu(ctx, "Instructor management", INSTRUCTOR_MENU)
        else:
            _println("Invalid choice.")
