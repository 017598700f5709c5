"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and Instructor objects so that:
- repositories, services and the CLI share the same field names
- the JSON files keep a stable layout (one object per record, snake_case keys)
- files written with PascalCase property names still load

Relationships are stored as id lists on both sides:
    Course.instructor_ids  <->  Instructor.course_ids
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Callable, Optional, List


# Business limits shared by the services and the CLI prompts
CODE_MAX_LEN = 20
TITLE_MAX_LEN = 200
DESCRIPTION_MAX_LEN = 2000
DEPARTMENT_MAX_LEN = 100
MIN_CREDITS = 1
MAX_CREDITS = 12
MIN_ENROLLMENT = 1
MAX_ENROLLMENT = 500
MAX_COURSES_PER_INSTRUCTOR = 4


@dataclass
class Course:
    """
    Represents one academic course as stored in courses.json.
    """

    code: str = ""
    title: str = ""
    description: str = ""
    credits: int = 0
    max_enrollment: int = 0
    department: str = ""
    instructor_ids: List[uuid.UUID] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_date: datetime = field(default_factory=datetime.now)


@dataclass
class Instructor:
    """
    Represents one faculty member as stored in instructors.json.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    department: str = ""
    title: str = ""
    office_location: str = ""
    phone: str = ""
    is_active: bool = True
    is_full_time: bool = True
    course_ids: List[uuid.UUID] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    hire_date: datetime = field(default_factory=datetime.now)
    created_date: datetime = field(default_factory=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ---------------------------------------------------------------------------
# JSON conversion
# ---------------------------------------------------------------------------

# Alternative property names accepted on load (normalized form -> field name)
_COURSE_ALIASES = {"credithours": "credits", "enrollmentcap": "max_enrollment"}
_INSTRUCTOR_ALIASES = {"office": "office_location"}


def _norm_key(key: str) -> str:
    """
    'InstructorIds', 'instructor_ids' and 'INSTRUCTOR_IDS' all become 'instructorids'.
    """
    return key.replace("_", "").lower()


def _to_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _to_uuid_list(value: Any) -> list[uuid.UUID]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Expected a list of ids, got {type(value).__name__}")
    # keep first occurrence order, drop duplicates
    out: list[uuid.UUID] = []
    for x in value:
        u = _to_uuid(x)
        if u not in out:
            out.append(u)
    return out


_COURSE_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "id": _to_uuid,
    "code": _to_str,
    "title": _to_str,
    "description": _to_str,
    "credits": int,
    "max_enrollment": int,
    "department": _to_str,
    "instructor_ids": _to_uuid_list,
    "created_date": _to_datetime,
}

_INSTRUCTOR_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "id": _to_uuid,
    "first_name": _to_str,
    "last_name": _to_str,
    "email": _to_str,
    "department": _to_str,
    "title": _to_str,
    "office_location": _to_str,
    "phone": _to_str,
    "is_active": _to_bool,
    "is_full_time": _to_bool,
    "course_ids": _to_uuid_list,
    "hire_date": _to_datetime,
    "created_date": _to_datetime,
}


def _collect_kwargs(
    raw: Any,
    converters: dict[str, Callable[[Any], Any]],
    aliases: dict[str, str],
    kind: str,
) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError(f"{kind} record must be a JSON object, got {type(raw).__name__}")

    by_norm = {_norm_key(name): name for name in converters}
    by_norm.update(aliases)

    kwargs: dict[str, Any] = {}
    for key, value in raw.items():
        name = by_norm.get(_norm_key(str(key)))
        if name is None:
            # unknown keys (e.g. ScheduleIds) are ignored
            continue
        kwargs[name] = converters[name](value)
    return kwargs


def course_from_dict(raw: Any) -> Course:
    """
    Build a Course from one JSON object. Keys are matched case-insensitively.
    Raises ValueError/TypeError on malformed values.
    """
    return Course(**_collect_kwargs(raw, _COURSE_CONVERTERS, _COURSE_ALIASES, "Course"))


def instructor_from_dict(raw: Any) -> Instructor:
    """
    Build an Instructor from one JSON object. Keys are matched case-insensitively.
    """
    return Instructor(**_collect_kwargs(raw, _INSTRUCTOR_CONVERTERS, _INSTRUCTOR_ALIASES, "Instructor"))


def _jsonable(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_jsonable(x) for x in value]
    return value


def to_dict(entity: Optional[Course | Instructor]) -> dict[str, Any]:
    """
    Convert a Course or Instructor into a JSON-ready dict (snake_case keys).
    """
    if entity is None:
        raise TypeError("Cannot serialize None")
    return {f.name: _jsonable(getattr(entity, f.name)) for f in fields(entity)}
