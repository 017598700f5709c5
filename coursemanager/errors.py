"""
Exception hierarchy shared by repositories, services and the CLI.

    CourseManagerError
    ├── EntityNotFoundError   requested record does not exist
    ├── ValidationError       one or more business rules violated
    ├── DataOperationError    I/O or (de)serialization failure (raised "from" the cause)
    └── InvalidArgumentError  missing/blank required parameter (also a ValueError)
"""

from __future__ import annotations

from typing import Any, Iterable


class CourseManagerError(Exception):
    """Base class for all application errors."""


class EntityNotFoundError(CourseManagerError):
    def __init__(self, entity_type: str, identifier: Any, field: str = "ID") -> None:
        self.entity_type = entity_type
        self.identifier = identifier
        self.field = field
        super().__init__(f"{entity_type} with {field} {identifier} not found")


class ValidationError(CourseManagerError):
    """
    Carries the full list of violated rules in `errors`.
    """

    def __init__(self, errors: str | Iterable[str], prefix: str = "") -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        text = ", ".join(self.errors)
        super().__init__(f"{prefix}: {text}" if prefix else text)


class DataOperationError(CourseManagerError):
    pass


class InvalidArgumentError(CourseManagerError, ValueError):
    pass
