"""
Generic JSON-file persistence.

Each repository owns exactly one file:

    <data_dir>/courses.json
    <data_dir>/instructors.json

Design rationale:
- the whole collection lives in memory (one list per repository instance)
- every mutation rewrites the complete file
- the file holds a pretty-printed JSON array, so it stays human-readable

Writes go to a temporary file next to the target and are then moved into place
with os.replace(). A crash in the middle of a save therefore leaves the previous
version of the file intact instead of a truncated one.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, Hashable, TypeVar

from coursemanager.errors import DataOperationError, EntityNotFoundError, InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFileRepository(Generic[T]):
    """
    CRUD over a homogeneous list of entities mirrored to one JSON file.

    The identifier is read through the `key` callable passed at construction,
    so entity classes do not need a common base class.
    """

    def __init__(
        self,
        file_path: str | Path,
        entity_name: str,
        *,
        key: Callable[[T], Hashable],
        encode: Callable[[T], dict[str, Any]],
        decode: Callable[[Any], T],
    ) -> None:
        self.file_path = Path(file_path)
        self.entity_name = entity_name
        self._key = key
        self._encode = encode
        self._decode = decode
        self._entities: list[T] = []
        self._load()

    def _load(self) -> None:
        """
        Read the backing file into memory.

        First run: the file does not exist yet -> start empty; it is created
        on the first save. A file that exists but cannot be parsed is fatal.
        """
        if not self.file_path.exists():
            self._entities = []
            logger.info(
                "Using empty %s repository (%s will be created when the first entity is added)",
                self.entity_name,
                self.file_path,
            )
            return

        try:
            raw = json.loads(self.file_path.read_text(encoding="utf-8"))
            if raw is None:
                raw = []
            if not isinstance(raw, list):
                raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
            self._entities = [self._decode(item) for item in raw]
        except (OSError, UnicodeDecodeError, ValueError, TypeError, RecursionError) as exc:
            logger.error("Error initializing repository from %s: %s", self.file_path, exc)
            raise DataOperationError(f"Failed to initialize repository from {self.file_path}") from exc

        logger.info("Loaded %d %s record(s) from %s", len(self._entities), self.entity_name, self.file_path)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    # Records go in and come out as deep copies: callers never hold a reference
    # to stored state, so only add/update/delete can change it.

    def get_all(self) -> list[T]:
        return copy.deepcopy(self._entities)

    def _index_of(self, entity_id: Hashable) -> int:
        for i, entity in enumerate(self._entities):
            if self._key(entity) == entity_id:
                return i
        return -1

    def get_by_id(self, entity_id: Hashable) -> T:
        idx = self._index_of(entity_id)
        if idx == -1:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return copy.deepcopy(self._entities[idx])

    def exists(self, entity_id: Hashable) -> bool:
        return self._index_of(entity_id) != -1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError(f"{self.entity_name} cannot be None")

        self._entities.append(copy.deepcopy(entity))
        try:
            self.save_changes()
        except DataOperationError:
            # keep memory in sync with the file that is still on disk
            self._entities.pop()
            raise
        return entity

    def update(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError(f"{self.entity_name} cannot be None")

        entity_id = self._key(entity)
        idx = self._index_of(entity_id)
        if idx == -1:
            raise EntityNotFoundError(self.entity_name, entity_id)

        previous = self._entities[idx]
        self._entities[idx] = copy.deepcopy(entity)
        try:
            self.save_changes()
        except DataOperationError:
            self._entities[idx] = previous
            raise
        return entity

    def delete(self, entity_id: Hashable) -> None:
        idx = self._index_of(entity_id)
        if idx == -1:
            raise EntityNotFoundError(self.entity_name, entity_id)

        removed = self._entities.pop(idx)
        try:
            self.save_changes()
        except DataOperationError:
            self._entities.insert(idx, removed)
            raise

    def save_changes(self) -> None:
        """
        Serialize the whole collection and replace the backing file.

        Creates parent directories if needed.
        """
        tmp_name: str | None = None
        try:
            payload = json.dumps([self._encode(e) for e in self._entities], indent=2, ensure_ascii=False)

            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.file_path.name}.", suffix=".tmp", dir=str(self.file_path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.file_path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving repository to %s: %s", self.file_path, exc)
            raise DataOperationError(f"Failed to save repository to {self.file_path}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info("Saved %d %s record(s) to %s", len(self._entities), self.entity_name, self.file_path)
