"""SquareStore — a single JSON file holding every square in creation order.

INVARIANT: The file always holds one complete JSON array. Every mutation
rewrites the whole collection to a temporary sibling file and renames it
over the target, so an interrupted write never leaves a half-written store.

Reads never fail on bad content. A missing, empty, or undecodable file
reads as empty, and individually malformed records are dropped while the
well-formed ones are kept. Each anomaly is logged.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from squarectl.domain.ids import is_valid_id
from squarectl.domain.models import Square

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "squares.json"


class InvalidSquareError(ValueError):
    """Raised when a square cannot be persisted as given."""


class SquareStore:
    """Whole-collection JSON persistence for squares.

    Not thread-safe; callers serialize mutations.
    """

    def __init__(self, data_dir: Path, filename: str = DEFAULT_FILENAME) -> None:
        self._path = Path(data_dir) / filename
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._create_if_missing()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock_path(self) -> Path:
        """Sidecar file that writers lock to serialize across processes."""
        return self._path.with_name(f"{self._path.name}.lock")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_all(self) -> list[Square]:
        """Return every stored square in insertion order."""
        raw = self._read_text()
        if raw is None or not raw.strip():
            logger.warning("Squares file is empty or missing, returning empty list: %s", self._path)
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError:
            logger.error("Squares file is not valid JSON, returning empty list: %s", self._path)
            return []

        if not isinstance(records, list):
            logger.error(
                "Squares file must hold a JSON array, found %s: %s",
                type(records).__name__,
                self._path,
            )
            return []

        squares: list[Square] = []
        for record in records:
            square = _parse_record(record)
            if square is not None:
                squares.append(square)

        dropped = len(records) - len(squares)
        if dropped:
            logger.warning("Filtered out %d invalid squares from %s", dropped, self._path)
        return squares

    def count(self) -> int:
        return len(self.load_all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, square: Square | None) -> Square:
        """Persist *square* after all existing squares.

        Raises:
            InvalidSquareError: If *square* is missing or has no ID. The
                store is left untouched.
        """
        if square is None:
            msg = "Square cannot be None"
            raise InvalidSquareError(msg)
        if not is_valid_id(square.id):
            msg = "Square must have a valid id"
            raise InvalidSquareError(msg)

        records = [s.to_record() for s in self.load_all()]
        records.append(square.to_record())
        self._write_records(records)
        logger.debug("Stored square %s at (%d, %d)", square.id, square.row, square.column)
        return square

    def clear_all(self) -> None:
        self._write_records([])
        logger.info("All squares cleared: %s", self._path)

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def _read_text(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            logger.error("Unreadable squares file, returning empty list: %s", self._path, exc_info=True)
            return None

    def _create_if_missing(self) -> None:
        # Exclusive create: a concurrent process may already have written squares.
        try:
            with self._path.open("x", encoding="utf-8") as fh:
                fh.write("[]")
        except FileExistsError:
            return

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        payload = json.dumps(records, indent=2)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def _parse_record(record: Any) -> Square | None:
    """Validate one persisted record, returning None if it is malformed."""
    try:
        square = Square.model_validate(record)
    except ValidationError as exc:
        logger.debug("Dropping malformed square record: %s", exc.errors(include_url=False))
        return None
    if not is_valid_id(square.id):
        return None
    return square
