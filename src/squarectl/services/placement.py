"""PlacementService — create, list, and clear squares on the spiral grid.

Pipeline for ``create_square``: COUNT → POSITION → COLOR → BUILD → PERSIST → RESPOND

INVARIANT: The stored count, the spiral lookup, the color pick, and the
append run inside one critical section. It holds a thread lock for callers
in this process and an exclusive lock on the store's sidecar lock file for
other processes sharing the same squares file. Two concurrent creates can
therefore never observe the same count and claim the same cell.
``clear_squares`` and ``list_squares`` take the same critical section.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from filelock import FileLock, Timeout

from squarectl.domain.ids import new_square_id
from squarectl.domain.models import Square
from squarectl.domain.palette import ColorSelector
from squarectl.domain.spiral import PositionSequencer, grid_size_for
from squarectl.infrastructure.store import InvalidSquareError
from squarectl.services._helpers import utc_now
from squarectl.services.base import BaseService
from squarectl.services.result import ServiceResult

if TYPE_CHECKING:
    from squarectl.infrastructure.store import SquareStore

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10.0


class LockTimeoutError(TimeoutError):
    """The placement lock could not be acquired in time."""


class PlacementService(BaseService):
    """Owns the spiral cache, the last-color state, and the placement lock.

    Construct once per process and share the instance; the mutable state
    lives on the instance, never in module globals.
    """

    def __init__(
        self,
        store: SquareStore,
        *,
        sequencer: PositionSequencer | None = None,
        colors: ColorSelector | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        super().__init__(store)
        self._sequencer = sequencer or PositionSequencer()
        self._colors = colors or ColorSelector()
        self._lock = threading.Lock()
        self._file_lock = FileLock(store.lock_path)
        self._lock_timeout = lock_timeout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_square(self) -> ServiceResult:
        """Place a new square at the next spiral cell with a fresh color."""
        op = "create_square"
        try:
            with self._critical_section():
                squares = self._store.load_all()
                row, column = self._next_free_position(squares)
                previous = squares[-1].color if squares else None
                square = Square(
                    id=new_square_id(),
                    row=row,
                    column=column,
                    color=self._colors.next(previous),
                    created_at=utc_now(),
                )
                saved = self._store.append(square)
        except InvalidSquareError as exc:
            return self._validation_error(op, exc)
        except Exception:
            return self._internal_error(op, reason="could not create square")

        logger.debug(
            "Created square %s at (%d, %d) with color %s",
            saved.id,
            saved.row,
            saved.column,
            saved.color,
        )
        return self._ok(op, **saved.to_record())

    def create_squares(self, count: int) -> ServiceResult:
        """Create *count* squares one after another, stopping at the first failure.

        Each square is its own critical section; squares created before a
        failure stay persisted and are reported under ``data["items"]``.
        """
        op = "create_squares"
        if count < 1:
            return self._validation_error(op, ValueError(f"count must be at least 1, got {count}"))

        created: list[dict[str, Any]] = []
        for _ in range(count):
            result = self.create_square()
            if not result.ok:
                return ServiceResult(
                    ok=False,
                    op=op,
                    data={"items": created, "count": len(created)},
                    error=result.error,
                )
            created.append(result.data)
        return self._ok(op, items=created, count=len(created))

    def list_squares(self) -> ServiceResult:
        """Return every square in creation order."""
        op = "list_squares"
        try:
            with self._critical_section():
                squares = self._store.load_all()
        except Exception:
            return self._internal_error(op, reason="could not list squares")

        return self._ok(
            op,
            items=[s.to_record() for s in squares],
            count=len(squares),
            grid_size=grid_size_for(len(squares)),
        )

    def clear_squares(self) -> ServiceResult:
        """Remove every square and restart the spiral and color state."""
        op = "clear_squares"
        try:
            with self._critical_section():
                self._store.clear_all()
                self._colors.reset()
                self._sequencer.reset()
        except Exception:
            return self._internal_error(op, reason="could not clear squares")

        return self._ok(op, cleared=True)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _next_free_position(self, squares: list[Square]) -> tuple[int, int]:
        """First unoccupied spiral cell at or after index ``len(squares)``.

        Read-repair can drop a record from the middle of the file, leaving
        later cells occupied; those indices are skipped.
        """
        occupied = {square.position for square in squares}
        index = len(squares)
        position = self._sequencer.position_at(index)
        while position in occupied:
            index += 1
            position = self._sequencer.position_at(index)
        return position

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @contextmanager
    def _critical_section(self) -> Iterator[None]:
        deadline = time.monotonic() + self._lock_timeout
        msg = f"Placement lock not acquired within {self._lock_timeout}s"
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockTimeoutError(msg)
        try:
            try:
                self._file_lock.acquire(timeout=max(0.0, deadline - time.monotonic()))
            except Timeout as exc:
                raise LockTimeoutError(msg) from exc
            try:
                yield
            finally:
                self._file_lock.release()
        finally:
            self._lock.release()
