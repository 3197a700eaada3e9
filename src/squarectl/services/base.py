"""BaseService — shared foundation for squarectl services.

Every service receives its :class:`SquareStore` at construction time and
reports outcomes as :class:`ServiceResult`. The helpers here keep the
success and failure shapes uniform across operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from squarectl.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from squarectl.infrastructure.store import SquareStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class PlacementService(BaseService):
            def list_squares(self) -> ServiceResult:
                squares = self._store.load_all()
                return self._ok("list_squares", items=[...])
    """

    def __init__(self, store: SquareStore) -> None:
        self._store = store

    @staticmethod
    def _ok(op: str, **data: Any) -> ServiceResult:
        return ServiceResult(ok=True, op=op, data=data)

    @staticmethod
    def _validation_error(op: str, exc: Exception) -> ServiceResult:
        logger.warning("%s rejected: %s", op, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=ErrorCode.VALIDATION_ERROR, message=str(exc)),
        )

    @staticmethod
    def _internal_error(op: str, *, reason: str = "unexpected error") -> ServiceResult:
        """Build a generic failure; the real cause is logged, never returned.

        Call from inside an ``except`` block so the traceback reaches the log.
        """
        logger.error("%s failed: %s", op, reason, exc_info=True)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=ErrorCode.INTERNAL_ERROR, message=INTERNAL_ERROR_MESSAGE),
        )
