"""Square identifier generation.

IDs are random UUID4 values in canonical hyphenated form.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import uuid


def new_square_id() -> str:
    """Generate a fresh, globally unique square ID."""
    return str(uuid.uuid4())


def is_valid_id(square_id: object) -> bool:
    """Check that *square_id* is a non-empty, non-blank string."""
    return isinstance(square_id, str) and bool(square_id.strip())
