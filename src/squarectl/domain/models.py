"""Square — the immutable record placed on the grid.

The persisted and external shape uses camelCase keys::

    {"id": "...", "row": 0, "column": 1, "color": "#FF5733",
     "createdAt": "2024-01-01T12:00:00Z"}
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from squarectl.domain.palette import is_palette_color


class Square(BaseModel):
    """A colored cell at a fixed grid coordinate.

    INVARIANT: Squares are never mutated after creation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    row: int = Field(ge=0)
    column: int = Field(ge=0)
    color: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="createdAt",
    )

    @field_validator("color")
    @classmethod
    def _color_in_palette(cls, value: str) -> str:
        if not is_palette_color(value):
            msg = f"Color {value!r} is not in the palette"
            raise ValueError(msg)
        return value

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.column)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible external/persisted shape."""
        return self.model_dump(mode="json", by_alias=True)
