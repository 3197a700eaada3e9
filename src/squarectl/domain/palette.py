"""Square color palette and the no-immediate-repeat color picker."""

from __future__ import annotations

import random
from collections.abc import Sequence

PALETTE: tuple[str, ...] = (
    "#FF5733",
    "#33FF57",
    "#3357FF",
    "#FF33F5",
    "#F5FF33",
    "#33FFF5",
    "#FF6B33",
    "#6B33FF",
    "#33FF6B",
    "#FF336B",
    "#6BFF33",
    "#336BFF",
)


def is_palette_color(color: str) -> bool:
    """Check whether *color* is one of the fixed palette entries."""
    return color in PALETTE


class ColorSelector:
    """Pick palette colors at random, never repeating the previous pick.

    Randomness is not security-sensitive; pass *rng* to make picks
    reproducible in tests.
    """

    def __init__(
        self,
        palette: Sequence[str] = PALETTE,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if not palette:
            msg = "Palette must contain at least one color"
            raise ValueError(msg)
        # Duplicates would let the re-draw loop spin forever.
        self._palette = tuple(dict.fromkeys(palette))
        self._rng = rng or random.Random()
        self._last: str | None = None

    @property
    def last(self) -> str | None:
        return self._last

    def next(self, previous: str | None = None) -> str:
        """Pick a color different from *previous* (default: the last pick).

        Pass the most recently stored color when the selector is fresh but
        the store is not, so a new process still avoids an adjacent repeat.
        """
        avoid = previous if previous is not None else self._last
        color = self._rng.choice(self._palette)
        if len(self._palette) > 1:
            while color == avoid:
                color = self._rng.choice(self._palette)
        self._last = color
        return color

    def reset(self) -> None:
        self._last = None
