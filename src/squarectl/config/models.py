"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, squarectl.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    data_dir: Path = Path("Data")
    filename: str = Field(default="squares.json", min_length=1)
    lock_timeout: float = Field(default=10.0, gt=0)

