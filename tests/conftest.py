"""Shared pytest fixtures and test helpers for squarectl tests."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from squarectl.domain.palette import ColorSelector
from squarectl.infrastructure.store import SquareStore
from squarectl.services.placement import PlacementService


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("squarectl")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "Data"


@pytest.fixture
def store(data_dir: Path) -> SquareStore:
    """Fresh store backed by a temp directory."""
    return SquareStore(data_dir)


@pytest.fixture
def service(store: SquareStore) -> PlacementService:
    """PlacementService with a seeded color picker."""
    return PlacementService(store, colors=ColorSelector(rng=random.Random(1234)))


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory with no config or env overrides."""
    monkeypatch.chdir(tmp_path)
    for var in ("SQUARECTL_CONFIG", "SQUARECTL_STORE__DATA_DIR", "SQUARECTL_PROJECT_ROOT"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_record(**overrides: Any) -> dict[str, Any]:
    """A well-formed persisted square record."""
    record: dict[str, Any] = {
        "id": "3f2b8c1e-0000-4000-8000-000000000001",
        "row": 0,
        "column": 0,
        "color": "#FF5733",
        "createdAt": "2024-05-01T12:00:00Z",
    }
    record.update(overrides)
    return record


def create_squares(service: PlacementService, count: int) -> list[dict[str, Any]]:
    """Create *count* squares, asserting each succeeds."""
    created = []
    for _ in range(count):
        result = service.create_square()
        assert result.ok, result.error
        created.append(result.data)
    return created
