"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from squarectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from squarectl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]

CELL = "██"
EMPTY_CELL = "··"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    view: str | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    *view* selects a renderer other than the one registered for
    ``result.op`` (e.g. ``"grid"`` for a list result).
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(view or result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: square IDs only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


def render_grid(items: list[dict[str, Any]], size: int) -> Text:
    """Lay squares out on a *size* x *size* block grid, one cell per square."""
    cells: dict[tuple[int, int], str] = {
        (int(item["row"]), int(item["column"])): str(item["color"]) for item in items
    }
    grid = Text()
    for row in range(size):
        for col in range(size):
            color = cells.get((row, col))
            if color is None:
                grid.append(EMPTY_CELL, style="sq.empty")
            else:
                grid.append(CELL, style=color)
        if row < size - 1:
            grid.append("\n")
    return grid


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="sq.ok"), Text(f"  {result.op}", style="sq.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "sq.id" if key == "id" else ""
    if key == "color":
        style = str(value)
    console.print(Text.assemble((f"  {key}: ", "sq.key"), (str(value), style)))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="sq.error"),
        Text(f"  {result.op}", style="sq.op"),
        Text(f"— {msg}"),
    )
    if verbose and err is not None:
        console.print(Text(f"  code: {err.code}", style="sq.key"))
        if err.detail:
            console.print(Text("  detail:", style="sq.key"))
            for key, value in err.detail.items():
                console.print(Text(f"    {key}: {value}"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_square(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in ("id", "row", "column", "color", "createdAt"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_square_table(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("  No squares yet.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="sq.id", no_wrap=True)
    table.add_column("Row", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Color")
    table.add_column("Created", style="dim")
    for index, item in enumerate(items):
        color = str(item.get("color", ""))
        table.add_row(
            str(index),
            str(item.get("id", "")),
            str(item.get("row", "")),
            str(item.get("column", "")),
            Text(color, style=color),
            str(item.get("createdAt", "")),
        )
    console.print(table)
    summary = f"  {result.data.get('count', len(items))} squares"
    if "grid_size" in result.data:
        size = result.data["grid_size"]
        summary += f", grid {size}x{size}"
    console.print(Text(summary, style="sq.key"))


def _render_grid(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("  No squares yet.", style="dim"))
        return
    console.print(render_grid(items, int(result.data.get("grid_size", 0))))


_OP_RENDERERS: dict[str, Renderer] = {
    "create_square": _render_square,
    "create_squares": _render_square_table,
    "list_squares": _render_square_table,
    "grid": _render_grid,
    "clear_squares": _render_generic,
}
