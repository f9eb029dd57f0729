"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to the generic message renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from staffboard.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from staffboard.services.result import ServiceResult

_BOARD_WIDTH = 200
_CELL_CHARS = 4


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(width=_BOARD_WIDTH if result.op == "board_show" else None)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_message)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the message, or the IDs of a list."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("scenarios") or result.data.get("matches")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items if isinstance(item, dict))
    if result.op == "parse":
        return str(result.data.get("action", ""))
    return str(result.data.get("message") or f"OK: {result.op}")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="sb.ok")
    op = Text(f"  {result.op}", style="sb.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sb.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="sb.id")
    elif key == "coordinate":
        v = Text(str(value), style="sb.coord")
    elif key == "name":
        v = Text(str(value), style="sb.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="sb.warning"), warning)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _cell_text(cell: dict[str, Any] | None) -> Text:
    if cell is None:
        return Text("·", style="sb.empty")
    label = str(cell.get("label", ""))[:_CELL_CHARS]
    return Text(label, style=style_for_kind(str(cell.get("kind", ""))))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sb.error")
    op = Text(f"  {result.op}", style="sb.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err and err.detail.get("suggestion"):
        console.print(Text("  try: ", style="sb.key"), err.detail["suggestion"])
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Command renderers ─────────────────────────────────────────────────


def _render_message(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render an executed command: status line, message, key fields."""
    _status_line(console, result)
    message = result.data.get("message")
    if message:
        console.print(f"  {message}")
    for key in ("coordinate", "id", "name"):
        value = result.data.get(key)
        if value:
            _field(console, key, value)
    _render_warnings(console, result)
    if verbose:
        changed = result.data.get("changed")
        if changed:
            _field(console, "changed", ", ".join(changed))
        _render_meta(console, result)


def _render_help(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Panel(str(result.data.get("message", "")), title="도움말", expand=False))


def _render_parse(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a parsed (not executed) command as a panel of its fields."""
    command = dict(result.data.get("command", {}))
    action = command.pop("action", result.data.get("action", ""))
    original = command.pop("original", "")

    lines = Text()
    lines.append("action: ", style="sb.key")
    lines.append(str(action), style="sb.op" if result.data.get("recognized") else "sb.error")
    for key, value in command.items():
        if value in (None, "", [], ()):
            continue
        lines.append(f"\n{key}: ", style="sb.key")
        lines.append(str(value))
    console.print(Panel(lines, title=str(original) or None, expand=False))


# ── Board renderers ───────────────────────────────────────────────────


def _render_board(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the seating grid, one table per block."""
    d = result.data
    columns: list[str] = list(d.get("columns", []))
    rows: list[int] = list(d.get("rows", []))
    cells: dict[str, dict[str, Any]] = d.get("cells", {})

    # Split at the block boundary so each table fits a terminal.
    if len(columns) > 20:
        halves = [("left", columns[:20]), ("right", columns[20:])]
    else:
        halves = [(str(d.get("block") or "left"), columns)]
    for block, half in halves:
        table = Table(
            title=f"{block} block",
            title_style=f"sb.block.{block}",
            show_header=True,
            show_lines=False,
            pad_edge=False,
        )
        table.add_column("", style="sb.key", justify="right", no_wrap=True)
        for letters in half:
            table.add_column(letters, justify="center", no_wrap=True)
        for row in rows:
            table.add_row(str(row), *(_cell_text(cells.get(f"{c}{row}")) for c in half))
        console.print(table)

    counts = d.get("counts", {})
    summary = Text("  ")
    summary.append(f"{counts.get('employees', 0)} employees", style="sb.kind.employee")
    summary.append(", ")
    summary.append(f"{counts.get('departments', 0)} departments", style="sb.kind.department")
    if d.get("last_updated"):
        summary.append(f"  (updated {d['last_updated']})", style="dim")
    console.print(summary)


def _render_matches(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render ``board where`` hits as a table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Coord", style="sb.coord", no_wrap=True)
    table.add_column("Name", style="sb.title")
    table.add_column("Kind")
    table.add_column("Dept")
    table.add_column("Position")
    if verbose:
        table.add_column("ID", style="sb.id")
        table.add_column("Photo", style="dim")

    for item in result.data.get("matches", []):
        kind = str(item.get("kind", ""))
        row = [
            str(item.get("coordinate", "")),
            str(item.get("label", "")),
            Text(kind, style=style_for_kind(kind)),
            str(item.get("dept", "")),
            str(item.get("position", "") or ""),
        ]
        if verbose:
            row.extend([str(item.get("id", "")), str(item.get("photo") or "")])
        table.add_row(*row)
    console.print(table)


def _render_at(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "coordinate", d.get("coordinate", ""))
    _field(console, "block", d.get("block", ""))
    occupant = d.get("occupant")
    if occupant:
        _field(console, "name", occupant.get("label", ""))
        _field(console, "kind", occupant.get("kind", ""))
        if verbose:
            _field(console, "id", occupant.get("id", ""))
    else:
        console.print(Text("  (empty)", style="sb.empty"))


# ── Scenario renderers ────────────────────────────────────────────────


def _render_scenarios(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("scenarios", [])
    if not items:
        console.print(str(result.data.get("message", "")))
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="sb.title")
    table.add_column("Description")
    table.add_column("Created", style="dim")
    if verbose:
        table.add_column("Updated", style="dim")
        table.add_column("ID", style="sb.id")
    for i, item in enumerate(items, start=1):
        row = [
            str(i),
            str(item.get("name", "")),
            str(item.get("description", "")),
            str(item.get("created_at", "")),
        ]
        if verbose:
            row.extend([str(item.get("updated_at", "")), str(item.get("id", ""))])
        table.add_row(*row)
    console.print(table)


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    console.print(f"  {d.get('message', '')}")
    _field(console, "seed", d.get("seed", ""))
    counts = d.get("counts", {})
    _field(console, "employees", counts.get("employees", 0))
    _field(console, "departments", counts.get("departments", 0))
    _field(console, "scenarios", d.get("scenarios", 0))


_OP_RENDERERS: dict[str, Any] = {
    "help": _render_help,
    "parse": _render_parse,
    "board_show": _render_board,
    "board_where": _render_matches,
    "board_at": _render_at,
    "scenario_list": _render_scenarios,
    "init": _render_init,
}
