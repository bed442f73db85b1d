"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from lineup.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from lineup.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items") or result.data.get("registered")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    if result.op == "place_order":
        return str(result.data.get("total", ""))
    return str(result.data.get("id", f"OK: {result.op}"))


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("id", "name", "key"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="lineup.ok")
    op = Text(f"  {result.op}", style="lineup.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lineup.key")
    if key == "id":
        v = Text(str(value), style="lineup.id")
    elif key in ("fee", "price", "subtotal", "tax", "total"):
        v = Text(str(value), style="lineup.money")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _parts_table(parts: list[dict[str, Any]], *, label: str, key: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column(key, style="lineup.id", justify="right")
    table.add_column(label)
    for part in parts:
        table.add_row(str(part.get("discriminator", "")), str(part.get("label", "")))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lineup.error")
    op = Text(f"  {result.op}", style="lineup.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Team renderers ────────────────────────────────────────────────────


def _render_team(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("id", "category", "fee"):
        if key in d:
            _field(console, key, d[key])
    for key, value in d.get("details", {}).items():
        _field(console, key, value)
    _field(console, "players", len(d.get("players", [])))
    _field(console, "match_minutes", d.get("params", {}).get("match_minutes", ""))
    if verbose:
        console.print()
        console.print(_parts_table(d.get("players", []), label="Player", key="#"))
        _render_meta(console, result)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    registered = result.data.get("registered", [])
    errors = result.data.get("errors", [])
    _field(console, "registered", len(registered))
    _field(console, "errors", len(errors))
    for err in errors:
        console.print(
            f"  [lineup.error]error[/lineup.error] index={err.get('index')}: {err.get('error')}"
        )
    if verbose:
        _render_meta(console, result)


def _render_team_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Team", style="lineup.id", no_wrap=True)
    table.add_column("Division")
    table.add_column("Players", justify="right")
    table.add_column("Fee", style="lineup.money", justify="right")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("category", "")),
            str(len(item.get("players", []))),
            str(item.get("fee", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} teams")


# ── Order renderer ────────────────────────────────────────────────────


def _render_order(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(f"Order [lineup.id]{d.get('id', '?')}[/lineup.id]")
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Line", style="lineup.id", no_wrap=True)
    table.add_column("Style")
    table.add_column("Size")
    table.add_column("Crust")
    table.add_column("Toppings")
    table.add_column("Price", style="lineup.money", justify="right")
    if verbose:
        table.add_column("Bake")
    for line in d.get("lines", []):
        details = line.get("details", {})
        row = [
            str(line.get("id", "")),
            str(line.get("category", "")),
            str(details.get("size", "")),
            str(details.get("crust", "")),
            ", ".join(p["label"] for p in line.get("parts", [])),
            str(line.get("price", "")),
        ]
        if verbose:
            params = line.get("params", {})
            minutes = params.get("bake_minutes", "?")
            row.append(f"{minutes} min @ {params.get('bake_temp_c', '?')}°C")
        table.add_row(*row)
    console.print(table)
    for key in ("subtotal", "tax", "total"):
        _field(console, key, d.get(key, ""))


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Category", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Parts", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Parameters")
    for item in result.data.get("items", []):
        kind = str(item.get("kind", ""))
        style = style_for_kind(kind)
        params = ", ".join(f"{k}={v}" for k, v in item.get("params", {}).items())
        table.add_row(
            str(item.get("name", "")),
            Text(kind, style=style),
            f"{item.get('min_parts')}–{item.get('max_parts')}",
            str(item.get("tax_rate", "")),
            params,
        )
    console.print(table)


def _render_templates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Template", style="lineup.id", no_wrap=True)
    table.add_column("Parts", justify="right")
    for item in result.data.get("items", []):
        table.add_row(str(item.get("key", "")), str(item.get("parts", "")))
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} templates")


def _render_template(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(f"Template [lineup.id]{result.data.get('key', '?')}[/lineup.id]")
    console.print(_parts_table(result.data.get("parts", []), label="Label", key="Key"))


# ── Generic ───────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "register_team": _render_team,
    "register_batch": _render_batch,
    "list_teams": _render_team_table,
    "place_order": _render_order,
    "list_categories": _render_categories,
    "list_templates": _render_templates,
    "show_template": _render_template,
}
