from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .io import Reject
from .model import Address
from .roster import RosterEntry

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_RED     = "#f05c5c"
_TEXT    = "#c9d1e0"
_MID     = "#8896af"
_DIM     = "#546075"
_BORDER  = "#2a3347"


def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


def print_address(address: Address) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style=f"dim {_MID}")
    table.add_column("Value", style=f"bold {_TEXT}")
    for name, value in address.to_dict().items():
        table.add_row(name, "—" if value is None else repr(value))
    console.print(table)


def print_roster(entries: list[RosterEntry]) -> None:
    table = Table(show_header=True, header_style="bold", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Address", style="bold")
    table.add_column("Resources")
    table.add_column("Sources", style=f"dim {_MID}")
    for idx, e in enumerate(entries, start=1):
        table.add_row(
            str(idx),
            str(e.address),
            "\n".join(e.resources),
            ", ".join(e.sources),
        )
    console.print(table)


def print_summary(
    *,
    input_count: int,
    entries: list[RosterEntry],
    rejects: list[Reject],
    out_path: Path | None,
    source_counts: dict[str, int] | None = None,
) -> None:
    merged_away = input_count - len(entries)

    console.print()
    console.print(Text("  ROSTER SUMMARY", style=f"dim {_DIM}"))
    console.print()
    console.print(Columns([
        _stat_panel(str(len(entries)), "roster entries",    _ACCENT),
        _stat_panel(str(merged_away),  "duplicates merged", _GREEN),
        _stat_panel(str(len(rejects)), "rejected",          _RED if rejects else _TEXT),
    ], equal=True, expand=True))
    console.print()

    if source_counts and len(source_counts) > 1:
        sources = Table(
            title="addresses per source",
            title_style=f"dim {_DIM}",
            show_header=False,
            box=None,
            padding=(0, 2),
        )
        sources.add_column("Source", style=_MID)
        sources.add_column("Addresses", justify="right", style=f"bold {_TEXT}")
        for src in sorted(source_counts):
            sources.add_row(src, str(source_counts[src]))
        console.print(sources)
        console.print()

    if out_path is not None:
        body = Text()
        body.append("✓  Written successfully\n", style=f"bold {_GREEN}")
        body.append(str(out_path), style=f"dim {_MID}")
        console.print(Panel(body, border_style=_GREEN, padding=(0, 2)))


def print_rejects(rejects: list[Reject]) -> None:
    if not rejects:
        return
    console.print(Text(f"  REJECTED  {len(rejects)} value(s)", style=f"dim {_DIM}"))
    for label, value, err in rejects:
        row = Text()
        row.append("  ✗ ", style=f"bold {_RED}")
        row.append(f"{value:<38}", style=_TEXT)
        row.append(f"  {err.reason}", style=f"dim {_RED}")
        row.append(f"  ({label})", style=f"dim {_DIM}")
        console.print(row)
    console.print()


def build_source_counts(pairs: list[tuple[object, str]]) -> dict[str, int]:
    return dict(Counter(label for _, label in pairs))
