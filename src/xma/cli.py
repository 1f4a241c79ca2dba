from __future__ import annotations

import glob
import json
import logging
from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import ensure_workspace
from .errors import AddressError
from .exporter import EXPORT_FORMATS, export_roster
from .io import collect_sources, read_addresses_from_files
from .model import Address, Require, compare
from .report import build_source_counts, print_address, print_rejects, print_roster, print_summary
from .resource import split_resource
from .roster import build_roster, search

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="xma: parse XMPP addresses and build deduplicated rosters.",
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_or_exit(text: str, require: Require = Require.IDENTIFIER) -> Address:
    try:
        return Address.parse(text, require)
    except AddressError as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)


# ── Single-address commands ────────────────────────────────────────────────────

@app.command()
def parse(
    address: str = typer.Argument(..., help="identifier, identifier@host or identifier@host/resource"),
    require: Require = typer.Option(Require.IDENTIFIER, "--require", "-r", help="Minimum address level"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed fields as JSON"),
) -> None:
    """Parse one address and show its components."""
    a = _parse_or_exit(address, require)
    if as_json:
        typer.echo(json.dumps(a.to_dict()))
        return
    print_address(a)


@app.command()
def split(resource: str = typer.Argument(..., help="Resource to split")) -> None:
    """Show how a resource splits into kind and session."""
    parts = split_resource(resource)
    kind, session = parts or (resource, resource)
    console.print(f"  kind    : [bold]{escape(kind)}[/bold]")
    console.print(f"  session : [bold]{escape(session)}[/bold]")
    if parts is None:
        console.print("  [dim]no split point; kind and session are the whole resource[/dim]")


@app.command(name="compare")
def compare_cmd(
    first: str = typer.Argument(...),
    second: str = typer.Argument(...),
) -> None:
    """Compare two addresses as a roster would."""
    a = _parse_or_exit(first)
    b = _parse_or_exit(second)
    console.print(f"  same roster entry : [bold]{'yes' if a == b else 'no'}[/bold]")
    console.print(f"  sort order        : [bold]{compare(a, b)}[/bold]")
    console.print(f"  same text key     : [bold]{'yes' if a.text == b.text else 'no'}[/bold]")


# ── Roster commands ────────────────────────────────────────────────────────────

def _gather(in_dir: Path, inputs: list[str] | None) -> list[Path]:
    if not inputs:
        return collect_sources(in_dir)
    files: list[Path] = []
    for g in inputs:
        files.extend(Path(p) for p in glob.glob(g, recursive=True))
    return sorted(f for f in files if f.is_file())


@app.command()
def roster(
    in_dir: Path | None = typer.Option(
        None, "--dir", "-d",
        help="Folder of .txt/.vcf roster sources (default: roster-in/)",
    ),
    inputs: list[str] | None = typer.Option(None, "--input", "-i", help="Glob(s) for source files"),
    require: Require | None = typer.Option(
        None, "--require", "-r",
        help="Minimum address level. Falls back to local/xma.conf.",
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Explicit output path"),
    fmt: str | None = typer.Option(None, "--format", "-f", help="Export format (txt or vcf)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing any files"),
) -> None:
    """Read roster sources, merge duplicate addresses, and export the roster."""
    paths, settings = ensure_workspace()
    effective_require = require or settings.require
    effective_fmt = (fmt or settings.export_format).lower()
    if effective_fmt not in EXPORT_FORMATS:
        console.print(f"[bold red]Unknown format {effective_fmt!r}; use txt or vcf.[/bold red]")
        raise typer.Exit(code=2)

    source_dir = in_dir or paths.in_dir
    files = _gather(source_dir, inputs)
    if not files:
        console.print(Panel(
            f"[bold red]No roster sources found in [white]{source_dir}/[/white][/bold red]\n\n"
            "Drop address lists (.txt, one per line) or address books (.vcf) here.",
            title="Nothing to read",
            border_style="red",
        ))
        raise typer.Exit(code=2)

    console.print(f"\n[bold]Reading {len(files)} file(s)…[/bold]")
    for f in files:
        console.print(f"  [dim]{f.name}[/dim]")

    pairs, rejects = read_addresses_from_files(files, effective_require)
    entries = build_roster(pairs)

    print_roster(entries)
    print_rejects(rejects)

    out_path = None
    if not dry_run:
        out_path = output
        if out_path is None:
            safe_owner = settings.owner_name.replace(" ", "-")
            out_path = paths.out_dir / f"{date.today().isoformat()}-roster-of-{safe_owner}.{effective_fmt}"
        export_roster(entries, out_path, effective_fmt)
    else:
        console.print("\n[yellow bold]Dry-run mode — no files written.[/yellow bold]")

    print_summary(
        input_count=len(pairs),
        entries=entries,
        rejects=rejects,
        out_path=out_path,
        source_counts=build_source_counts(pairs),
    )


@app.command()
def find(
    query: str = typer.Argument(..., help="Text to look for"),
    in_dir: Path | None = typer.Option(None, "--dir", "-d", help="Folder of roster sources"),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum matches"),
) -> None:
    """Fuzzy-search the roster built from the source folder."""
    paths, settings = ensure_workspace()
    files = collect_sources(in_dir or paths.in_dir)
    pairs, _ = read_addresses_from_files(files, settings.require)
    matches = search(build_roster(pairs), query, limit=limit)
    if not matches:
        console.print("[dim]No matches.[/dim]")
        raise typer.Exit(code=1)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Address", style="bold")
    table.add_column("Resources")
    for entry, score in matches:
        table.add_row(f"{score:.0f}", str(entry.address), ", ".join(entry.resources))
    console.print(table)


if __name__ == "__main__":
    app()
