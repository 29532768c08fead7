"""Human-readable console report of a folder reconciliation."""

from __future__ import annotations

from typing import IO, Optional

from rich.console import Console
from rich.text import Text

from challenge_checker.folders import Reconciliation

OK_STYLE = "bold green"
ERROR_STYLE = "bold red"


def make_console(file: Optional[IO[str]] = None) -> Console:
    """Console for reports. Writes to stdout unless ``file`` is given.

    Colours are dropped automatically when the stream is not a terminal. Directory
    names are passed as ``Text`` so brackets in them are never read as markup.
    """
    return Console(file=file, highlight=False, soft_wrap=True)


def folder_status_report(result: Reconciliation, console: Optional[Console] = None) -> None:
    """Print the missing and extra folders, sorted by name."""
    console = console or make_console()

    if result.ok:
        console.print(Text("All good!", style=OK_STYLE))
        return

    if result.missing:
        console.print()
        console.print(Text(f"Error: Found {len(result.missing)} Missing directories", style=ERROR_STYLE))
        for missing_dir in sorted(result.missing):
            console.print(Text(missing_dir))

    if result.extra:
        console.print()
        console.print(Text(f"Found {len(result.extra)} Extra directories", style=ERROR_STYLE))
        for extra_dir in sorted(result.extra):
            console.print(Text(extra_dir, style=ERROR_STYLE))
