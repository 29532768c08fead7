"""Check that every chapter directory carries a README.md."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional

from rich.console import Console
from rich.text import Text

from challenge_checker.report_cli import OK_STYLE, make_console

README_FILENAME = "README.md"


def missing_readmes(root_dir: str, dirs: Iterable[str]) -> List[str]:
    """Directories under ``root_dir`` with no README.md file, sorted."""
    return sorted(
        d for d in dirs
        if not os.path.isfile(os.path.join(root_dir, d, README_FILENAME))
    )


def readme_report(missing: List[str], console: Optional[Console] = None) -> None:
    console = console or make_console()
    console.print()
    console.print(Text("Checking READMEs"))
    if not missing:
        console.print(Text("All READMEs present", style=OK_STYLE))
        return
    for d in missing:
        console.print(Text(f"README missing in {d}"))
