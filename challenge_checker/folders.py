"""Compare the chapter directories a config expects with the ones on disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet

from challenge_checker.config import Config
from challenge_checker.fileops import list_directories


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of a comparison. Sets are unordered; renderers sort as they need."""
    missing: frozenset[str] = field(default_factory=frozenset)
    extra: frozenset[str] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        return not self.missing and not self.extra

    def swapped(self) -> "Reconciliation":
        return Reconciliation(missing=self.extra, extra=self.missing)


def reconcile(needed: AbstractSet[str], existing: AbstractSet[str]) -> Reconciliation:
    """missing = needed - existing, extra = existing - needed."""
    return Reconciliation(
        missing=frozenset(needed) - frozenset(existing),
        extra=frozenset(existing) - frozenset(needed),
    )


def analyze(config: Config, exclude_hidden: bool = True) -> Reconciliation:
    """Snapshot ``config.root_dir`` and reconcile it against the chapters."""
    existing_dirs = list_directories(config.root_dir, exclude_hidden=exclude_hidden)
    needed_dirs = config.computed_chapter_dirs()
    return reconcile(needed_dirs, existing_dirs)
