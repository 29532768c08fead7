"""Legacy (v1) configuration model, kept only so v1 files can be migrated to v2.

In v1 the chapters are an ordered list and each one carries its own ``number``:

    language: rust
    project: Rust Language
    chapters:
      - number: 1
        name: basics
      - number: 2
        name: loops
"""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from challenge_checker.config import (
    CONFIG_FILENAME,
    Chapter,
    Config,
    ReportMode,
    read_document,
    root_dir_for_file,
    validate_document,
)

SCHEMA_V1 = "challenges_v1_schema.json"


@dataclass(frozen=True)
class LegacyChapter:
    number: int
    name: str
    topics: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class LegacyConfig:
    language: str
    project: str
    chapters: Tuple[LegacyChapter, ...] = field(default_factory=tuple)
    dirs_cached: bool = False
    root_dir: str = "."

    def __post_init__(self):
        object.__setattr__(self, "chapters", tuple(self.chapters))

    @classmethod
    def from_document(cls, doc: Mapping[str, Any], root_dir: str = ".",
                      source: str = "<document>") -> "LegacyConfig":
        # Repeated numbers are accepted here; migrate() decides what they mean.
        validate_document(doc, SCHEMA_V1, source)
        chapters = []
        for raw in doc["chapters"]:
            topics = raw.get("topics")
            chapters.append(LegacyChapter(
                number=raw["number"],
                name=raw["name"],
                topics=tuple(topics) if topics is not None else None,
            ))
        return cls(
            language=doc["language"],
            project=doc["project"],
            chapters=chapters,
            root_dir=root_dir,
        )

    @classmethod
    def from_file(cls, config_filename: str) -> "LegacyConfig":
        doc = read_document(config_filename)
        return cls.from_document(doc, root_dir=root_dir_for_file(config_filename),
                                 source=config_filename)

    @classmethod
    def from_path(cls, project_path: str) -> "LegacyConfig":
        config_path = os.path.join(project_path, CONFIG_FILENAME)
        doc = read_document(config_path)
        return cls.from_document(doc, root_dir=project_path, source=config_path)

    def to_v2(self) -> Config:
        return migrate(self)


def colliding_numbers(legacy: LegacyConfig) -> List[int]:
    """Chapter numbers used by more than one chapter, ascending."""
    counts = Counter(chapter.number for chapter in legacy.chapters)
    return sorted(number for number, n in counts.items() if n > 1)


def migrate(legacy: LegacyConfig) -> Config:
    """Convert a v1 config to v2. Pure: no I/O.

    Every chapter is re-keyed by its zero-padded number. Numbers are neither inferred nor
    de-duplicated: when two chapters share a number the later one replaces the earlier.
    ``colliding_numbers`` tells the caller whether that happened.
    """
    chapters: Dict[str, Chapter] = {}
    for chapter in legacy.chapters:
        index = format(chapter.number, "02d")
        chapters[index] = Chapter(name=chapter.name, topics=chapter.topics)

    return Config(
        language=legacy.language,
        project=legacy.project,
        chapters=dict(sorted(chapters.items())),
        dirs_cached=False,
        root_dir=legacy.root_dir,
        report_mode=ReportMode.CLI,
    )
