"""Reading and validating the ``challenges.yaml`` configuration file (v2 schema).

A chapter is a unit of learning (a book chapter, a tutorial section, ...). On disk a
chapter is a directory named after the chapter with its index prepended, so the chapter
``basics`` under key ``"01"`` lives in ``01.basics``.

v2 document shape:

    language: rust
    project: Rust Language
    chapters:
      '01':
        name: basics
        topics: [variables, mutability]
      '02':
        name: loops

The legacy v1 shape (a list of chapters with an explicit ``number``) lives in
``config_v1`` and only exists so it can be migrated.
"""

from __future__ import annotations

import dataclasses
import json
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import jsonschema
import yaml

from challenge_checker.errors import (
    ConfigNotFound,
    ConfigParseError,
    ConfigValidationError,
)

# ─── Constants ──────────────────────────────────────────────────────────────

CONFIG_FILENAME = "challenges.yaml"
SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
SCHEMA_V2 = "challenges_v2_schema.json"
REPORT_ENV_VAR = "CHALLENGE_CHECKER_REPORT"


class ReportMode(Enum):
    CLI = "cli"
    ORG = "org"

    @classmethod
    def parse(cls, value: str) -> "ReportMode":
        """Map ``cli`` / ``org`` (any case) to a ReportMode. Raises ValueError otherwise."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown report mode {value!r} (expected one of: {choices})") from None


def default_report_mode(environ: Optional[Mapping[str, str]] = None) -> ReportMode:
    """Report mode used when the caller does not ask for one.

    ``CHALLENGE_CHECKER_REPORT`` overrides the built-in default of CLI.
    """
    env = os.environ if environ is None else environ
    raw = env.get(REPORT_ENV_VAR, "").strip()
    if not raw:
        return ReportMode.CLI
    return ReportMode.parse(raw)


# ─── YAML / schema helpers ──────────────────────────────────────────────────

class DuplicateKeyError(yaml.constructor.ConstructorError):
    pass


class IntegerKeyError(yaml.constructor.ConstructorError):
    pass


STR_TAG = "tag:yaml.org,2002:str"
INT_TAG = "tag:yaml.org,2002:int"
MERGE_TAG = "tag:yaml.org,2002:merge"
DECIMAL_KEY = re.compile(r"[0-9]+")


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses mappings with a repeated key.

    Plain ``yaml.safe_load`` keeps the last value silently, which would hide two
    chapters sharing an index.

    Unquoted integer keys are kept as the text that was written, padded to two digits
    (``1`` -> ``"01"``, ``010`` -> ``"010"``). YAML 1.1 would read ``010`` as octal 8
    and ``0x0a`` as 10; anything other than plain decimal digits is refused.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if key_node.tag == MERGE_TAG:
                continue
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag == INT_TAG:
                if not DECIMAL_KEY.fullmatch(key_node.value):
                    raise IntegerKeyError(
                        "while constructing a mapping", node.start_mark,
                        f"integer key {key_node.value!r} is not plain decimal; quote it",
                        key_node.start_mark,
                    )
                key_node.tag = STR_TAG
                key_node.value = key_node.value.zfill(2)
            key = self.construct_object(key_node, deep=deep)
            try:
                if key in seen:
                    raise DuplicateKeyError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark,
                    )
                seen.add(key)
            except TypeError:
                # unhashable key; the base class reports it
                pass
        return super().construct_mapping(node, deep=deep)


def read_document(path: str) -> Dict[str, Any]:
    """Read a YAML config file into a dict. No schema checks."""
    if not os.path.exists(path):
        raise ConfigNotFound(f"config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f, Loader=UniqueKeyLoader)
    except (DuplicateKeyError, IntegerKeyError) as e:
        raise ConfigValidationError(f"{path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigParseError(f"{path}: invalid YAML: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"{path}: cannot read config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigParseError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    with open(SCHEMA_DIR / name, encoding="utf-8") as f:
        return json.load(f)


def validate_document(doc: Mapping[str, Any], schema_name: str, source: str) -> None:
    try:
        jsonschema.validate(doc, load_schema(schema_name))
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigValidationError(f"{source}: schema validation error at {where}: {e.message}") from e


def normalize_chapter_keys(chapters: Any, source: str) -> Any:
    """Turn integer chapter keys into zero-padded strings.

    Covers documents built by plain ``yaml.safe_load``, where an unquoted ``01:`` is
    the integer 1, so ``01`` and ``'01'`` both land on ``"01"`` here. Two keys landing
    on the same string is an error.
    """
    if not isinstance(chapters, dict):
        return chapters
    out: Dict[Any, Any] = {}
    for key, value in chapters.items():
        if isinstance(key, int) and not isinstance(key, bool):
            key = format(key, "02d")
        if key in out:
            raise ConfigValidationError(f"{source}: duplicate chapter key {key!r}")
        out[key] = value
    return out


def root_dir_for_file(path: str) -> str:
    return os.path.dirname(path) or "."


# ─── Model ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Chapter:
    """A chapter in the v2 schema. Its number is the key it is stored under."""
    name: str
    topics: Optional[Tuple[str, ...]] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "topics": list(self.topics) if self.topics is not None else None,
        }


@dataclass(frozen=True)
class Config:
    """Configuration for one challenges project.

    ``root_dir`` and ``report_mode`` are never read from the file: they are set at load
    time. The instance is not mutated after construction; ``chapters`` is held in a
    read-only mapping. Use ``with_report_mode`` to derive a copy with a different mode.
    """
    language: str
    project: str
    chapters: Mapping[str, Chapter] = field(default_factory=dict)
    dirs_cached: bool = False
    root_dir: str = "."
    report_mode: ReportMode = ReportMode.CLI

    def __post_init__(self):
        object.__setattr__(self, "chapters", MappingProxyType(dict(self.chapters)))

    def __hash__(self):
        return hash((self.language, self.project, tuple(self.chapters.items()),
                     self.dirs_cached, self.root_dir, self.report_mode))

    @classmethod
    def from_document(cls, doc: Mapping[str, Any], root_dir: str = ".",
                      source: str = "<document>") -> "Config":
        doc = dict(doc)
        if "chapters" in doc:
            doc["chapters"] = normalize_chapter_keys(doc["chapters"], source)
        validate_document(doc, SCHEMA_V2, source)

        chapters = {}
        for key, raw in sorted(doc["chapters"].items()):
            topics = raw.get("topics")
            chapters[key] = Chapter(
                name=raw["name"],
                topics=tuple(topics) if topics is not None else None,
            )
        return cls(
            language=doc["language"],
            project=doc["project"],
            chapters=chapters,
            root_dir=root_dir,
        )

    @classmethod
    def from_file(cls, config_filename: str) -> "Config":
        """Load a config file. The project root is the directory holding the file."""
        doc = read_document(config_filename)
        return cls.from_document(doc, root_dir=root_dir_for_file(config_filename),
                                 source=config_filename)

    @classmethod
    def from_path(cls, project_path: str) -> "Config":
        """Load ``challenges.yaml`` from a project directory, which becomes the root."""
        config_path = os.path.join(project_path, CONFIG_FILENAME)
        doc = read_document(config_path)
        return cls.from_document(doc, root_dir=project_path, source=config_path)

    def computed_chapter_dirs(self) -> set[str]:
        """Directory names the chapters expect: ``{key}.{name}``."""
        return {f"{key}.{chapter.name}" for key, chapter in self.chapters.items()}

    def with_report_mode(self, mode: ReportMode) -> "Config":
        return dataclasses.replace(self, report_mode=mode)

    def to_document(self) -> Dict[str, Any]:
        """The persisted fields only, chapters in key order."""
        return {
            "language": self.language,
            "project": self.project,
            "chapters": {key: self.chapters[key].to_document() for key in sorted(self.chapters)},
        }


def load_config(path: str) -> Config:
    """Load from a project directory or from a config file path."""
    if os.path.isdir(path):
        return Config.from_path(path)
    return Config.from_file(path)


def dump_config(config: Config) -> str:
    return yaml.safe_dump(
        config.to_document(),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    )
