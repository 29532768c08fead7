"""Org-mode TODO entries for chapters that have no directory yet.

Only the missing set is rendered: the output is a list of things still to do, meant to
be appended to an org agenda file by the caller.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import AbstractSet

from challenge_checker.config import Config
from challenge_checker.errors import TemplateRenderError

TODO_TEMPLATE = "\n* TODO [{language}] {project} :: Learn {chapter}\n{body}"


@dataclass(frozen=True)
class TodoContext:
    language: str
    project: str
    chapter: str
    body: str = ""


def render_todo(context: TodoContext, template: str = TODO_TEMPLATE) -> str:
    try:
        return template.format_map(dataclasses.asdict(context))
    except (KeyError, IndexError, ValueError) as e:
        raise TemplateRenderError(f"cannot render TODO for {context.chapter!r}: {e}") from e


def todo_do_chapter(missing_chapters: AbstractSet[str], config: Config) -> str:
    """One TODO per missing chapter directory, in ascending name order, concatenated."""
    entries = []
    for chapter in sorted(missing_chapters):
        context = TodoContext(
            language=config.language,
            project=config.project,
            chapter=chapter,
        )
        entries.append(render_todo(context))
    return "".join(entries)
