"""Error taxonomy for challenge-checker.

Library code raises these; only the CLI entry points turn them into an
``ERROR: ...`` line and a process exit code.
"""

from __future__ import annotations


class ChallengeCheckerError(Exception):
    """Base class. ``exit_code`` is what the CLI returns for this error."""

    exit_code = 1


class ConfigNotFound(ChallengeCheckerError):
    """The challenges.yaml file does not exist."""

    exit_code = 3


class ConfigParseError(ChallengeCheckerError):
    """The config file could not be read or is not a YAML mapping."""

    exit_code = 4


class ConfigValidationError(ConfigParseError):
    """The document parsed but violates the schema or a chapter-key invariant."""


class DirectoryReadError(ChallengeCheckerError):
    """The project root is missing, not a directory, or cannot be listed."""

    exit_code = 5


class TemplateRenderError(ChallengeCheckerError):
    """An org-mode TODO entry could not be rendered."""

    exit_code = 6
