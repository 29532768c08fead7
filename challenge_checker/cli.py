#!/usr/bin/env python3
"""Check a challenges project against its challenges.yaml.

Compares the chapter directories the config describes with the directories that exist
under the project root and reports the difference, either as a coloured console report
or as org-mode TODO entries for the chapters not started yet.

Usage:
  challenge-checker [--path DIR_OR_FILE] [--report {cli,org}] [--include-hidden]
                    [--check-readmes] [--strict] [--verbose]

  challenge-checker --report org >> ~/org/agenda.org

Exit codes:
  0  report written (1 instead when --strict and something is missing or extra)
  2  bad command line
  3  config file not found
  4  config file malformed or invalid
  5  project directory unreadable
  6  org-mode rendering failed
"""

from __future__ import annotations

import argparse
import sys

from challenge_checker.config import REPORT_ENV_VAR, ReportMode, default_report_mode, load_config
from challenge_checker.errors import ChallengeCheckerError
from challenge_checker.folders import analyze
from challenge_checker.orgmode import todo_do_chapter
from challenge_checker.readme import missing_readmes, readme_report
from challenge_checker.report_cli import folder_status_report


def error(msg):
    print(f"ERROR: {msg}", file=sys.stderr)


def warn(msg):
    print(f"WARNING: {msg}", file=sys.stderr)


def debug(msg, verbose):
    if verbose:
        print(f"DEBUG: {msg}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that a challenges project's chapter directories match challenges.yaml."
    )
    parser.add_argument("-p", "--path", default=".",
                        help="Project directory, or path to its config file (default: current directory)")
    parser.add_argument("-r", "--report", choices=[m.value for m in ReportMode], default=None,
                        help=f"Report format (default: ${REPORT_ENV_VAR} or 'cli')")
    parser.add_argument("--include-hidden", action="store_true",
                        help="Treat dot directories (.git, .github, ...) as candidate chapters")
    parser.add_argument("--check-readmes", action="store_true",
                        help="Also report chapter directories without a README.md (cli report only)")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 1 when directories are missing or extra")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print the raw missing/extra sets to stderr")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.report is None:
        try:
            mode = default_report_mode()
        except ValueError as e:
            parser.error(f"{REPORT_ENV_VAR}: {e}")
    else:
        mode = ReportMode.parse(args.report)

    try:
        config = load_config(args.path).with_report_mode(mode)
        result = analyze(config, exclude_hidden=not args.include_hidden)

        debug(f"root dir: {config.root_dir}", args.verbose)
        debug(f"missing dirs: {sorted(result.missing)}", args.verbose)
        debug(f"extra dirs: {sorted(result.extra)}", args.verbose)

        if config.report_mode is ReportMode.ORG:
            if args.check_readmes:
                warn("--check-readmes is ignored with --report org")
            sys.stdout.write(todo_do_chapter(result.missing, config))
        else:
            folder_status_report(result)
            if args.check_readmes:
                existing = (config.computed_chapter_dirs() - result.missing) | result.extra
                readme_report(missing_readmes(config.root_dir, existing))
    except ChallengeCheckerError as e:
        error(e)
        return e.exit_code

    if args.strict and not result.ok:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
