#!/usr/bin/env python3
"""Convert a v1 challenges.yaml to the v2 schema.

Reads the legacy file (chapters as a list with explicit numbers) and prints the v2
document (chapters keyed by zero-padded index) on stdout. The input is never modified.
When two chapters share a number the later one wins and a warning goes to stderr.

Usage:
  challenge-v1-to-v2 [-f challenges.yaml] > challenges.v2.yaml
"""

from __future__ import annotations

import argparse
import sys

from challenge_checker.config import CONFIG_FILENAME, dump_config
from challenge_checker.config_v1 import LegacyConfig, colliding_numbers, migrate
from challenge_checker.errors import ChallengeCheckerError


def error(msg):
    print(f"ERROR: {msg}", file=sys.stderr)


def warn(msg):
    print(f"WARNING: {msg}", file=sys.stderr)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Migrate a v1 challenges.yaml to the v2 schema.")
    parser.add_argument("-f", "--filename", default=CONFIG_FILENAME,
                        help=f"Challenge config file (default: {CONFIG_FILENAME})")
    args = parser.parse_args(argv)

    try:
        legacy = LegacyConfig.from_file(args.filename)
    except ChallengeCheckerError as e:
        error(e)
        return e.exit_code

    for number in colliding_numbers(legacy):
        names = [c.name for c in legacy.chapters if c.number == number]
        warn(f"chapter number {number} used more than once ({', '.join(names)}); "
             f"keeping '{names[-1]}'")

    sys.stdout.write(dump_config(migrate(legacy)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
