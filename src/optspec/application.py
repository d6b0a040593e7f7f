#!/usr/bin/env python3
"""Command line front end for optspec."""

import logging
import shlex
import sys
from pathlib import Path
from typing import Optional

from .descriptor_loader import DescriptorLoader
from .environment_helper import EnvironmentHelper, debug_log
from .exceptions import OptspecError
from .matcher import Matched
from .option_parser import OptionParser
from .types import ArgsList, ExitCode

APP_NAME = "optspec"

APP_DESCRIPTORS = [
    "d+descriptor SPEC",
    "t:table FILE",
    "n:name NAME",
    "h|help",
    "-D|debug",
]

EXIT_OK = 0
EXIT_PARSE_ERRORS = 1
EXIT_USAGE = 2


def print_help() -> None:
    """Print concise help message about optspec functionality."""
    help_text = """optspec - try option descriptor tables against a command line
Usage:
  optspec -d 'c:count N' 'v|verbose' -- -v -c 5 file   # Inline descriptors
  optspec -t options.tbl -- --verb --count=5 file      # Descriptors from a file
  optspec -n myprog -t options.tbl -- -xyz             # Name used in error messages

  Descriptor format: [-]<short><policy><long> [VALUE]
  Hidden descriptors (leading '-') must be glued to -d (-d-h|hush) or
  read from a table file (-t FILE).
  Policies: '|' none, '?' optional, ':' required, '*' zero or more, '+' one or more
  Prints one line per matched option, then '--' and the positional arguments.
  Set OPTSPEC_DEBUG=1 to trace the matcher.
"""
    print(help_text)


def format_match(match: Matched) -> str:
    """Render a match as ``-c value`` (``--long value`` for long-only options)."""
    definition = match.definition
    if definition is not None and not definition.has_short_form:
        text = f"--{definition.long_name}"
    else:
        text = f"-{match.option_char}"
    if match.value is not None:
        text += f" {shlex.quote(match.value)}"
    return text


class Application:
    """Main application orchestrator."""

    def __init__(self, loader: Optional[DescriptorLoader] = None):
        self.loader = loader or DescriptorLoader()
        self.parser = OptionParser(APP_NAME, APP_DESCRIPTORS)

    def run(self, args: ArgsList) -> ExitCode:
        """Run the application with the given arguments."""
        if not args:
            print_help()
            return EXIT_OK

        own = self.parser.parse(args)
        if not own.ok:
            return EXIT_USAGE

        if own.has("help"):
            print_help()
            return EXIT_OK

        if own.has("debug"):
            EnvironmentHelper.enable_debug()

        try:
            target = self._build_parser(
                own.values("name"), own.values("descriptor"), own.values("table")
            )
        except OptspecError as e:
            logging.error(str(e))
            return EXIT_USAGE

        if target is None:
            logging.error(f"{APP_NAME}: no option descriptors given")
            return EXIT_USAGE

        debug_log(f"run: parsing {own.positionals}")
        result = target.parse(own.positionals)

        for match in result.matches:
            print(format_match(match))
        print(" ".join(["--", shlex.join(result.positionals)]).rstrip())

        return EXIT_OK if result.ok else EXIT_PARSE_ERRORS

    def _build_parser(
        self,
        names: list[Optional[str]],
        descriptors: list[Optional[str]],
        tables: list[Optional[str]],
    ) -> Optional[OptionParser]:
        """Compile the descriptors given inline and in table files."""
        collected = [d for d in descriptors if d is not None]
        for table in tables:
            collected.extend(self.loader.load(Path(table)))

        if not collected:
            return None

        program_name = names[-1] if names else "program"
        return OptionParser(program_name, collected)


def main() -> ExitCode:
    """Main entry point."""
    try:
        app = Application()
        return app.run(sys.argv[1:])
    except OptspecError as e:
        logging.error(str(e))
        return EXIT_USAGE
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        return EXIT_USAGE
