"""
Type aliases for optspec.

This module provides centralized type definitions used throughout the package
to keep signatures consistent.

Type Aliases:
    ArgsList: List of raw argument tokens
    DescriptorList: Sequence of option descriptor strings
    OptionPair: Tuple of an option character and its optional value
    ExitCode: Integer representing exit codes
"""

from typing import List, Optional, Sequence, Tuple

ArgsList = List[str]
"""List of string arguments as found on the command line."""

DescriptorList = Sequence[str]
"""Ordered sequence of option descriptor strings (e.g. ``["c:count N", "v|verbose"]``)."""

OptionPair = Tuple[str, Optional[str]]
"""Tuple of an option character and its value (e.g. ('c', '5') or ('v', None))."""

OptionPairList = List[OptionPair]
"""Matched options in command-line order."""

ExitCode = int
"""Integer representing process exit codes (0 for success, non-zero for errors)."""
