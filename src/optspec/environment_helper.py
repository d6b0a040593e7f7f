"""Environment variable operations for optspec."""

import os
import sys

TRUTHY_VALUES = ("1", "true", "yes", "on")


def debug_log(message: str) -> None:
    """Log debug message when OPTSPEC_DEBUG=1 is set."""
    if EnvironmentHelper.is_debug_enabled():
        print(f"[DEBUG] {message}", file=sys.stderr, flush=True)


class EnvironmentHelper:
    """Utility class for environment variable operations."""

    @staticmethod
    def is_debug_enabled() -> bool:
        """Check if debug output was requested through OPTSPEC_DEBUG."""
        return os.environ.get("OPTSPEC_DEBUG", "").lower() in TRUTHY_VALUES

    @staticmethod
    def enable_debug() -> None:
        """Turn on debug output for the rest of the process."""
        os.environ["OPTSPEC_DEBUG"] = "1"
