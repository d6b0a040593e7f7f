#!/usr/bin/env python3
"""Entry point for optspec when packaged as zipapp."""

import sys

from optspec.application import main

if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
