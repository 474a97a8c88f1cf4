#!/usr/bin/env python3
"""
mcmod - sync a mod project into its Forge workspace and launch it.

This is the entry point script. All logic lives in the mcmod/ package.
"""

import sys

# Check Python version before importing anything else
if sys.version_info < (3, 9):
    print(f"Error: Python 3.9+ required, but running {sys.version_info.major}.{sys.version_info.minor}")
    sys.exit(1)

from mcmod.main import run

if __name__ == "__main__":
    sys.exit(run())
