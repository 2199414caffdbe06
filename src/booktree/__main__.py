"""Module entry point for running with python -m booktree."""

import sys

from booktree.cli import main

if __name__ == "__main__":
    sys.exit(main())
