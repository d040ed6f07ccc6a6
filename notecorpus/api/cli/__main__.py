"""CLI entry point for running as `python -m notecorpus.api.cli`.

Usage:
    python -m notecorpus.api.cli index notes/
    python -m notecorpus.api.cli search NavigationLink notes/
    python -m notecorpus.api.cli dupes --threshold 0.9 notes/
    python -m notecorpus.api.cli watch notes/
    python -m notecorpus.api.cli repl notes/
"""

import sys

from .commands import main as _main


def main():
    """Entry point for `python -m notecorpus.api.cli`."""
    sys.exit(_main())


if __name__ == "__main__":
    main()
