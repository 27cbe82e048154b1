"""Entry point for ``python -m astrical <command>``."""

import sys

from astrical.cli import main

if __name__ == "__main__":
    sys.exit(main())
