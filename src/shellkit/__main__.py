"""Allow running shellkit as a module: python -m shellkit."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
