"""Entry point for ``python -m pseudocode``."""

import sys

from pseudocode.cli import main

if __name__ == "__main__":
    sys.exit(main())
