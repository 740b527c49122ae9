"""Entry point for running build-common as a module.

Allows the package to be run as:
    python -m build_common
"""

import sys

from build_common.cli import main

if __name__ == "__main__":
    sys.exit(main())
