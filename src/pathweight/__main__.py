"""Main entry point for the pathweight package when run as a module.

This module enables running the CLI directly using 'python -m pathweight'.
"""

import sys

from . import cli


def main():
    """Main entry point for the package."""
    sys.exit(cli.main())


if __name__ == "__main__":
    main()
