"""
Main entry point for running the package as a module.

Usage:
    python -m photoderiv /path/to/photos
    python -m photoderiv /path/to/photos --output /path/to/out --workers 4
    python -m photoderiv /path/to/photos --dry-run --show-files
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
