"""
Main entry point for running the package as a module.

Usage:
    python -m thumbregen run --catalog catalog.json --local-root /srv/uploads
    python -m thumbregen one 42 --catalog catalog.json --local-root /srv/uploads
    python -m thumbregen status --catalog catalog.json
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
