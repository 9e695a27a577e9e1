"""
ADR Network Engine - Main Entry Point

Usage:
    python -m adrnet --help
    python -m adrnet
    python -m adrnet disaster 2
    python -m adrnet reroute P1 H2
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
