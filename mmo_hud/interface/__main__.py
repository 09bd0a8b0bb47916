"""
Render a host snapshot in the terminal.

Usage:
    python -m mmo_hud.interface snapshot.json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
