#!/usr/bin/env python3
"""
ATM Demo Entry Point

Runs the scripted terminal visits for the configured demo card holder and
prints a receipt for each one.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from atm_core.__main__ import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nShutting down ATM demo...")
