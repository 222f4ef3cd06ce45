"""Convenience entry point to run the simplecrypt command line.

Allows running ``python main.py encrypt ...`` from the project root without installing.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path so `import simplecrypt` works
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from simplecrypt.frontend.cli.app import run


if __name__ == "__main__":
    run()
