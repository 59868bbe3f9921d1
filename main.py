#!/usr/bin/env python3
"""
Main script for the interactive news-to-artwork console.
Uses the package in src/news_canvas; run from project root.
"""

import sys
from pathlib import Path

# Ensure src is on path when running without installing the package
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


def main():
    from news_canvas.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
