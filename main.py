#!/usr/bin/env python3
"""Launch the oxidizer from the project root.

Usage:
    uv run python main.py input.mp3 -o output.wav --level muffled --passes 2
"""

import sys

if __name__ == "__main__":
    from oxidizer.audio.render import main
    sys.exit(main())
