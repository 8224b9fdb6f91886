#!/usr/bin/env python3
"""
ASCII Art - convert images to ASCII art by glyph brightness.

Quick start:
    python main.py cat.jpeg           # Open the shell with an image loaded
    python main.py cat.jpeg --run     # Print the art once and exit
    python main.py cat.jpeg -o html --run

For more options: python main.py --help
"""

from ascii_art.shell import main

if __name__ == "__main__":
    exit(main())
