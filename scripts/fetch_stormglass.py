#!/usr/bin/env python3
"""Refresh public/data-1day.json and public/data-10day.json from Stormglass."""
import sys

from marine_cli.cli import main

if __name__ == "__main__":
    sys.exit(main(["fetch", *sys.argv[1:]]))
