#!/usr/bin/env python3
"""
Tile Packer - command line launcher

Packs image files into a single tileset image plus placement metadata.
"""

from tilepack.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
