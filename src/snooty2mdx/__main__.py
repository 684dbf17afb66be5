#!/usr/bin/env python3
"""Entry point for running snooty2mdx as a module.

This allows the package to be executed as:
    python -m snooty2mdx [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
