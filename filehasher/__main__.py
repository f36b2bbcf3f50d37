#!/usr/bin/env python3
"""
Module: filehasher.__main__

This module allows the filehasher package to be executed as a module using:
    python -m filehasher
"""

import sys

from filehasher.main import main

if __name__ == "__main__":
    sys.exit(main())
