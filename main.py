#!/usr/bin/env python3
"""
mv-git - Main Entry Point

Relocates the Git repositories found directly inside a source
directory into a destination directory.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from mv_git.cli import main

if __name__ == "__main__":
    main()
