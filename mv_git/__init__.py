"""
mv-git: relocate Git repositories between directory trees.

Scans a source directory for child directories that are Git
repositories and moves or copies them into a destination,
skipping files excluded by each repository's .gitignore.
"""

__version__ = "1.0.0"
__author__ = "mv-git"
