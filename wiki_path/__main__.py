"""
Main entry point for the wiki_path package.

Allows running the path finder as: python -m wiki_path
"""

import sys

from wiki_path.cli import main

if __name__ == "__main__":
    sys.exit(main())
