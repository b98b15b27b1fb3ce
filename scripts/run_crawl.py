#!/usr/bin/env python3
"""
Command-line entry point for crawling job posts without installing the package.
"""

import sys
from pathlib import Path

# Add project root to path so we can import jobharvest
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from jobharvest.cli import app

if __name__ == "__main__":
    app()
