#!/usr/bin/env python3
"""
UE5 Project Rebuilder

Deletes .vs, Binaries, Build, Intermediate, DerivedDataCache and the
solution file, regenerates project files and compiles the editor target.

Usage:
    python rebuild.py
    python rebuild.py --pause
"""

import sys
from pathlib import Path

# Add lib directory to Python path
lib_path = Path(__file__).parent.parent / "lib"
sys.path.insert(0, str(lib_path))
from ue5_builder.cli import rebuild_main

if __name__ == "__main__":
    sys.exit(rebuild_main())
