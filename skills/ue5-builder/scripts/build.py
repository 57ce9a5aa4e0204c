#!/usr/bin/env python3
"""
UE5 Project Builder

Finds the .uproject file under the current directory, locates
UnrealBuildTool through the engine installation and compiles the editor
target, streaming the build output.

Usage:
    python build.py
    python build.py --no-pause --engine-dir "C:\\Program Files\\Epic Games\\UE_5.3"
"""

import sys
from pathlib import Path

# Add lib directory to Python path
lib_path = Path(__file__).parent.parent / "lib"
sys.path.insert(0, str(lib_path))
from ue5_builder.cli import main

if __name__ == "__main__":
    sys.exit(main())
