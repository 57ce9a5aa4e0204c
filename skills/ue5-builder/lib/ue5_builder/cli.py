#!/usr/bin/env python3
"""
UE5 Builder - Command Line Entry Points

ue5-build    Compile the project's editor target.
ue5-rebuild  Delete cached build files, regenerate project files, compile.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import __version__
from .console import ConsoleSink, ERROR, wait_for_acknowledgement
from .errors import BuilderError
from .pipeline import BuildPipeline
from .settings import LOCATORS, load_settings

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

ENVIRONMENT_HELP = """
Environment Variables:
  UE5_BUILDER_PROJECT_DIR    - Directory to search for the .uproject file
  UE5_BUILDER_ENGINE_DIR     - Engine installation directory (skips lookup)
  UE5_BUILDER_LOCATOR        - Installation lookup: registry or launcher
  UE5_BUILDER_CONFIGURATION  - Build configuration (default: Development)
  UE5_BUILDER_PLATFORM       - Target platform (default: Win64)
  NO_COLOR                   - Disable colored output
"""


def create_parser(prog: str, description: str, examples: str, pause_default: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=examples + ENVIRONMENT_HELP,
    )

    parser.add_argument(
        "--project-dir",
        help="Directory to search for the .uproject file (default: current directory)"
    )
    parser.add_argument(
        "--engine-dir",
        help="Unreal Engine installation directory (skips the installation lookup)"
    )
    parser.add_argument(
        "--locator",
        choices=LOCATORS,
        help="How to find engine installations (default: registry)"
    )
    parser.add_argument(
        "--configuration",
        help="Build configuration (default: Development)"
    )
    parser.add_argument(
        "--platform",
        help="Target platform (default: Win64)"
    )
    parser.add_argument(
        "--pause",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"Wait for Enter before exiting (default: {'on' if pause_default else 'off'})"
    )
    parser.add_argument(
        "--linger",
        type=float,
        help="Seconds to keep the window open after a successful build"
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const=False,
        default=None,
        help="Disable colored output"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        format="[%(levelname)s] %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def run(
    argv: Optional[List[str]],
    parser: argparse.ArgumentParser,
    title: str,
    clean: bool,
    regenerate: bool,
    pause: bool,
    linger: float,
) -> int:
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = load_settings(
            args, clean=clean, regenerate=regenerate, pause=pause, linger=linger
        )
    except ValueError as e:
        parser.error(str(e))

    sink = ConsoleSink(use_color=settings.color)
    exit_code = 0

    try:
        BuildPipeline(settings, sink, title=title).run()
    except BuilderError as e:
        sink.styled(str(e), ERROR)
        exit_code = EXIT_FAILURE
    except KeyboardInterrupt:
        sink.styled("Interrupted.", ERROR)
        return EXIT_INTERRUPTED

    if settings.pause:
        wait_for_acknowledgement(sink)
    elif exit_code == 0 and settings.linger > 0:
        time.sleep(settings.linger)

    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """ue5-build: compile the editor target."""
    parser = create_parser(
        "ue5-build",
        "Compile the Unreal Engine project found under the current directory",
        """
Examples:
  # Build the project in the current directory
  ue5-build

  # Build without waiting for Enter (CI, scripts)
  ue5-build --no-pause

  # Use a specific engine installation
  ue5-build --engine-dir "C:\\Program Files\\Epic Games\\UE_5.3"
""",
        pause_default=True,
    )
    return run(argv, parser, "Unreal Builder", clean=False, regenerate=False, pause=True, linger=0.0)


def rebuild_main(argv: Optional[List[str]] = None) -> int:
    """ue5-rebuild: clean caches, regenerate project files, compile."""
    parser = create_parser(
        "ue5-rebuild",
        "Delete cached build files, regenerate project files and rebuild the project",
        """
Examples:
  # Full rebuild of the project in the current directory
  ue5-rebuild

  # Keep the window open until Enter is pressed
  ue5-rebuild --pause

  # Find engines by scanning Epic Games folders instead of the registry
  ue5-rebuild --locator launcher
""",
        pause_default=False,
    )
    return run(argv, parser, "Unreal Utility", clean=True, regenerate=True, pause=False, linger=2.0)


if __name__ == "__main__":
    sys.exit(main())
