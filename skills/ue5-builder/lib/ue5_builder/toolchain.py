#!/usr/bin/env python3
"""
UE5 Builder - Toolchain Resolution

Finds UnrealBuildTool.exe for the newest registered engine installation
without the operator configuring a path.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from . import console
from .errors import (
    InvalidInstallPath,
    NoInstallationsFound,
    NotFound,
    ToolNotFound,
    TraversalError,
)
from .installations import Installation, InstallationLocator
from .walk import find_first_file

logger = logging.getLogger(__name__)

BUILD_TOOL_NAME = "UnrealBuildTool.exe"
BUILD_TOOL_SUBPATH = ("Engine", "Binaries", "DotNET", "UnrealBuildTool", BUILD_TOOL_NAME)


@dataclass(frozen=True)
class ResolvedPaths:
    """Absolute paths to the project descriptor and the build tool."""

    descriptor: Path
    build_tool: Path

    def __post_init__(self):
        for path in (self.descriptor, self.build_tool):
            if not path.exists():
                raise NotFound(f"Path does not exist: {path}")


def select_installation(installations: Sequence[Installation]) -> Installation:
    """
    Pick the installation whose name sorts last.

    This is a plain string comparison standing in for "newest version": "5.3"
    beats "4.27", but "5.9" also beats "5.10".

    Raises:
        NoInstallationsFound: If installations is empty
    """
    if not installations:
        raise NoInstallationsFound(
            "No Unreal Engine installations were found. "
            "Install the engine or pass --engine-dir."
        )
    return max(installations, key=lambda i: i.name)


def conventional_tool_path(install_dir: Path) -> Path:
    return install_dir.joinpath(*BUILD_TOOL_SUBPATH)


class ToolchainResolver:
    """
    Locate the build tool: installation lookup, then the conventional
    sub-path, then a recursive search of the installation directory.
    """

    def __init__(self, locator: InstallationLocator, sink: console.OutputSink):
        self.locator = locator
        self.sink = sink

    def installation_directory(self) -> Path:
        """
        Return the directory of the selected installation.

        Raises:
            RegistryUnavailable: If the locator cannot be queried
            NoInstallationsFound: If the locator returned nothing
            InvalidInstallPath: If the directory is missing or does not exist
        """
        installation = select_installation(self.locator.find_installations())
        logger.debug("Selected installation %s -> %s", installation.name, installation.directory)

        install_dir: Optional[Path] = installation.directory
        if install_dir is None or not install_dir.exists():
            raise InvalidInstallPath(f"Invalid path: {install_dir}")
        return install_dir

    def resolve(self) -> Path:
        """
        Return the absolute path to UnrealBuildTool.exe.

        Raises:
            ToolNotFound: If neither the conventional path nor the search found it
            TraversalError: If the search walk fails
        """
        install_dir = self.installation_directory()

        ubt_path = conventional_tool_path(install_dir)
        if ubt_path.exists():
            return ubt_path.absolute()

        return self.search(install_dir)

    def search(self, install_dir: Path) -> Path:
        """Recursive fallback search; may take a while on a full engine tree."""
        self.sink.styled(
            f"{BUILD_TOOL_NAME} not found in default path. Searching for it...",
            console.WARNING,
        )

        try:
            found = find_first_file(install_dir, lambda p: p.name == BUILD_TOOL_NAME)
        except TraversalError:
            self.sink.styled("not found.", console.ERROR)
            raise

        if found is None:
            self.sink.styled("not found.", console.ERROR)
            raise ToolNotFound(f"File '{BUILD_TOOL_NAME}' not found in directory '{install_dir}'")

        self.sink.styled("found.", console.SUCCESS)
        return found.absolute()
