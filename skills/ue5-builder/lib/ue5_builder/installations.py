#!/usr/bin/env python3
"""
UE5 Builder - Engine Installation Discovery

Pluggable sources of installed engine versions. Each locator returns named
entries with an installation directory; choosing between them is the
resolver's job.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Protocol

from .errors import RegistryUnavailable

logger = logging.getLogger(__name__)

REGISTRY_KEY = r"SOFTWARE\EpicGames\Unreal Engine"
REGISTRY_VALUE = "InstalledDirectory"


@dataclass(frozen=True)
class Installation:
    """One installed engine version."""

    name: str
    directory: Optional[Path]


class InstallationLocator(Protocol):
    def find_installations(self) -> List[Installation]:
        ...


class RegistryInstallationLocator:
    """
    Read launcher installations from the Windows registry.

    Each subkey of HKLM\\SOFTWARE\\EpicGames\\Unreal Engine is one version;
    its InstalledDirectory value is the engine root.
    """

    def __init__(self, key_path: str = REGISTRY_KEY):
        self.key_path = key_path

    def find_installations(self) -> List[Installation]:
        try:
            import winreg
        except ImportError as e:
            raise RegistryUnavailable(
                "The Windows registry is not available on this platform. "
                "Use --engine-dir or --locator launcher."
            ) from e

        try:
            key = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, self.key_path, 0, winreg.KEY_READ)
        except OSError as e:
            raise RegistryUnavailable(f"Error opening registry key: {e}") from e

        installations = []
        with key:
            try:
                subkey_count = winreg.QueryInfoKey(key)[0]
                names = [winreg.EnumKey(key, i) for i in range(subkey_count)]
            except OSError as e:
                raise RegistryUnavailable(f"Error reading subkey names: {e}") from e

            for name in names:
                installations.append(Installation(name, self._read_directory(winreg, key, name)))

        logger.debug("Registry installations: %s", [i.name for i in installations])
        return installations

    @staticmethod
    def _read_directory(winreg, key, name: str) -> Optional[Path]:
        try:
            with winreg.OpenKey(key, name, 0, winreg.KEY_READ) as subkey:
                value, _ = winreg.QueryValueEx(subkey, REGISTRY_VALUE)
        except OSError as e:
            logger.debug("No %s for %s: %s", REGISTRY_VALUE, name, e)
            return None
        return Path(value) if value else None


def _get_launcher_search_roots() -> List[Path]:
    """Get common Epic Games launcher installation roots."""
    program_files = os.environ.get("ProgramFiles", "C:\\Program Files")
    return [
        Path(program_files) / "Epic Games",
        Path("D:\\Epic Games"),
        Path("E:\\Epic Games"),
        Path("C:\\Epic Games"),
    ]


class LauncherDirectoryLocator:
    """
    Find launcher installations by scanning for UE_<version> directories.

    Useful where the registry is unavailable or was never written.
    """

    PREFIX = "UE_"

    def __init__(self, search_roots: Optional[List[Path]] = None):
        self.search_roots = search_roots if search_roots is not None else _get_launcher_search_roots()

    def find_installations(self) -> List[Installation]:
        installations = []
        seen = set()

        for base_path in self.search_roots:
            if not base_path.is_dir():
                continue

            try:
                children = list(base_path.iterdir())
            except OSError as e:
                logger.debug("Cannot list %s: %s", base_path, e)
                continue

            for item in children:
                if not (item.is_dir() and item.name.startswith(self.PREFIX)):
                    continue
                name = item.name[len(self.PREFIX):]
                if name in seen:
                    continue
                seen.add(name)
                installations.append(Installation(name, item))

        return installations


class StaticInstallationLocator:
    """Fixed name -> directory mapping (engine override and tests)."""

    def __init__(self, entries: Mapping[str, Optional[str]]):
        self.entries = dict(entries)

    def find_installations(self) -> List[Installation]:
        return [
            Installation(name, Path(directory) if directory else None)
            for name, directory in self.entries.items()
        ]
