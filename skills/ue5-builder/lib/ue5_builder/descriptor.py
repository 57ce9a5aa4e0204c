#!/usr/bin/env python3
"""
UE5 Builder - Project Descriptor

Locates the project's .uproject file and reads the module name from it.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import (
    DescriptorNotFound,
    DescriptorParseError,
    DescriptorReadError,
    DescriptorSchemaError,
)
from .walk import find_first_file

logger = logging.getLogger(__name__)

DESCRIPTOR_SUFFIX = ".uproject"


def find_descriptor(root: Optional[Path] = None) -> Path:
    """
    Find the .uproject file under root.

    The first descriptor in depth-first order wins. When a tree holds several
    descriptors only the first is ever returned.

    Args:
        root: Directory to search (defaults to cwd)

    Returns:
        Absolute path to the .uproject file

    Raises:
        DescriptorNotFound: If no descriptor exists under root
        TraversalError: If the directory walk fails
    """
    root = Path(root if root is not None else ".").absolute()

    uproject = find_first_file(root, lambda p: p.suffix == DESCRIPTOR_SUFFIX)
    if uproject is None:
        raise DescriptorNotFound(
            f"No uproject file found in directory: {root}\n"
            "Are you sure this tool is running inside an Unreal Engine project?"
        )
    return uproject.absolute()


@dataclass(frozen=True)
class ProjectDescriptor:
    """Read-only view of a parsed .uproject file."""

    path: Path
    modules: Tuple[Any, ...]
    document: Dict[str, Any] = field(repr=False, compare=False)

    @classmethod
    def load(cls, path: Path) -> "ProjectDescriptor":
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise DescriptorReadError(f"Error reading file: {path} ({e})") from e

        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise DescriptorParseError(f"JSON Parse Error in {path}: {e}") from e

        if not isinstance(document, dict):
            raise DescriptorParseError(
                f"JSON Parse Error in {path}: top level is not an object"
            )

        modules = document.get("Modules")
        if not isinstance(modules, list):
            raise DescriptorSchemaError(
                f"Modules key not found in {path.name}. No project name found."
            )

        return cls(path=path, modules=tuple(modules), document=document)

    def module_name(self) -> str:
        """
        Return the Name of the first well-formed module.

        Entries that are not objects or lack a string Name are skipped with a
        warning.

        Raises:
            DescriptorSchemaError: If no module has a usable Name
        """
        for index, module in enumerate(self.modules):
            if not isinstance(module, dict):
                logger.warning("Module #%d in %s is not an object.", index, self.path.name)
                continue
            name = module.get("Name")
            if isinstance(name, str) and name:
                return name
            logger.warning("Name key not found in module #%d.", index)

        raise DescriptorSchemaError(f"No project name found in {self.path.name}.")


def read_module_name(path: Path) -> str:
    """Parse the descriptor at path and return its canonical module name."""
    return ProjectDescriptor.load(path).module_name()
