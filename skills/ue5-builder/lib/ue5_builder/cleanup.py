#!/usr/bin/env python3
"""
UE5 Builder - Cache Cleanup

Deletes the generated folders and solution file before a full rebuild. Every
target is attempted; failures are collected and reported together.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .errors import CleanupFailed

logger = logging.getLogger(__name__)

CACHE_DIRECTORIES = (".vs", "Binaries", "Build", "Intermediate", "DerivedDataCache")

REMOVED = "removed"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class CleanupTarget:
    path: Path
    is_directory: bool


@dataclass(frozen=True)
class CleanupOutcome:
    target: CleanupTarget
    status: str
    error: Optional[OSError] = None


@dataclass(frozen=True)
class CleanupReport:
    outcomes: Tuple[CleanupOutcome, ...]

    @property
    def failures(self) -> List[CleanupOutcome]:
        return [o for o in self.outcomes if o.status == FAILED]

    @property
    def ok(self) -> bool:
        return not self.failures


def default_targets(project_dir: Path, module_name: str) -> List[CleanupTarget]:
    """Cache folders plus <Module>.sln, relative to the project directory."""
    project_dir = Path(project_dir)
    targets = [CleanupTarget(project_dir / name, True) for name in CACHE_DIRECTORIES]
    targets.append(CleanupTarget(project_dir / f"{module_name}.sln", False))
    return targets


def remove_target(target: CleanupTarget) -> CleanupOutcome:
    path = target.path
    if not path.exists() and not path.is_symlink():
        return CleanupOutcome(target, SKIPPED)

    try:
        if target.is_directory and path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        return CleanupOutcome(target, SKIPPED)
    except OSError as e:
        logger.debug("Failed to delete %s: %s", path, e)
        return CleanupOutcome(target, FAILED, e)

    logger.debug("Deleted %s", path)
    return CleanupOutcome(target, REMOVED)


def remove_targets(targets: Iterable[CleanupTarget]) -> CleanupReport:
    """Attempt every target, regardless of earlier failures."""
    return CleanupReport(tuple(remove_target(t) for t in targets))


def clean_project(project_dir: Path, module_name: str) -> CleanupReport:
    """
    Delete the cache folders and solution file of a project.

    Raises:
        CleanupFailed: If any target could not be removed; carries the report
    """
    report = remove_targets(default_targets(project_dir, module_name))
    if not report.ok:
        raise CleanupFailed(report)
    return report
