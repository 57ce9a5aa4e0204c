#!/usr/bin/env python3
"""
UE5 Builder - Filesystem Walk

Depth-first "first match wins" file search shared by the .uproject lookup and
the UnrealBuildTool fallback search.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, Optional

from .errors import TraversalError

logger = logging.getLogger(__name__)

PathPredicate = Callable[[Path], bool]


def iter_files(
    root: Path, skip_dir: Optional[PathPredicate] = None
) -> Iterator[Path]:
    """
    Yield regular files (or symlinks to them) under root, depth-first.

    Entries of each directory are visited in sorted name order with files and
    subdirectories interleaved, so a subdirectory named "A" is fully explored
    before a sibling file named "B". Directory symlinks are not followed.

    Args:
        root: Directory to walk
        skip_dir: Optional predicate; directories for which it returns True
            are not descended into

    Raises:
        TraversalError: If a directory cannot be listed
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise TraversalError(f"Error while searching {root}: {e}") from e

    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            # Symlinks to files count; dangling links, FIFOs and sockets do not
            is_file = not is_dir and entry.is_file()
        except OSError as e:
            raise TraversalError(f"Error while searching {path}: {e}") from e

        if is_dir:
            if skip_dir is not None and skip_dir(path):
                logger.debug("Skipping directory %s", path)
                continue
            yield from iter_files(path, skip_dir)
        elif is_file:
            yield path


def find_first_file(
    root: Path,
    predicate: PathPredicate,
    skip_dir: Optional[PathPredicate] = None,
) -> Optional[Path]:
    """
    Return the first file under root for which predicate is True.

    The walk stops as soon as a match is found; remaining entries are never
    visited.

    Args:
        root: Directory to search
        predicate: Called with each file path
        skip_dir: Optional directory pruning predicate

    Returns:
        Matching path or None if the tree holds no match

    Raises:
        TraversalError: If the walk fails
    """
    root = Path(root)
    logger.debug("Searching %s", root)
    for path in iter_files(root, skip_dir):
        if predicate(path):
            logger.debug("Match: %s", path)
            return path
    return None
