#!/usr/bin/env python3
"""
UE5 Builder - Settings

Resolves run settings with the priority: command-line argument, then
environment variable, then default. There is no configuration file.
"""

import os
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .orchestrator import DEFAULT_CONFIGURATION, DEFAULT_PLATFORM

ENV_PROJECT_DIR = "UE5_BUILDER_PROJECT_DIR"
ENV_ENGINE_DIR = "UE5_BUILDER_ENGINE_DIR"
ENV_LOCATOR = "UE5_BUILDER_LOCATOR"
ENV_CONFIGURATION = "UE5_BUILDER_CONFIGURATION"
ENV_PLATFORM = "UE5_BUILDER_PLATFORM"

LOCATOR_REGISTRY = "registry"
LOCATOR_LAUNCHER = "launcher"
LOCATORS = (LOCATOR_REGISTRY, LOCATOR_LAUNCHER)


@dataclass(frozen=True)
class BuilderSettings:
    project_dir: Path
    engine_dir: Optional[Path] = None
    locator: str = LOCATOR_REGISTRY
    configuration: str = DEFAULT_CONFIGURATION
    platform: str = DEFAULT_PLATFORM
    clean: bool = False
    regenerate: bool = False
    pause: bool = True
    linger: float = 0.0
    color: Optional[bool] = None
    verbose: bool = False


def _pick(arg_value, environ: Mapping[str, str], env_name: str, default):
    if arg_value is not None:
        return arg_value
    env_value = environ.get(env_name)
    if env_value:
        return env_value
    return default


def load_settings(
    args: Namespace,
    environ: Optional[Mapping[str, str]] = None,
    clean: bool = False,
    regenerate: bool = False,
    pause: bool = True,
    linger: float = 0.0,
) -> BuilderSettings:
    """
    Build settings from parsed arguments and the environment.

    clean, regenerate, pause and linger are the entry point's defaults;
    --pause/--no-pause and --linger override the last two.

    Raises:
        ValueError: If the locator name is unknown
    """
    environ = os.environ if environ is None else environ

    project_dir = _pick(getattr(args, "project_dir", None), environ, ENV_PROJECT_DIR, None)
    engine_dir = _pick(getattr(args, "engine_dir", None), environ, ENV_ENGINE_DIR, None)
    locator = _pick(getattr(args, "locator", None), environ, ENV_LOCATOR, LOCATOR_REGISTRY)
    if locator not in LOCATORS:
        raise ValueError(f"Unknown installation locator '{locator}' (expected one of {', '.join(LOCATORS)})")

    arg_pause = getattr(args, "pause", None)
    arg_linger = getattr(args, "linger", None)

    return BuilderSettings(
        project_dir=Path(project_dir) if project_dir else Path.cwd(),
        engine_dir=Path(engine_dir) if engine_dir else None,
        locator=locator,
        configuration=_pick(getattr(args, "configuration", None), environ, ENV_CONFIGURATION, DEFAULT_CONFIGURATION),
        platform=_pick(getattr(args, "platform", None), environ, ENV_PLATFORM, DEFAULT_PLATFORM),
        clean=clean,
        regenerate=regenerate,
        pause=pause if arg_pause is None else arg_pause,
        linger=linger if arg_linger is None else arg_linger,
        color=getattr(args, "color", None),
        verbose=bool(getattr(args, "verbose", False)),
    )
