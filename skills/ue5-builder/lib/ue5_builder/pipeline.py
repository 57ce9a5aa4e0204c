#!/usr/bin/env python3
"""
UE5 Builder - Build Pipeline

Locate descriptor -> read module name -> resolve build tool -> (clean) ->
(regenerate project files) -> compile. Each stage raises a BuilderError on
failure, which ends the run.
"""

import logging
from typing import Optional

from . import __version__, console
from .cleanup import clean_project
from .descriptor import find_descriptor, read_module_name
from .installations import (
    InstallationLocator,
    LauncherDirectoryLocator,
    RegistryInstallationLocator,
    StaticInstallationLocator,
)
from .orchestrator import BuildOrchestrator, BuildResult
from .settings import LOCATOR_LAUNCHER, BuilderSettings
from .toolchain import ResolvedPaths, ToolchainResolver

logger = logging.getLogger(__name__)

ENGINE_OVERRIDE_NAME = "engine-dir"


def make_locator(settings: BuilderSettings) -> InstallationLocator:
    """--engine-dir wins over any installation lookup."""
    if settings.engine_dir is not None:
        return StaticInstallationLocator({ENGINE_OVERRIDE_NAME: str(settings.engine_dir)})
    if settings.locator == LOCATOR_LAUNCHER:
        return LauncherDirectoryLocator()
    return RegistryInstallationLocator()


class BuildPipeline:
    def __init__(
        self,
        settings: BuilderSettings,
        sink: console.OutputSink,
        locator: Optional[InstallationLocator] = None,
        resolver: Optional[ToolchainResolver] = None,
        title: str = "Unreal Builder",
    ):
        self.settings = settings
        self.sink = sink
        self.resolver = resolver or ToolchainResolver(locator or make_locator(settings), sink)
        self.orchestrator = BuildOrchestrator(sink)
        self.title = title

    def run(self) -> BuildResult:
        """
        Run every stage in order.

        Returns:
            The successful compile result

        Raises:
            BuilderError: From the first stage that fails
        """
        sink = self.sink
        settings = self.settings

        sink.styled(f"{self.title} v{__version__}", console.TITLE)
        sink.line("")

        descriptor = find_descriptor(settings.project_dir)
        logger.debug("Found uproject file: %s", descriptor)

        module_name = read_module_name(descriptor)
        sink.line(f"Project {sink.highlight(module_name)} was found.")

        # Nothing is deleted until the build tool is known to exist
        paths = ResolvedPaths(descriptor=descriptor, build_tool=self.resolver.resolve())
        sink.line(f"Found UBT path: {paths.build_tool}")

        if settings.clean:
            sink.line("Deleting temporary files...")
            clean_project(settings.project_dir, module_name)
            sink.line("done.")

        if settings.regenerate:
            result = self.orchestrator.regenerate_and_compile(
                paths, module_name, settings.configuration, settings.platform
            )
        else:
            result = self.orchestrator.compile(
                paths, module_name, settings.configuration, settings.platform
            )
        result.raise_for_status()

        sink.styled("Finished compiling project.", console.SUCCESS)
        sink.line("")
        sink.line(f"{sink.highlight(module_name)} was successfully rebuilt.")
        return result
