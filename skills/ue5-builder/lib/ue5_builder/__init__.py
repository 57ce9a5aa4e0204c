"""
UE5 Builder Library

Finds a project's .uproject file and UnrealBuildTool, then drives the build
tool and streams its output. Used by the ue5-builder skill scripts.
"""

__version__ = "0.2.0"

from .cleanup import CleanupReport, clean_project
from .console import ConsoleSink, MemorySink, OutputSink
from .descriptor import ProjectDescriptor, find_descriptor, read_module_name
from .errors import BuilderError
from .installations import (
    Installation,
    LauncherDirectoryLocator,
    RegistryInstallationLocator,
    StaticInstallationLocator,
)
from .orchestrator import BuildInvocation, BuildOrchestrator, BuildResult, BuildStatus
from .pipeline import BuildPipeline
from .settings import BuilderSettings, load_settings
from .toolchain import ResolvedPaths, ToolchainResolver, select_installation

__all__ = [
    "__version__",
    "BuilderError",
    "BuilderSettings",
    "BuildInvocation",
    "BuildOrchestrator",
    "BuildPipeline",
    "BuildResult",
    "BuildStatus",
    "CleanupReport",
    "ConsoleSink",
    "Installation",
    "LauncherDirectoryLocator",
    "MemorySink",
    "OutputSink",
    "ProjectDescriptor",
    "RegistryInstallationLocator",
    "ResolvedPaths",
    "StaticInstallationLocator",
    "ToolchainResolver",
    "clean_project",
    "find_descriptor",
    "load_settings",
    "read_module_name",
    "select_installation",
]
