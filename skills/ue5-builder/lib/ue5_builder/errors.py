#!/usr/bin/env python3
"""
UE5 Builder - Error Types

Every stage of the build pipeline raises a subclass of BuilderError. The CLI
reports the message and stops; nothing here is retried.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cleanup import CleanupReport
    from .orchestrator import BuildResult


class BuilderError(Exception):
    """Base class for all pipeline failures."""


class NotFound(BuilderError):
    """A required file (descriptor or build tool) does not exist."""


class TraversalError(BuilderError):
    """The filesystem walk itself failed (permission denied, I/O error...)."""


# Descriptor stage


class DescriptorError(BuilderError):
    """Base class for .uproject discovery and parsing failures."""


class DescriptorNotFound(NotFound, DescriptorError):
    pass


class DescriptorReadError(DescriptorError):
    pass


class DescriptorParseError(DescriptorError):
    pass


class DescriptorSchemaError(DescriptorError):
    pass


# Toolchain stage


class ToolchainError(BuilderError):
    """Base class for UnrealBuildTool resolution failures."""


class RegistryUnavailable(ToolchainError):
    pass


class NoInstallationsFound(ToolchainError):
    pass


class InvalidInstallPath(ToolchainError):
    pass


class ToolNotFound(NotFound, ToolchainError):
    pass


# Build stage


class BuildError(BuilderError):
    """Base class for build tool subprocess failures."""

    def __init__(self, message: str, result: "BuildResult"):
        super().__init__(message)
        self.result = result


class LaunchFailed(BuildError):
    """The build tool process could not be started at all."""


class CompileFailed(BuildError):
    """The build tool ran and exited with a non-zero status."""


# Cleanup stage


class CleanupFailed(BuilderError):
    """One or more cache targets could not be removed."""

    def __init__(self, report: "CleanupReport"):
        self.report = report
        lines = [f"{o.target.path}: {o.error}" for o in report.failures]
        super().__init__("Error deleting files:\n" + "\n".join(lines))
