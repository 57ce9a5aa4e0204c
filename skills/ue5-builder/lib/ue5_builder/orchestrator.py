#!/usr/bin/env python3
"""
UE5 Builder - Build Orchestration

Runs UnrealBuildTool as a subprocess and forwards its output line by line
while it is still running.

Usage:
    orchestrator = BuildOrchestrator(ConsoleSink())
    result = orchestrator.compile(paths, "MyGame")
    result.raise_for_status()
"""

import enum
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, List, Optional, Tuple

from . import console
from .errors import CompileFailed, LaunchFailed
from .toolchain import ResolvedPaths

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION = "Development"
DEFAULT_PLATFORM = "Win64"
EDITOR_TARGET_SUFFIX = "Editor"

COMPILE_FLAGS = ("-WaitMutex",)
PROJECT_FILES_FLAGS = ("-Game", "-CurrentPlatform", "-ProjectFiles")


@dataclass(frozen=True)
class BuildInvocation:
    """Argument vector and working directory for one build tool run."""

    executable: Path
    arguments: Tuple[str, ...]
    working_directory: Optional[Path] = None

    @property
    def argv(self) -> List[str]:
        return [str(self.executable), *self.arguments]


def compile_invocation(
    build_tool: Path,
    descriptor: Path,
    module_name: str,
    configuration: str = DEFAULT_CONFIGURATION,
    platform: str = DEFAULT_PLATFORM,
) -> BuildInvocation:
    """<descriptor> <Module>Editor <Configuration> <Platform> -WaitMutex"""
    return BuildInvocation(
        executable=build_tool,
        arguments=(
            str(descriptor),
            module_name + EDITOR_TARGET_SUFFIX,
            configuration,
            platform,
            *COMPILE_FLAGS,
        ),
        working_directory=descriptor.parent,
    )


def project_files_invocation(build_tool: Path, descriptor: Path) -> BuildInvocation:
    """<descriptor> -Game -CurrentPlatform -ProjectFiles"""
    return BuildInvocation(
        executable=build_tool,
        arguments=(str(descriptor), *PROJECT_FILES_FLAGS),
        working_directory=descriptor.parent,
    )


class BuildStatus(enum.Enum):
    SUCCESS = "success"
    LAUNCH_FAILED = "launch_failed"
    COMPILE_FAILED = "compile_failed"


@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of one build tool run.

    The streamed output is the diagnostic; the tool reports its own errors
    there, so no separate error text is collected.
    """

    invocation: BuildInvocation
    status: BuildStatus
    exit_code: Optional[int] = None
    output: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is BuildStatus.SUCCESS

    def raise_for_status(self) -> "BuildResult":
        if self.status is BuildStatus.LAUNCH_FAILED:
            raise LaunchFailed(f"Error starting build tool: {self.error}", self)
        if self.status is BuildStatus.COMPILE_FAILED:
            raise CompileFailed(f"Compile error: exit status {self.exit_code}", self)
        return self


class BuildSession:
    """
    One running build tool process.

    stderr is merged into stdout so both reach the operator in order.
    Undecodable bytes are replaced rather than aborting the stream.
    """

    def __init__(self, invocation: BuildInvocation):
        self.invocation = invocation
        self.exit_code: Optional[int] = None
        self._process = subprocess.Popen(
            invocation.argv,
            cwd=str(invocation.working_directory) if invocation.working_directory else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def stdout(self) -> IO[str]:
        return self._process.stdout

    def lines(self) -> Iterator[str]:
        """Yield output lines, without line endings, as the tool writes them."""
        for raw in iter(self.stdout.readline, ""):
            yield raw.rstrip("\r\n")

    def wait(self) -> int:
        """Wait for the process to exit and return its exit code."""
        self.exit_code = self._process.wait()
        return self.exit_code

    def close(self):
        if self._process.stdout and not self._process.stdout.closed:
            self._process.stdout.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        if exc_type is not None and self._process.poll() is None:
            # Interrupted while streaming (Ctrl+C): do not leave the tool orphaned
            self._process.kill()
            self._process.wait()
        return False


class BuildOrchestrator:
    """Launch the build tool, stream its output to a sink, report the outcome."""

    def __init__(self, sink: console.OutputSink):
        self.sink = sink

    def run(self, invocation: BuildInvocation) -> BuildResult:
        logger.debug("Running: %s (cwd=%s)", invocation.argv, invocation.working_directory)

        try:
            session = BuildSession(invocation)
        except OSError as e:
            logger.debug("Launch failed: %s", e)
            return BuildResult(invocation, BuildStatus.LAUNCH_FAILED, error=str(e))

        output = []
        with session:
            for line in session.lines():
                output.append(line)
                self.sink.line(line)
            exit_code = session.wait()

        logger.debug("Build tool exited with %s", exit_code)
        status = BuildStatus.SUCCESS if exit_code == 0 else BuildStatus.COMPILE_FAILED
        return BuildResult(invocation, status, exit_code=exit_code, output=tuple(output))

    def compile(
        self,
        paths: ResolvedPaths,
        module_name: str,
        configuration: str = DEFAULT_CONFIGURATION,
        platform: str = DEFAULT_PLATFORM,
    ) -> BuildResult:
        """Compile the editor target only."""
        self.sink.line("Compiling project...")
        return self.run(
            compile_invocation(paths.build_tool, paths.descriptor, module_name, configuration, platform)
        )

    def regenerate_project_files(self, paths: ResolvedPaths) -> BuildResult:
        self.sink.line("Generating project files...")
        result = self.run(project_files_invocation(paths.build_tool, paths.descriptor))
        if result.ok:
            self.sink.styled("Finished generating project files.", console.SUCCESS)
        return result

    def regenerate_and_compile(
        self,
        paths: ResolvedPaths,
        module_name: str,
        configuration: str = DEFAULT_CONFIGURATION,
        platform: str = DEFAULT_PLATFORM,
    ) -> BuildResult:
        """
        Regenerate project files, then compile once regeneration has succeeded.

        Returns:
            The failed regeneration result, or the compile result
        """
        result = self.regenerate_project_files(paths)
        if not result.ok:
            return result
        return self.compile(paths, module_name, configuration, platform)
