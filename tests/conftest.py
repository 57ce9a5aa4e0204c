"""
Shared pytest configuration and fixtures for ue5-builder tests.
"""

import pytest
import sys
import json
import stat
from pathlib import Path

# Add skill lib directory to Python path
PLUGIN_ROOT = Path(__file__).parent.parent
SKILLS_ROOT = PLUGIN_ROOT / "skills"

UE5_BUILDER_LIB = SKILLS_ROOT / "ue5-builder" / "lib"
if str(UE5_BUILDER_LIB) not in sys.path:
    sys.path.insert(0, str(UE5_BUILDER_LIB))

UBT_SUBPATH = ("Engine", "Binaries", "DotNET", "UnrealBuildTool", "UnrealBuildTool.exe")

# Stub build tools are Python scripts with a shebang line
posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="Stub build tools need shebang execution"
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: Slow tests")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless explicitly requested."""
    if not config.getoption("--run-slow", default=False):
        skip_slow = pytest.mark.skip(reason="Slow tests disabled (use --run-slow to enable)")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests"
    )


def write_stub_tool(path: Path, body: str) -> Path:
    """
    Write an executable Python script standing in for UnrealBuildTool.exe.

    Args:
        path: Where to write the stub
        body: Python source run by the stub (sys is already imported)

    Returns:
        The stub path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\nimport sys\n{body}\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_uproject(project_dir: Path, name: str, modules) -> Path:
    """Write <name>.uproject with the given Modules value."""
    project_dir.mkdir(parents=True, exist_ok=True)
    document = {
        "FileVersion": 3,
        "EngineAssociation": "5.3",
        "Category": "",
        "Description": "",
    }
    if modules is not None:
        document["Modules"] = modules
    uproject = project_dir / f"{name}.uproject"
    uproject.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return uproject


# ============================================================================
# Shared Fixtures
# ============================================================================

@pytest.fixture
def temp_uproject(tmp_path):
    """
    Create a temporary project with a single runtime module named Demo.

    Returns:
        Path to the temporary project directory
    """
    project_dir = tmp_path / "Demo"
    write_uproject(project_dir, "Demo", [
        {"Name": "Demo", "Type": "Runtime", "LoadingPhase": "Default"}
    ])
    (project_dir / "Config").mkdir()
    (project_dir / "Source" / "Demo").mkdir(parents=True)
    return project_dir


@pytest.fixture
def fake_engine(tmp_path):
    """
    Create an empty engine installation directory.

    Returns:
        Path to the installation root (UE_5.3)
    """
    install_dir = tmp_path / "Epic Games" / "UE_5.3"
    (install_dir / "Engine" / "Binaries" / "Win64").mkdir(parents=True)
    return install_dir


@pytest.fixture
def conventional_ubt(fake_engine):
    """Path where UnrealBuildTool.exe lives in a standard installation."""
    return fake_engine.joinpath(*UBT_SUBPATH)


@pytest.fixture
def stub_tool(tmp_path):
    """Factory writing stub build tools under tmp_path/tools."""
    def factory(body: str, name: str = "UnrealBuildTool.exe") -> Path:
        return write_stub_tool(tmp_path / "tools" / name, body)
    return factory
