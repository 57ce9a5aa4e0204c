"""
Unit tests for settings resolution (argument > environment > default).
"""

import pytest
from argparse import Namespace
from pathlib import Path

from ue5_builder.settings import (
    ENV_CONFIGURATION,
    ENV_ENGINE_DIR,
    ENV_LOCATOR,
    ENV_PLATFORM,
    ENV_PROJECT_DIR,
    LOCATOR_LAUNCHER,
    LOCATOR_REGISTRY,
    load_settings,
)


def args(**kwargs):
    defaults = dict(
        project_dir=None, engine_dir=None, locator=None, configuration=None,
        platform=None, pause=None, linger=None, color=None, verbose=False,
    )
    defaults.update(kwargs)
    return Namespace(**defaults)


class TestLoadSettings:
    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        settings = load_settings(args(), environ={})

        assert settings.project_dir == Path.cwd()
        assert settings.engine_dir is None
        assert settings.locator == LOCATOR_REGISTRY
        assert settings.configuration == "Development"
        assert settings.platform == "Win64"
        assert settings.pause is True
        assert settings.linger == 0.0
        assert settings.clean is False
        assert settings.regenerate is False

    def test_environment_over_default(self, tmp_path):
        environ = {
            ENV_PROJECT_DIR: str(tmp_path),
            ENV_ENGINE_DIR: str(tmp_path / "UE_5.3"),
            ENV_LOCATOR: LOCATOR_LAUNCHER,
            ENV_CONFIGURATION: "DebugGame",
            ENV_PLATFORM: "Linux",
        }

        settings = load_settings(args(), environ=environ)

        assert settings.project_dir == tmp_path
        assert settings.engine_dir == tmp_path / "UE_5.3"
        assert settings.locator == LOCATOR_LAUNCHER
        assert settings.configuration == "DebugGame"
        assert settings.platform == "Linux"

    def test_argument_over_environment(self, tmp_path):
        environ = {ENV_CONFIGURATION: "DebugGame", ENV_PROJECT_DIR: "/elsewhere"}

        settings = load_settings(
            args(configuration="Shipping", project_dir=str(tmp_path)), environ=environ
        )

        assert settings.configuration == "Shipping"
        assert settings.project_dir == tmp_path

    def test_empty_environment_value_ignored(self):
        settings = load_settings(args(), environ={ENV_PLATFORM: ""})

        assert settings.platform == "Win64"

    def test_entry_point_defaults_and_overrides(self):
        settings = load_settings(args(), environ={}, clean=True, regenerate=True, pause=False, linger=2.0)

        assert settings.clean and settings.regenerate
        assert settings.pause is False
        assert settings.linger == 2.0

        settings = load_settings(args(pause=True, linger=0.5), environ={}, pause=False, linger=2.0)

        assert settings.pause is True
        assert settings.linger == 0.5

    def test_unknown_locator(self):
        with pytest.raises(ValueError):
            load_settings(args(), environ={ENV_LOCATOR: "magic"})
