"""Unit tests for ScaffoldConfig (t3fire.config).

Tests cover:
- Defaults
- App name validation and derived names/paths
- Provider and package coercion
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from t3fire.config import DEFAULT_APP_NAME, ScaffoldConfig, validate_app_name
from t3fire.errors import UnknownProviderError
from t3fire.installers import DatabaseProvider


class TestDefaults:
    @pytest.mark.unit
    def test_default_values(self):
        config = ScaffoldConfig()
        assert config.app_name == DEFAULT_APP_NAME
        assert config.packages == []
        assert config.database_provider is DatabaseProvider.SQLITE
        assert config.app_router is False
        assert config.template_root is None
        assert config.configure_firebase is True


class TestAppName:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name",
        ["my-app", "@acme/my-app", "apps/my-app", "apps/@acme/web", ".", "./my_app", "/tmp/My Dir/app"],
    )
    def test_valid_names(self, name):
        assert validate_app_name(name) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["My App", "UPPER", "@acme/Web", "bad!name"])
    def test_invalid_names(self, name):
        assert validate_app_name(name) is not None
        with pytest.raises(ValidationError):
            ScaffoldConfig(app_name=name)

    @pytest.mark.unit
    def test_scoped_name(self, tmp_path: Path):
        config = ScaffoldConfig(app_name="@acme/web", output_dir=tmp_path)
        assert config.scoped_app_name == "@acme/web"
        assert config.app_dir == "web"
        assert config.project_dir == tmp_path / "web"
        assert config.project_name == "web"

    @pytest.mark.unit
    def test_nested_path(self, tmp_path: Path):
        config = ScaffoldConfig(app_name="apps/site", output_dir=tmp_path)
        assert config.scoped_app_name == "site"
        assert config.project_dir == tmp_path / "apps" / "site"

    @pytest.mark.unit
    def test_current_directory(self, tmp_path: Path):
        target = tmp_path / "here-app"
        target.mkdir()
        config = ScaffoldConfig(app_name=".", output_dir=target)
        assert config.scoped_app_name == "here-app"
        assert config.app_dir == "."
        assert config.project_name == "here-app"


class TestCoercion:
    @pytest.mark.unit
    def test_provider_from_string(self):
        assert ScaffoldConfig(database_provider="Postgres").database_provider is DatabaseProvider.POSTGRES

    @pytest.mark.unit
    def test_unknown_provider(self):
        with pytest.raises(UnknownProviderError):
            ScaffoldConfig(database_provider="oracle")

    @pytest.mark.unit
    def test_packages_from_comma_string(self):
        config = ScaffoldConfig(packages="trpc, tailwind,,nextAuth")
        assert config.packages == ["trpc", "tailwind", "nextAuth"]


class TestFromEnv:
    @pytest.mark.unit
    def test_from_env(self, tmp_path: Path):
        env = {
            "T3F_APP_NAME": "env-app",
            "T3F_PACKAGES": "trpc,tailwind",
            "T3F_DB_PROVIDER": "mysql",
            "T3F_APP_ROUTER": "true",
            "T3F_OUTPUT_DIR": str(tmp_path),
            "T3F_CONFIGURE_FIREBASE": "0",
        }
        with patch.dict(os.environ, env, clear=False):
            config = ScaffoldConfig.from_env()
        assert config.app_name == "env-app"
        assert config.packages == ["trpc", "tailwind"]
        assert config.database_provider is DatabaseProvider.MYSQL
        assert config.app_router is True
        assert config.output_dir == tmp_path
        assert config.configure_firebase is False

    @pytest.mark.unit
    def test_from_env_defaults(self):
        cleared = {k: v for k, v in os.environ.items() if not k.startswith("T3F_")}
        with patch.dict(os.environ, cleared, clear=True):
            config = ScaffoldConfig.from_env()
        assert config == ScaffoldConfig()
