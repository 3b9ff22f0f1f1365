"""Tests for sessionizer.core.config — option normalization and settings."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sessionizer.core.config import (
    DEFAULT_DEPTH,
    DEFAULT_EXCLUDE_DIRS,
    BaseSpec,
    SessionizerConfig,
    Settings,
)


class TestBaseSpec:
    def test_bare_string(self) -> None:
        assert BaseSpec.from_option("/base1/", 3) == BaseSpec("/base1", 3)

    def test_mapping_with_depth(self) -> None:
        assert BaseSpec.from_option({"path": "/w", "max_depth": -1}, 3) == BaseSpec("/w", -1)

    def test_mapping_without_depth_uses_default(self) -> None:
        assert BaseSpec.from_option({"path": "/w"}, 2) == BaseSpec("/w", 2)

    def test_no_default_keeps_none(self) -> None:
        assert BaseSpec.from_option("/w").max_depth is None

    def test_path_object(self) -> None:
        assert BaseSpec.from_option(Path("/p"), 1) == BaseSpec("/p", 1)

    def test_expands_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/u")
        assert BaseSpec.from_option("~/code").path == "/home/u/code"

    @pytest.mark.parametrize(
        "raw, match",
        [
            ({"max_depth": 2}, "missing 'path'"),
            ({"path": ""}, "non-empty"),
            ({"path": "/x", "max_depth": "2"}, "integer"),
            (42, "unsupported"),
        ],
    )
    def test_invalid(self, raw, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            BaseSpec.from_option(raw)


class TestFromOptions:
    def test_defaults(self) -> None:
        cfg = SessionizerConfig.from_options(None)
        assert cfg.projects == ()
        assert cfg.exclude_dirs == DEFAULT_EXCLUDE_DIRS
        assert cfg.default_depth == DEFAULT_DEPTH == 3
        assert cfg.add_to_launch_menu is False
        assert cfg.launch_args == ("nvim",)
        assert cfg.scan_workers == 1

    def test_default_exclude_set(self) -> None:
        assert DEFAULT_EXCLUDE_DIRS == (
            ".git", "node_modules", ".vscode", ".svn", ".hg",
            ".idea", ".DS_Store", "__pycache__", "target", "build",
        )

    def test_projects_get_effective_default_depth(self) -> None:
        cfg = SessionizerConfig.from_options(
            {"projects": ["/a", {"path": "/b", "max_depth": 1}], "default_depth": 5}
        )
        assert cfg.projects == (BaseSpec("/a", 5), BaseSpec("/b", 1))

    def test_explicit_empty_exclusions(self) -> None:
        assert SessionizerConfig.from_options({"exclude_dirs": []}).exclude_dirs == ()

    def test_none_fields_fall_back(self) -> None:
        cfg = SessionizerConfig.from_options({"default_depth": None, "exclude_dirs": None})
        assert cfg.default_depth == 3
        assert cfg.exclude_dirs == DEFAULT_EXCLUDE_DIRS

    def test_platform_flag(self) -> None:
        assert SessionizerConfig.from_options({"is_windows": True}).is_windows is True
        assert SessionizerConfig.from_options({"is_windows": False}).is_windows is False

    def test_bad_default_depth(self) -> None:
        with pytest.raises(ValueError, match="default_depth"):
            SessionizerConfig.from_options({"default_depth": "3"})

    def test_bad_workers(self) -> None:
        with pytest.raises(ValueError, match="scan_workers"):
            SessionizerConfig.from_options({"scan_workers": -2})

    def test_frozen(self) -> None:
        cfg = SessionizerConfig.from_options({})
        with pytest.raises(AttributeError):
            cfg.default_depth = 9  # type: ignore[misc]


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SESSIONIZER_CONFIG", raising=False)
        monkeypatch.delenv("SESSIONIZER_LOG_LEVEL", raising=False)
        s = Settings()
        assert s.config_path.name == "config.yaml"
        assert s.log_level == logging.WARNING

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("SESSIONIZER_CONFIG", str(tmp_path / "s.toml"))
        monkeypatch.setenv("SESSIONIZER_LOG_LEVEL", "debug")
        s = Settings()
        assert s.config_path == tmp_path / "s.toml"
        assert s.log_level == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SESSIONIZER_LOG_LEVEL", "chatty")
        assert Settings().log_level == logging.WARNING
