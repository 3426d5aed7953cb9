"""Tests for configuration loading.

Run with: pytest tests/test_config.py -v
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest
from pydantic import ValidationError

from gke_upgrade_risk.config import (
    AppConfig,
    ChangelogRules,
    ExclusionRule,
    ReleaseNotesRules,
    SourceConfig,
    load_app_config,
)


class TestDefaults:
    """The built-in rules describe the current GKE and Kubernetes formats."""

    def test_release_notes_defaults(self) -> None:
        rules = ReleaseNotesRules()
        assert rules.exclusion_rules == (
            ExclusionRule(attribute="data-text", suffix="Version updates"),
            ExclusionRule(attribute="data-text", suffix="Security updates"),
        )
        assert rules.ancestor_depth == 2
        assert rules.release_selector == ".releases"
        assert rules.parser == "lxml"

    def test_changelog_defaults(self) -> None:
        rules = ChangelogRules()
        assert rules.ignored_section_prefixes == ("## Dependencies", "## Downloads for")
        assert rules.section_heading_prefixes == ("# ", "## ")
        assert rules.is_version_heading("# v1.33.0")
        assert not rules.is_version_heading("## v1.33.0")
        assert not rules.is_version_heading("# v1.33")

    def test_changelog_url(self) -> None:
        assert SourceConfig().k8s_changelog_url("1.31").endswith("/CHANGELOG/CHANGELOG-1.31.md")

    def test_rules_are_frozen(self) -> None:
        rules = ReleaseNotesRules()
        with pytest.raises(ValidationError):
            rules.ancestor_depth = 3


class TestLoadAppConfig:
    """YAML overrides."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert load_app_config(tmp_path / "absent.yaml") == AppConfig()

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_app_config(path) == AppConfig()

    def test_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "release_notes:\n"
            "  ancestor_depth: 3\n"
            "  exclusion_rules:\n"
            "    - {attribute: data-text, suffix: Version updates}\n"
            "changelog:\n"
            "  version_heading_pattern: '^# release-\\d+'\n"
            "  ignored_section_prefixes: ['## Dependencies']\n"
            "sources:\n"
            "  timeout_seconds: 5\n"
        )
        config = load_app_config(path)

        assert config.release_notes.ancestor_depth == 3
        assert len(config.release_notes.exclusion_rules) == 1
        assert config.release_notes.release_selector == ".releases"
        assert isinstance(config.changelog.version_heading_pattern, re.Pattern)
        assert config.changelog.is_version_heading("# release-42")
        assert config.changelog.ignored_section_prefixes == ("## Dependencies",)
        assert config.sources.timeout_seconds == 5.0

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("release_notes: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_app_config(path)

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("release_notes:\n  ancestor_depth: -1\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_app_config(path)
