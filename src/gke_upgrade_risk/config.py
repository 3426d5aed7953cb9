"""Extraction rules and source configuration.

All rule tables the extractors use live here as frozen pydantic models.
They are built once (see ``get_app_config``) and handed to the extractors
by reference, so a request never re-parses a regex or a selector list.

The defaults describe the current GKE release notes markup and the
Kubernetes ``CHANGELOG-<minor>.md`` format. Any of them can be overridden
from a YAML file:

    release_notes:
      ancestor_depth: 2
      exclusion_rules:
        - {attribute: data-text, suffix: Version updates}
    changelog:
      ignored_section_prefixes: ["## Dependencies"]
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from re import Pattern

import yaml
from pydantic import BaseModel, ConfigDict, Field

CONFIG_PATH_ENV_VAR = "GKE_UPGRADE_RISK_CONFIG"
DEFAULT_CONFIG_PATH = "gke_upgrade_risk.yaml"


# ---------------------------------------------------------------------------
# HTML release notes rules
# ---------------------------------------------------------------------------


class ExclusionRule(BaseModel):
    """Locates an exclusion anchor: a node whose attribute ends with a suffix.

    Attributes:
        attribute: Attribute name to inspect (e.g. "data-text")
        suffix: Literal suffix the attribute value must end with
    """

    model_config = ConfigDict(frozen=True)

    attribute: str = Field(..., min_length=1)
    suffix: str = Field(..., min_length=1)

    def matches(self, value: str | list[str] | None) -> bool:
        """Check an attribute value as BeautifulSoup returns it."""
        if value is None:
            return False
        if isinstance(value, list):
            # multi-valued attributes (class, rel, ...) come back as lists
            value = " ".join(value)
        return value.endswith(self.suffix)


class ReleaseNotesRules(BaseModel):
    """Rules for the HTML release notes extractor.

    Attributes:
        exclusion_rules: Anchors whose ancestor subtree gets deleted, in order
        ancestor_depth: How many parent levels to climb from an anchor
        release_selector: CSS selector of the release blocks to keep
        parser: BeautifulSoup tree builder used for raw markup
    """

    model_config = ConfigDict(frozen=True)

    exclusion_rules: tuple[ExclusionRule, ...] = (
        ExclusionRule(attribute="data-text", suffix="Version updates"),
        ExclusionRule(attribute="data-text", suffix="Security updates"),
    )
    ancestor_depth: int = Field(2, ge=0)
    release_selector: str = Field(".releases", min_length=1)
    # lxml wraps bare fragments in html/body, as browsers do
    parser: str = Field("lxml", min_length=1)


# ---------------------------------------------------------------------------
# Changelog rules
# ---------------------------------------------------------------------------


class ChangelogRules(BaseModel):
    """Line predicates for the changelog filter.

    Attributes:
        version_heading_pattern: Regex for a line opening a version section
        ignored_section_prefixes: Heading prefixes of subsections to drop
        section_heading_prefixes: Heading levels that close an ignored subsection
    """

    model_config = ConfigDict(frozen=True)

    version_heading_pattern: Pattern[str] = re.compile(r"^#\s*v?\d+\.\d+\.\d+")
    ignored_section_prefixes: tuple[str, ...] = ("## Dependencies", "## Downloads for")
    section_heading_prefixes: tuple[str, ...] = ("# ", "## ")

    def is_version_heading(self, line: str) -> bool:
        return self.version_heading_pattern.match(line) is not None

    def opens_ignored_section(self, line: str) -> bool:
        return line.startswith(self.ignored_section_prefixes)

    def is_section_heading(self, line: str) -> bool:
        return line.startswith(self.section_heading_prefixes)


# ---------------------------------------------------------------------------
# Sources and top-level config
# ---------------------------------------------------------------------------


class SourceConfig(BaseModel):
    """Where the raw documents are fetched from."""

    model_config = ConfigDict(frozen=True)

    gke_release_notes_url: str = (
        "https://docs.cloud.google.com/kubernetes-engine/docs/release-notes"
    )
    k8s_changelog_url_template: str = (
        "https://raw.githubusercontent.com/kubernetes/kubernetes/refs/heads/master/"
        "CHANGELOG/CHANGELOG-{version}.md"
    )
    timeout_seconds: float = Field(30.0, gt=0)

    def k8s_changelog_url(self, minor_version: str) -> str:
        return self.k8s_changelog_url_template.format(version=minor_version)


class AppConfig(BaseModel):
    """Top-level configuration loaded from YAML."""

    model_config = ConfigDict(frozen=True)

    release_notes: ReleaseNotesRules = ReleaseNotesRules()
    changelog: ChangelogRules = ChangelogRules()
    sources: SourceConfig = SourceConfig()


DEFAULT_RELEASE_NOTES_RULES = ReleaseNotesRules()
DEFAULT_CHANGELOG_RULES = ChangelogRules()


def load_app_config(path: str | Path) -> AppConfig:
    """Load and validate a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated AppConfig. Returns defaults if the file doesn't exist.

    Raises:
        ValueError: If the YAML content is invalid or fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        return AppConfig()

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    try:
        return AppConfig.model_validate(raw)
    except Exception as exc:
        raise ValueError(f"Invalid config in {path}: {exc}") from exc


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """Return the process-wide config, read once from GKE_UPGRADE_RISK_CONFIG."""
    return load_app_config(os.environ.get(CONFIG_PATH_ENV_VAR, DEFAULT_CONFIG_PATH))
