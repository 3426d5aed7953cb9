"""Changelog filter that keeps only the version sections of a changelog.

A Kubernetes ``CHANGELOG-<minor>.md`` starts with a table of contents,
then has one ``# v1.33.2`` section per patch release. Each section lists
download tarballs and dependency bumps next to the actual changes. Only
the changes matter for an upgrade-risk report, so the filter:

- drops everything before the first version heading,
- drops ignored subsections ("## Dependencies", "## Downloads for ...")
  together with all of their nested content, and
- keeps every other line unchanged and in order.

The scan is an explicit three-state machine. Some transitions re-evaluate
the same line in the new state, which ``advance`` makes explicit.
"""

from __future__ import annotations

from enum import StrEnum

from gke_upgrade_risk.config import DEFAULT_CHANGELOG_RULES, ChangelogRules
from gke_upgrade_risk.logging_config import get_logger

logger = get_logger(__name__)


class FilterState(StrEnum):
    """Where the scan currently is.

    SEEKING_FIRST_VERSION: No version heading seen yet, lines are dropped
    EMITTING: Inside a version section, lines are kept
    IGNORING: Inside an ignored subsection, lines are dropped
    """

    SEEKING_FIRST_VERSION = "SEEKING_FIRST_VERSION"
    EMITTING = "EMITTING"
    IGNORING = "IGNORING"


def advance(
    state: FilterState,
    line: str,
    rules: ChangelogRules = DEFAULT_CHANGELOG_RULES,
) -> tuple[FilterState, bool]:
    """Run one line through the state machine.

    Args:
        state: State before the line
        line: The line, without its terminator
        rules: Version heading and subsection predicates

    Returns:
        (state after the line, whether the line is kept)
    """
    if state is FilterState.SEEKING_FIRST_VERSION:
        if not rules.is_version_heading(line):
            return state, False
        state = FilterState.EMITTING

    # ignored-subsection headers win over every other check
    if rules.opens_ignored_section(line):
        return FilterState.IGNORING, False

    if state is FilterState.IGNORING:
        if not rules.is_section_heading(line):
            return state, False
        state = FilterState.EMITTING

    return state, True


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``; a final terminator does not open an extra line.

    A ``\\r`` left over from ``\\r\\n`` terminators is dropped so the output
    always uses ``\\n``.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def filter_changelog(
    text: str,
    rules: ChangelogRules = DEFAULT_CHANGELOG_RULES,
) -> str:
    """Keep only the version sections of a changelog.

    Args:
        text: Full changelog document
        rules: Version heading and subsection predicates

    Returns:
        The kept lines, each followed by ``\\n``. Empty if the changelog
        has no version heading.
    """
    state = FilterState.SEEKING_FIRST_VERSION
    kept: list[str] = []
    lines = split_lines(text)

    for line in lines:
        state, emit = advance(state, line, rules)
        if emit:
            kept.append(line)

    logger.debug(
        "changelog_filtered",
        lines_in=len(lines),
        lines_out=len(kept),
        final_state=state.value,
    )
    return "".join(f"{line}\n" for line in kept)
