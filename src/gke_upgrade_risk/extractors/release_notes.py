"""HTML release notes extractor.

The GKE release notes page renders every release as a ``.releases`` block.
Inside a release, each update group ("Version updates", "Security updates",
...) is a heading wrapped two levels below the container of the whole group.
Version and security listings carry no upgrade-risk signal, so the groups
are cut out before the release text is collected:

    <div class="releases">
      <div>                                  <- deleted (grandparent)
        <h3><span data-text="Version updates">...</span></h3>
        <ul>...</ul>
      </div>
      <div>... kept ...</div>
    </div>

The extractor mutates the tree it is given. Callers must not reuse it.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from gke_upgrade_risk.config import (
    DEFAULT_RELEASE_NOTES_RULES,
    ExclusionRule,
    ReleaseNotesRules,
)
from gke_upgrade_risk.logging_config import get_logger

logger = get_logger(__name__)


def find_anchors(soup: BeautifulSoup, rule: ExclusionRule) -> list[Tag]:
    """Return every tag matching an exclusion rule, in document order."""
    return [
        tag
        for tag in soup.find_all(True)
        if rule.matches(tag.get(rule.attribute))
    ]


def structural_ancestor(tag: Tag, depth: int) -> Tag | None:
    """Climb ``depth`` parent levels from ``tag``.

    The document object itself is not a structural ancestor, so an anchor
    sitting too close to the root yields None.
    """
    node = tag
    for _ in range(depth):
        node = node.parent
        if node is None or isinstance(node, BeautifulSoup):
            return None
    return node


def remove_excluded_sections(
    soup: BeautifulSoup,
    rules: ReleaseNotesRules = DEFAULT_RELEASE_NOTES_RULES,
) -> int:
    """Delete the ancestor subtree of every exclusion anchor.

    Rules run in order and each sees the tree as left by the previous ones.
    Anchors already destroyed by an earlier deletion are skipped.

    Returns:
        Number of subtrees deleted
    """
    removed = 0
    for rule in rules.exclusion_rules:
        for anchor in find_anchors(soup, rule):
            if anchor.decomposed:
                continue
            ancestor = structural_ancestor(anchor, rules.ancestor_depth)
            if ancestor is None or ancestor.decomposed:
                continue
            ancestor.decompose()
            removed += 1
    return removed


def extract_release_content(
    soup: BeautifulSoup,
    rules: ReleaseNotesRules = DEFAULT_RELEASE_NOTES_RULES,
) -> str:
    """Return the text of all release blocks left after exclusions.

    Args:
        soup: Parsed release notes page (modified in place)
        rules: Exclusion anchors, ancestor depth and release selector

    Returns:
        Concatenated text of the remaining release blocks, possibly empty
    """
    removed = remove_excluded_sections(soup, rules)
    blocks = soup.select(rules.release_selector)
    text = "".join(block.get_text() for block in blocks)

    logger.debug(
        "release_notes_extracted",
        sections_removed=removed,
        release_blocks=len(blocks),
        chars=len(text),
    )
    return text


def extract_release_notes_html(
    html: str | bytes,
    rules: ReleaseNotesRules = DEFAULT_RELEASE_NOTES_RULES,
) -> str:
    """Parse raw release notes markup and extract the release content."""
    return extract_release_content(BeautifulSoup(html, rules.parser), rules)
