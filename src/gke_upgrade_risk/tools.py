"""Read-only tools that return upgrade-relevant release documents.

Each tool follows the same flow:
1. Validate arguments (pydantic schemas)
2. Fetch the raw document (context/fetcher.py)
3. Reduce it with the matching extractor (extractors/)
4. Return the text as a ToolResult

The tools hold no state. Fetchers and config are passed in, so the HTTP
API, the CLI and the tests all drive the same functions.
"""

from __future__ import annotations

import asyncio

from gke_upgrade_risk.config import AppConfig
from gke_upgrade_risk.context.fetcher import DocumentFetcherProtocol
from gke_upgrade_risk.extractors.changelog import filter_changelog
from gke_upgrade_risk.extractors.release_notes import extract_release_notes_html
from gke_upgrade_risk.logging_config import get_logger
from gke_upgrade_risk.schemas import K8sChangelogArgs, ToolResult, ToolSpec

logger = get_logger(__name__)

GKE_RELEASE_NOTES_TOOL = ToolSpec(
    name="get_gke_release_notes",
    description=(
        "Get GKE release notes. Prefer to use this tool if GKE release notes are needed."
    ),
)

K8S_CHANGELOG_TOOL = ToolSpec(
    name="get_k8s_changelog",
    description=(
        "Get changelog file for a specific kubernetes minor version and keep only "
        "changes content. Prefer to use this tool if kubernetes minor version "
        "changelog is needed."
    ),
)

TOOLS: tuple[ToolSpec, ...] = (GKE_RELEASE_NOTES_TOOL, K8S_CHANGELOG_TOOL)


async def get_gke_release_notes(
    fetcher: DocumentFetcherProtocol,
    config: AppConfig,
) -> ToolResult:
    """Fetch the GKE release notes page and keep only the release content.

    Raises:
        Whatever the fetcher raises (httpx.HTTPError for the HTTP fetcher)
    """
    url = config.sources.gke_release_notes_url
    try:
        html = await fetcher.fetch_text(url)
    except Exception as e:
        logger.error("release_notes_fetch_failed", url=url, error=str(e))
        raise

    text = await asyncio.to_thread(extract_release_notes_html, html, config.release_notes)
    logger.info("release_notes_extracted", url=url, html_chars=len(html), chars=len(text))
    return ToolResult(text=text)


async def get_k8s_changelog(
    args: K8sChangelogArgs,
    fetcher: DocumentFetcherProtocol,
    config: AppConfig,
) -> ToolResult:
    """Fetch the changelog of a Kubernetes minor version and keep only changes.

    Args:
        args: Validated tool arguments (minor version such as "1.33")
        fetcher: Document fetcher
        config: Source URLs and changelog rules

    Raises:
        Whatever the fetcher raises (httpx.HTTPError for the HTTP fetcher)
    """
    version = args.kubernetes_minor_version
    url = config.sources.k8s_changelog_url(version)
    try:
        changelog = await fetcher.fetch_text(url)
    except Exception as e:
        logger.error("k8s_changelog_fetch_failed", version=version, url=url, error=str(e))
        raise

    text = await asyncio.to_thread(filter_changelog, changelog, config.changelog)
    logger.info(
        "k8s_changelog_filtered",
        version=version,
        changelog_chars=len(changelog),
        chars=len(text),
    )
    return ToolResult(text=text)

