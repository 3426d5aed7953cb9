"""Command line entry point.

Usage:
    gke-upgrade-risk release-notes
    gke-upgrade-risk release-notes --file release-notes.html
    gke-upgrade-risk changelog 1.33
    gke-upgrade-risk changelog --file CHANGELOG-1.33.md
    gke-upgrade-risk prompt --cluster-name prod --cluster-location us-central1

Extracted text goes to stdout, logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import httpx
from pydantic import ValidationError

from gke_upgrade_risk.config import AppConfig, get_app_config, load_app_config
from gke_upgrade_risk.context.fetcher import HttpDocumentFetcher
from gke_upgrade_risk.extractors.changelog import filter_changelog
from gke_upgrade_risk.extractors.release_notes import extract_release_notes_html
from gke_upgrade_risk.logging_config import setup_logging
from gke_upgrade_risk.prompts.upgrade_risk_report import build_upgrade_risk_report_prompt
from gke_upgrade_risk.schemas import K8sChangelogArgs, UpgradeRiskReportArgs
from gke_upgrade_risk.tools import get_gke_release_notes, get_k8s_changelog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gke-upgrade-risk",
        description="Upgrade-relevant GKE release notes and Kubernetes changelogs",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to YAML config (defaults to $GKE_UPGRADE_RISK_CONFIG)",
    )
    subparsers = parser.add_subparsers(dest="command")

    notes = subparsers.add_parser("release-notes", help="GKE release notes, changes only")
    notes.add_argument("--file", "-f", type=Path, help="Read HTML from a file instead of fetching")

    changelog = subparsers.add_parser("changelog", help="Kubernetes changelog, changes only")
    changelog.add_argument("version", nargs="?", help="Kubernetes minor version, e.g. 1.33")
    changelog.add_argument("--file", "-f", type=Path, help="Read Markdown from a file instead of fetching")

    prompt = subparsers.add_parser("prompt", help="Render the upgrade risk report prompt")
    prompt.add_argument("--cluster-name", required=True)
    prompt.add_argument("--cluster-location", required=True)
    prompt.add_argument("--target-version", default="")

    return parser


def run(args: argparse.Namespace, parser: argparse.ArgumentParser, config: AppConfig) -> str:
    """Execute a parsed command and return the text to print."""
    fetcher = HttpDocumentFetcher(timeout=config.sources.timeout_seconds)

    if args.command == "release-notes":
        if args.file:
            return extract_release_notes_html(args.file.read_text(), config.release_notes)
        return asyncio.run(get_gke_release_notes(fetcher, config)).text

    if args.command == "changelog":
        if args.file:
            return filter_changelog(args.file.read_text(), config.changelog)
        if not args.version:
            parser.error("changelog needs a VERSION or --file")
        try:
            tool_args = K8sChangelogArgs(kubernetes_minor_version=args.version)
        except ValidationError as e:
            parser.error(e.errors()[0]["msg"])
        return asyncio.run(get_k8s_changelog(tool_args, fetcher, config)).text

    try:
        result = build_upgrade_risk_report_prompt(
            UpgradeRiskReportArgs(
                cluster_name=args.cluster_name,
                cluster_location=args.cluster_location,
                target_version=args.target_version,
            )
        )
    except ValueError as e:
        parser.error(str(e))
    return "\n".join(message.text for message in result.messages)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_usage()
        return 2

    setup_logging()
    try:
        config = load_app_config(args.config) if args.config else get_app_config()
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        output = run(args, parser, config)
    except httpx.HTTPError as e:
        print(f"error: failed to fetch document: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
