"""Prompt template for the GKE cluster upgrade risk report.

The prompt instructs a client-side model to gather cluster facts with
gcloud/kubectl, pull the relevant changelogs through the
``get_k8s_changelog`` tool, and turn the changes into a list of upgrade
risks ordered by severity.

This module only renders text. It never calls a model.
"""

from __future__ import annotations

from gke_upgrade_risk.schemas import (
    MessageRole,
    PromptArgument,
    PromptMessage,
    PromptResult,
    PromptSpec,
    UpgradeRiskReportArgs,
)

PROMPT_NAME = "gke:upgraderiskreport"
PROMPT_DESCRIPTION = "Generate GKE cluster upgrade risk report."
RESULT_DESCRIPTION = "GKE Cluster Upgrade Risk Report Prompt"

UPGRADE_RISK_REPORT_PROMPT = PromptSpec(
    name=PROMPT_NAME,
    description=PROMPT_DESCRIPTION,
    arguments=[
        PromptArgument(
            name="cluster_name",
            description="A name of a GKE cluster user want to upgrade.",
            required=True,
        ),
        PromptArgument(
            name="cluster_location",
            description="A location of a GKE cluster user want to upgrade.",
            required=True,
        ),
        PromptArgument(
            name="target_version",
            description="A version user want to upgrade their cluster to.",
            required=False,
        ),
    ],
)

# ---------------------------------------------------------------------------
# Prompt Template
# ---------------------------------------------------------------------------

UPGRADE_RISK_REPORT_TEMPLATE = """
Cluster name: {cluster_name}
Cluster location: {cluster_location}
Target version: {target_version}

You are a GKE expert, and you have to generate an upgrade risk report for the cluster before it gets upgraded to the target version from its current version. An upgrade risk report is used to estimate how safe it is to perform the upgrade. The cluster current version is its control plane version. Warn the user if node pool versions differ from the cluster current version.

If the target version is not provided, you should ask the user to specify one. To help the user choose, provide a list of relevant upgrade versions. This list should be derived by:
- Fetching available versions using `gcloud container get-server-config`.
- Filtering these versions based on the cluster's current release channel.
- Displaying only versions that are newer than the cluster's current control plane version.

The upgrade risk report focuses on a specific GKE upgrade risks which may arise when upgrading the cluster from the current version to the target version.

For fetching any in-cluster resources use kubectl tool and gcloud get-credentials. For fetching any cluster information use gcloud.

The report is based on changes which are brought by the target version and versions between the current and the target versions. You extract relevant changes from kubernetes changelogs.

You get relevant kubernetes changelogs using the `get_k8s_changelog` tool.
When getting Kubernetes changelogs, you must consider every minor version from the current minor version up to and including the target minor version. For example, if upgrading from 1.29.x to 1.31.y, you must get changelogs for 1.29, 1.30 and 1.31 minor versions.
When analyzing kubernetes changelogs, you must consider changes for every patch version from the current version (not including) up to and including the target version. For example, if upgrading from 1.29.1 to 1.29.5, you must process all changes brought by versions 1.29.2, 1.29.3, 1.29.4, 1.29.5.

You take a set of relevant changes and transform it to a set of risks the upgrade may be affected. The set of risks will be used by the user to ensure that the upgrade is safe. Each risk item must tell how severe it is using terms LOW, MEDIUM, HIGH from perspective how much harmful a change can be for user's workloads if such an upgrade happen.

You should analyse relevant changes and identify potential risks such as changes which require immediate manual intervention during or after the upgrade to prevent service disruption, data loss, security vulnerabilities, etc. For example:
- Deprecated and removed APIs;
- Significant behavioral changes in existing features;
- Changes to default configurations;
- New features that might interact with existing workloads in destructive way.

Be specific about each risk, do not group various risks under general headings.

The set of risks represents the requested upgrade risk report. You present it as a list following the rules:
- there is only one list;
- each list item contains Severity, Risk description, Verification recommendations, Mitigation recommendations;
- list items are ordered by severity from HIGH to LOW;
- items are printed as text one under another.

Verification and mitigation recommendations should provide clear, actionable steps the user can take to verify/mitigate the risk. This includes command examples, configuration changes, links to specific Google Cloud documentation, or Kubernetes resources.

```The markdown format of a single risk item:

# Short risk title

## Description

Risk description...

## Verification recommendations

Risk verification recommendations...

## Mitigation recommendations

Mitigation recommendations...
```"""


def build_upgrade_risk_report_prompt(args: UpgradeRiskReportArgs) -> PromptResult:
    """Render the upgrade risk report prompt for a cluster.

    Args:
        args: Prompt arguments, already trimmed by the schema

    Returns:
        A PromptResult with a single user message

    Raises:
        ValueError: If a required argument is empty
    """
    for argument in UPGRADE_RISK_REPORT_PROMPT.arguments:
        if argument.required and not getattr(args, argument.name):
            raise ValueError(f"argument '{argument.name}' cannot be empty")

    text = UPGRADE_RISK_REPORT_TEMPLATE.format(
        cluster_name=args.cluster_name,
        cluster_location=args.cluster_location,
        target_version=args.target_version,
    )
    return PromptResult(
        description=RESULT_DESCRIPTION,
        messages=[PromptMessage(role=MessageRole.USER, text=text)],
    )
