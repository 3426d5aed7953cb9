"""Pydantic models for the tool and prompt contracts.

These schemas are shared by the HTTP API, the CLI and the tools layer, so
argument validation happens in exactly one place.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

K8S_MINOR_VERSION_RE = re.compile(r"^\d+\.\d+$")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class MessageRole(str, Enum):
    """Author of a prompt message."""

    USER = "user"
    ASSISTANT = "assistant"


# ---------------------------------------------------------------------------
# Tool Schemas
# ---------------------------------------------------------------------------


class ToolSpec(BaseModel):
    """Description of a callable tool.

    Attributes:
        name: Tool name used for dispatch (e.g. "get_k8s_changelog")
        description: When and why a client should call the tool
        read_only_hint: The tool never modifies anything
        idempotent_hint: Repeated calls with the same arguments are safe
    """

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    read_only_hint: bool = True
    idempotent_hint: bool = True


class K8sChangelogArgs(BaseModel):
    """Arguments of the get_k8s_changelog tool."""

    kubernetes_minor_version: str = Field(
        ...,
        alias="KubernetesMinorVersion",
        description="The kubernetes minor version to get changelog for. For example, '1.33'.",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("kubernetes_minor_version")
    @classmethod
    def check_minor_version(cls, value: str) -> str:
        """Accept only "<major>.<minor>" after trimming whitespace."""
        version = value.strip()
        if not K8S_MINOR_VERSION_RE.match(version):
            raise ValueError(f"invalid kubernetes minor version: {version}")
        return version


class ToolResult(BaseModel):
    """Text content returned by a tool."""

    text: str = Field("", description="Extracted document content")


class ReleaseNotesDocument(BaseModel):
    """Raw release notes markup submitted for extraction."""

    html: str


class ChangelogDocument(BaseModel):
    """Raw changelog text submitted for filtering."""

    text: str


# ---------------------------------------------------------------------------
# Prompt Schemas
# ---------------------------------------------------------------------------


class PromptArgument(BaseModel):
    """One argument a prompt accepts."""

    name: str
    description: str
    required: bool = False


class PromptSpec(BaseModel):
    """Description of a prompt and its arguments."""

    name: str
    description: str
    arguments: list[PromptArgument] = Field(default_factory=list)


class UpgradeRiskReportArgs(BaseModel):
    """Arguments of the gke:upgraderiskreport prompt.

    Cluster name and location are required and may not be blank.
    Target version is optional; the prompt asks the user for one if unset.
    """

    cluster_name: str = ""
    cluster_location: str = ""
    target_version: str = ""

    @field_validator("cluster_name", "cluster_location", "target_version", mode="before")
    @classmethod
    def strip_whitespace(cls, value: str | None) -> str:
        return (value or "").strip()


class PromptMessage(BaseModel):
    role: MessageRole = MessageRole.USER
    text: str


class PromptResult(BaseModel):
    """Rendered prompt, ready to hand to a client."""

    description: str
    messages: list[PromptMessage] = Field(default_factory=list)
