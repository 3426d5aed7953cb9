"""Shared fixtures: sample documents, configs and fetchers."""

from __future__ import annotations

import pytest

from gke_upgrade_risk.config import AppConfig
from gke_upgrade_risk.context.fetcher import MockDocumentFetcher

RELEASE_NOTES_HTML = """<!DOCTYPE html>
<html>
<head><title>GKE release notes</title></head>
<body>
<nav class="devsite-nav">Overview Guides Reference</nav>
<div class="releases">
  <h2 id="May_20_2025">May 20, 2025</h2>
  <div class="release-feature">
    <div class="devsite-heading"><h3 data-text="Feature">Feature</h3></div>
    <p>Node auto-provisioning now supports custom compute classes.</p>
  </div>
  <div class="release-changed">
    <div class="devsite-heading"><h3 data-text="(2025-R20) Version updates">Version updates</h3></div>
    <p>Version 1.32.4-gke.1106000 is now the default version.</p>
  </div>
  <div class="release-security">
    <div class="devsite-heading"><h3 data-text="Security updates">Security updates</h3></div>
    <p>Patched CVE-2025-0001 in containerd.</p>
  </div>
</div>
<div class="releases">
  <h2 id="May_13_2025">May 13, 2025</h2>
  <div class="release-deprecated">
    <div class="devsite-heading"><h3 data-text="Deprecated">Deprecated</h3></div>
    <p>The v1beta1 FlowSchema API is removed in 1.33.</p>
  </div>
</div>
<footer>Except as otherwise noted, the content of this page is licensed.</footer>
</body>
</html>
"""

CHANGELOG_MD = """<!-- BEGIN MUNGE: GENERATED_TOC -->

- [v1.33.1](#v1331)
  - [Downloads for v1.33.1](#downloads-for-v1331)
  - [Changelog since v1.33.0](#changelog-since-v1330)

<!-- END MUNGE: GENERATED_TOC -->

# v1.33.1


## Downloads for v1.33.1



### Source Code

filename | sha512 hash
-------- | -----------
[kubernetes.tar.gz](https://dl.k8s.io/v1.33.1/kubernetes.tar.gz) | `0a1b2c`

## Changelog since v1.33.0

## Changes by Kind

### Bug or Regression

- Fixed a kubelet crash when a pod had no containers. (#131500, @dev)

## Dependencies

### Added
_Nothing has changed._

### Changed
- golang.org/x/net: v0.33.0 → v0.38.0

# v1.33.0

## Downloads for v1.33.0

### Client Binaries

[kubernetes-client-linux-amd64.tar.gz](https://dl.k8s.io/v1.33.0/kubernetes-client-linux-amd64.tar.gz) | `3d4e5f`

## Changelog since v1.32.0

## Urgent Upgrade Notes

- The kube-proxy flag --masquerade-all is removed. (#130000, @dev)
"""

GKE_RELEASE_NOTES_URL = "https://docs.cloud.google.com/kubernetes-engine/docs/release-notes"
K8S_CHANGELOG_URL = (
    "https://raw.githubusercontent.com/kubernetes/kubernetes/refs/heads/master/"
    "CHANGELOG/CHANGELOG-1.33.md"
)


@pytest.fixture
def release_notes_html() -> str:
    return RELEASE_NOTES_HTML


@pytest.fixture
def changelog_md() -> str:
    return CHANGELOG_MD


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration."""
    return AppConfig()


@pytest.fixture
def mock_fetcher() -> MockDocumentFetcher:
    """Fetcher serving the sample release notes and the 1.33 changelog."""
    return MockDocumentFetcher(
        documents={
            GKE_RELEASE_NOTES_URL: RELEASE_NOTES_HTML,
            K8S_CHANGELOG_URL: CHANGELOG_MD,
        }
    )
