"""GKE Upgrade Risk context service.

Fetches GKE release notes and Kubernetes changelogs, strips them down to
the content that can affect an upgrade, and renders the upgrade risk
report prompt that consumes them.
"""

__version__ = "0.1.0"
