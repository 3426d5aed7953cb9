"""Context-building modules for gathering raw release documents.

These modules fetch the documents (release notes pages, changelog files)
that the extractors reduce to upgrade-relevant content.
"""
