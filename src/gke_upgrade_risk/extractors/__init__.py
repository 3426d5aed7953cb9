"""Extractors that reduce raw release documents to risk-relevant text.

Both extractors are pure text-to-text transforms. They share no state and
never fetch anything themselves; the tools layer feeds them documents.
"""
