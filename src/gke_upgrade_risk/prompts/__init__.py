"""Prompt templates served to clients."""
