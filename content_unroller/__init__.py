# Content Unroller
"""Expands embedded content references by fetching them from the content store."""

__version__ = "1.0.0"
