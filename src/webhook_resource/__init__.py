"""Concourse resource that keeps a GitHub repository webhook in sync."""

__version__ = "1.0.0"
