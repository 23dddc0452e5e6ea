"""Sync portfolio projects from a GitHub account into local config files."""

__version__ = "1.0.0"
