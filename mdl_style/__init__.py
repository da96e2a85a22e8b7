"""Inspect, validate and edit markdownlint style files."""

__version__ = "0.1.0"
