"""opskit - small command-line helpers for routine DevOps chores."""

__version__ = "0.1.0"
