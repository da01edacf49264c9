"""Loadstone: command-line access to the RuneScape 3 Wiki and RuneMetrics."""

__version__ = "0.1.0"
