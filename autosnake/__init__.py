"""Autonomous grid snake steered by A* search."""

__version__ = "0.1.0"
