"""Batch runner for CAD console automation scripts."""

__version__ = "1.0.0"
