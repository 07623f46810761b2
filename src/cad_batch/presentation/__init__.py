"""Presentation layer package."""

from cad_batch.presentation.cli import main, build_parser

__all__ = ["main", "build_parser"]
