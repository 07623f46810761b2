"""Shared utilities package."""

from cad_batch.shared.logging import setup_logger, get_logger, close_logger, LoggerAdapter
from cad_batch.shared.types import PathLike, Extensions

__all__ = [
    "setup_logger",
    "get_logger",
    "close_logger",
    "LoggerAdapter",
    "PathLike",
    "Extensions",
]
