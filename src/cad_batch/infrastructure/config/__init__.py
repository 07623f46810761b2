"""Configuration package."""

from cad_batch.infrastructure.config.loader import ConfigLoader, BatchConfig

__all__ = ["ConfigLoader", "BatchConfig"]
