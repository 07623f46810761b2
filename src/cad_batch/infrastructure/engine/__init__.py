"""CAD engine process package."""

from cad_batch.infrastructure.engine.console import EngineConsoleRunner

__all__ = ["EngineConsoleRunner"]
