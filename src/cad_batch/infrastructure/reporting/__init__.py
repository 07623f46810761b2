"""Session reporting package."""

from cad_batch.infrastructure.reporting.session_log import SessionLog

__all__ = ["SessionLog"]
