"""Application layer package."""

from cad_batch.application.batch_runner import BatchRunner
from cad_batch.application.validation import resolve_folder, validate_paths

__all__ = ["BatchRunner", "resolve_folder", "validate_paths"]
