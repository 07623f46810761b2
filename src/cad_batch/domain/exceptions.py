"""Domain exceptions for the CAD batch runner."""


class DomainException(Exception):
    """Base exception for all domain errors."""
    pass


class ConfigurationError(DomainException):
    """Raised when configuration is invalid or a required path is missing."""
    pass


class BackupCleanupError(DomainException):
    """Raised when a stray backup artifact cannot be deleted."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not delete backup file {path}: {reason}")
