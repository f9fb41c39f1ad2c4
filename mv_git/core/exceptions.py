"""
Custom exceptions for mv-git.

Provides a hierarchy of exceptions for the validation, scan and
transfer stages, so callers can tell top-level failures apart from
per-repository ones.
"""


class RelocationError(Exception):
    """Base exception for all relocation errors."""

    def __init__(self, message: str, stage: str = None, details: dict = None):
        super().__init__(message)
        self.stage = stage
        self.details = details or {}

    def __str__(self):
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class SourceNotFoundError(RelocationError):
    """Raised when the source directory does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Source path does not exist: {path}",
            stage="Validation",
            details={"path": path},
        )


class SourceNotADirectoryError(RelocationError):
    """Raised when the source path exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__(
            f"Source path is not a directory: {path}",
            stage="Validation",
            details={"path": path},
        )


class DestinationError(RelocationError):
    """Raised when the destination cannot be used or created."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Destination unusable: {reason}",
            stage="Validation",
            details={"path": path, "reason": reason},
        )


class RelocationIOError(RelocationError):
    """Raised when a filesystem operation fails during scan or transfer."""

    def __init__(self, message: str, path: str = None, cause: OSError = None):
        super().__init__(
            message,
            stage="Transfer",
            details={"path": path, "cause": str(cause) if cause else None},
        )
        self.path = path
        self.cause = cause


class ConfigurationError(RelocationError):
    """Raised when configuration cannot be loaded."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, stage="Configuration", details=details)
