from __future__ import annotations

class ScavengerHuntError(Exception):
    """Base exception for the application."""

class TaskLookupError(ScavengerHuntError, LookupError):
    """Raised when a task reference does not name a task in the store."""

class TaskIndexError(TaskLookupError, IndexError):
    """Raised when a positional task index is out of range."""

class TaskNotFoundError(TaskLookupError, KeyError):
    """Raised when a task id is unknown."""

class TaskNotCompletedError(ScavengerHuntError):
    """Raised when uploading a task that has no photo attached."""

class UploadInProgressError(ScavengerHuntError):
    """Raised when a task already has an upload in flight."""

class UploadFailedError(ScavengerHuntError):
    """Raised for an upload that finished without success."""

    def __init__(self, outcome, message: str = "") -> None:
        self.outcome = outcome
        super().__init__(message or f"Upload did not succeed ({outcome.value}).")

class HuntDefinitionError(ScavengerHuntError):
    """Raised when a hunt definition file cannot be used."""
