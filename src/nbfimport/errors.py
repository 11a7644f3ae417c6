"""Exceptions raised along the import pipeline.

Cancellation and a negative validation verdict are outcomes, not errors,
so they have no exception type here.
"""


class ImportPipelineError(Exception):
    """Base class for terminal pipeline failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EnvironmentUnavailable(ImportPipelineError):
    """Native shell capabilities are not present."""

    def __init__(self, message: str = "App features unavailable in browser."):
        super().__init__(message)


class ReadError(ImportPipelineError):
    """The native reader could not return the file content."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return f"Could not read {self.path}: {self.message}"


class SubmissionError(ImportPipelineError):
    """The backend did not accept the entries."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BridgeError(ImportPipelineError):
    """The native bridge failed or answered outside its contract."""


class BridgeCommandError(BridgeError):
    """A bridge command reported a failure."""

    def __init__(self, command: str, message: str):
        super().__init__(message)
        self.command = command
