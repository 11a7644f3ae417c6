"""User-facing reporting of import outcomes."""

import sys
from typing import Protocol, TextIO

import structlog

from nbfimport.errors import EnvironmentUnavailable
from nbfimport.schemas.outcome import ImportOutcome, OutcomeKind

logger = structlog.get_logger(__name__)


class ReportSink(Protocol):
    """Protocol for the surface that shows a message to the user."""

    def notify(self, message: str) -> None:
        """Show a single notification."""
        ...


class LogSink:
    """Sink that only writes notifications to the log."""

    def notify(self, message: str) -> None:
        logger.info("User notification", message=message)


class ConsoleSink:
    """Sink that prints notifications to a stream."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def notify(self, message: str) -> None:
        print(message, file=self.stream, flush=True)


class ResultReporter:
    """
    Map an outcome to one user notification and one log entry.

    Cancelled runs are silent: nothing is shown and nothing is logged above
    debug level.
    """

    def __init__(self, sink: ReportSink | None = None):
        self.sink = sink or LogSink()

    def format_message(self, outcome: ImportOutcome) -> str | None:
        if outcome.kind == OutcomeKind.CANCELLED:
            return None
        if outcome.kind == OutcomeKind.SUCCEEDED:
            return f"SUCCESS: {outcome.message}"
        if outcome.kind == OutcomeKind.REJECTED_INVALID:
            return f"ERROR: Invalid CSV - {outcome.message}"
        if isinstance(outcome.error, EnvironmentUnavailable):
            return outcome.error.message
        return f"Import failed: {outcome.error or outcome.message}"

    def report(self, outcome: ImportOutcome) -> str | None:
        """Surface the outcome. Returns the message shown, if any."""
        message = self.format_message(outcome)

        if outcome.kind == OutcomeKind.CANCELLED:
            logger.debug("Import cancelled by user")
            return None

        if outcome.kind == OutcomeKind.SUCCEEDED:
            logger.info(
                "Import succeeded",
                message=outcome.message,
                entries=outcome.entries_submitted,
            )
        elif outcome.kind == OutcomeKind.REJECTED_INVALID:
            logger.error("CSV validation failed", message=outcome.message)
        elif isinstance(outcome.error, EnvironmentUnavailable):
            logger.warning("Native features unavailable", message=outcome.message)
        else:
            logger.error(
                "Import failed",
                error=str(outcome.error),
                error_type=type(outcome.error).__name__,
                exc_info=outcome.error,
            )

        self.sink.notify(message)
        return message
