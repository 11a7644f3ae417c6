"""CSV import pipeline orchestration."""

from dataclasses import dataclass
from enum import Enum

import structlog

from nbfimport.errors import EnvironmentUnavailable
from nbfimport.schemas.outcome import ImportOutcome
from nbfimport.services.bridge.acquisition import DEFAULT_MAX_BYTES, NativeAcquisitionAdapter
from nbfimport.services.bridge.validator import RemoteCsvValidator
from nbfimport.services.detection import EnvironmentDetector
from nbfimport.services.parsing import normalize, parse_rows
from nbfimport.services.reporting import ResultReporter
from nbfimport.services.submission import SubmissionClient

logger = structlog.get_logger(__name__)


class PipelineState(str, Enum):
    """Pipeline states, in the order they may be visited."""

    IDLE = "idle"
    DETECTING = "detecting"
    ACQUIRING = "acquiring"
    VALIDATING = "validating"
    PARSING = "parsing"
    SUBMITTING = "submitting"
    REPORTED = "reported"


@dataclass
class PipelineConfig:
    """Configuration for the import pipeline."""

    validate: bool = True
    submit: bool = True
    max_bytes: int = DEFAULT_MAX_BYTES

    @classmethod
    def validate_only(cls, max_bytes: int = DEFAULT_MAX_BYTES) -> "PipelineConfig":
        """Structural validation, no submission."""
        return cls(validate=True, submit=False, max_bytes=max_bytes)

    @classmethod
    def parse_and_submit(cls, max_bytes: int = DEFAULT_MAX_BYTES) -> "PipelineConfig":
        """Parse and submit without asking the validator."""
        return cls(validate=False, submit=True, max_bytes=max_bytes)


class ImportPipeline:
    """
    One-shot CSV import.

    Flow:
    1. Detect the native shell
    2. Pick and read the file through the bridge
    3. Validate the content remotely (optional)
    4. Parse and normalize rows into entries
    5. Submit entries to the backend (optional)
    6. Report the outcome

    Any failure or cancellation jumps straight to reporting; downstream
    stages never run. Each call to ``run`` is independent.
    """

    def __init__(
        self,
        detector: EnvironmentDetector,
        acquisition: NativeAcquisitionAdapter,
        reporter: ResultReporter,
        validator: RemoteCsvValidator | None = None,
        submitter: SubmissionClient | None = None,
        config: PipelineConfig | None = None,
    ):
        self.config = config or PipelineConfig()
        if self.config.validate and validator is None:
            raise ValueError("validation is enabled but no validator was given")
        if self.config.submit and submitter is None:
            raise ValueError("submission is enabled but no submitter was given")

        self.detector = detector
        self.acquisition = acquisition
        self.reporter = reporter
        self.validator = validator
        self.submitter = submitter
        self.last_trace: list[PipelineState] = []

    def _enter(self, trace: list[PipelineState], state: PipelineState) -> None:
        if state in trace:
            raise RuntimeError(f"pipeline state {state.value} visited twice")
        trace.append(state)
        logger.debug("Pipeline state", state=state.value)

    async def run(self) -> ImportOutcome:
        """Run the pipeline once and return the reported outcome."""
        trace = [PipelineState.IDLE]
        self.last_trace = trace

        try:
            outcome = await self._execute(trace)
        except Exception as e:
            logger.debug("Import pipeline stopped", state=trace[-1].value, error=str(e))
            outcome = ImportOutcome.failed(e)

        self._enter(trace, PipelineState.REPORTED)
        self.reporter.report(outcome)
        return outcome

    async def _execute(self, trace: list[PipelineState]) -> ImportOutcome:
        self._enter(trace, PipelineState.DETECTING)
        if not self.detector.is_available():
            return ImportOutcome.failed(EnvironmentUnavailable())

        self._enter(trace, PipelineState.ACQUIRING)
        path = await self.acquisition.pick_file()
        if path is None:
            return ImportOutcome.cancelled()
        content = await self.acquisition.read_text(path, self.config.max_bytes)

        verdict_message = None
        if self.config.validate:
            self._enter(trace, PipelineState.VALIDATING)
            verdict = await self.validator.validate(content)
            if not verdict.is_valid:
                return ImportOutcome.rejected(verdict.message)
            verdict_message = verdict.message

        self._enter(trace, PipelineState.PARSING)
        entries = normalize(parse_rows(content))
        logger.info("CSV normalized", path=path, entries=len(entries))

        if self.config.submit:
            self._enter(trace, PipelineState.SUBMITTING)
            ack = await self.submitter.submit(entries)
            return ImportOutcome.succeeded(f"Imported {ack.entries} entries", ack.entries)

        if verdict_message is not None:
            return ImportOutcome.succeeded(verdict_message)
        return ImportOutcome.succeeded(f"Parsed {len(entries)} entries")
