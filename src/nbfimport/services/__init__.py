"""Import pipeline services."""

from nbfimport.services.detection import EnvironmentDetector, is_native_context
from nbfimport.services.parsing import normalize, parse_rows, parse_value
from nbfimport.services.pipeline import ImportPipeline, PipelineConfig, PipelineState
from nbfimport.services.reporting import ConsoleSink, LogSink, ReportSink, ResultReporter
from nbfimport.services.submission import SubmissionAck, SubmissionClient

__all__ = [
    "EnvironmentDetector",
    "is_native_context",
    "normalize",
    "parse_rows",
    "parse_value",
    "ImportPipeline",
    "PipelineConfig",
    "PipelineState",
    "ConsoleSink",
    "LogSink",
    "ReportSink",
    "ResultReporter",
    "SubmissionAck",
    "SubmissionClient",
]
