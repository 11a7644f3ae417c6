"""Application wiring and command line entry point."""

import argparse
import asyncio
import logging
import sys

import httpx
import structlog

from nbfimport.config import Settings, get_settings
from nbfimport.page import ImportPage
from nbfimport.schemas.outcome import OutcomeKind
from nbfimport.services.bridge import (
    LocalShellBridge,
    NativeAcquisitionAdapter,
    NativeBridgeProtocol,
    RemoteCsvValidator,
)
from nbfimport.services.detection import EnvironmentDetector
from nbfimport.services.pipeline import ImportPipeline, PipelineConfig
from nbfimport.services.reporting import ConsoleSink, ReportSink, ResultReporter
from nbfimport.services.submission import SubmissionClient

logger = structlog.get_logger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.is_production else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_page(
    settings: Settings | None = None,
    user_agent: str | None = None,
    bridge: NativeBridgeProtocol | None = None,
    csrf_token: str | None = None,
    sink: ReportSink | None = None,
    http_client: httpx.AsyncClient | None = None,
    config: PipelineConfig | None = None,
) -> ImportPage:
    """
    Build the page handle. Call once per page load.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        user_agent: Embedded browser identification, used when no bridge is given
        bridge: Native shell invoke surface
        csrf_token: Anti-forgery token read from the page
        sink: Where user notifications go
        http_client: Shared httpx client for submissions
        config: Phase toggles; defaults come from settings
    """
    settings = settings or get_settings()
    config = config or PipelineConfig(
        validate=settings.validate_enabled,
        submit=settings.submit_enabled,
        max_bytes=settings.max_read_bytes,
    )

    if csrf_token is None and settings.csrf_token is not None:
        csrf_token = settings.csrf_token.get_secret_value()

    detector = EnvironmentDetector(
        user_agent=user_agent,
        bridge=bridge,
        marker=settings.user_agent_marker,
    )
    reporter = ResultReporter(sink)
    acquisition = NativeAcquisitionAdapter(bridge)
    validator = RemoteCsvValidator(bridge) if config.validate else None
    submitter = None
    if config.submit:
        submitter = SubmissionClient(
            base_url=settings.backend_url,
            csrf_token=csrf_token or "",
            import_path=settings.import_path,
            csrf_header=settings.csrf_header,
            timeout=settings.request_timeout,
            client=http_client,
        )

    def pipeline_factory() -> ImportPipeline:
        return ImportPipeline(
            detector=detector,
            acquisition=acquisition,
            reporter=reporter,
            validator=validator,
            submitter=submitter,
            config=config,
        )

    return ImportPage(detector, pipeline_factory, submitter=submitter)


def prompt_for_path() -> str | None:
    """Ask for a CSV path on stdin. A blank answer cancels."""
    try:
        answer = input("Path to CSV file (blank to cancel): ").strip()
    except EOFError:
        return None
    return answer or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nbf-import",
        description="Import a CSV file of metric entries into the backend.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="CSV file to import (prompted for if omitted)",
    )
    parser.add_argument("--backend", help="Backend base URL (default from NBF_BACKEND_URL)")
    parser.add_argument("--csrf-token", help="Anti-forgery token sent with the import request")
    parser.add_argument("--max-bytes", type=int, help="Largest file size accepted")
    parser.add_argument("--no-validate", action="store_true", help="Skip structural validation")
    parser.add_argument("--no-submit", action="store_true", help="Parse only, do not submit")
    return parser


async def _run_import(args: argparse.Namespace, settings: Settings) -> OutcomeKind:
    picker = (lambda: args.path) if args.path else prompt_for_path
    config = PipelineConfig(
        validate=settings.validate_enabled and not args.no_validate,
        submit=settings.submit_enabled and not args.no_submit,
        max_bytes=args.max_bytes or settings.max_read_bytes,
    )

    async with create_page(
        settings=settings,
        bridge=LocalShellBridge(picker=picker),
        csrf_token=args.csrf_token,
        sink=ConsoleSink(),
        config=config,
    ) as page:
        outcome = await page.import_csv_file()
    return outcome.kind


def run(argv: list[str] | None = None) -> int:
    """Run one import from the command line."""
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.backend:
        overrides["backend_url"] = args.backend
    settings = get_settings().model_copy(update=overrides) if overrides else get_settings()

    configure_logging(settings)
    logger.info(
        "Starting import",
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    kind = asyncio.run(_run_import(args, settings))
    return 0 if kind in (OutcomeKind.SUCCEEDED, OutcomeKind.CANCELLED) else 1


if __name__ == "__main__":
    sys.exit(run())
