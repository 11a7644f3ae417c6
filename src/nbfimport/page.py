"""Page-facing handle for the import pipeline.

The host page gets one ``ImportPage`` per load and calls its methods; there
is no other shared state.
"""

from typing import Callable

import structlog
from bs4 import BeautifulSoup

from nbfimport.schemas.outcome import ImportOutcome
from nbfimport.services.detection import EnvironmentDetector
from nbfimport.services.pipeline import ImportPipeline
from nbfimport.services.submission import SubmissionClient

logger = structlog.get_logger(__name__)

CSRF_META_NAME = "csrf-token"


def csrf_token_from_markup(html: str | None, meta_name: str = CSRF_META_NAME) -> str:
    """Return the content of ``<meta name="csrf-token">``, or "" if missing."""
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    meta = soup.find("meta", attrs={"name": meta_name})
    if meta is None:
        return ""
    return (meta.get("content") or "").strip()


class ImportPage:
    """
    Entry points exposed to the embedded website.

    Usage:
        page = create_page(user_agent=ua, bridge=bridge, csrf_token=token)
        if page.is_app():
            outcome = await page.import_csv_file()
    """

    def __init__(
        self,
        detector: EnvironmentDetector,
        pipeline_factory: Callable[[], ImportPipeline],
        submitter: SubmissionClient | None = None,
    ):
        self.detector = detector
        self.submitter = submitter
        self._pipeline_factory = pipeline_factory

    async def close(self) -> None:
        """Release the HTTP client held for submissions."""
        if self.submitter:
            await self.submitter.close()

    async def __aenter__(self) -> "ImportPage":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def is_app(self) -> bool:
        """Check whether the page runs inside the native shell."""
        return self.detector.is_available()

    async def import_csv_file(self) -> ImportOutcome:
        """Run one import and return once the outcome has been reported."""
        pipeline = self._pipeline_factory()
        outcome = await pipeline.run()
        logger.debug("Import finished", outcome=outcome.kind.value)
        return outcome

    async def pick_and_import_csv(self) -> ImportOutcome:
        """Legacy alias of ``import_csv_file``."""
        return await self.import_csv_file()
