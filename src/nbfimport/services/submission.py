"""Delivery of normalized entries to the persistence backend."""

from dataclasses import dataclass
from typing import Sequence

import httpx
import structlog

from nbfimport.errors import SubmissionError
from nbfimport.schemas.entry import Entry, ImportPayload

logger = structlog.get_logger(__name__)


@dataclass
class SubmissionAck:
    """Backend acknowledgement. Only the status is consumed."""

    status_code: int
    entries: int


class SubmissionClient:
    """
    POST entries to the backend import endpoint.

    One request per call, all-or-nothing from the caller's side, no retry.
    The anti-forgery token is supplied by the page; it is never computed here.
    """

    def __init__(
        self,
        base_url: str,
        csrf_token: str,
        import_path: str = "/api/import",
        csrf_header: str = "x-csrf-token",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.csrf_token = csrf_token
        self.import_path = import_path
        self.csrf_header = csrf_header
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.import_path}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SubmissionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def submit(self, entries: Sequence[Entry]) -> SubmissionAck:
        """
        Send entries in a single request.

        Raises:
            SubmissionError: network failure, timeout or non-2xx response
        """
        client = await self._get_client()
        payload = ImportPayload(entries=list(entries))

        try:
            response = await client.post(
                self.url,
                json=payload.model_dump(mode="json"),
                headers={
                    "Content-Type": "application/json",
                    self.csrf_header: self.csrf_token,
                },
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.debug("Import submission timed out", url=self.url)
            raise SubmissionError(f"Request to {self.url} timed out") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.debug("Import submission rejected", url=self.url, status=status)
            raise SubmissionError(f"Backend responded with HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.debug("Import submission failed", url=self.url, error=str(e))
            raise SubmissionError(f"Request to {self.url} failed: {e}") from e

        logger.info(
            "Entries submitted",
            url=self.url,
            entries=len(payload.entries),
            status=response.status_code,
        )
        return SubmissionAck(status_code=response.status_code, entries=len(payload.entries))
