"""File acquisition through the native bridge."""

import structlog

from nbfimport.errors import BridgeError, ReadError
from nbfimport.services.bridge.base import PICK_CSV_FILE, READ_TEXT, NativeBridgeProtocol

logger = structlog.get_logger(__name__)

DEFAULT_MAX_BYTES = 2_000_000


class NativeAcquisitionAdapter:
    """
    Let the user pick a CSV file and read it through the shell.

    Both calls suspend on the bridge. Cancelling the picker is a normal
    outcome and comes back as ``None``; read failures are raised as
    ``ReadError`` and never retried.
    """

    def __init__(self, bridge: NativeBridgeProtocol | None):
        self.bridge = bridge

    async def _invoke(self, command: str, args: dict | None = None):
        if self.bridge is None:
            raise BridgeError("Native bridge is not connected")
        return await self.bridge.invoke(command, args)

    async def pick_file(self) -> str | None:
        """Open the native picker. Returns None if the user cancelled."""
        path = await self._invoke(PICK_CSV_FILE)

        if path is None or path == "":
            logger.debug("File selection cancelled")
            return None
        if not isinstance(path, str):
            raise BridgeError(f"{PICK_CSV_FILE} returned {type(path).__name__}, expected a path")

        logger.info("File selected", path=path)
        return path

    async def read_text(self, path: str, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
        """
        Read the file content, bounded at ``max_bytes``.

        Raises:
            ReadError: path invalid, unreadable or larger than the bound
        """
        try:
            content = await self._invoke(
                READ_TEXT,
                {"path": path, "max_bytes": max_bytes},
            )
        except Exception as e:
            raise ReadError(path, str(e)) from e

        if not isinstance(content, str):
            raise ReadError(path, f"{READ_TEXT} returned {type(content).__name__}, expected text")

        logger.info("File read", path=path, chars=len(content))
        return content
