"""Desktop host implementation of the native shell commands.

This is the shell side of the bridge: what ``invoke`` reaches when the
pipeline runs inside a Python host instead of the packaged app.
"""

import asyncio
import os
from pathlib import Path
from typing import Any, Callable

import structlog

from nbfimport.errors import BridgeCommandError, BridgeError
from nbfimport.services.bridge.base import PICK_CSV_FILE, READ_TEXT, VALIDATE_CSV
from nbfimport.services.parsing import parse_rows

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("date", "metric", "value")

Picker = Callable[[], str | None]


def check_csv_structure(content: str) -> dict[str, Any]:
    """
    Structural check used by ``validate_csv``.

    Returns the verdict in the wire shape ``{"is_valid", "message"}``.
    """
    rows = parse_rows(content)
    if not rows:
        return {"is_valid": False, "message": "File is empty"}

    header = [cell.lower() for cell in rows[0]]
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        return {
            "is_valid": False,
            "message": f"Missing required columns: {', '.join(missing)}",
        }

    data_rows = rows[1:]
    if not data_rows:
        return {"is_valid": False, "message": "No data rows"}

    expected = len(header)
    for number, row in enumerate(data_rows, start=2):
        if len(row) != expected:
            return {
                "is_valid": False,
                "message": f"Row {number} has {len(row)} fields, expected {expected}",
            }

    return {"is_valid": True, "message": f"CSV is valid ({len(data_rows)} rows)"}


class LocalShellBridge:
    """
    Native bridge backed by the local filesystem.

    Usage:
        bridge = LocalShellBridge(picker=lambda: "/tmp/data.csv")
        path = await bridge.invoke("pick_csv_file")
        text = await bridge.invoke("read_text", {"path": path, "max_bytes": 2_000_000})
    """

    def __init__(self, picker: Picker | None = None, encoding: str = "utf-8-sig"):
        self.picker = picker
        self.encoding = encoding
        self._commands: dict[str, Callable[..., Any]] = {
            PICK_CSV_FILE: self.pick_csv_file,
            READ_TEXT: self.read_text,
            VALIDATE_CSV: self.validate_csv,
        }

    async def invoke(self, command: str, args: dict[str, Any] | None = None) -> Any:
        """Dispatch a command by name."""
        handler = self._commands.get(command)
        if handler is None:
            raise BridgeError(f"Unknown command: {command}")

        logger.debug("Bridge command", command=command)
        return await handler(**(args or {}))

    async def pick_csv_file(self) -> str | None:
        if self.picker is None:
            return None

        loop = asyncio.get_event_loop()
        answer = await loop.run_in_executor(None, self.picker)
        if answer is None or not str(answer).strip():
            return None
        return str(answer).strip()

    async def read_text(self, path: str, max_bytes: int) -> str:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._read_bounded, path, max_bytes)

    async def validate_csv(self, content: str) -> dict[str, Any]:
        return check_csv_structure(content)

    def _read_bounded(self, path: str, max_bytes: int) -> str:
        p = Path(path)
        if not p.is_file():
            raise BridgeCommandError(READ_TEXT, "Not a file")

        try:
            size = os.stat(p).st_size
            if size > max_bytes:
                raise BridgeCommandError(READ_TEXT, "File too large")
            return p.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise BridgeCommandError(READ_TEXT, str(e)) from e
