"""Native bridge surface."""

from typing import Any, Protocol

# Command names exposed by the native shell
PICK_CSV_FILE = "pick_csv_file"
READ_TEXT = "read_text"
VALIDATE_CSV = "validate_csv"


class NativeBridgeProtocol(Protocol):
    """Protocol for the shell's invoke surface."""

    async def invoke(self, command: str, args: dict[str, Any] | None = None) -> Any:
        """Run a shell command and return its response."""
        ...
