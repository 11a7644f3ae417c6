"""Remote structural CSV validation."""

import structlog
from pydantic import ValidationError

from nbfimport.errors import BridgeError
from nbfimport.schemas.verdict import ValidationVerdict
from nbfimport.services.bridge.base import VALIDATE_CSV, NativeBridgeProtocol

logger = structlog.get_logger(__name__)


class RemoteCsvValidator:
    """Ask the shell whether raw content is acceptable CSV."""

    def __init__(self, bridge: NativeBridgeProtocol):
        self.bridge = bridge

    async def validate(self, content: str) -> ValidationVerdict:
        """
        Validate raw content.

        The verdict is advisory; callers branch on ``is_valid`` and pass
        ``message`` through unchanged.
        """
        response = await self.bridge.invoke(VALIDATE_CSV, {"content": content})

        try:
            verdict = ValidationVerdict.model_validate(response)
        except ValidationError as e:
            raise BridgeError(f"{VALIDATE_CSV} returned a malformed verdict: {e}") from e

        logger.info("CSV validation verdict", is_valid=verdict.is_valid, message=verdict.message)
        return verdict
