"""Native shell detection."""

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MARKER = "NBFAPP"


def is_native_context(user_agent: str | None, marker: str = DEFAULT_MARKER) -> bool:
    """Return True when the user agent carries the native shell marker."""
    return marker in (user_agent or "")


class EnvironmentDetector:
    """
    Capability query for the native bridge.

    A bridge object exposing a callable ``invoke`` is taken as proof of the
    native shell. The user-agent marker is kept as a compatibility fallback
    for hosts that inject the marker but hand the bridge over later.

    Usage:
        detector = EnvironmentDetector(user_agent=ua, bridge=bridge)
        if detector.is_available():
            ...
    """

    def __init__(
        self,
        user_agent: str | None = None,
        bridge: object | None = None,
        marker: str = DEFAULT_MARKER,
    ):
        self.user_agent = user_agent
        self.bridge = bridge
        self.marker = marker

    def has_bridge(self) -> bool:
        return callable(getattr(self.bridge, "invoke", None))

    def is_available(self) -> bool:
        """Check whether native features can be used."""
        if self.has_bridge():
            return True

        available = is_native_context(self.user_agent, self.marker)
        logger.debug(
            "Bridge not present, using user agent fallback",
            marker=self.marker,
            available=available,
        )
        return available
