"""
Snapshot Errors

Exception hierarchy for endpoint discovery and page capture.
Every error is chained to the httpx or Playwright exception that caused it.
"""


class SnapshotError(Exception):
    """Base class for all websnap errors."""


class DiscoveryError(SnapshotError):
    """Resolving the browser's debugging endpoint failed."""


class EndpointConnectionError(DiscoveryError, ConnectionError):
    """The /json/version request could not be sent or completed."""


class EndpointDecodeError(DiscoveryError, ValueError):
    """The /json/version response body is not valid JSON."""


class MissingFieldError(DiscoveryError):
    """The /json/version response has no usable webSocketDebuggerUrl."""


class CaptureError(SnapshotError):
    """A capture sequence against the remote browser failed."""


class SessionError(CaptureError):
    """Connecting to the browser or opening a page failed."""


class NavigationError(CaptureError):
    """The page could not be navigated to the target URL."""


class ActionError(CaptureError):
    """Device emulation, the capture itself, or closing the page failed."""


class DeadlineExceededError(CaptureError, TimeoutError):
    """The caller's deadline elapsed before the capture completed."""
