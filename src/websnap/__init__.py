"""websnap - Capture webpages from a remote headless Chrome as MHTML or PDF."""

from .errors import (
    ActionError,
    CaptureError,
    DeadlineExceededError,
    DiscoveryError,
    EndpointConnectionError,
    EndpointDecodeError,
    MissingFieldError,
    NavigationError,
    SessionError,
    SnapshotError,
)
from .gear import (
    BrowserVersion,
    ChromeRemoteSnapshotter,
    SnapshotFormat,
    SnapshotOption,
    SnapshotOptions,
    apply_options,
    format_option,
    height_option,
    mobile_option,
    scale_factor_option,
    width_option,
)

__all__ = [
    "ChromeRemoteSnapshotter",
    "BrowserVersion",
    "SnapshotFormat",
    "SnapshotOption",
    "SnapshotOptions",
    "apply_options",
    "format_option",
    "height_option",
    "mobile_option",
    "scale_factor_option",
    "width_option",
    "SnapshotError",
    "DiscoveryError",
    "EndpointConnectionError",
    "EndpointDecodeError",
    "MissingFieldError",
    "CaptureError",
    "SessionError",
    "NavigationError",
    "ActionError",
    "DeadlineExceededError",
]
