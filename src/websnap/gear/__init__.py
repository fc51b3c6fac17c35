"""Snapshot Gear - Remote Chrome capture implementations."""

from .capture import ChromeRemoteSnapshotter
from .discovery import BrowserVersion, resolve_endpoint, rewrite_loopback
from .options import (
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
    "resolve_endpoint",
    "rewrite_loopback",
    "SnapshotFormat",
    "SnapshotOption",
    "SnapshotOptions",
    "apply_options",
    "format_option",
    "height_option",
    "mobile_option",
    "scale_factor_option",
    "width_option",
]
