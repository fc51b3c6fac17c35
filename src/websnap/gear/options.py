"""
Snapshot Options

Capture settings are built by applying option callables, in order,
to a SnapshotOptions record. A later option overwrites an earlier one
on the same field and leaves every other field alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class SnapshotFormat(str, Enum):
    """Supported output formats."""

    MHTML = "mhtml"
    PDF = "pdf"


@dataclass
class SnapshotOptions:
    """Rendering options for a single capture."""

    width: int = 0
    height: int = 0
    scale_factor: float = 0.0
    mobile: bool = False
    format: str = ""  # "pdf" selects PDF, anything else MHTML

    def wants_pdf(self) -> bool:
        return self.format == SnapshotFormat.PDF

    def device_metrics(self) -> dict[str, Any]:
        """Parameters for Emulation.setDeviceMetricsOverride."""
        return {
            "width": self.width,
            "height": self.height,
            "deviceScaleFactor": self.scale_factor,
            "mobile": self.mobile,
        }


SnapshotOption = Callable[[SnapshotOptions], None]


def width_option(width: int) -> SnapshotOption:
    def apply(opts: SnapshotOptions) -> None:
        opts.width = width

    return apply


def height_option(height: int) -> SnapshotOption:
    def apply(opts: SnapshotOptions) -> None:
        opts.height = height

    return apply


def scale_factor_option(factor: float) -> SnapshotOption:
    def apply(opts: SnapshotOptions) -> None:
        opts.scale_factor = factor

    return apply


def mobile_option(mobile: bool) -> SnapshotOption:
    def apply(opts: SnapshotOptions) -> None:
        opts.mobile = mobile

    return apply


def format_option(format: str) -> SnapshotOption:
    def apply(opts: SnapshotOptions) -> None:
        opts.format = format

    return apply


def apply_options(*options: SnapshotOption, base: SnapshotOptions | None = None) -> SnapshotOptions:
    """
    Apply options in the order given.

    Args:
        options: Option callables, applied first to last
        base: Record to update in place (a fresh one if omitted)

    Returns:
        The updated SnapshotOptions
    """
    opts = base if base is not None else SnapshotOptions()
    for option in options:
        option(opts)
    return opts
