"""
Visual Freezer - "The Camera"

Handles MHTML snapshots and PDF printing.
Uses Chrome DevTools Protocol (CDP) commands sent through a page's CDP session.
"""

import base64
import logging

from playwright.async_api import CDPSession

from ...errors import ActionError
from ..options import SnapshotOptions

logger = logging.getLogger("websnap.visual")


def _reply_data(result: dict, method: str) -> str:
    data = result.get("data") if isinstance(result, dict) else None
    if not isinstance(data, str):
        raise ActionError(f"{method} reply carried no data")
    return data


class VisualFreezer:
    """
    Single-shot CDP actions against an open page: device emulation,
    MHTML serialization and print-to-PDF.
    """

    @staticmethod
    async def emulate_device(client: CDPSession, opts: SnapshotOptions) -> None:
        """Override viewport size, pixel ratio and mobile mode."""
        metrics = opts.device_metrics()
        logger.debug(f"Emulating device metrics {metrics}")
        await client.send("Emulation.setDeviceMetricsOverride", metrics)

    @staticmethod
    async def capture_mhtml(client: CDPSession) -> bytes:
        """
        Captures a full-page MHTML snapshot.
        This includes HTML, CSS, Images, and Frames in a single archive.
        """
        # Reference: https://chromedevtools.github.io/devtools-protocol/tot/Page/#method-captureSnapshot
        result = await client.send("Page.captureSnapshot", {"format": "mhtml"})

        # The archive comes back as one large string
        return _reply_data(result, "Page.captureSnapshot").encode("utf-8")

    @staticmethod
    async def print_pdf(client: CDPSession) -> bytes:
        """Prints the page to PDF with Chrome's default print settings."""
        result = await client.send("Page.printToPDF", {})
        return base64.b64decode(_reply_data(result, "Page.printToPDF"))
