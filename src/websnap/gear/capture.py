"""
Snapshot Capture Gear

Captures a webpage from a remote headless Chrome as an MHTML archive or a PDF.

One capture is a fixed sequence against a fresh page:
emulate device metrics, navigate, capture, close the page.
Any failing step aborts the rest and no bytes are returned.
"""

import asyncio
import io
import logging
from typing import Any, Awaitable, TypeVar

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..errors import ActionError, CaptureError, DeadlineExceededError, NavigationError
from .browser.session import open_session
from .discovery import BrowserVersion, resolve_endpoint
from .options import SnapshotOption, SnapshotOptions, apply_options
from .visual.freezer import VisualFreezer

logger = logging.getLogger("websnap.capture")

T = TypeVar("T")


async def _step(action: Awaitable[T], error: type[CaptureError], what: str) -> T:
    """
    Await one remote action, translating Playwright failures.

    Playwright's own per-call timeouts are step failures, not the
    caller's deadline, so they map to the step's error too.
    """
    try:
        return await action
    except PlaywrightTimeoutError as e:
        raise error(f"{what} timed out: {e}") from e
    except PlaywrightError as e:
        raise error(f"{what} failed: {e}") from e


class ChromeRemoteSnapshotter:
    """
    Snapshot service backed by a remote Chrome over the DevTools Protocol.

    The debugger endpoint is resolved once, at construction. Every call to
    snapshot() opens and tears down its own connection and page, so one
    instance can serve concurrent captures.
    """

    def __init__(
        self,
        endpoint: str,
        version: BrowserVersion | None = None,
        config: dict[str, Any] | None = None,
    ):
        self._endpoint = endpoint
        self.version = version
        self.config = config or {}
        self.connect_timeout = self.config.get("browser.connect_timeout", 30000)
        self.navigation_timeout = self.config.get("navigation.timeout", 30000)
        self.wait_until = self.config.get("navigation.wait_until", "load")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @classmethod
    async def create(
        cls,
        addr: str,
        client: httpx.AsyncClient | None = None,
        config: dict[str, Any] | None = None,
    ) -> "ChromeRemoteSnapshotter":
        """
        Build a snapshotter for the browser whose debugging port is at addr.

        Args:
            addr: host:port of the remote debugging port, such as 127.0.0.1:9222
            client: Optional httpx client used for endpoint discovery
            config: Optional dotted-key configuration

        Raises:
            EndpointConnectionError, EndpointDecodeError, MissingFieldError
        """
        config = config or {}
        version = await resolve_endpoint(addr, client, timeout=config.get("discovery.timeout", 10.0))
        return cls(version.endpoint, version=version, config=config)

    async def snapshot(
        self, url: str, *options: SnapshotOption, timeout: float | None = None
    ) -> io.BytesIO:
        """
        Capture url and return the archive or PDF bytes.

        Args:
            url: Page to capture, passed to the browser as is
            options: Option callables, applied in order
            timeout: Deadline in seconds for the whole sequence. When set, it
                replaces the configured connect and navigation limits.

        Returns:
            Readable stream over the captured bytes

        Raises:
            SessionError: The browser could not be reached or a page opened
            NavigationError: Navigating to url failed
            ActionError: Emulation, capture or closing the page failed
            DeadlineExceededError: The caller's deadline elapsed first
        """
        opts = apply_options(*options)

        try:
            data = await asyncio.wait_for(self._capture(url, opts, timeout is None), timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Snapshot of {url} exceeded its {timeout}s deadline")
            raise DeadlineExceededError(f"Snapshot of {url} exceeded {timeout}s deadline") from e
        except CaptureError as e:
            logger.error(f"Snapshot of {url} failed: {e}")
            raise

        logger.info(f"Captured {url} as {'pdf' if opts.wants_pdf() else 'mhtml'} ({len(data)} bytes)")
        return io.BytesIO(data)

    async def _capture(self, url: str, opts: SnapshotOptions, own_limits: bool = True) -> bytes:
        # With a caller deadline, Playwright waits without its own limit (0)
        connect_timeout = self.connect_timeout if own_limits else 0
        navigation_timeout = self.navigation_timeout if own_limits else 0

        async with open_session(self._endpoint, connect_timeout) as session:
            await _step(
                VisualFreezer.emulate_device(session.cdp, opts),
                ActionError,
                "Device metrics override",
            )

            logger.debug(f"Navigating to {url}")
            await _step(
                session.page.goto(url, wait_until=self.wait_until, timeout=navigation_timeout),
                NavigationError,
                f"Navigation to {url}",
            )

            if opts.wants_pdf():
                data = await _step(VisualFreezer.print_pdf(session.cdp), ActionError, "Print to PDF")
            else:
                data = await _step(
                    VisualFreezer.capture_mhtml(session.cdp), ActionError, "MHTML snapshot"
                )

            await _step(session.page.close(), ActionError, "Closing page")

        return data
