"""
Remote Browser Session

Scoped access to a Chrome instance that is already running elsewhere.
Each session owns its own CDP connection, browser context and page, and
tears them down when the block exits, whether it succeeded, failed or
was cancelled.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable

from playwright.async_api import (
    Browser,
    BrowserContext,
    CDPSession,
    Error as PlaywrightError,
    Page,
    async_playwright,
)

from ...errors import SessionError

logger = logging.getLogger("websnap.browser")


@dataclass
class RemoteSession:
    """Handles for one open page on a remote browser."""

    browser: Browser
    context: BrowserContext
    page: Page
    cdp: CDPSession


async def _close_quietly(close: Callable[[], Awaitable[None]], what: str) -> None:
    try:
        await close()
    except Exception as e:
        logger.debug(f"Error closing {what}: {e}")


@asynccontextmanager
async def open_session(endpoint: str, connect_timeout: float = 30000) -> AsyncIterator[RemoteSession]:
    """
    Connect to the browser at endpoint and open a fresh page.

    Args:
        endpoint: Debugger WebSocket URL
        connect_timeout: connect_over_cdp timeout in milliseconds, 0 for none

    Raises:
        SessionError: The connection, context or page could not be opened,
            including a connect timeout
    """
    async with async_playwright() as p:
        try:
            browser = await p.chromium.connect_over_cdp(endpoint, timeout=connect_timeout)
        except PlaywrightError as e:
            raise SessionError(f"Failed to connect to {endpoint}: {e}") from e

        logger.debug(f"Connected to {endpoint}")
        try:
            try:
                context = await browser.new_context()
            except PlaywrightError as e:
                raise SessionError(f"Failed to create browser context: {e}") from e

            try:
                try:
                    page = await context.new_page()
                    cdp = await context.new_cdp_session(page)
                except PlaywrightError as e:
                    raise SessionError(f"Failed to open page: {e}") from e

                yield RemoteSession(browser=browser, context=context, page=page, cdp=cdp)
            finally:
                await _close_quietly(context.close, "browser context")
        finally:
            await _close_quietly(browser.close, "browser connection")
            logger.debug(f"Disconnected from {endpoint}")
