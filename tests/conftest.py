"""
Shared fixtures: an in-process stand-in for a remote Chrome.

The fakes mirror the slice of playwright.async_api that websnap drives
(connect_over_cdp, new_context, new_page, new_cdp_session, goto, close, send)
and record every call so tests can check ordering and teardown.
"""

import asyncio
import base64

import httpx
import pytest

from websnap.gear.browser import session as session_module

MHTML_BODY = "From: <Saved by Blink>\r\nSubject: Test\r\nMIME-Version: 1.0\r\n\r\n<html></html>"
PDF_BODY = b"%PDF-1.4\n%fake\n%%EOF"

VERSION_PAYLOAD = {
    "Browser": "HeadlessChrome/120.0.6099.109",
    "Protocol-Version": "1.3",
    "User-Agent": "Mozilla/5.0 HeadlessChrome/120.0.6099.109",
    "V8-Version": "12.0.267.8",
    "WebKit-Version": "537.36",
    "webSocketDebuggerUrl": "ws://localhost/devtools/browser/4f9c6a2e-0d7b-4c1a-9a55-6f3c0b8b1f21",
}


class FakeRemoteChrome:
    """Knobs and call records shared by all fake handles."""

    def __init__(self):
        self.events: list[str] = []
        self.cdp_calls: list[tuple[str, dict]] = []
        self.endpoints: list[str] = []
        self.goto_urls: list[str] = []
        self.goto_timeouts: list[float | None] = []
        self.connect_timeouts: list[float | None] = []

        self.connect_error: Exception | None = None
        self.context_error: Exception | None = None
        self.goto_error: Exception | None = None
        self.goto_delay: float = 0.0
        self.close_page_error: Exception | None = None
        self.cdp_errors: dict[str, Exception] = {}
        self.cdp_replies: dict[str, dict] = {}

        self.browser_closes = 0
        self.context_closes = 0
        self.page_closes = 0
        self.contexts_opened = 0

    def methods(self) -> list[str]:
        return [method for method, _ in self.cdp_calls]


class FakeCDPSession:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chrome = chrome

    async def send(self, method: str, params: dict | None = None) -> dict:
        self.chrome.cdp_calls.append((method, params or {}))
        self.chrome.events.append(method)
        if method in self.chrome.cdp_errors:
            raise self.chrome.cdp_errors[method]
        if method in self.chrome.cdp_replies:
            return self.chrome.cdp_replies[method]
        if method == "Page.captureSnapshot":
            return {"data": MHTML_BODY}
        if method == "Page.printToPDF":
            return {"data": base64.b64encode(PDF_BODY).decode()}
        return {}


class FakePage:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chrome = chrome

    async def goto(self, url: str, wait_until: str | None = None, timeout: float | None = None):
        self.chrome.goto_urls.append(url)
        self.chrome.goto_timeouts.append(timeout)
        self.chrome.events.append("goto")
        if self.chrome.goto_delay:
            await asyncio.sleep(self.chrome.goto_delay)
        if self.chrome.goto_error:
            raise self.chrome.goto_error
        return None

    async def close(self):
        self.chrome.page_closes += 1
        self.chrome.events.append("page.close")
        if self.chrome.close_page_error:
            raise self.chrome.close_page_error


class FakeContext:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chrome = chrome

    async def new_page(self):
        return FakePage(self.chrome)

    async def new_cdp_session(self, page):
        return FakeCDPSession(self.chrome)

    async def close(self):
        self.chrome.context_closes += 1
        self.chrome.events.append("context.close")


class FakeBrowser:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chrome = chrome

    async def new_context(self):
        if self.chrome.context_error:
            raise self.chrome.context_error
        self.chrome.contexts_opened += 1
        return FakeContext(self.chrome)

    async def close(self):
        self.chrome.browser_closes += 1
        self.chrome.events.append("browser.close")


class FakeChromium:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chrome = chrome

    async def connect_over_cdp(self, endpoint_url: str, timeout: float | None = None):
        self.chrome.endpoints.append(endpoint_url)
        self.chrome.connect_timeouts.append(timeout)
        if self.chrome.connect_error:
            raise self.chrome.connect_error
        return FakeBrowser(self.chrome)


class FakePlaywrightManager:
    def __init__(self, chrome: FakeRemoteChrome):
        self.chromium = FakeChromium(chrome)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def remote_chrome(monkeypatch) -> FakeRemoteChrome:
    """Route open_session() to an in-process fake browser."""
    chrome = FakeRemoteChrome()
    monkeypatch.setattr(session_module, "async_playwright", lambda: FakePlaywrightManager(chrome))
    return chrome


def version_transport(payload=VERSION_PAYLOAD, status_code: int = 200, seen: list | None = None):
    """httpx transport answering /json/version with payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)
