"""
websnap MCP Server

Exposes remote Chrome page capture as MCP tools.

Tools:
- snapshot_capture: Navigate a remote Chrome to a URL and store it as MHTML or PDF
- snapshot_browser_info: Report the remote browser's /json/version descriptor

Environment:
- WEBSNAP_BROWSER_ADDR: host:port of Chrome's remote debugging port (default 127.0.0.1:9222)
- WEBSNAP_STORAGE: directory captures are written to (default ./snapshots)
- WEBSNAP_DISCOVERY_TIMEOUT, WEBSNAP_CONNECT_TIMEOUT,
  WEBSNAP_NAVIGATION_TIMEOUT, WEBSNAP_WAIT_UNTIL: see load_config()
"""

import asyncio
import json
import logging
import os
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .errors import DeadlineExceededError, SnapshotError
from .gear.archive import CaptureResult, SnapshotStore
from .gear.capture import ChromeRemoteSnapshotter
from .gear.options import (
    SnapshotFormat,
    format_option,
    height_option,
    mobile_option,
    scale_factor_option,
    width_option,
)

logger = logging.getLogger("websnap")


def load_config(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Build the dotted-key config from WEBSNAP_* environment variables."""
    env = os.environ if environ is None else environ

    def number(name: str, default: str) -> float:
        value = env.get(name, default)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{name} must be a number, got {value!r}") from None

    return {
        "browser.addr": env.get("WEBSNAP_BROWSER_ADDR", "127.0.0.1:9222"),
        "storage.path": env.get("WEBSNAP_STORAGE", "./snapshots"),
        "discovery.timeout": number("WEBSNAP_DISCOVERY_TIMEOUT", "10"),
        "browser.connect_timeout": number("WEBSNAP_CONNECT_TIMEOUT", "30000"),
        "navigation.timeout": number("WEBSNAP_NAVIGATION_TIMEOUT", "30000"),
        "navigation.wait_until": env.get("WEBSNAP_WAIT_UNTIL", "load"),
    }


_config: dict[str, Any] | None = None


def get_config() -> dict[str, Any]:
    """Read the environment on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


# Create MCP server
server = Server("websnap")

_snapshotter: ChromeRemoteSnapshotter | None = None
_snapshotter_lock = asyncio.Lock()
_store: SnapshotStore | None = None


async def get_snapshotter() -> ChromeRemoteSnapshotter:
    """Resolve the browser endpoint on first use and reuse it afterwards."""
    global _snapshotter
    async with _snapshotter_lock:
        if _snapshotter is None:
            config = get_config()
            _snapshotter = await ChromeRemoteSnapshotter.create(config["browser.addr"], config=config)
        return _snapshotter


def get_store() -> SnapshotStore:
    global _store
    if _store is None:
        _store = SnapshotStore(get_config()["storage.path"])
    return _store


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available websnap tools."""
    return [
        Tool(
            name="snapshot_capture",
            description=(
                "Navigate a remote headless Chrome to a URL and archive the page, "
                "either as an MHTML snapshot (default) or as a PDF. "
                "Returns the stored file path, SHA-256 and size. "
                "error_type 'deadline_exceeded' means the capture timed out and may be retried."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "URL to capture",
                    },
                    "format": {
                        "type": "string",
                        "enum": [f.value for f in SnapshotFormat],
                        "description": "Output format (default: mhtml)",
                        "default": SnapshotFormat.MHTML.value,
                    },
                    "width": {
                        "type": "integer",
                        "description": "Emulated viewport width in device pixels (0 keeps the browser's)",
                    },
                    "height": {
                        "type": "integer",
                        "description": "Emulated viewport height in device pixels (0 keeps the browser's)",
                    },
                    "scale_factor": {
                        "type": "number",
                        "description": "Emulated device scale factor (0 keeps the browser's)",
                    },
                    "mobile": {
                        "type": "boolean",
                        "description": "Emulate a mobile device",
                    },
                    "timeout": {
                        "type": "number",
                        "description": "Deadline for the capture in seconds",
                    },
                },
                "required": ["url"],
            },
        ),
        Tool(
            name="snapshot_browser_info",
            description="Report the remote browser's version and debugger endpoint.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


async def capture(arguments: dict[str, Any]) -> CaptureResult:
    """Run one capture and store it, reporting failures as a result."""
    url = arguments["url"]
    fmt = arguments.get("format", SnapshotFormat.MHTML.value)

    options = [format_option(fmt)]
    if "width" in arguments:
        options.append(width_option(int(arguments["width"])))
    if "height" in arguments:
        options.append(height_option(int(arguments["height"])))
    if "scale_factor" in arguments:
        options.append(scale_factor_option(float(arguments["scale_factor"])))
    if "mobile" in arguments:
        options.append(mobile_option(bool(arguments["mobile"])))

    try:
        snapshotter = await get_snapshotter()
        stream = await snapshotter.snapshot(url, *options, timeout=arguments.get("timeout"))
    except DeadlineExceededError as e:
        return CaptureResult(success=False, url=url, error=str(e), error_type="deadline_exceeded")
    except SnapshotError as e:
        return CaptureResult(success=False, url=url, error=str(e), error_type=type(e).__name__)

    return get_store().save(url, stream.getvalue(), fmt)


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "snapshot_capture":
            result = (await capture(arguments)).to_dict()
        elif name == "snapshot_browser_info":
            snapshotter = await get_snapshotter()
            result = snapshotter.version.to_dict() if snapshotter.version else {"endpoint": snapshotter.endpoint}
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception(f"Tool {name} failed")
        return [TextContent(type="text", text=f"Error: {e!s}")]


def main() -> int:
    """Run the websnap MCP server."""
    if "-h" in sys.argv or "--help" in sys.argv:
        print(
            "Usage: websnap\n\n"
            "Runs the websnap MCP server over stdio.\n"
            "Set WEBSNAP_BROWSER_ADDR to the remote Chrome's debugging address."
        )
        return 0

    logging.basicConfig(level=logging.INFO)
    try:
        config = get_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.info(f"Starting websnap MCP server against {config['browser.addr']}...")
    asyncio.run(_run_server())
    return 0


async def _run_server() -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    main()
