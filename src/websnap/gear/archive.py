"""
Snapshot Archive

Writes captured bytes to disk and describes the result.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger("websnap.archive")


@dataclass
class CaptureResult:
    """Result of a capture operation."""

    success: bool
    url: str
    format: str | None = None
    path: str | None = None
    sha256: str | None = None
    size: int | None = None
    error: str | None = None
    error_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "url": self.url,
                "error": self.error,
                "error_type": self.error_type,
            }
        return {
            "success": True,
            "url": self.url,
            "format": self.format,
            "path": self.path,
            "sha256": self.sha256,
            "size": self.size,
        }


class SnapshotStore:
    """Stores snapshots as snapshot_<timestamp>_<urlhash>.<ext> files."""

    def __init__(self, storage_path: str | Path = "./snapshots"):
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def save(self, url: str, data: bytes, fmt: str) -> CaptureResult:
        ext = "pdf" if fmt == "pdf" else "mhtml"
        url_hash = hashlib.md5(url.encode()).hexdigest()[:8]
        path = self.storage_path / f"snapshot_{time.time_ns()}_{url_hash}.{ext}"
        path.write_bytes(data)

        logger.info(f"Stored {len(data)} bytes for {url} at {path}")
        return CaptureResult(
            success=True,
            url=url,
            format=ext,
            path=str(path),
            sha256=hashlib.sha256(data).hexdigest(),
            size=len(data),
        )
