"""
FetchReceipt — the result contract between the installer and HTTP fetchers.

Fetchers never raise.  A fetch either succeeds with a body or fails
with an error string; the caller decides which installer error that
becomes (``NetworkError`` for the release index, ``DownloadError`` for
the archive).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class FetchReceipt(BaseModel):
    """Outcome of a single GET request."""

    fetcher: str
    url: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    body: bytes = b""
    http_status: int | None = None
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def size(self) -> int:
        return len(self.body)

    @classmethod
    def success(
        cls,
        fetcher: str,
        url: str,
        body: bytes,
        **kwargs: Any,
    ) -> FetchReceipt:
        """Create a success receipt."""
        return cls(fetcher=fetcher, url=url, status="ok", body=body, **kwargs)

    @classmethod
    def failure(
        cls,
        fetcher: str,
        url: str,
        error: str,
        **kwargs: Any,
    ) -> FetchReceipt:
        """Create a failure receipt."""
        return cls(fetcher=fetcher, url=url, status="failed", error=error, **kwargs)
