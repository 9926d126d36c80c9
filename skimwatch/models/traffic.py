"""Pydantic models for captured network traffic: request entries and the traffic log."""

from __future__ import annotations

import pydantic

_CONTENT_TYPE = "content-type"


class RequestEntry(pydantic.BaseModel):
    """A single completed network exchange from one page load.

    ``response_headers`` is empty when no response was received
    (e.g. a failed or aborted load).  ``method`` and ``status`` are
    carried only so that a captured log persists as a valid HAR.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    request_url: str
    response_headers: tuple[tuple[str, str], ...] = ()
    method: str = "GET"
    status: int | None = None

    def content_types(self) -> list[str]:
        """Return every ``content-type`` header value (name matched case-insensitively)."""
        return [value for name, value in self.response_headers if name.lower() == _CONTENT_TYPE]


class TrafficLog(pydantic.BaseModel):
    """Ordered, immutable sequence of request entries for one page load."""

    model_config = pydantic.ConfigDict(frozen=True)

    entries: tuple[RequestEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def urls(self) -> list[str]:
        """Return the raw request URLs in log order (duplicates kept)."""
        return [entry.request_url for entry in self.entries]
