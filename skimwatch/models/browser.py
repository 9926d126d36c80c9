"""Outcome of loading the target page in the capture browser."""

from __future__ import annotations

import pydantic


class NavigationResult(pydantic.BaseModel):
    """Whether the page loaded, and what the main document returned.

    ``status_code`` is ``None`` when no document response was received
    (navigation error, or a same-document navigation).
    """

    model_config = pydantic.ConfigDict(frozen=True)

    success: bool
    status_code: int | None = None
    status_text: str | None = None
    final_url: str | None = None
    error_message: str | None = None

    @classmethod
    def failed(cls, message: str) -> NavigationResult:
        return cls(success=False, error_message=message)

    @classmethod
    def from_status(cls, status: int, status_text: str, final_url: str) -> NavigationResult:
        """Build a result from the document response; 4xx/5xx count as failures."""
        if status >= 400:
            return cls(
                success=False,
                status_code=status,
                status_text=status_text,
                final_url=final_url,
                error_message=f"Server error ({status}: {status_text})",
            )
        return cls(success=True, status_code=status, status_text=status_text, final_url=final_url)
