"""Pydantic models describing how the request listing is presented."""

from __future__ import annotations

from typing import Literal

import pydantic

UrlShape = Literal[
    "full",
    "no-params",
    "domain",
]


class ViewConfig(pydantic.BaseModel):
    """User-selected request listing options.

    Attributes:
        content_type_filter: Case-insensitive substrings; an entry is
            listed only if one of its ``content-type`` values contains
            one of them.  ``None`` lists every entry.
        url_shape: How each listed URL is rendered.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    content_type_filter: frozenset[str] | None = None
    url_shape: UrlShape = "full"

    @pydantic.field_validator("content_type_filter")
    @classmethod
    def _normalise_terms(cls, terms: frozenset[str] | None) -> frozenset[str] | None:
        """Lower-case and strip terms, treating an empty selection as no filter."""
        if terms is None:
            return None
        cleaned = frozenset(t.strip().lower() for t in terms if t.strip())
        return cleaned or None
