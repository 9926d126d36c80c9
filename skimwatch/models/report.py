"""Pydantic model for the structured risk report produced by one run."""

from __future__ import annotations

import pydantic
from skimwatch.utils import serialization


class Report(pydantic.BaseModel):
    """Aggregated analysis result.

    ``filtered_requests`` is ``None`` when no request listing was
    asked for; ``unexpected_requests`` is ``None`` when no expectation
    list was configured (no check performed), which is distinct from
    an empty list (checked, nothing unexpected).
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    filtered_requests: list[str] | None = None
    matched_indicators: list[str] = pydantic.Field(default_factory=list)
    unexpected_requests: list[str] | None = None

    @property
    def expectation_checked(self) -> bool:
        """Whether an expectation list was applied in this run."""
        return self.unexpected_requests is not None
