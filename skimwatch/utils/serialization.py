"""Shared serialization helpers for report output.

Provides the ``snake_to_camel`` alias generator used by the
report model, and the single JSON rendering used for both
``--json`` console output and ``--output`` files.
"""

from __future__ import annotations

import pydantic


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"matched_indicators"``.

    Returns:
        The camelCase equivalent, e.g. ``"matchedIndicators"``.
    """
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)


def to_json(model: pydantic.BaseModel, indent: int = 2) -> str:
    """Serialise *model* with camelCase keys, omitting absent fields.

    Fields set to ``None`` are dropped entirely so that an absent
    optional section is distinguishable from an empty list.
    """
    return model.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
