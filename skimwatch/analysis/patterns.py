"""
Compiled pattern sets for request classification.

A pattern set is an ordered list of regex fragments, each compiled on
its own and tried in turn, so inline flags (``(?i)...``) and numbered
back-references inside a fragment behave exactly as they would alone.
The same type backs both the indicator list (known skimmer hosts and
paths) and the optional expectation list (trusted destinations).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from skimwatch.utils.errors import ConfigurationError


class Matcher(Protocol):
    """Anything that can answer "does this text contain any known fragment"."""

    def matches_any(self, text: str) -> bool: ...

    def __len__(self) -> int: ...


class PatternSet:
    """An immutable, non-empty set of compiled fragments.

    Matching is an unanchored search anywhere in the text.  It is
    case-sensitive unless the set was compiled with ``ignore_case``
    or a fragment carries its own inline flag.

    Use :meth:`compile` rather than the constructor directly; it
    validates the fragments and reports which one fails.
    """

    __slots__ = ("_fragments", "_ignore_case", "_compiled")

    def __init__(self, fragments: tuple[str, ...], compiled: tuple[re.Pattern[str], ...], ignore_case: bool) -> None:
        self._fragments = fragments
        self._compiled = compiled
        self._ignore_case = ignore_case

    @classmethod
    def compile(cls, fragments: Iterable[str], *, ignore_case: bool = False) -> PatternSet:
        """Compile *fragments* into a pattern set.

        Raises:
            ConfigurationError: If there are no fragments, a fragment is
                empty, or a fragment is not a valid regular expression.
        """
        frozen = tuple(fragments)
        if not frozen:
            raise ConfigurationError("Pattern set is empty; at least one fragment is required")

        flags = re.IGNORECASE if ignore_case else 0
        compiled: list[re.Pattern[str]] = []
        for fragment in frozen:
            # An empty fragment would match every URL.
            if not fragment:
                raise ConfigurationError("Pattern set contains an empty fragment")
            try:
                compiled.append(re.compile(fragment, flags))
            except re.error as exc:
                raise ConfigurationError(f"Invalid pattern fragment {fragment!r}: {exc}") from exc

        return cls(frozen, tuple(compiled), ignore_case)

    @property
    def fragments(self) -> tuple[str, ...]:
        return self._fragments

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def matches_any(self, text: str) -> bool:
        """Return True if any fragment occurs anywhere in *text*."""
        return any(p.search(text) for p in self._compiled)

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        return f"PatternSet({len(self._fragments)} fragments, ignore_case={self._ignore_case})"
