"""
Pattern list loading for indicator and expectation sets.

Pattern files hold one regex fragment per line.  Blank lines and
``#`` comments are skipped.  The indicator list is mandatory; the
expectation list is optional and a missing file yields ``None``.
"""

from __future__ import annotations

import pathlib

from skimwatch.analysis import patterns
from skimwatch.utils import errors, logger

log = logger.create_logger("Loader")

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent

DEFAULT_INDICATORS_FILE = _DATA_DIR / "url-patterns.txt"


def read_fragments(path: pathlib.Path) -> list[str]:
    """Read the pattern fragments listed in *path*.

    Raises:
        OSError: If *path* cannot be opened or read.
        UnicodeDecodeError: If *path* is not UTF-8 text.
    """
    text = path.read_text(encoding="utf-8")
    fragments: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            fragments.append(stripped)
    return fragments


def _read_list(path: pathlib.Path, label: str) -> list[str]:
    """Read a pattern list, reporting unreadable files as configuration errors."""
    try:
        fragments = read_fragments(path)
    except UnicodeDecodeError as exc:
        raise errors.ConfigurationError(f"{label} is not UTF-8 text: {path}") from exc
    except OSError as exc:
        raise errors.ConfigurationError(f"{label} could not be read: {path} ({exc.strerror or exc})") from exc
    if not fragments:
        raise errors.ConfigurationError(f"{label} is empty: {path}")
    return fragments


def load_indicator_set(path: pathlib.Path, *, ignore_case: bool = False) -> patterns.PatternSet:
    """Load the known-malicious indicator list.

    Raises:
        ConfigurationError: If the file is missing, unreadable, holds no
            fragments, or a fragment does not compile.
    """
    if not path.is_file():
        raise errors.ConfigurationError(f"Indicator list not found: {path}")
    fragments = _read_list(path, "Indicator list")
    indicator_set = patterns.PatternSet.compile(fragments, ignore_case=ignore_case)
    log.info("Indicator list loaded", {"path": str(path), "fragments": len(indicator_set)})
    return indicator_set


def load_expectation_set(path: pathlib.Path | None, *, ignore_case: bool = False) -> patterns.PatternSet | None:
    """Load the expected-destination list, if one is configured.

    A missing file (or no path at all) is a normal condition and
    returns ``None``.

    Raises:
        ConfigurationError: If the file exists but is unreadable or
            holds no fragments, or a fragment does not compile.
    """
    if path is None or not path.is_file():
        log.debug("No expectation list available", {"path": str(path) if path else None})
        return None
    fragments = _read_list(path, "Expectation list")
    expectation_set = patterns.PatternSet.compile(fragments, ignore_case=ignore_case)
    log.info("Expectation list loaded", {"path": str(path), "fragments": len(expectation_set)})
    return expectation_set
