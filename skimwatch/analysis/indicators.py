"""Indicator classification: requests matching known-malicious fragments."""

from __future__ import annotations

from skimwatch.analysis import patterns
from skimwatch.models import traffic
from skimwatch.utils import errors, logger

log = logger.create_logger("Indicators")


def classify_indicators(
    traffic_log: traffic.TrafficLog,
    indicator_set: patterns.Matcher | None,
) -> list[str]:
    """Return every request URL that matches an indicator, in log order.

    Duplicates are kept: a matching request seen twice is reported
    twice, so the analyst sees how often it actually fired.

    Raises:
        ConfigurationError: If no indicator set (or an empty one) is given.
    """
    if indicator_set is None or len(indicator_set) == 0:
        raise errors.ConfigurationError("Indicator classification requires a non-empty indicator set")

    matched = [url for url in traffic_log.urls() if indicator_set.matches_any(url)]
    if matched:
        log.warn("Indicator matches found", {"matches": len(matched), "unique": len(set(matched))})
    else:
        log.success("No indicator matches", {"requests": len(traffic_log)})
    return matched
