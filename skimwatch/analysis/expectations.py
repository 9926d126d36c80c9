"""Expectation classification: requests outside the expected destinations.

The logical inverse of indicator classification.  When no expectation
list is configured the check is not performed at all and the result
is ``None``, which callers must keep distinct from an empty list.
"""

from __future__ import annotations

from skimwatch.analysis import patterns
from skimwatch.models import traffic
from skimwatch.utils import logger

log = logger.create_logger("Expectations")


def classify_unexpected(
    traffic_log: traffic.TrafficLog,
    expectation_set: patterns.Matcher | None,
) -> list[str] | None:
    """Return request URLs matching no expected fragment, in log order.

    Duplicates are kept.  Returns ``None`` when *expectation_set* is absent.
    """
    if expectation_set is None:
        log.info("No expectation list configured, skipping expected-domain check")
        return None

    unexpected = [url for url in traffic_log.urls() if not expectation_set.matches_any(url)]
    log.info("Expected-domain check complete", {"requests": len(traffic_log), "unexpected": len(unexpected)})
    return unexpected
