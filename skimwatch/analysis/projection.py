"""
Request projection: the filtered, shaped, de-duplicated request listing.

Projection needs a structurally valid URL, so entries whose URL cannot
be decomposed are left out here (they are still classified, since
classification works on the raw string).
"""

from __future__ import annotations

from skimwatch.models import traffic, view
from skimwatch.utils import logger
from skimwatch.utils import url as url_mod

log = logger.create_logger("Projection")


def passes_content_type(entry: traffic.RequestEntry, terms: frozenset[str] | None) -> bool:
    """Whether *entry* has a ``content-type`` value containing any of *terms*.

    With no terms every entry passes; with terms, an entry without a
    ``content-type`` header never does.
    """
    if terms is None:
        return True
    return any(term in value.lower() for value in entry.content_types() for term in terms)


def shape_url(request_url: str, shape: view.UrlShape) -> str:
    """Render *request_url* in the requested shape.

    Raises:
        ValueError: If the URL cannot be decomposed into its components.
    """
    parts = url_mod.split_url(request_url)
    if shape == "domain":
        return url_mod.origin(parts)
    if shape == "no-params":
        return url_mod.without_query(parts)
    return request_url


def project(traffic_log: traffic.TrafficLog, cfg: view.ViewConfig) -> list[str]:
    """Build the request listing for *traffic_log* according to *cfg*.

    Entries are filtered by content type, shaped, then collapsed to
    unique strings sorted in ascending code-point order.
    """
    shaped: set[str] = set()
    malformed = 0
    for entry in traffic_log.entries:
        if not passes_content_type(entry, cfg.content_type_filter):
            continue
        try:
            shaped.add(shape_url(entry.request_url, cfg.url_shape))
        except ValueError:
            malformed += 1
            log.debug("Skipping unparseable URL", {"url": entry.request_url})

    if malformed:
        log.warn("Entries left out of the request listing (unparseable URL)", {"count": malformed})
    log.debug("Projected requests", {
        "entries": len(traffic_log),
        "listed": len(shaped),
        "shape": cfg.url_shape,
        "filtered": cfg.content_type_filter is not None,
    })
    return sorted(shaped)
