"""
HAR (HTTP Archive) reading and writing for traffic logs.

Only the parts of HAR 1.2 the analysis needs are read: each entry's
``request.url`` (and method), plus ``response.status`` and
``response.headers``.  Entry order is preserved.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from skimwatch import __version__
from skimwatch.models import traffic
from skimwatch.utils import errors, logger

log = logger.create_logger("HAR")


def _parse_headers(raw: Any) -> tuple[tuple[str, str], ...]:
    """Convert a HAR header list into ``(name, value)`` pairs, skipping junk."""
    if not isinstance(raw, list):
        return ()
    pairs: list[tuple[str, str]] = []
    for header in raw:
        if isinstance(header, dict) and "name" in header:
            pairs.append((str(header["name"]), str(header.get("value", ""))))
    return tuple(pairs)


def parse_har(data: Any, source: str = "<memory>") -> traffic.TrafficLog:
    """Build a traffic log from decoded HAR JSON.

    Raises:
        InputError: If the document has no ``log.entries`` list or an
            entry lacks a ``request.url`` string.
    """
    har_log = data.get("log") if isinstance(data, dict) else None
    raw_entries = har_log.get("entries") if isinstance(har_log, dict) else None
    if not isinstance(raw_entries, list):
        raise errors.InputError(f"Not a HAR traffic log (missing log.entries): {source}")

    entries: list[traffic.RequestEntry] = []
    for index, raw in enumerate(raw_entries):
        request = raw.get("request") if isinstance(raw, dict) else None
        request_url = request.get("url") if isinstance(request, dict) else None
        if not isinstance(request_url, str):
            raise errors.InputError(f"HAR entry {index} has no request URL: {source}")

        response = raw.get("response")
        if not isinstance(response, dict):
            response = {}
        status = response.get("status")
        entries.append(
            traffic.RequestEntry(
                request_url=request_url,
                response_headers=_parse_headers(response.get("headers")),
                method=str(request.get("method") or "GET"),
                # Chrome writes status 0 for requests that never completed.
                status=status if isinstance(status, int) and status > 0 else None,
            )
        )
    return traffic.TrafficLog(entries=tuple(entries))


def load_traffic_log(path: pathlib.Path) -> traffic.TrafficLog:
    """Load a previously saved HAR file.

    Raises:
        InputError: If the file does not exist, cannot be read, is not
            valid JSON, or is not a HAR traffic log.
    """
    if not path.is_file():
        raise errors.InputError(f"Traffic log not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise errors.InputError(f"Invalid JSON in {path}: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise errors.InputError(f"Traffic log is not UTF-8 text: {path}") from exc
    except OSError as exc:
        raise errors.InputError(f"Traffic log could not be read: {path} ({exc.strerror or exc})") from exc

    traffic_log = parse_har(data, str(path))
    log.info("Traffic log loaded", {"path": str(path), "entries": len(traffic_log)})
    return traffic_log


def to_har(traffic_log: traffic.TrafficLog) -> dict[str, Any]:
    """Render *traffic_log* as a HAR 1.2 document."""
    return {
        "log": {
            "version": "1.2",
            "creator": {"name": "skimwatch", "version": __version__},
            "pages": [],
            "entries": [
                {
                    "request": {
                        "method": entry.method,
                        "url": entry.request_url,
                        "headers": [],
                    },
                    "response": {
                        "status": entry.status or 0,
                        "headers": [{"name": n, "value": v} for n, v in entry.response_headers],
                    },
                }
                for entry in traffic_log.entries
            ],
        }
    }


def save_traffic_log(traffic_log: traffic.TrafficLog, directory: pathlib.Path, name: str) -> pathlib.Path:
    """Write *traffic_log* to ``<directory>/<name>.har`` and return the path.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    path = directory / f"{name}.har"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(to_har(traffic_log), indent=4), encoding="utf-8")
    except OSError as exc:
        raise errors.OutputError(f"Traffic log could not be saved to {path}: {exc.strerror or exc}") from exc
    log.info("Traffic log saved", {"path": str(path), "entries": len(traffic_log)})
    return path
