"""
URL decomposition helpers for request projection and file naming.
"""

from __future__ import annotations

from urllib import parse


def split_url(url: str) -> parse.SplitResult:
    """Split an absolute URL into its components.

    Raises:
        ValueError: If *url* has no scheme or host, or carries an
            invalid port or IPv6 literal.
    """
    parts = parse.urlsplit(url)
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Not an absolute URL: {url!r}")
    # Accessing .port validates it (raises ValueError when out of range).
    _ = parts.port
    return parts


def origin(parts: parse.SplitResult) -> str:
    """Return ``scheme://host[:port]`` for already split URL *parts*."""
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = f":{parts.port}" if parts.port is not None else ""
    return f"{parts.scheme.lower()}://{host}{port}"


def without_query(parts: parse.SplitResult) -> str:
    """Return the origin plus path, dropping query string and fragment."""
    return origin(parts) + parts.path


def is_web_url(target: str) -> bool:
    """Whether *target* names a page to capture rather than a local file."""
    return target.lower().startswith(("http://", "https://"))


def har_name_for(target: str) -> str:
    """Derive the HAR file base name for an analysed URL or file.

    URLs use their last non-empty path segment, falling back to the
    host for bare origins; file paths use the file stem.
    """
    if is_web_url(target):
        parsed = parse.urlsplit(target)
        segments = [s for s in parsed.path.split("/") if s]
        name = segments[-1] if segments else (parsed.hostname or "capture")
    else:
        stem = target.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        name = stem[:-4] if stem.lower().endswith(".har") else stem
    clean = "".join(c if c.isalnum() or c in ".-_" else "_" for c in name)
    return clean or "capture"
