"""Small pure normalizers shared by the extraction tiers.

Durations become whole minutes, servings become an integer and image fields
of any JSON shape become an ordered list of URLs.
"""

from __future__ import annotations

import re
from typing import Any

_ISO_DAYS = re.compile(r"(\d+)D", re.IGNORECASE)
_ISO_HOURS = re.compile(r"(\d+)H", re.IGNORECASE)
_ISO_MINUTES = re.compile(r"(\d+)M", re.IGNORECASE)

_TEXT_HOURS = re.compile(r"(\d+)\s*h(ou)?r?s?")
_TEXT_MINUTES = re.compile(r"(\d+)\s*m(in)?(ute)?s?")

_FIRST_INTEGER = re.compile(r"\d+")


def parse_iso_duration(value: Any) -> int | None:
    """Convert an ISO-8601 duration such as ``PT1H30M`` to minutes.

    Hour and minute components are matched independently, so sloppy values
    like ``PT90M`` or ``1H`` still work. The date part of the duration is
    only searched for days, because ``M`` there would mean months.

    Args:
        value: Duration string; anything else is treated as absent

    Returns:
        Total minutes, or None when no hour or minute component is present
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip().upper()
    if "T" in text:
        date_part, _, time_part = text.partition("T")
    else:
        # no time designator, e.g. "1H30M" or "P1D"
        date_part = time_part = text

    days = _ISO_DAYS.search(date_part)
    hours = _ISO_HOURS.search(time_part)
    minutes = _ISO_MINUTES.search(time_part)
    if not (days or hours or minutes):
        return None

    total = 0
    if days:
        total += int(days.group(1)) * 24 * 60
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def parse_time_text(text: str | None) -> int | None:
    """Parse free text such as ``"1 hour 15 min"`` or ``"45m"`` to minutes.

    Returns None when the sum is zero.
    """
    if not text:
        return None

    lower = text.lower()
    hours_match = _TEXT_HOURS.search(lower)
    minutes_match = _TEXT_MINUTES.search(lower)

    hours = int(hours_match.group(1)) if hours_match else 0
    minutes = int(minutes_match.group(1)) if minutes_match else 0

    total = hours * 60 + minutes
    return total if total > 0 else None


def parse_servings(value: Any) -> int | None:
    """Return the first integer found in a yield value.

    Handles ``"4 servings"``, ``"4-6"``, bare numbers and arrays of either
    (the first element that yields a number wins). This layer never applies
    a default.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, list):
        for item in value:
            servings = parse_servings(item)
            if servings is not None:
                return servings
        return None
    if isinstance(value, str):
        match = _FIRST_INTEGER.search(value)
        return int(match.group()) if match else None
    return None


def first_integer(text: str) -> int | None:
    """First run of digits in ``text`` as an int."""
    match = _FIRST_INTEGER.search(text)
    return int(match.group()) if match else None


def normalize_url(url: str) -> str:
    """Upgrade ``http://`` to ``https://`` and add a scheme when missing."""
    url = url.strip()
    if not url:
        return url
    if url.lower().startswith("http://"):
        return "https://" + url[len("http://") :]
    if not url.lower().startswith("https://"):
        return "https://" + url.lstrip("/")
    return url


def resolve_image_urls(value: Any) -> list[str]:
    """Collect every image URL from a string, object or array value.

    Objects contribute their ``url`` field (``contentUrl`` as a fallback).
    Order is preserved and duplicates are dropped.
    """
    urls: list[str] = []
    for url in _iter_image_urls(value):
        url = url.strip()
        if url and url not in urls:
            urls.append(url)
    return urls


def _iter_image_urls(value: Any):
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        url = value.get("url") or value.get("contentUrl")
        if isinstance(url, str):
            yield url
    elif isinstance(value, list):
        for item in value:
            yield from _iter_image_urls(item)
