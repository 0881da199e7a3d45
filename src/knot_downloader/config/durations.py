from __future__ import annotations

import re
from datetime import timedelta

_UNIT_SECONDS = {
    "ns": 1e-9,
    "nsec": 1e-9,
    "us": 1e-6,
    "usec": 1e-6,
    "ms": 1e-3,
    "msec": 1e-3,
    "millis": 1e-3,
    "s": 1.0,
    "sec": 1.0,
    "secs": 1.0,
    "second": 1.0,
    "seconds": 1.0,
    "m": 60.0,
    "min": 60.0,
    "mins": 60.0,
    "minute": 60.0,
    "minutes": 60.0,
    "h": 3600.0,
    "hr": 3600.0,
    "hrs": 3600.0,
    "hour": 3600.0,
    "hours": 3600.0,
    "d": 86400.0,
    "day": 86400.0,
    "days": 86400.0,
    "w": 604800.0,
    "week": 604800.0,
    "weeks": 604800.0,
}

_TOKEN_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]+)\s*")


def parse_duration(value: str) -> timedelta:
    """
    Parse a human-readable duration such as "30s", "5m", "1h 30m" or "2days".

    Components are summed. Every number must carry a unit.
    """
    raw = value.strip()
    if not raw:
        raise ValueError("Duration must not be empty")

    total = 0.0
    pos = 0
    while pos < len(raw):
        match = _TOKEN_RE.match(raw, pos)
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        number, unit = match.groups()
        seconds = _UNIT_SECONDS.get(unit.lower())
        if seconds is None:
            raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")
        total += float(number) * seconds
        pos = match.end()
    return timedelta(seconds=total)


def format_duration(delta: timedelta) -> str:
    remaining = delta.total_seconds()
    if remaining == 0:
        return "0s"
    parts: list[str] = []
    for label, size in (("d", 86400), ("h", 3600), ("m", 60)):
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{int(count)}{label}")
    if remaining:
        parts.append(f"{remaining:g}s")
    return " ".join(parts)
