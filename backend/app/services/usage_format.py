"""Presentation values for quota usage.

Limits use 0 for "unlimited" and a negative value for "disabled". All
functions here are pure and locale independent.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

BYTES_PER_MIB = 1024 * 1024
UNLIMITED = "∞"
DISABLED = "Disabled"

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


@dataclass(frozen=True)
class UsageDisplay:
    used_bytes: int
    limit_bytes: int
    # None when limit_bytes == 0 (no quota to measure against)
    percent: Optional[int]
    display_text: str


def bytes_human(num_bytes: int) -> str:
    """Format a byte count with the largest binary unit keeping the mantissa >= 1.

    >>> bytes_human(1048576)
    '1.00 MiB'
    """
    if num_bytes < 0:
        raise ValueError("byte count must be non-negative")
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    # keep the printed mantissa below 1024 (1048575 B is 1.00 MiB, not 1024.00 KiB)
    if round(value, 2) >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {_UNITS[unit]}"


def mib_to_bytes(mebibytes: int) -> int:
    return int(mebibytes) * BYTES_PER_MIB


def usage_percent(used_bytes: int, limit_bytes: int) -> Optional[int]:
    # round half up, no upper clamp so an over-quota account shows > 100
    if limit_bytes <= 0:
        return None
    return (used_bytes * 200 + limit_bytes) // (limit_bytes * 2)


def format_usage(used_bytes: int, limit_bytes: int) -> UsageDisplay:
    if used_bytes < 0 or limit_bytes < 0:
        raise ValueError("usage and limit must be non-negative")
    if limit_bytes == 0:
        text = f"{bytes_human(used_bytes)} / {UNLIMITED}"
    else:
        text = f"{bytes_human(used_bytes)} / {bytes_human(limit_bytes)}"
    return UsageDisplay(
        used_bytes=used_bytes,
        limit_bytes=limit_bytes,
        percent=usage_percent(used_bytes, limit_bytes),
        display_text=text,
    )


def translate_limit(max_value: int) -> str:
    if max_value == 0:
        return UNLIMITED
    if max_value < 0:
        return DISABLED
    return str(max_value)


def limit_message(current: int, max_value: int) -> str:
    return f"{current} / {translate_limit(max_value)}"
