from __future__ import annotations

import re
from datetime import timedelta

_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAX_NS = (1 << 63) - 1
_COMPONENT = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>[^0-9.]*)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration literal such as "300ms", "-1.5h" or "2h45m".

    A literal is an optionally signed sequence of decimal numbers, each with an
    optional fraction and a unit suffix (ns, us, ms, s, m, h). The bare value "0"
    needs no unit. Precision below a microsecond is truncated.
    """
    original = text
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    total_ns = 0
    while text:
        match = _COMPONENT.match(text)
        whole = match.group("whole")
        frac = match.group("frac")
        unit = match.group("unit")
        if not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {original!r}")
        scale = _UNITS_NS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")

        total_ns += int(whole or "0") * scale
        if frac:
            total_ns += int(frac) * scale // 10 ** len(frac)
        if total_ns > _MAX_NS + (1 if negative else 0):
            raise ValueError(f"invalid duration {original!r}")
        text = text[match.end():]

    value = timedelta(microseconds=total_ns // 1_000)
    return -value if negative else value

