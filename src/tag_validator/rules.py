"""
Rule predicates registered on the shared validator.

Each predicate takes the (already coerced) field value and returns a bool.
Non-string values are checked against their ``str()`` form. None of them
raise: parse failures are reported as ``False``.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Pattern

INT = r"^(?:[-+]?(?:0|[1-9][0-9]*))$"
FLOAT = r"^(?:[-+]?(?:[0-9]+))?(?:\.[0-9]*)?(?:[eE][\+\-]?(?:[0-9]+))?$"
DATE_EXP = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"

# Layout names accepted by is_time()
RFC3339 = "2006-01-02T15:04:05Z07:00"
RFC3339_WITHOUT_ZONE = "2006-01-02T15:04:05"

rx_int = re.compile(INT)
rx_float = re.compile(FLOAT)
rx_date = re.compile(DATE_EXP)

_TIMESTAMP = (
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
)
_ZONE = r"(?P<zone>Z|(?P<sign>[+-])(?P<zone_hour>[0-9]{2}):(?P<zone_minute>[0-9]{2}))"

_LAYOUTS: Dict[str, Pattern[str]] = {
    RFC3339: re.compile(_TIMESTAMP + _ZONE),
    RFC3339_WITHOUT_ZONE: re.compile(_TIMESTAMP),
}


def _field_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    return str(value)


def is_null(text: str) -> bool:
    """Return True if the string is empty."""
    return len(text) == 0


def _parse_timestamp(text: str, layout: str) -> Optional[datetime]:
    match = _LAYOUTS[layout].fullmatch(text)
    if match is None:
        return None

    parts = match.groupdict()
    tzinfo = None
    if parts.get("zone") == "Z":
        tzinfo = timezone.utc
    elif parts.get("sign"):
        if int(parts["zone_minute"]) >= 60:
            return None
        offset = timedelta(hours=int(parts["zone_hour"]), minutes=int(parts["zone_minute"]))
        tzinfo = timezone(-offset if parts["sign"] == "-" else offset)

    # Only microsecond precision is representable; extra digits are still valid input
    fraction = (parts.get("fraction") or "0")[:6].ljust(6, "0")
    return datetime(
        int(parts["year"]),
        int(parts["month"]),
        int(parts["day"]),
        int(parts["hour"]),
        int(parts["minute"]),
        int(parts["second"]),
        int(fraction),
        tzinfo=tzinfo,
    )


def is_time(text: str, layout: str) -> bool:
    """
    Check that a string is a valid timestamp for the given layout.

    ``layout`` is ``RFC3339`` or ``RFC3339_WITHOUT_ZONE``. Fractional seconds
    are accepted after the seconds field in both layouts.

    :raises ValueError: If ``layout`` is not one of the supported layouts.
    """
    if layout not in _LAYOUTS:
        raise ValueError(f"Unsupported time layout: {layout!r}")
    try:
        return _parse_timestamp(text, layout) is not None
    except ValueError:
        # out-of-range calendar or offset fields
        return False


def not_null(value: Any) -> bool:
    """
    Used with the Null* wrappers. Absent values never reach a predicate,
    so getting here means the value is present.
    """
    return True


def is_int(value: Any) -> bool:
    """Check if the string is an integer. The empty string is not."""
    field = _field_string(value)
    if is_null(field):
        return False
    return rx_int.fullmatch(field) is not None


def is_float(value: Any) -> bool:
    """Check if the string is a float."""
    field = _field_string(value)
    return field != "" and rx_float.fullmatch(field) is not None


def is_date(value: Any) -> bool:
    """
    Check if the string contains a YYYY-MM-DD shaped date.

    The match is not anchored: "xx2024-01-15xx" passes.
    """
    field = _field_string(value)
    if is_null(field):
        return False
    return rx_date.search(field) is not None


def is_rfc3339(value: Any) -> bool:
    """Check if the string is a valid RFC 3339 timestamp."""
    return is_time(_field_string(value), RFC3339)


def is_rfc3339_without_zone(value: Any) -> bool:
    """Check if the string is an RFC 3339 timestamp without the zone suffix."""
    return is_time(_field_string(value), RFC3339_WITHOUT_ZONE)


def is_datetime(value: Any) -> bool:
    """Datetime with or without timezone."""
    field = _field_string(value)
    return is_time(field, RFC3339) or is_time(field, RFC3339_WITHOUT_ZONE)


BUILTIN_RULES = {
    "notNull": not_null,
    "int": is_int,
    "float": is_float,
    "date": is_date,
    "rfc3339": is_rfc3339,
    "rfc3339WithoutZone": is_rfc3339_without_zone,
    "datetime": is_datetime,
}
