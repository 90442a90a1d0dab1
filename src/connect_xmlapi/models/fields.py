"""Field descriptors and wire value conversions shared by all records.

Every record is a plain dataclass whose fields carry an ``XmlBinding`` in their
metadata. The binding says where the value lives on the wire (attribute, child
element, or flattened from an embedded value type) and under which name. The
field encoder and the XML marshaller both read this table instead of
inspecting the class at call time.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

# Wire date-time layout, millisecond precision and a +HH:MM offset:
# 2024-03-01T09:30:00.000+00:00
DATE_FORMAT = "{:%Y-%m-%dT%H:%M:%S}.{:03d}{}"

_PARSE_FORMATS = (
    # strptime reads DATE_FORMAT output: %f takes 3 digits and %z takes +HH:MM
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)

XML_BINDING = "xml"


class XmlKind(Enum):
    """Where a field's value lives on the wire."""

    ATTRIBUTE = "attribute"
    ELEMENT = "element"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class XmlBinding:
    """Descriptor stored in a dataclass field's metadata.

    Attributes:
        kind: Attribute, child element, or embedded value type
        wire_name: Name on the wire; None derives it from the identifier
        item_type: Record type for repeated child elements
        decoder: Optional custom text-to-value conversion
    """

    kind: XmlKind
    wire_name: Optional[str] = None
    item_type: Optional[type] = None
    decoder: Optional[Callable[[str], Any]] = None


class WireEnum(Enum):
    """Enumeration whose member values are the names used on the wire."""

    @classmethod
    def from_wire(cls, text: Optional[str], default: Optional["WireEnum"] = None):
        """Map wire text onto a member.

        Matching ignores case and hyphens, so ``no-access``, ``NoAccess`` and
        ``NO_ACCESS`` all resolve to the same member.

        Args:
            text: Raw attribute or element text
            default: Value returned for blank text

        Returns:
            Matching member, or ``default`` when text is blank

        Raises:
            ValueError: If no member matches
        """
        if text is None or not text.strip():
            return default
        wanted = _squash(text)
        for member in cls:
            if _squash(member.value) == wanted or _squash(member.name) == wanted:
                return member
        raise ValueError(f"{text!r} is not a valid {cls.__name__}")

    @property
    def wire_name(self) -> str:
        return self.value


def _squash(text: str) -> str:
    return text.replace("-", "").replace("_", "").lower()


def xml_attribute(
    wire_name: Optional[str] = None,
    default: Any = None,
    decoder: Optional[Callable[[str], Any]] = None,
) -> Any:
    """Declare a field bound to an XML attribute."""
    return field(
        default=default,
        metadata={XML_BINDING: XmlBinding(XmlKind.ATTRIBUTE, wire_name, decoder=decoder)},
    )


def xml_element(
    wire_name: Optional[str] = None,
    default: Any = None,
    decoder: Optional[Callable[[str], Any]] = None,
) -> Any:
    """Declare a field bound to a child element's text."""
    return field(
        default=default,
        metadata={XML_BINDING: XmlBinding(XmlKind.ELEMENT, wire_name, decoder=decoder)},
    )


def xml_elements(item_type: type, wire_name: Optional[str] = None) -> Any:
    """Declare a list field bound to repeated child elements of one record type."""
    return field(
        default_factory=list,
        metadata={XML_BINDING: XmlBinding(XmlKind.ELEMENT, wire_name, item_type=item_type)},
    )


def xml_embedded(value_type: type) -> Any:
    """Declare a composed value type whose fields are flattened onto the record."""
    return field(
        default_factory=value_type,
        metadata={XML_BINDING: XmlBinding(XmlKind.EMBEDDED)},
    )


def default_wire_name(identifier: str) -> str:
    """Derive the wire name of a field: underscores become hyphens, lower-cased."""
    return identifier.replace("_", "-").lower()


def format_date(value: datetime) -> str:
    """Format a datetime with ``DATE_FORMAT``.

    Naive datetimes are taken as UTC. The wire carries milliseconds, so any
    sub-millisecond part is truncated.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    offset = value.strftime("%z")
    return DATE_FORMAT.format(value, value.microsecond // 1000, f"{offset[:3]}:{offset[3:5]}")


def parse_date(text: str) -> datetime:
    """Parse wire date text into an aware UTC datetime.

    Raises:
        ValueError: If the text matches none of the accepted layouts
    """
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    for pattern in _PARSE_FORMATS:
        try:
            parsed = datetime.strptime(text, pattern)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise ValueError(f"Unrecognized date value: {text!r}")


def format_duration(value: timedelta) -> str:
    """Format a duration as an ISO 8601 string such as ``PT1H30M``."""
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    out = f"{sign}P"
    if days:
        out += f"{days}D"
    clock = ""
    if hours:
        clock += f"{hours}H"
    if minutes:
        clock += f"{minutes}M"
    if seconds or (not days and not clock):
        clock += f"{seconds}S"
    if clock:
        out += "T" + clock
    return out


def parse_duration(text: str) -> timedelta:
    """Parse an ISO 8601 duration, or a bare integer count of minutes.

    Raises:
        ValueError: If the text is neither form
    """
    text = text.strip()
    if re.fullmatch(r"-?\d+", text):
        return timedelta(minutes=int(text))

    negative = text.startswith("-")
    match = _ISO_DURATION.match(text.lstrip("-"))
    if not match or text.lstrip("-") in ("P", "PT"):
        raise ValueError(f"Unrecognized duration value: {text!r}")
    parts = {key: float(val) for key, val in match.groupdict().items() if val}
    delta = timedelta(
        days=parts.get("days", 0),
        hours=parts.get("hours", 0),
        minutes=parts.get("minutes", 0),
        seconds=parts.get("seconds", 0),
    )
    return -delta if negative else delta


def parse_bool(text: str) -> bool:
    """Parse ``true``/``false``/``1``/``0`` (case-insensitive)."""
    lowered = text.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ValueError(f"Unrecognized boolean value: {text!r}")
