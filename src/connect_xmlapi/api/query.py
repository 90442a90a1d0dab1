"""Field encoder: records to URL query parameters."""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from connect_xmlapi.api.serializer import get_serializer
from connect_xmlapi.models.fields import WireEnum, format_date
from connect_xmlapi.transport.url_encoding import url_encode

logger = logging.getLogger(__name__)


def encode_query_value(value: Any) -> Optional[str]:
    """Convert one field value into its query text, before URL encoding.

    Returns:
        Text to send, or None when the value is not sent at all (None, the
        zero duration, or an enumeration's NOT_SET member)
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, timedelta):
        if value == timedelta(0):
            return None
        return str(int(value.total_seconds() // 60))
    if isinstance(value, WireEnum):
        if value.name == "NOT_SET":
            return None
        return value.wire_name
    return str(value)


def struct_to_query_string(record: Any, use_wire_names: bool = True) -> str:
    """Encode a record's declared fields as ``&name=value`` query parameters.

    Fields of embedded value types (the shared date block) are flattened in.
    Derived fields that carry no wire descriptor are never sent.

    Args:
        record: Record dataclass instance
        use_wire_names: Use the declared wire names; when False the name is
            derived from the identifier alone (``_`` to ``-``, lower-cased)

    Returns:
        Concatenated ``&name=value`` pairs; empty string when nothing is set

    Example:
        >>> struct_to_query_string(MeetingUpdateItem(folder_id="11", name="Weekly sync"))
        '&folder-id=11&name=Weekly+sync'
    """
    if record is None:
        return ""

    serializer = get_serializer(type(record))
    parts = []
    for spec in serializer.specs:
        if spec.item_type is not None:
            continue
        text = encode_query_value(spec.get(record))
        if text is None:
            continue
        name = spec.wire_name if use_wire_names else spec.declared_name
        parts.append(f"&{name}={url_encode(text)}")
    return "".join(parts)


def build_query(*pairs: Any, **params: Any) -> str:
    """Encode explicit parameters in order.

    Positional arguments are ``(name, value)`` tuples, which allows a name to
    repeat (``sco-id`` for multi-delete); keyword names have ``_`` mapped to
    ``-``. Values go through the same conversions as record fields and None
    values are dropped.

    Example:
        >>> build_query(("sco-id", "1"), ("sco-id", "2"))
        'sco-id=1&sco-id=2'
        >>> build_query(filter_type="meeting")
        'filter-type=meeting'
    """
    items = list(pairs) + [(name.replace("_", "-"), value) for name, value in params.items()]
    parts = []
    for name, value in items:
        text = encode_query_value(value)
        if text is None:
            continue
        parts.append(f"{name}={url_encode(text)}")
    return "&".join(parts)
