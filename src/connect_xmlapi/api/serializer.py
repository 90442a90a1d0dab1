"""XML marshalling of records through a process-wide serializer cache.

A serializer is compiled once per ``(record type, root element name)`` from
the record's field descriptors and then reused by every thread. Reads from
the cache take no lock; a miss takes the lock, re-checks, and builds, so
concurrent first use of one key compiles exactly one serializer.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from lxml import etree

from connect_xmlapi.models.fields import (
    XML_BINDING,
    WireEnum,
    XmlKind,
    default_wire_name,
    format_date,
    format_duration,
    parse_bool,
    parse_date,
    parse_duration,
)
from connect_xmlapi.utils.exceptions import DecodeError

logger = logging.getLogger(__name__)

R = TypeVar("R")

_SERIALIZER_CACHE: Dict[Tuple[type, str], "XmlSerializer"] = {}
_CACHE_LOCK = Lock()


@dataclass(frozen=True)
class FieldSpec:
    """Compiled descriptor of one wire field.

    Attributes:
        path: Attribute path from the record, e.g. ``("dates", "date_begin")``
            for a field flattened from an embedded value type
        kind: ATTRIBUTE or ELEMENT
        wire_name: Attribute or element name on the wire
        declared_name: Name derived from the identifier alone
        value_type: Scalar type of the value (str, int, bool, datetime, ...)
        item_type: Record type of repeated child elements, for list fields
        decoder: Custom text-to-value conversion
    """

    path: Tuple[str, ...]
    kind: XmlKind
    wire_name: str
    declared_name: str
    value_type: Any
    item_type: Optional[type] = None
    decoder: Optional[Callable[[str], Any]] = None

    @property
    def name(self) -> str:
        return self.path[-1]

    def get(self, record: Any) -> Any:
        value = record
        for part in self.path:
            if value is None:
                return None
            value = getattr(value, part)
        return value

    def set(self, record: Any, value: Any) -> None:
        target = record
        for part in self.path[:-1]:
            target = getattr(target, part)
        setattr(target, self.path[-1], value)


class XmlSerializer:
    """Encoder/decoder for one record type under one root element name."""

    def __init__(self, record_type: type, root_name: str, specs: List[FieldSpec]) -> None:
        self.record_type = record_type
        self.root_name = root_name
        self.specs = specs

    def decode(self, element: etree._Element) -> Any:
        """Build a record from ``element``.

        Raises:
            DecodeError: If the element's tag is not the expected root name, or
                a value does not parse as its declared kind
        """
        if element.tag != self.root_name:
            raise DecodeError(
                f"Cannot decode {self.record_type.__name__}: expected root element "
                f"<{self.root_name}>, got <{element.tag}>"
            )

        record = self.record_type()
        for spec in self.specs:
            if spec.item_type is not None:
                item_serializer = get_serializer(spec.item_type, spec.wire_name)
                spec.set(
                    record,
                    [item_serializer.decode(child) for child in element.findall(spec.wire_name)],
                )
                continue

            if spec.kind is XmlKind.ATTRIBUTE:
                raw = element.get(spec.wire_name)
            else:
                child = element.find(spec.wire_name)
                raw = None if child is None else "".join(child.itertext())

            if raw is None:
                continue
            spec.set(record, self._decode_value(spec, raw))
        return record

    def _decode_value(self, spec: FieldSpec, raw: str) -> Any:
        try:
            return decode_text(spec.value_type, raw, spec.decoder)
        except (ValueError, TypeError) as e:
            raise DecodeError(
                f"Cannot decode {self.record_type.__name__}.{spec.name} "
                f"from {spec.wire_name}={raw!r}: {e}"
            ) from e

    def encode(self, record: Any) -> etree._Element:
        """Build an element from ``record``; None values are omitted."""
        root = etree.Element(self.root_name)
        for spec in self.specs:
            value = spec.get(record)
            if value is None:
                continue
            if spec.item_type is not None:
                item_serializer = get_serializer(spec.item_type, spec.wire_name)
                for item in value:
                    root.append(item_serializer.encode(item))
            elif spec.kind is XmlKind.ATTRIBUTE:
                root.set(spec.wire_name, encode_text(value))
            else:
                etree.SubElement(root, spec.wire_name).text = encode_text(value)
        return root


def decode_text(value_type: Any, raw: str, decoder: Optional[Callable[[str], Any]] = None) -> Any:
    """Convert wire text into a value of ``value_type``.

    Blank text reads as None for every kind except str.
    """
    if decoder is not None:
        return decoder(raw)
    if value_type is str:
        return raw
    if not raw.strip():
        return None
    if value_type is bool:
        return parse_bool(raw)
    if value_type is int:
        return int(raw.strip())
    if value_type is float:
        return float(raw.strip())
    if value_type is datetime:
        return parse_date(raw)
    if value_type is timedelta:
        return parse_duration(raw)
    if isinstance(value_type, type) and issubclass(value_type, WireEnum):
        return value_type.from_wire(raw)
    raise TypeError(f"Unsupported field type: {value_type!r}")


def encode_text(value: Any) -> str:
    """Convert a value into its XML text form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_date(value)
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, WireEnum):
        return value.wire_name
    return str(value)


def get_serializer(record_type: type, root_name: Optional[str] = None) -> XmlSerializer:
    """Return the cached serializer for ``(record_type, root_name)``.

    Args:
        record_type: Record dataclass
        root_name: Root element name; defaults to the record's ``XML_ROOT``

    Returns:
        Shared XmlSerializer instance
    """
    root = root_name or getattr(record_type, "XML_ROOT", None)
    if not root:
        raise TypeError(f"{record_type.__name__} declares no XML_ROOT and no root name was given")

    key = (record_type, root)
    serializer = _SERIALIZER_CACHE.get(key)
    if serializer is not None:
        return serializer

    with _CACHE_LOCK:
        serializer = _SERIALIZER_CACHE.get(key)
        if serializer is None:
            serializer = _build_serializer(record_type, root)
            _SERIALIZER_CACHE[key] = serializer
    return serializer


def clear_serializer_cache() -> None:
    with _CACHE_LOCK:
        _SERIALIZER_CACHE.clear()


def _build_serializer(record_type: type, root_name: str) -> XmlSerializer:
    if not dataclasses.is_dataclass(record_type):
        raise TypeError(f"{record_type!r} is not a record dataclass")
    specs = list(_compile_fields(record_type, ()))
    logger.debug(
        "Compiled serializer for %s as <%s> (%d fields)",
        record_type.__name__,
        root_name,
        len(specs),
    )
    return XmlSerializer(record_type, root_name, specs)


def _compile_fields(record_type: type, prefix: Tuple[str, ...]) -> Iterable[FieldSpec]:
    hints = get_type_hints(record_type)
    for f in dataclasses.fields(record_type):
        binding = f.metadata.get(XML_BINDING)
        if binding is None:
            continue
        path = prefix + (f.name,)
        if binding.kind is XmlKind.EMBEDDED:
            yield from _compile_fields(_unwrap_optional(hints[f.name]), path)
            continue
        yield FieldSpec(
            path=path,
            kind=binding.kind,
            wire_name=binding.wire_name or default_wire_name(f.name),
            declared_name=default_wire_name(f.name),
            value_type=_unwrap_optional(hints[f.name]),
            item_type=binding.item_type,
            decoder=binding.decoder,
        )


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) is Union:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        return args[0]
    return get_origin(hint) or hint


def from_xml(record_type: Type[R], element: etree._Element, root_name: Optional[str] = None) -> R:
    """Decode one record from ``element``.

    Example:
        >>> detail = from_xml(MeetingDetail, status.result_document.find("sco"))
    """
    return get_serializer(record_type, root_name).decode(element)


def from_xml_list(
    record_type: Type[R], elements: Iterable[etree._Element], root_name: Optional[str] = None
) -> List[R]:
    serializer = get_serializer(record_type, root_name)
    return [serializer.decode(element) for element in elements]


def to_xml(records: Union[Any, List[Any]], root_name: Optional[str] = None) -> str:
    """Serialize a record, or a list of records item by item.

    Output carries no XML declaration and no namespace declarations.
    """
    if isinstance(records, (list, tuple)):
        return "".join(to_xml(record, root_name) for record in records)
    element = get_serializer(type(records), root_name).encode(records)
    return etree.tostring(element, encoding="unicode")
