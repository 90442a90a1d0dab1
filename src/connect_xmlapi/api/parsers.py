"""Status envelope parsing for XML API responses.

Every response has the shape::

    <results>
      <status code="ok"/>
      <sco ...>...</sco>
    </results>

or, on failure::

    <results>
      <status code="invalid">
        <invalid field="name" type="string" subcode="duplicate"/>
      </status>
    </results>
"""

import copy
import logging
from typing import Union

from lxml import etree

from connect_xmlapi.models.enums import StatusCode, SubCode
from connect_xmlapi.models.status import ApiStatus
from connect_xmlapi.utils.exceptions import ResponseParseError

logger = logging.getLogger(__name__)

RESULT_ROOT = "resultroot"

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_document(xml: Union[str, bytes]) -> etree._Element:
    """Parse response text into an element tree.

    Raises:
        ResponseParseError: If the text is empty or not well-formed
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    if not xml or not xml.strip():
        raise ResponseParseError("Empty response body")
    try:
        return etree.fromstring(xml, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise ResponseParseError(f"Response is not well-formed XML: {e}") from e


def resolve_operation_status(xml: Union[str, bytes]) -> ApiStatus:
    """Parse a response document into a status envelope.

    Args:
        xml: Raw response body

    Returns:
        ApiStatus with code, sub-code, invalid field and exception text set
        from the ``status`` element, and ``result_document`` holding copies of
        the elements that follow it under a ``<resultroot>`` element (None when
        there are none)

    Raises:
        ResponseParseError: If the document is malformed, has no ``status``
            element, or carries a status code that is not recognized

    Example:
        >>> status = resolve_operation_status('<results><status code="ok"/></results>')
        >>> status.code
        <StatusCode.OK: 'ok'>
    """
    root = parse_document(xml)

    status_elem = root if root.tag == "status" else next(root.iter("status"), None)
    if status_elem is None:
        raise ResponseParseError(
            f"No status element in response (root element: {root.tag})"
        )

    raw_code = status_elem.get("code")
    if raw_code is None:
        raise ResponseParseError("status element has no code attribute")

    try:
        code = StatusCode.from_wire(raw_code, default=StatusCode.NOT_SET)
    except ValueError as e:
        raise ResponseParseError(f"Unknown status code: {raw_code!r}") from e

    status = ApiStatus(code=code)

    # no-access carries its subcode on status itself
    raw_subcode = status_elem.get("subcode")
    invalid_elem = status_elem.find("invalid")
    if invalid_elem is not None:
        raw_subcode = invalid_elem.get("subcode", raw_subcode)
        status.invalid_field = invalid_elem.get("field")
    if raw_subcode is not None:
        try:
            status.sub_code = SubCode.from_wire(raw_subcode, default=SubCode.NOT_SET)
        except ValueError:
            logger.warning(f"Unknown status subcode {raw_subcode!r}, leaving NOT_SET")

    exception_elem = status_elem.find("exception")
    if exception_elem is not None:
        status.exception_text = "".join(exception_elem.itertext())

    status.result_document = _collect_payload(status_elem)

    logger.debug(
        "Resolved status code=%s subcode=%s payload_elements=%d",
        status.code.wire_name,
        status.sub_code.wire_name,
        0 if status.result_document is None else len(status.result_document),
    )
    return status


def _collect_payload(status_elem: etree._Element):
    """Copy the element siblings that follow ``status`` under a synthetic root."""
    siblings = [
        sibling
        for sibling in status_elem.itersiblings()
        if isinstance(sibling.tag, str)
    ]
    if not siblings:
        return None

    result_root = etree.Element(RESULT_ROOT)
    for sibling in siblings:
        copied = copy.deepcopy(sibling)
        copied.tail = None
        result_root.append(copied)
    return result_root
