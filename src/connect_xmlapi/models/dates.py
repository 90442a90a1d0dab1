"""Date block shared by meeting, quota, transaction and event records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from connect_xmlapi.models.fields import xml_element


@dataclass
class XmlDates:
    """Begin, end, modified, created and closed timestamps.

    Records embed this by value rather than inheriting from it. A None value
    means the element was absent (the zero date) and is never sent.
    """

    date_begin: Optional[datetime] = xml_element("date-begin")
    date_end: Optional[datetime] = xml_element("date-end")
    date_modified: Optional[datetime] = xml_element("date-modified")
    date_created: Optional[datetime] = xml_element("date-created")
    date_closed: Optional[datetime] = xml_element("date-closed")
