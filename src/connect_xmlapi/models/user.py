"""Current user record."""

from dataclasses import dataclass
from typing import ClassVar, Optional

from connect_xmlapi.models.fields import xml_attribute, xml_element


@dataclass
class UserInfo:
    """The logged-in user as reported by ``common-info``."""

    XML_ROOT: ClassVar[str] = "user"

    user_id: Optional[str] = xml_attribute("user-id")
    name: Optional[str] = xml_element("name")
    login: Optional[str] = xml_element("login")
