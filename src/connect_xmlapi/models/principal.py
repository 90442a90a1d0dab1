"""Principal (user and group) records."""

from dataclasses import dataclass
from typing import ClassVar, Optional

from connect_xmlapi.models.enums import PrincipalType
from connect_xmlapi.models.fields import xml_attribute, xml_element


@dataclass
class Contact:
    XML_ROOT: ClassVar[str] = "contact"

    email: Optional[str] = xml_element("email")
    first_name: Optional[str] = xml_element("first-name")
    last_name: Optional[str] = xml_element("last-name")


@dataclass
class Preferences:
    XML_ROOT: ClassVar[str] = "preferences"

    acl_id: Optional[str] = xml_attribute("acl-id")
    language: Optional[str] = xml_attribute("lang")
    time_zone_id: Optional[str] = xml_attribute("time-zone-id")


@dataclass
class Principal:
    """A user or group as described by ``principal-info`` and ``principal-update``."""

    XML_ROOT: ClassVar[str] = "principal"

    account_id: Optional[str] = xml_attribute("account-id")
    principal_id: Optional[str] = xml_attribute("principal-id")
    has_children: Optional[bool] = xml_attribute("has-children")
    is_hidden: Optional[bool] = xml_attribute("is-hidden")
    is_primary: Optional[bool] = xml_attribute("is-primary")
    ext_login: Optional[str] = xml_element("ext-login")
    login: Optional[str] = xml_element("login")
    name: Optional[str] = xml_element("name")
    email: Optional[str] = xml_element("email")
    first_name: Optional[str] = xml_element("first-name")
    last_name: Optional[str] = xml_element("last-name")


@dataclass
class PrincipalListItem:
    """Row of ``principal-list``."""

    XML_ROOT: ClassVar[str] = "principal"

    account_id: Optional[str] = xml_attribute("account-id")
    principal_id: Optional[str] = xml_attribute("principal-id")
    has_children: Optional[bool] = xml_attribute("has-children")
    is_hidden: Optional[bool] = xml_attribute("is-hidden")
    is_primary: Optional[bool] = xml_attribute("is-primary")
    login: Optional[str] = xml_element("login")
    name: Optional[str] = xml_element("name")
    email: Optional[str] = xml_element("email")
    display_uid: Optional[str] = xml_element("display-uid")


@dataclass
class PrincipalInfo:
    """Combined result of ``principal-info``.

    Not a wire record itself; each part is decoded from its own element.
    """

    preferences: Optional[Preferences] = None
    principal: Optional[Principal] = None
    contact: Optional[Contact] = None


@dataclass
class PrincipalSetup:
    """Field set sent with ``principal-update`` to create or modify a principal.

    Without ``principal_id`` the server creates a new principal of
    ``principal_type``.
    """

    XML_ROOT: ClassVar[str] = "principal-setup"

    principal_type: Optional[PrincipalType] = xml_element("type")
    login: Optional[str] = xml_element("login")
    name: Optional[str] = xml_element("name")
    first_name: Optional[str] = xml_element("first-name")
    last_name: Optional[str] = xml_element("last-name")
    email: Optional[str] = xml_element("email")
    password: Optional[str] = xml_element("password")
    description: Optional[str] = xml_element("description")
    has_children: Optional[bool] = xml_element("has-children")
    principal_id: Optional[str] = xml_attribute("principal-id")
    send_email: Optional[bool] = xml_element("send-email")
