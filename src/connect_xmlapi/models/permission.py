"""Permission records."""

from dataclasses import dataclass
from typing import ClassVar, Optional

from connect_xmlapi.models.enums import PermissionId
from connect_xmlapi.models.fields import xml_attribute, xml_element


@dataclass
class PermissionInfo:
    """Row of ``permissions-info``: one principal's permission on an ACL object."""

    XML_ROOT: ClassVar[str] = "principal"

    principal_id: Optional[str] = xml_attribute("principal-id")
    has_children: Optional[bool] = xml_attribute("has-children")
    is_primary: Optional[bool] = xml_attribute("is-primary")
    permission_id: Optional[PermissionId] = xml_attribute("permission-id")
    training_group_id: Optional[str] = xml_attribute("training-group-id")
    login: Optional[str] = xml_element("login")
    name: Optional[str] = xml_element("name")
    description: Optional[str] = xml_element("description")
