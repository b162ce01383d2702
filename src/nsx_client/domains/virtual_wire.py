"""
Virtual Wire Domain

Create-if-absent and delete for NSX logical switches (virtual wires).
"""

from typing import Optional

from ..core.client import NSXClient
from ..core.exceptions import ValidationError
from ..core.models import APIResponse, VirtualWire
from ..shared.constants import (
    API_VDN_SCOPE_VIRTUALWIRES,
    API_VDN_SCOPE_VIRTUALWIRES_LIST,
    API_VDN_VIRTUALWIRE,
)
from ..shared.rendering import VIRTUALWIRE_TEMPLATE, render_template
from ..shared.validation import build_model
from ..shared.xml_utils import child_text, extract_text, list_elements
from .base import BaseManager


def check_virtual_wire_exists(client: NSXClient, name: str, scope_id: str) -> Optional[str]:
    """Look up a virtual wire by name within a scope.

    Args:
        client: NSX client
        name: Name of the virtual wire
        scope_id: Transport zone (vdnscope) to search

    Returns:
        The virtual wire ID if it exists; otherwise None

    Raises:
        NotFoundError: If a virtual wire matches but carries no objectId
    """
    response = client.get(
        API_VDN_SCOPE_VIRTUALWIRES_LIST.format(scope_id=scope_id),
        operation="list_virtual_wires",
    )
    for vwire in list_elements(response.body, "virtualWire"):
        if child_text(vwire, "name") == name:
            return extract_text(vwire, "objectId")
    return None


class VirtualWireManager(BaseManager):
    """Manages NSX virtual wires."""

    def create(
        self,
        name: str,
        scope_id: str,
        description: Optional[str] = None,
        tenant_id: Optional[str] = None,
        control_plane_mode: Optional[str] = None,
    ) -> str:
        """Create a virtual wire unless one with the same name exists in the scope.

        Args:
            name: Name of the virtual wire
            scope_id: vdnscope the virtual wire is added to
            description: Optional description
            tenant_id: Tenant, defaults to "virtual wire tenant"
            control_plane_mode: unicast, multicast or hybrid; defaults to unicast

        Returns:
            The virtual wire ID, existing or newly created

        Raises:
            ValidationError: If any argument is missing or invalid
            NotFoundError: If a matching virtual wire carries no objectId
            RemoteError: If the NSX manager rejects a request
        """
        self.logger.info(f"Attempting to create new virtualwire (name: {name}, scopeId: {scope_id})")

        vwire = build_model(
            VirtualWire,
            "create_virtual_wire",
            name=name,
            scope_id=scope_id,
            description=description,
            tenant_id=tenant_id,
            control_plane_mode=control_plane_mode,
        )

        self.logger.info(f"Checking if virtualwire already exists (name: {name}, scopeId: {scope_id})")
        vwire_id = check_virtual_wire_exists(self.client, vwire.name, vwire.scope_id)
        if vwire_id is not None:
            self.logger.info(
                f"Skipping virtualwire creation - virtual wire already exists "
                f"(name: {name}, scopeId: {scope_id}, id: {vwire_id})"
            )
            return vwire_id

        self.logger.info(f"Adding virtual wire (name: {name}, scopeId: {scope_id})")
        payload = render_template(VIRTUALWIRE_TEMPLATE, vwire)
        response = self.client.post(
            API_VDN_SCOPE_VIRTUALWIRES.format(scope_id=vwire.scope_id),
            payload,
            operation="create_virtual_wire",
        )
        return response.body.strip()

    def delete(self, virtualwire_id: str) -> APIResponse:
        """Delete a virtual wire.

        A RemoteError from the manager is always re-raised.

        Args:
            virtualwire_id: ID of the virtual wire

        Returns:
            The API response

        Raises:
            ValidationError: If no ID is given
            RemoteError: If the NSX manager rejects the request
        """
        if not virtualwire_id:
            raise ValidationError(
                "You must specify the virtual wire id to be deleted",
                errors=["virtualwire_id must be specified"],
                context={"operation": "delete_virtual_wire"},
            )

        self.logger.info(f"Deleting virtualwire: {virtualwire_id}")
        response = self.client.delete(
            API_VDN_VIRTUALWIRE.format(virtualwire_id=virtualwire_id),
            operation="delete_virtual_wire",
        )
        self.logger.info(f"Successfully deleted virtualwire: {virtualwire_id}")
        return response
