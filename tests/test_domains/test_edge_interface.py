"""
Tests for the edge interface domain.
"""

import pytest

from src.nsx_client.core.exceptions import NotFoundError, RemoteError, ValidationError
from src.nsx_client.domains.edge_interface import EdgeInterfaceManager, check_interface_exists
from src.nsx_client.shared.xml_utils import extract_text

from fixtures.mock_responses import MOCK_ATTACH_INTERFACE_RESPONSE, MOCK_INTERFACES

ATTACH_ARGS = {
    "edge_id": "edge-1",
    "name": "app-lif",
    "primary_address": "10.0.2.1",
    "subnet_mask": "255.255.255.0",
    "connected_to_id": "virtualwire-8",
    "interface_type": "internal",
}


@pytest.fixture
def attach_client(make_client):
    """Client whose edge already has the uplink and web-lif interfaces."""
    return make_client({
        ("GET", "/interfaces"): (200, MOCK_INTERFACES),
        ("POST", "/interfaces/?action=patch"): (200, MOCK_ATTACH_INTERFACE_RESPONSE),
    })


class TestCheckInterfaceExists:
    """Test the interface existence check."""

    def test_found_by_connected_network(self, make_client):
        """Test that the interface attached to the network is returned."""
        client, transport = make_client({("GET", "/interfaces"): (200, MOCK_INTERFACES)})

        interface = check_interface_exists(client, "edge-1", "virtualwire-7")

        assert interface.startswith("<interface>")
        assert extract_text(interface, "name") == "web-lif"
        assert transport.requests_made[0]["url"].endswith("/api/4.0/edges/edge-1/interfaces")

    def test_not_found(self, make_client):
        """Test a network without interface on the edge."""
        client, _ = make_client({("GET", "/interfaces"): (200, MOCK_INTERFACES)})

        assert check_interface_exists(client, "edge-1", "virtualwire-8") is None


class TestAttachInterface:
    """Test EdgeInterfaceManager.attach_interface."""

    def test_attach_new_interface(self, attach_client):
        """Test attaching an interface via the patch action."""
        client, transport = attach_client

        result = EdgeInterfaceManager(client).attach_interface(**ATTACH_ARGS)

        assert result == MOCK_ATTACH_INTERFACE_RESPONSE
        assert len(transport.mutating_requests) == 1
        post = transport.mutating_requests[0]
        assert post["method"] == "POST"
        assert post["url"].endswith("/api/4.0/edges/edge-1/interfaces/?action=patch")

    def test_attach_payload(self, attach_client):
        """Test the rendered interface payload."""
        client, transport = attach_client

        EdgeInterfaceManager(client).attach_interface(**ATTACH_ARGS, mtu=9000)

        body = transport.mutating_requests[0]["body"]
        assert extract_text(body, "interface/name") == "app-lif"
        assert extract_text(body, "primaryAddress") == "10.0.2.1"
        assert extract_text(body, "subnetMask") == "255.255.255.0"
        assert extract_text(body, "mtu") == "9000"
        assert extract_text(body, "type") == "internal"
        assert extract_text(body, "isConnected") == "true"
        assert extract_text(body, "connectedToId") == "virtualwire-8"

    def test_attach_default_mtu(self, attach_client):
        """Test that the MTU defaults to 1500."""
        client, transport = attach_client

        EdgeInterfaceManager(client).attach_interface(**ATTACH_ARGS)

        assert extract_text(transport.mutating_requests[0]["body"], "mtu") == "1500"

    def test_attach_existing_skips_post(self, attach_client):
        """Test that a second attach returns the existing interface."""
        client, transport = attach_client
        args = dict(ATTACH_ARGS, name="web-lif", connected_to_id="virtualwire-7")

        result = EdgeInterfaceManager(client).attach_interface(**args)

        assert extract_text(result, "index") == "10"
        assert transport.mutating_requests == []

    def test_attach_uplink_type_case_insensitive(self, attach_client):
        """Test that the interface type is normalized."""
        client, transport = attach_client

        EdgeInterfaceManager(client).attach_interface(**dict(ATTACH_ARGS, interface_type="Uplink"))

        assert extract_text(transport.mutating_requests[0]["body"], "type") == "uplink"

    def test_attach_invalid_arguments(self, attach_client):
        """Test that every invalid field is reported and nothing is sent."""
        client, transport = attach_client
        args = dict(ATTACH_ARGS, interface_type="trunk", subnet_mask=None, mtu=-1)

        with pytest.raises(ValidationError) as exc_info:
            EdgeInterfaceManager(client).attach_interface(**args)

        fields = exc_info.value.context["fields"]
        assert {"interface_type", "subnet_mask", "mtu"} <= set(fields)
        assert "subnet_mask must be specified" in exc_info.value.errors
        assert transport.requests_made == []

    def test_attach_rejected(self, make_client):
        """Test that a rejected patch raises RemoteError."""
        client, _ = make_client({
            ("GET", "/interfaces"): (200, MOCK_INTERFACES),
            ("POST", "/interfaces/?action=patch"): (400, "no free vnic"),
        })

        with pytest.raises(RemoteError):
            EdgeInterfaceManager(client).attach_interface(**ATTACH_ARGS)


class TestVnicIndex:
    """Test EdgeInterfaceManager.vnic_index_from_response."""

    def test_index_from_attach_response(self):
        """Test reading the index of a freshly attached interface."""
        assert EdgeInterfaceManager.vnic_index_from_response(MOCK_ATTACH_INTERFACE_RESPONSE) == "11"

    def test_index_from_existing_interface(self, attach_client):
        """Test reading the index of an interface returned by the existence check."""
        client, _ = attach_client
        args = dict(ATTACH_ARGS, connected_to_id="virtualwire-7")

        interface = EdgeInterfaceManager(client).attach_interface(**args)

        assert EdgeInterfaceManager.vnic_index_from_response(interface) == "10"

    def test_index_missing(self):
        """Test a document without index."""
        with pytest.raises(NotFoundError):
            EdgeInterfaceManager.vnic_index_from_response("<interface><name>x</name></interface>")
