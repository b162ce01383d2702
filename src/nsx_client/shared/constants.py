"""
NSX Client - API Endpoint Constants

This module contains the NSX manager API endpoints and default values used
throughout the client. Endpoints are relative to the manager base URL.
"""

# Logical switches (virtual wires)
API_VDN_SCOPE_VIRTUALWIRES = "/api/2.0/vdn/scopes/{scope_id}/virtualwires"
API_VDN_SCOPE_VIRTUALWIRES_LIST = (
    "/api/2.0/vdn/scopes/{scope_id}/virtualwires?startindex=0&pagesize=1000"
)
API_VDN_VIRTUALWIRE = "/api/2.0/vdn/virtualwires/{virtualwire_id}"

# Edge interfaces
API_EDGE_INTERFACES = "/api/4.0/edges/{edge_id}/interfaces"
API_EDGE_INTERFACES_PATCH = "/api/4.0/edges/{edge_id}/interfaces/?action=patch"

# Edge DHCP
API_EDGE_DHCP_CONFIG = "/api/4.0/edges/{edge_id}/dhcp/config"
API_EDGE_DHCP_RELAY = "/api/4.0/edges/{edge_id}/dhcp/config/relay"
API_EDGE_DHCP_IPPOOLS = "/api/4.0/edges/{edge_id}/dhcp/config/ippools"

# Used by test-connection: cheap authenticated GET
API_GLOBAL_CONFIG = "/api/2.0/global/config"

# Content types
XML_CONTENT_TYPE = "application/xml"

# Object defaults
DEFAULT_TENANT_ID = "virtual wire tenant"
DEFAULT_MTU = 1500
DEFAULT_LEASE_TIME = 3600

# Relay configuration document structure
RELAY_ROOT_TAG = "relay"
RELAY_AGENTS_TAG = "relayAgents"

# Environment variables
ENV_MANAGER_URL = "NSX_MANAGER_URL"
ENV_USERNAME = "NSX_USERNAME"
ENV_PASSWORD = "NSX_PASSWORD"
ENV_VERIFY_SSL = "NSX_VERIFY_SSL"

LOGGER_NAME = "nsx-client"
