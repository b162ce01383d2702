"""
NSX Client - Data Models

This module contains Pydantic models for the connection configuration and for
each NSX object type the client can create.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..shared.constants import DEFAULT_LEASE_TIME, DEFAULT_MTU, DEFAULT_TENANT_ID


def normalize_url(url: str) -> str:
    """Prefix a bare host name with https:// and drop trailing slashes."""
    url = url.strip()
    if url and not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url.rstrip("/")


class NSXConfig(BaseModel):
    """Configuration for the NSX manager connection."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="NSX manager host or base URL")
    username: str = Field(..., min_length=1, description="API username")
    password: str = Field(..., min_length=1, description="API password", repr=False)
    verify_ssl: bool = Field(default=True, description="Whether to verify SSL certificates")
    timeout: float | None = Field(default=None, description="Request timeout, None blocks")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Normalize a bare host name to an https URL."""
        if not v.strip():
            raise ValueError("URL must not be empty")
        return normalize_url(v)


class _StatusAndBody(NamedTuple):
    status_code: int
    body: str


class APIResponse(_StatusAndBody):
    """Status code and body of a successful API call.

    Unpacks as ``(status_code, body)``. Response headers are available as the
    read-only ``headers`` mapping with lower-case names.
    """

    headers: Mapping[str, str]

    def __new__(cls, status_code: int, body: str, headers: Mapping[str, str] | None = None):
        self = super().__new__(cls, status_code, body)
        self.headers = MappingProxyType(
            {key.lower(): value for key, value in (headers or {}).items()}
        )
        return self


class ControlPlaneMode(str, Enum):
    """Control plane mode of a virtual wire."""

    UNICAST = "UNICAST_MODE"
    MULTICAST = "MULTICAST_MODE"
    HYBRID = "HYBRID_MODE"


class InterfaceType(str, Enum):
    """Link type of an edge interface."""

    INTERNAL = "internal"
    UPLINK = "uplink"


class NSXObject(BaseModel):
    """Base for NSX object models.

    A value of None means "not supplied": defaulted fields fall back to their
    default and required fields are reported as missing.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_unset(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class VirtualWire(NSXObject):
    """A logical switch within a transport zone (scope)."""

    name: str = Field(..., min_length=1)
    scope_id: str = Field(..., min_length=1)
    description: str = ""
    tenant_id: str = DEFAULT_TENANT_ID
    control_plane_mode: ControlPlaneMode = ControlPlaneMode.UNICAST

    @field_validator("control_plane_mode", mode="before")
    @classmethod
    def normalize_mode(cls, v):
        """Accept 'unicast' as well as 'UNICAST_MODE'."""
        if isinstance(v, str) and not isinstance(v, ControlPlaneMode):
            v = v.strip().upper()
            if not v.endswith("_MODE"):
                v = f"{v}_MODE"
        return v


class EdgeInterface(NSXObject):
    """An interface attaching an edge to a virtual wire or port group."""

    edge_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    primary_address: str = Field(..., min_length=1)
    subnet_mask: str = Field(..., min_length=1)
    mtu: int = Field(default=DEFAULT_MTU, gt=0)
    connected_to_id: str = Field(..., min_length=1)
    interface_type: InterfaceType

    @field_validator("interface_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        if isinstance(v, str) and not isinstance(v, InterfaceType):
            return v.strip().lower()
        return v


class DhcpRelayAgent(NSXObject):
    """A DHCP relay agent bound to an edge vNIC."""

    edge_id: str = Field(..., min_length=1)
    vnic_index: int = Field(..., ge=0)
    gi_address: str = Field(..., min_length=1)


class DhcpIpPool(NSXObject):
    """A simple DHCP IP pool served by an edge."""

    edge_id: str = Field(..., min_length=1)
    ip_range: str = Field(..., min_length=1)
    default_gateway: str = Field(..., min_length=1)
    domain_name: str = Field(..., min_length=1)
    primary_name_server: str = Field(..., min_length=1)
    secondary_name_server: str = Field(..., min_length=1)
    lease_time: int = Field(default=DEFAULT_LEASE_TIME, gt=0)
