"""
Server Schemas.

Snapshots of servers as reported by the provisioning API, and the
request body for deploying a new one.
"""

from pydantic import Field

from provisioner.schemas.base import WireModel


class ServerSummary(WireModel):
    """One row of `servers list`."""

    id: str
    name: str = ""
    location: str = ""
    status: str = ""


class ServerCost(WireModel):
    charged: float = 0
    hour_on: float = 0
    minutes_on: float = 0
    hour_off: float = 0
    minutes_off: float = 0


class ServerDetail(WireModel):
    """Full server record returned by the single-server endpoint."""

    id: str
    name: str = ""
    location: str = ""
    ip: str = ""
    cost: ServerCost = Field(default_factory=ServerCost)
    cpu_model: str = ""
    gpu_count: int = 0
    gpu_model: str = ""
    ram: int | float = 0
    status: str = ""
    storage: int | float = 0
    storage_class: str = ""
    type: str = ""
    vcpus: int = 0
    links: dict[str, dict[str, str]] = Field(default_factory=dict)


class DeployedServer(WireModel):
    """The resource created by a deploy call."""

    id: str


class DeployRequest(WireModel):
    """Everything the API needs to provision a server."""

    name: str
    admin_user: str
    admin_pass: str = Field(repr=False)
    instance_type: str
    gpu_model: str
    gpu_count: int
    vcpus: int
    ram: int
    storage: int
    storage_class: str
    os: str
    location: str
