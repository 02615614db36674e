# src/draview/models/cluster.py
"""
Pydantic models for the raw collections fetched from the cluster: nodes,
pods, resource slices and resource claims.

Collectors translate Kubernetes API objects into these models so that the
reconciliation engine never deals with client-library types. Every field has
a default: a missing field on the wire is an empty value, not an error.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.k8s_utils import parse_resource_list


class ClusterNode(BaseModel):
    """A cluster node with its declared and schedulable resources."""

    name: str = Field(..., description="Node name.")
    labels: Dict[str, str] = Field(default_factory=dict, description="Node labels.")
    capacity: Dict[str, Decimal] = Field(default_factory=dict, description="status.capacity quantities.")
    allocatable: Dict[str, Decimal] = Field(default_factory=dict, description="status.allocatable quantities.")

    @field_validator("capacity", "allocatable", mode="before")
    @classmethod
    def _parse_quantities(cls, value):
        return parse_resource_list(value)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_or_empty(cls, value):
        return value or {}


class ContainerRequests(BaseModel):
    """Resource requests of a single container."""

    name: str = Field("", description="Container name.")
    requests: Dict[str, Decimal] = Field(default_factory=dict, description="resources.requests quantities.")

    @field_validator("requests", mode="before")
    @classmethod
    def _parse_quantities(cls, value):
        return parse_resource_list(value)


class ClusterPod(BaseModel):
    """A workload placement: zero or one node, and per-container requests."""

    name: str = Field("", description="Pod name.")
    namespace: str = Field("", description="Pod namespace.")
    node_name: Optional[str] = Field(None, description="spec.nodeName; unset while unscheduled.")
    containers: List[ContainerRequests] = Field(default_factory=list)


class DeviceAttribute(BaseModel):
    """A typed device attribute. At most one of the values is set."""

    string: Optional[str] = None
    int_value: Optional[int] = Field(None, alias="int")
    bool_value: Optional[bool] = Field(None, alias="bool")
    version: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class SliceDevice(BaseModel):
    """One device advertised in a resource slice."""

    name: str = Field(..., description="Device name, unique within its pool.")
    attributes: Dict[str, DeviceAttribute] = Field(default_factory=dict)
    capacity: Dict[str, Decimal] = Field(default_factory=dict)

    @field_validator("capacity", mode="before")
    @classmethod
    def _parse_quantities(cls, value):
        return parse_resource_list(value)


class ResourceSlice(BaseModel):
    """Device inventory published by a driver for one pool on one node."""

    name: str = Field("", description="ResourceSlice object name.")
    node_name: Optional[str] = Field(None, description="Node the devices are attached to.")
    driver: str = Field("", description="Driver managing the devices.")
    pool_name: str = Field("", description="Pool the devices belong to.")
    devices: List[SliceDevice] = Field(default_factory=list)


class DeviceAllocation(BaseModel):
    """One allocation result of a claim: a device picked from a driver's pool."""

    driver: str = ""
    pool: str = ""
    device: str = ""
    request: Optional[str] = None


class ResourceClaim(BaseModel):
    """A binding record; allocations is empty while the claim is pending."""

    name: str = ""
    namespace: str = ""
    allocations: List[DeviceAllocation] = Field(default_factory=list)
