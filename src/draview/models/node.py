# src/draview/models/node.py

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..utils.k8s_utils import format_bytes, format_cpu, format_gib

NO_ROLE = "<none>"


class NodeCapacity(BaseModel):
    """
    Total and available resources of a node.

    Attributes:
        total_cpu: status.capacity cpu, in cores
        available_cpu: allocatable cpu minus pod requests, in cores
        total_memory: status.capacity memory, in bytes
        available_memory: allocatable memory minus pod requests, in bytes
        total_storage: status.capacity storage, in bytes
        available_storage: allocatable storage minus pod requests, in bytes

    Available values are not clamped and go negative on an overcommitted node.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_cpu: Decimal = Field(default=Decimal(0), description="CPU capacity in cores")
    available_cpu: Decimal = Field(default=Decimal(0), description="Unrequested allocatable CPU in cores")
    total_memory: Decimal = Field(default=Decimal(0), description="Memory capacity in bytes")
    available_memory: Decimal = Field(default=Decimal(0), description="Unrequested allocatable memory in bytes")
    total_storage: Decimal = Field(default=Decimal(0), description="Storage capacity in bytes")
    available_storage: Decimal = Field(default=Decimal(0), description="Unrequested allocatable storage in bytes")

    def cpu_display(self) -> str:
        return f"{format_cpu(self.total_cpu)}/{format_cpu(self.available_cpu)}"

    def memory_display(self) -> str:
        return f"{format_gib(self.total_memory)}/{format_gib(self.available_memory)}"

    def storage_display(self) -> str:
        return f"{format_bytes(self.total_storage)}/{format_bytes(self.available_storage)}"


class DeviceSummary(BaseModel):
    """Tally of identical devices (same display name and memory) on one node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    display_name: str = Field(..., description="Product name or driver name")
    memory: Decimal = Field(default=Decimal(0), description="Device memory in bytes, 0 when undeclared")
    total_count: int = Field(..., ge=0, description="Number of device instances")
    available_count: int = Field(..., ge=0, description="Instances not referenced by any allocation")

    @property
    def label(self) -> str:
        """Display name, suffixed with the memory size when one is declared."""
        if self.memory:
            return f"{self.display_name}+{format_bytes(self.memory)}"
        return self.display_name

    def describe(self) -> str:
        return f"{self.label}: {self.total_count} total, {self.available_count} available"


class NodeRecord(BaseModel):
    """Reconciled view of one node: role, capacity and device availability."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    role: str = Field(default=NO_ROLE, description="Role taken from node-role.kubernetes.io/* labels")
    capacity: NodeCapacity = Field(default_factory=NodeCapacity)
    devices: List[DeviceSummary] = Field(default_factory=list)

    def devices_display(self) -> str:
        if not self.devices:
            return "None"
        return "; ".join(device.describe() for device in self.devices)

    def to_row(self) -> dict:
        """Flat, string-valued representation used by the file exporters."""
        return {
            "node": self.name,
            "role": self.role,
            "total_cpu": format_cpu(self.capacity.total_cpu),
            "available_cpu": format_cpu(self.capacity.available_cpu),
            "total_memory": format_bytes(self.capacity.total_memory),
            "available_memory": format_bytes(self.capacity.available_memory),
            "total_storage": format_bytes(self.capacity.total_storage),
            "available_storage": format_bytes(self.capacity.available_storage),
            "devices": self.devices_display(),
        }

    def to_document(self) -> dict:
        """Nested representation used by the JSON exporter."""
        row = self.to_row()
        row["devices"] = [
            {
                "display_name": device.display_name,
                "memory": format_bytes(device.memory),
                "total_count": device.total_count,
                "available_count": device.available_count,
            }
            for device in self.devices
        ]
        return row
