# src/draview/core/demand.py
"""
Sums the resource requests of scheduled pods per node.
"""

from decimal import Decimal
from typing import Dict, Iterable

from pydantic import BaseModel, ConfigDict

from ..models.cluster import ClusterPod
from .config import config


class ResourceDemand(BaseModel):
    """Requested CPU (cores), memory and storage (bytes) summed over a node."""

    model_config = ConfigDict(frozen=True)

    cpu: Decimal = Decimal(0)
    memory: Decimal = Decimal(0)
    storage: Decimal = Decimal(0)

    def __add__(self, other: "ResourceDemand") -> "ResourceDemand":
        return ResourceDemand(
            cpu=self.cpu + other.cpu,
            memory=self.memory + other.memory,
            storage=self.storage + other.storage,
        )


DemandTable = Dict[str, ResourceDemand]


def pod_demand(pod: ClusterPod, storage_resource: str) -> ResourceDemand:
    """Straight sum of every container's requests; init containers are not counted."""
    total = ResourceDemand()
    for container in pod.containers:
        requests = container.requests
        total += ResourceDemand(
            cpu=requests.get("cpu", Decimal(0)),
            memory=requests.get("memory", Decimal(0)),
            storage=requests.get(storage_resource, Decimal(0)),
        )
    return total


def aggregate_demand(pods: Iterable[ClusterPod], storage_resource: str | None = None) -> DemandTable:
    """
    Build the per-node demand table.

    Pods without a node assignment have not been scheduled and are skipped.
    """
    storage_resource = storage_resource or config.STORAGE_RESOURCE_NAME
    table: Dict[str, ResourceDemand] = {}
    for pod in pods:
        if not pod.node_name:
            continue
        demand = pod_demand(pod, storage_resource)
        table[pod.node_name] = table.get(pod.node_name, ResourceDemand()) + demand
    return table
