# src/draview/core/capacity.py

from decimal import Decimal
from typing import Mapping, Optional

from ..models.cluster import ClusterNode
from ..models.node import NO_ROLE, NodeCapacity
from .config import config
from .demand import ResourceDemand

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"


def resolve_role(labels: Mapping[str, str]) -> str:
    """
    Role from the node-role.kubernetes.io/<role> label.

    When a node carries several role labels the lexicographically smallest
    role wins, so the result does not depend on label ordering.
    """
    roles = [key[len(ROLE_LABEL_PREFIX) :] for key in labels if key.startswith(ROLE_LABEL_PREFIX)]
    if not roles:
        return NO_ROLE
    return min(roles)


def resolve_capacity(
    node: ClusterNode,
    demand: Optional[ResourceDemand] = None,
    storage_resource: str | None = None,
) -> NodeCapacity:
    """
    Totals come from status.capacity; availables are status.allocatable minus
    the node's aggregated pod requests. Missing resources count as zero and
    the result is not clamped.
    """
    storage_resource = storage_resource or config.STORAGE_RESOURCE_NAME
    demand = demand or ResourceDemand()
    zero = Decimal(0)

    return NodeCapacity(
        total_cpu=node.capacity.get("cpu", zero),
        available_cpu=node.allocatable.get("cpu", zero) - demand.cpu,
        total_memory=node.capacity.get("memory", zero),
        available_memory=node.allocatable.get("memory", zero) - demand.memory,
        total_storage=node.capacity.get(storage_resource, zero),
        available_storage=node.allocatable.get(storage_resource, zero) - demand.storage,
    )
