# src/draview/core/reconciler.py
"""
The reconciliation engine: joins nodes, resource slices, resource claims and
pods into one NodeRecord per node.
"""

import logging
from typing import Iterable, List, Optional

from ..collectors import ClusterCollector, ClusterSnapshot
from ..models.cluster import ClusterNode, ClusterPod, ResourceClaim, ResourceSlice
from ..models.node import NodeRecord
from .allocation import build_allocation_index
from .capacity import resolve_capacity, resolve_role
from .demand import aggregate_demand
from .devices import DisplayNameResolver, summarize_devices

logger = logging.getLogger(__name__)


def reconcile(
    nodes: Iterable[ClusterNode],
    resource_slices: Iterable[ResourceSlice],
    resource_claims: Iterable[ResourceClaim],
    pods: Iterable[ClusterPod],
    resolver: Optional[DisplayNameResolver] = None,
    storage_resource: str | None = None,
) -> List[NodeRecord]:
    """
    Produce one NodeRecord per input node, sorted by node name.

    This is a pure function over the four collections: it keeps no state
    between calls, so the same inputs always give the same records.
    """
    nodes = list(nodes)
    allocations = build_allocation_index(resource_claims)
    demand = aggregate_demand(pods, storage_resource=storage_resource)
    devices = summarize_devices(resource_slices, [node.name for node in nodes], allocations, resolver)

    records = {}
    for node in nodes:
        if node.name in records:
            logger.debug("Node %s listed twice; keeping the first entry.", node.name)
            continue
        records[node.name] = NodeRecord(
            name=node.name,
            role=resolve_role(node.labels),
            capacity=resolve_capacity(node, demand.get(node.name), storage_resource=storage_resource),
            devices=devices.get(node.name, []),
        )

    return [records[name] for name in sorted(records)]


def reconcile_snapshot(snapshot: ClusterSnapshot, resolver: Optional[DisplayNameResolver] = None) -> List[NodeRecord]:
    return reconcile(
        snapshot.nodes,
        snapshot.resource_slices,
        snapshot.resource_claims,
        snapshot.pods,
        resolver=resolver,
    )


class ClusterReconciler:
    """
    Fetches the four collections and reconciles them.

    A fetch failure propagates as FetchError; no partial report is produced.
    """

    def __init__(
        self,
        collector: Optional[ClusterCollector] = None,
        resolver: Optional[DisplayNameResolver] = None,
    ):
        self.collector = collector or ClusterCollector()
        self.resolver = resolver

    async def reconcile(self) -> List[NodeRecord]:
        snapshot = await self.collector.collect()
        records = reconcile_snapshot(snapshot, resolver=self.resolver)
        logger.info(
            "Reconciled %d nodes from %d slices, %d claims and %d pods.",
            len(records),
            len(snapshot.resource_slices),
            len(snapshot.resource_claims),
            len(snapshot.pods),
        )
        return records

    async def close(self):
        await self.collector.close()
