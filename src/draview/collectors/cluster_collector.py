# src/draview/collectors/cluster_collector.py
"""
Fetches the four collections the reconciliation engine needs, concurrently.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.config import config
from ..core.exceptions import FetchError
from ..models.cluster import ClusterNode, ClusterPod, ResourceClaim, ResourceSlice
from .base_collector import BaseCollector
from .node_collector import NodeCollector
from .pod_collector import PodCollector
from .resource_collectors import ResourceClaimCollector, ResourceSliceCollector

logger = logging.getLogger(__name__)


@dataclass
class ClusterSnapshot:
    """The raw collections of one point-in-time listing."""

    nodes: List[ClusterNode] = field(default_factory=list)
    resource_slices: List[ResourceSlice] = field(default_factory=list)
    resource_claims: List[ResourceClaim] = field(default_factory=list)
    pods: List[ClusterPod] = field(default_factory=list)


class ClusterCollector:
    """
    Runs the node, resource slice, resource claim and pod collectors in
    parallel and waits for all of them.

    The first failure cancels the remaining listings and is re-raised, so a
    caller either gets the complete snapshot or a FetchError.
    """

    def __init__(
        self,
        node_collector: Optional[NodeCollector] = None,
        slice_collector: Optional[ResourceSliceCollector] = None,
        claim_collector: Optional[ResourceClaimCollector] = None,
        pod_collector: Optional[PodCollector] = None,
        timeout: Optional[float] = None,
    ):
        self.node_collector = node_collector or NodeCollector()
        self.slice_collector = slice_collector or ResourceSliceCollector()
        self.claim_collector = claim_collector or ResourceClaimCollector()
        self.pod_collector = pod_collector or PodCollector()
        self.timeout = config.FETCH_TIMEOUT_SECONDS if timeout is None else timeout

    @property
    def collectors(self) -> Dict[str, BaseCollector]:
        """The four collectors keyed by the name of the collection they list."""
        return {
            NodeCollector.COLLECTION: self.node_collector,
            ResourceSliceCollector.COLLECTION: self.slice_collector,
            ResourceClaimCollector.COLLECTION: self.claim_collector,
            PodCollector.COLLECTION: self.pod_collector,
        }

    @staticmethod
    async def _cancel(tasks: Dict[str, asyncio.Future]):
        for task in tasks.values():
            if not task.done():
                task.cancel()
        # Let cancelled listings unwind before returning.
        await asyncio.gather(*tasks.values(), return_exceptions=True)

    async def collect(self) -> ClusterSnapshot:
        """
        Raises:
            FetchError: For the first listing that failed, or naming every
                listing still pending when the deadline expired.
        """
        logger.info("Fetching nodes, resource slices, resource claims and pods...")
        tasks = {name: asyncio.ensure_future(collector.collect()) for name, collector in self.collectors.items()}
        try:
            await asyncio.wait(
                tasks.values(),
                timeout=self.timeout or None,
                return_when=asyncio.FIRST_EXCEPTION,
            )
            for task in tasks.values():
                if task.done() and not task.cancelled() and task.exception() is not None:
                    raise task.exception()

            pending = [name for name, task in tasks.items() if not task.done()]
            if pending:
                logger.error("Listing %s took longer than %ss.", ", ".join(pending), self.timeout)
                raise FetchError(", ".join(pending), f"timed out after {self.timeout}s")
        finally:
            await self._cancel(tasks)

        return ClusterSnapshot(
            nodes=tasks[NodeCollector.COLLECTION].result(),
            resource_slices=tasks[ResourceSliceCollector.COLLECTION].result(),
            resource_claims=tasks[ResourceClaimCollector.COLLECTION].result(),
            pods=tasks[PodCollector.COLLECTION].result(),
        )

    async def close(self):
        for collector in self.collectors.values():
            await collector.close()
