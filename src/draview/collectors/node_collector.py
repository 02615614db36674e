# src/draview/collectors/node_collector.py

import logging
from typing import List

from ..core.k8s_client import get_core_v1_api
from ..models.cluster import ClusterNode
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Lists the cluster nodes with their labels, capacity and allocatable resources."""

    COLLECTION = "nodes"

    async def _create_api(self):
        return await get_core_v1_api()

    async def _list(self, api) -> List[ClusterNode]:
        node_list = await api.list_node(watch=False)
        nodes = [self._to_model(node) for node in node_list.items or []]
        if not nodes:
            logger.warning("No nodes found in the cluster.")
        return nodes

    @staticmethod
    def _to_model(node) -> ClusterNode:
        status = node.status
        return ClusterNode(
            name=node.metadata.name,
            labels=node.metadata.labels or {},
            capacity=(status.capacity if status else None) or {},
            allocatable=(status.allocatable if status else None) or {},
        )
