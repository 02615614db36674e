"""Collectors package: fetch adapters for the cluster collections."""

from .base_collector import BaseCollector
from .cluster_collector import ClusterCollector, ClusterSnapshot
from .node_collector import NodeCollector
from .pod_collector import PodCollector
from .resource_collectors import ResourceClaimCollector, ResourceSliceCollector

__all__ = [
    "BaseCollector",
    "ClusterCollector",
    "ClusterSnapshot",
    "NodeCollector",
    "PodCollector",
    "ResourceClaimCollector",
    "ResourceSliceCollector",
]
