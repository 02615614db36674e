# src/draview/collectors/pod_collector.py
"""
Collects resource 'request' data for all pods from the Kubernetes API.
"""

import logging
from typing import List

from ..core.k8s_client import get_core_v1_api
from ..models.cluster import ClusterPod, ContainerRequests
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class PodCollector(BaseCollector):
    """
    Connects to the K8s API to find the node placement and the resource
    requests of every container in every pod, across all namespaces.
    """

    COLLECTION = "pods"

    async def _create_api(self):
        api = await get_core_v1_api()
        if not api:
            logger.warning("PodCollector could not initialize Kubernetes client.")
        return api

    async def _list(self, api) -> List[ClusterPod]:
        pod_list = await api.list_pod_for_all_namespaces(watch=False)
        return [self._to_model(pod) for pod in pod_list.items or []]

    @staticmethod
    def _to_model(pod) -> ClusterPod:
        spec = pod.spec
        containers = []
        for container in (spec.containers if spec else None) or []:
            resources = container.resources
            containers.append(
                ContainerRequests(
                    name=container.name or "",
                    requests=(resources.requests if resources else None) or {},
                )
            )

        return ClusterPod(
            name=pod.metadata.name or "",
            namespace=pod.metadata.namespace or "",
            node_name=spec.node_name if spec else None,
            containers=containers,
        )
