# src/draview/collectors/resource_collectors.py
"""
Collectors for the Dynamic Resource Allocation collections (resource.k8s.io):
ResourceSlices (device inventory) and ResourceClaims (allocations).

Both are listed through the CustomObjectsApi so the tool works with any
served API version. The v1beta1 layout nests device attributes and capacity
under ``basic``; the v1 layout puts them on the device itself. Both are
accepted.
"""

import logging
from typing import Any, Dict, List

from ..core.config import config
from ..core.k8s_client import get_custom_objects_api
from ..models.cluster import DeviceAllocation, DeviceAttribute, ResourceClaim, ResourceSlice, SliceDevice
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


def _capacity_value(entry: Any) -> Any:
    # v1beta1+ wraps the quantity as {"value": "8Gi"}; older drafts used the bare quantity.
    if isinstance(entry, dict):
        return entry.get("value")
    return entry


def parse_device(raw: Dict[str, Any]) -> SliceDevice:
    body = raw.get("basic") or raw
    attributes = {
        name: DeviceAttribute.model_validate(value)
        for name, value in (body.get("attributes") or {}).items()
        if isinstance(value, dict)
    }
    capacity = {name: _capacity_value(value) for name, value in (body.get("capacity") or {}).items()}
    return SliceDevice(name=raw.get("name", ""), attributes=attributes, capacity=capacity)


def parse_resource_slice(raw: Dict[str, Any]) -> ResourceSlice:
    spec = raw.get("spec") or {}
    return ResourceSlice(
        name=(raw.get("metadata") or {}).get("name", ""),
        node_name=spec.get("nodeName"),
        driver=spec.get("driver", ""),
        pool_name=(spec.get("pool") or {}).get("name", ""),
        devices=[parse_device(device) for device in spec.get("devices") or [] if device.get("name")],
    )


def parse_resource_claim(raw: Dict[str, Any]) -> ResourceClaim:
    metadata = raw.get("metadata") or {}
    allocation = (raw.get("status") or {}).get("allocation") or {}
    results = (allocation.get("devices") or {}).get("results") or []
    return ResourceClaim(
        name=metadata.get("name", ""),
        namespace=metadata.get("namespace", ""),
        allocations=[
            DeviceAllocation(
                driver=result.get("driver", ""),
                pool=result.get("pool", ""),
                device=result.get("device", ""),
                request=result.get("request"),
            )
            for result in results
        ],
    )


class _ResourceApiCollector(BaseCollector):
    PLURAL: str = ""

    async def _create_api(self):
        return await get_custom_objects_api()

    async def _list_raw(self, api) -> List[Dict[str, Any]]:
        response = await api.list_cluster_custom_object(
            group=config.DRA_API_GROUP,
            version=config.DRA_API_VERSION,
            plural=self.PLURAL,
        )
        return response.get("items") or []


class ResourceSliceCollector(_ResourceApiCollector):
    """Lists every ResourceSlice (cluster scoped)."""

    COLLECTION = "resource slices"
    PLURAL = "resourceslices"

    async def _list(self, api) -> List[ResourceSlice]:
        return [parse_resource_slice(item) for item in await self._list_raw(api)]


class ResourceClaimCollector(_ResourceApiCollector):
    """Lists every ResourceClaim across all namespaces."""

    COLLECTION = "resource claims"
    PLURAL = "resourceclaims"

    async def _list(self, api) -> List[ResourceClaim]:
        claims = [parse_resource_claim(item) for item in await self._list_raw(api)]
        allocated = sum(1 for claim in claims if claim.allocations)
        logger.debug("%d of %d resource claims are allocated.", allocated, len(claims))
        return claims
