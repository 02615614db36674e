# src/draview/core/devices.py
"""
Turns resource slices into per-node device tallies.

Devices are grouped on each node by (display name, memory size). A device
whose name appears in the allocation index for its (driver, pool) is counted
as in use.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..models.cluster import ResourceSlice, SliceDevice
from ..models.node import DeviceSummary
from .allocation import AllocationIndex, AllocationKey, is_allocated
from .config import config

logger = logging.getLogger(__name__)

DeviceGroupKey = Tuple[str, Decimal]


class DisplayNameResolver:
    """
    Maps a driver to the device attribute holding a human readable product
    name. Drivers without a mapping, and devices missing the attribute, are
    shown under the driver name.
    """

    def __init__(self, attributes: Optional[Mapping[str, str]] = None):
        if attributes is None:
            attributes = config.PRODUCT_NAME_ATTRIBUTES
        self.attributes: Dict[str, str] = dict(attributes)

    def resolve(self, driver: str, device: SliceDevice) -> str:
        attribute = self.attributes.get(driver)
        if not attribute:
            return driver

        # Attributes in the driver's own domain may be published qualified or not.
        for name in (attribute, f"{driver}/{attribute}"):
            value = device.attributes.get(name)
            if value is not None and value.string:
                return value.string
        return driver


def device_memory(device: SliceDevice) -> Decimal:
    return device.capacity.get("memory", Decimal(0))


@dataclass
class _Tally:
    total: int = 0
    available: int = 0


class DeviceAccumulator:
    """Per-node running tallies, alive for one reconciliation pass only."""

    def __init__(self, allocations: AllocationIndex, resolver: DisplayNameResolver):
        self._allocations = allocations
        self._resolver = resolver
        self._tallies: Dict[DeviceGroupKey, _Tally] = {}

    def add_slice(self, resource_slice: ResourceSlice):
        key = AllocationKey(resource_slice.driver, resource_slice.pool_name)
        for device in resource_slice.devices:
            group = (self._resolver.resolve(resource_slice.driver, device), device_memory(device))
            tally = self._tallies.setdefault(group, _Tally())
            tally.total += 1
            tally.available += 1
            if is_allocated(self._allocations, key, device.name) and tally.available > 0:
                tally.available -= 1

    def summaries(self) -> List[DeviceSummary]:
        return [
            DeviceSummary(
                display_name=name,
                memory=memory,
                total_count=tally.total,
                available_count=tally.available,
            )
            for (name, memory), tally in sorted(self._tallies.items())
        ]


def summarize_devices(
    slices: Iterable[ResourceSlice],
    node_names: Iterable[str],
    allocations: AllocationIndex,
    resolver: Optional[DisplayNameResolver] = None,
) -> Dict[str, List[DeviceSummary]]:
    """
    Fold resource slices into device summaries for each known node.

    Slices attached to an unknown node (or to no node) are dropped.
    """
    resolver = resolver or DisplayNameResolver()
    accumulators = {name: DeviceAccumulator(allocations, resolver) for name in node_names}

    for resource_slice in slices:
        accumulator = accumulators.get(resource_slice.node_name or "")
        if accumulator is None:
            logger.debug(
                "Dropping slice %s: node %r is not part of the node list.",
                resource_slice.name,
                resource_slice.node_name,
            )
            continue
        accumulator.add_slice(resource_slice)

    return {name: accumulator.summaries() for name, accumulator in accumulators.items()}
