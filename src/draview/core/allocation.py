# src/draview/core/allocation.py
"""
Builds the allocation index: which devices of each (driver, pool) are
currently handed out to a resource claim.
"""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, NamedTuple

from ..models.cluster import ResourceClaim

logger = logging.getLogger(__name__)


class AllocationKey(NamedTuple):
    """Identifies a device pool. Node identity is not part of the key."""

    driver: str
    pool: str


AllocationIndex = Dict[AllocationKey, FrozenSet[str]]


def build_allocation_index(claims: Iterable[ResourceClaim]) -> AllocationIndex:
    """
    Index every allocated device name under its (driver, pool).

    Unallocated claims contribute nothing, and results missing a driver, pool
    or device name are skipped.
    """
    allocated = defaultdict(set)
    for claim in claims:
        for result in claim.allocations:
            if not (result.driver and result.pool and result.device):
                logger.debug("Ignoring incomplete allocation result in claim %s/%s", claim.namespace, claim.name)
                continue
            allocated[AllocationKey(result.driver, result.pool)].add(result.device)

    return {key: frozenset(devices) for key, devices in allocated.items()}


def is_allocated(index: AllocationIndex, key: AllocationKey, device: str) -> bool:
    return device in index.get(key, frozenset())
