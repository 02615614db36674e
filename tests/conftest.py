# tests/conftest.py

import pytest

from draview.core.k8s_client import reset_k8s_config
from draview.models.cluster import (
    ClusterNode,
    ClusterPod,
    ContainerRequests,
    DeviceAllocation,
    DeviceAttribute,
    ResourceClaim,
    ResourceSlice,
    SliceDevice,
)


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Keeps every test independent of the developer's environment: no
    kubeconfig from the shell, default API version and storage resource, and
    a fresh Kubernetes config loader state.
    """
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.delenv("KUBE_CONTEXT", raising=False)
    monkeypatch.delenv("PRODUCT_NAME_ATTRIBUTES", raising=False)
    reset_k8s_config()
    yield
    reset_k8s_config()


def _nvidia_gpu(name, product="Vendor X", memory="8Gi"):
    return SliceDevice(
        name=name,
        attributes={"productName": DeviceAttribute(string=product)},
        capacity={"memory": memory},
    )


@pytest.fixture
def make_gpu():
    """Factory for gpu.nvidia.com devices with a productName attribute and memory capacity."""
    return _nvidia_gpu


@pytest.fixture
def scenario():
    """
    One worker node with allocatable CPU 3 / memory 14Gi, one pod requesting
    1 CPU / 2Gi, two 8Gi "Vendor X" GPUs in pool-a and a claim on gpu-0.
    """
    nodes = [
        ClusterNode(
            name="node-1",
            labels={"node-role.kubernetes.io/worker": ""},
            capacity={"cpu": "4", "memory": "16Gi", "storage": "100Gi"},
            allocatable={"cpu": "3", "memory": "14Gi", "storage": "90Gi"},
        )
    ]
    pods = [
        ClusterPod(
            name="trainer",
            namespace="ml",
            node_name="node-1",
            containers=[ContainerRequests(name="main", requests={"cpu": "1", "memory": "2Gi"})],
        )
    ]
    slices = [
        ResourceSlice(
            name="node-1-gpu.nvidia.com-abcde",
            node_name="node-1",
            driver="gpu.nvidia.com",
            pool_name="pool-a",
            devices=[_nvidia_gpu("gpu-0"), _nvidia_gpu("gpu-1")],
        )
    ]
    claims = [
        ResourceClaim(
            name="trainer-gpu",
            namespace="ml",
            allocations=[DeviceAllocation(driver="gpu.nvidia.com", pool="pool-a", device="gpu-0")],
        )
    ]
    return {"nodes": nodes, "resource_slices": slices, "resource_claims": claims, "pods": pods}
