# tests/collectors/test_node_collector.py

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from kubernetes_asyncio.client import models as k8s
from kubernetes_asyncio.client.rest import ApiException

from draview.collectors.node_collector import NodeCollector
from draview.core.exceptions import FetchError, KubeConfigError


def create_node(name, labels=None, capacity=None, allocatable=None, with_status=True):
    return k8s.V1Node(
        metadata=k8s.V1ObjectMeta(name=name, labels=labels),
        status=k8s.V1NodeStatus(capacity=capacity, allocatable=allocatable) if with_status else None,
    )


@pytest.fixture
def mock_k8s_api():
    mock_api = MagicMock()
    mock_api.list_node = AsyncMock(
        return_value=k8s.V1NodeList(
            items=[
                create_node(
                    "node-1",
                    labels={"node-role.kubernetes.io/worker": ""},
                    capacity={"cpu": "4", "memory": "16Gi"},
                    allocatable={"cpu": "3", "memory": "14Gi"},
                ),
                create_node("node-2", with_status=False),
            ]
        )
    )
    return mock_api


@patch("draview.collectors.node_collector.get_core_v1_api")
async def test_collect_converts_nodes(mock_get_api, mock_k8s_api):
    mock_get_api.return_value = mock_k8s_api

    nodes = await NodeCollector().collect()

    assert [n.name for n in nodes] == ["node-1", "node-2"]
    assert nodes[0].labels == {"node-role.kubernetes.io/worker": ""}
    assert nodes[0].capacity["memory"] == Decimal(16 * 1024**3)
    assert nodes[0].allocatable["cpu"] == Decimal(3)
    assert nodes[1].labels == {}
    assert nodes[1].capacity == {}


@patch("draview.collectors.node_collector.get_core_v1_api")
async def test_api_error_raises_fetch_error(mock_get_api, mock_k8s_api):
    mock_k8s_api.list_node = AsyncMock(side_effect=ApiException(status=403, reason="Forbidden"))
    mock_get_api.return_value = mock_k8s_api

    with pytest.raises(FetchError) as excinfo:
        await NodeCollector().collect()

    assert excinfo.value.collection == "nodes"
    assert "403" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ApiException)


@patch("draview.collectors.node_collector.get_core_v1_api")
async def test_unexpected_error_raises_fetch_error(mock_get_api, mock_k8s_api):
    mock_k8s_api.list_node = AsyncMock(side_effect=ConnectionRefusedError("connection refused"))
    mock_get_api.return_value = mock_k8s_api

    with pytest.raises(FetchError, match="failed to list nodes: connection refused"):
        await NodeCollector().collect()


@patch("draview.collectors.node_collector.get_core_v1_api")
async def test_missing_kubeconfig_raises(mock_get_api):
    mock_get_api.return_value = None

    with pytest.raises(KubeConfigError):
        await NodeCollector().collect()


@patch("draview.collectors.node_collector.get_core_v1_api")
async def test_empty_cluster(mock_get_api, mock_k8s_api):
    mock_k8s_api.list_node = AsyncMock(return_value=k8s.V1NodeList(items=[]))
    mock_get_api.return_value = mock_k8s_api

    assert await NodeCollector().collect() == []


async def test_close_releases_client():
    collector = NodeCollector()
    api = MagicMock()
    api.api_client.close = AsyncMock()
    collector._api = api

    await collector.close()

    api.api_client.close.assert_awaited_once()
    assert collector._api is None
