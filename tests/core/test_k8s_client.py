# tests/core/test_k8s_client.py

from unittest.mock import AsyncMock, MagicMock, patch

from kubernetes_asyncio import config as k8s_config

from draview.core import k8s_client


@patch("draview.core.k8s_client.config.load_kube_config", new_callable=AsyncMock)
@patch("draview.core.k8s_client.config.load_incluster_config", new_callable=MagicMock)
async def test_in_cluster_config_is_preferred(mock_load_incluster, mock_load_kube):
    assert await k8s_client.ensure_k8s_config() is True

    mock_load_incluster.assert_called_once()
    mock_load_kube.assert_not_awaited()


@patch("draview.core.k8s_client.config.load_kube_config", new_callable=AsyncMock)
@patch("draview.core.k8s_client.config.load_incluster_config", new_callable=MagicMock)
async def test_falls_back_to_default_kubeconfig(mock_load_incluster, mock_load_kube):
    mock_load_incluster.side_effect = k8s_config.ConfigException("not in a pod")

    assert await k8s_client.ensure_k8s_config() is True

    mock_load_kube.assert_awaited_once_with(config_file=None, context=None)


@patch("draview.core.k8s_client.config.load_kube_config", new_callable=AsyncMock)
@patch("draview.core.k8s_client.config.load_incluster_config", new_callable=MagicMock)
async def test_explicit_kubeconfig_skips_in_cluster(mock_load_incluster, mock_load_kube, monkeypatch):
    monkeypatch.setenv("KUBECONFIG", "/etc/kube/dra.yaml")
    monkeypatch.setenv("KUBE_CONTEXT", "kind-dra")

    assert await k8s_client.ensure_k8s_config() is True

    mock_load_incluster.assert_not_called()
    mock_load_kube.assert_awaited_once_with(config_file="/etc/kube/dra.yaml", context="kind-dra")


@patch("draview.core.k8s_client.config.load_kube_config", new_callable=AsyncMock)
@patch("draview.core.k8s_client.config.load_incluster_config", new_callable=MagicMock)
async def test_config_is_loaded_once(mock_load_incluster, mock_load_kube):
    await k8s_client.ensure_k8s_config()
    await k8s_client.ensure_k8s_config()

    assert mock_load_incluster.call_count == 1


@patch("draview.core.k8s_client.config.load_kube_config", new_callable=AsyncMock)
@patch("draview.core.k8s_client.config.load_incluster_config", new_callable=MagicMock)
async def test_no_configuration_returns_no_api(mock_load_incluster, mock_load_kube):
    mock_load_incluster.side_effect = k8s_config.ConfigException("not in a pod")
    mock_load_kube.side_effect = k8s_config.ConfigException("no kubeconfig")

    assert await k8s_client.ensure_k8s_config() is False
    assert await k8s_client.get_core_v1_api() is None
    assert await k8s_client.get_custom_objects_api() is None
