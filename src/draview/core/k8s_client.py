import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

from .config import config as app_config

logger = logging.getLogger(__name__)

# Global lock to prevent race conditions during config loading
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False


async def _load_kubeconfig_file(config_file: typing.Optional[str], context: typing.Optional[str]) -> bool:
    try:
        logger.debug("Attempting to load kubeconfig (file=%s, context=%s)...", config_file or "<default>", context)
        await config.load_kube_config(config_file=config_file, context=context)
        logger.info("Loaded Kubernetes configuration from kubeconfig file.")
        return True
    except config.ConfigException as e:
        logger.warning("Could not load kubeconfig: %s", e)
    except FileNotFoundError:
        logger.warning("Kubeconfig file '%s' does not exist.", config_file)
    return False


def _load_incluster() -> bool:
    try:
        logger.debug("Attempting to load in-cluster Kubernetes config...")
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration.")
        return True
    except config.ConfigException:
        logger.debug("In-cluster config not found.")
    return False


async def ensure_k8s_config() -> bool:
    """
    Ensures that the Kubernetes configuration is loaded exactly once.

    An explicit KUBECONFIG (or --kubeconfig) is tried first; otherwise the
    in-cluster service account, then the default kubeconfig location.

    Returns:
        bool: True if config was loaded successfully (or was already loaded), False otherwise.
    """
    global _CONFIG_LOADED

    if _CONFIG_LOADED:
        return True

    async with _CONFIG_LOCK:
        # Double-check locking pattern
        if _CONFIG_LOADED:
            return True

        config_file = app_config.KUBECONFIG
        context = app_config.KUBE_CONTEXT

        if config_file:
            _CONFIG_LOADED = await _load_kubeconfig_file(config_file, context)
        else:
            _CONFIG_LOADED = _load_incluster() or await _load_kubeconfig_file(None, context)

    if not _CONFIG_LOADED:
        logger.warning("Failed to load any Kubernetes configuration.")
    return _CONFIG_LOADED


def reset_k8s_config():
    """Forget the loaded configuration so the next call reloads it."""
    global _CONFIG_LOADED
    _CONFIG_LOADED = False


async def get_core_v1_api() -> typing.Optional[client.CoreV1Api]:
    """
    Returns a configured CoreV1Api instance.
    Safe to call concurrently.
    """
    if await ensure_k8s_config():
        return client.CoreV1Api()
    return None


async def get_custom_objects_api() -> typing.Optional[client.CustomObjectsApi]:
    """
    Returns a configured CustomObjectsApi instance, used for the
    resource.k8s.io collections.
    """
    if await ensure_k8s_config():
        return client.CustomObjectsApi()
    return None
