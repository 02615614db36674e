# src/draview/collectors/base_collector.py
"""
This module defines the abstract base class for the cluster collectors.

Each collector lists one collection from the Kubernetes API and converts it
into the Pydantic models of ``draview.models.cluster``. Unlike a best-effort
metrics pipeline, a listing failure is never swallowed: it is raised as a
FetchError naming the collection, so the report is all-or-nothing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List

from kubernetes_asyncio.client.rest import ApiException

from ..core.exceptions import FetchError, KubeConfigError

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract Base Class for all collection fetchers.
    """

    #: Human readable name of the listed collection, used in errors.
    COLLECTION: str = ""

    def __init__(self):
        self._api = None

    @abstractmethod
    async def _create_api(self):
        """Return a configured API object, or None when no kubeconfig is available."""
        pass

    @abstractmethod
    async def _list(self, api) -> List[Any]:
        """List the collection and convert each item into a model."""
        pass

    async def _ensure_client(self):
        """Lazily initialize the Kubernetes client."""
        if self._api:
            return self._api

        self._api = await self._create_api()
        return self._api

    async def collect(self) -> List[Any]:
        """
        Fetch the whole collection.

        Raises:
            KubeConfigError: If no Kubernetes configuration could be loaded.
            FetchError: If the API call fails for any other reason.
        """
        api = await self._ensure_client()
        if not api:
            raise KubeConfigError(self.COLLECTION, "no Kubernetes configuration could be loaded")

        try:
            items = await self._list(api)
        except ApiException as e:
            logger.error("Kubernetes API error while listing %s: %s %s", self.COLLECTION, e.status, e.reason)
            raise FetchError(self.COLLECTION, f"API error {e.status}: {e.reason}") from e
        except FetchError:
            raise
        except Exception as e:
            logger.error("Unexpected error while listing %s: %s", self.COLLECTION, e)
            raise FetchError(self.COLLECTION, e) from e

        logger.debug("Collected %d %s.", len(items), self.COLLECTION)
        return items

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("%s Kubernetes client closed.", type(self).__name__)
            self._api = None
