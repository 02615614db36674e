# src/draview/core/config.py

import logging
import os
from typing import Dict

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

# Drivers whose devices carry a more descriptive name than the driver itself.
DEFAULT_PRODUCT_NAME_ATTRIBUTES: Dict[str, str] = {
    "gpu.nvidia.com": "productName",
}


def parse_attribute_mapping(raw: str) -> Dict[str, str]:
    """
    Parses "driver=attribute,driver2=attribute2" into a dict.

    Raises:
        ValueError: If an entry is not of the form driver=attribute.
    """
    mapping: Dict[str, str] = {}
    if not raw:
        return mapping
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        driver, sep, attribute = entry.partition("=")
        if not sep or not driver.strip() or not attribute.strip():
            raise ValueError(f"PRODUCT_NAME_ATTRIBUTES entry '{entry}' must look like 'driver=attribute'.")
        mapping[driver.strip()] = attribute.strip()
    return mapping


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Kubernetes connection ---
    # Resolved at access time so the CLI's --kubeconfig/--context flags and
    # tests can change the environment after import.
    @property
    def KUBECONFIG(self) -> str | None:
        return os.getenv("KUBECONFIG") or None

    @property
    def KUBE_CONTEXT(self) -> str | None:
        return os.getenv("KUBE_CONTEXT") or None

    # --- Dynamic Resource Allocation API ---
    DRA_API_GROUP = os.getenv("DRA_API_GROUP", "resource.k8s.io")
    DRA_API_VERSION = os.getenv("DRA_API_VERSION", "v1beta1")

    # --- Reconciliation ---
    STORAGE_RESOURCE_NAME = os.getenv("STORAGE_RESOURCE_NAME", "storage")
    FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

    @property
    def PRODUCT_NAME_ATTRIBUTES(self) -> Dict[str, str]:
        mapping = dict(DEFAULT_PRODUCT_NAME_ATTRIBUTES)
        mapping.update(parse_attribute_mapping(os.getenv("PRODUCT_NAME_ATTRIBUTES", "")))
        return mapping

    def validate_instance(self):
        if self.FETCH_TIMEOUT_SECONDS < 0:
            raise ValueError("FETCH_TIMEOUT_SECONDS must be zero (disabled) or positive.")
        if not self.DRA_API_VERSION:
            raise ValueError("DRA_API_VERSION must not be empty.")
        # Raises on malformed entries.
        self.PRODUCT_NAME_ATTRIBUTES
        if self.LOG_LEVEL.upper() not in logging.getLevelNamesMapping():
            logging.getLogger(__name__).warning("Unknown LOG_LEVEL '%s', falling back to INFO.", self.LOG_LEVEL)
            self.LOG_LEVEL = "INFO"


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
