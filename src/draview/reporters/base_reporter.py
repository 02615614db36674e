# src/draview/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.node import NodeRecord


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, data: List[NodeRecord]):
        """
        Takes the reconciled node records and presents them in a specific
        format (e.g., a console table).
        """
        pass
