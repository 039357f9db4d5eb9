# src/kubestats/collectors/base_collector.py
"""
This module defines the abstract base class for all data collectors.
Enforcing this interface ensures that all collectors have a consistent
method signature, making them interchangeable and easy to manage by the
scrape processor.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """
    Abstract Base Class for all collectors.
    """

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        The main method for a collector. It should fetch data from its
        source (the Kubernetes API, a kubelet), parse it, and return
        Pydantic models.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions or API clients).
        """
        pass
