# src/kubestats/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod

from ..core.processor import ScrapeResult


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, result: ScrapeResult):
        """
        Takes the outcome of a scrape cycle and presents it in a specific
        format (e.g., console).
        """
        pass
