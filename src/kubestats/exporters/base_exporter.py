from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..models.metrics import DataBatch


class BaseExporter(ABC):
    """Abstract base class for batch sinks.

    Subclasses should provide a DEFAULT_FILENAME and implement `export`.
    """

    DEFAULT_FILENAME: str = "kubestats-batches"

    @abstractmethod
    async def export(self, batches: Iterable[DataBatch], path: str | None = None) -> str:
        """Hand the batches over to the sink. Return the written path."""
        raise NotImplementedError()
