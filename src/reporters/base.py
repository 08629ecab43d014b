"""Base reporter interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.models import BenchmarkConfig, SizeResult, SweepResult, UploadMode


class Reporter(ABC):
    """Abstract base class for benchmark reporters."""

    @abstractmethod
    def on_sweep_start(self, mode: "UploadMode", config: "BenchmarkConfig") -> None:
        """Called before the first size is uploaded."""
        pass

    @abstractmethod
    def on_size_start(self, size: int) -> None:
        """Called when the runs for a size begin."""
        pass

    @abstractmethod
    def on_size_complete(self, result: "SizeResult") -> None:
        """Called when every run for a size has completed."""
        pass

    @abstractmethod
    def on_sweep_complete(self, result: "SweepResult") -> None:
        """Called after the last size has been reported."""
        pass
