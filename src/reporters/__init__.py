"""Reporter modules for outputting benchmark results."""

from .base import Reporter
from .console import ConsoleReporter

__all__ = ["Reporter", "ConsoleReporter"]
