"""
Object storage upload throughput benchmark.

Measures single-shot and resumable chunked upload speed across a sweep of
payload sizes and reports mean throughput and its standard deviation.
"""

__version__ = "1.0.0"

from src.cli import main

__all__ = ["main", "__version__"]
