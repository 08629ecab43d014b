"""Benchmark sweep orchestrator.

Coordinates a sweep over payload sizes, managing:
- Payload creation for each size
- Dispatch to the single-shot or resumable driver
- Throughput aggregation
- Reporter callbacks

Runs are strictly sequential. The first error from a driver ends the
sweep and propagates to the caller; sizes already reported stay reported.
"""

from typing import Any, Callable, Optional

from src.gcs_client import GcsClient
from src.models import (
    BackendConfig,
    BenchmarkConfig,
    SizeResult,
    SweepResult,
    UploadMode,
)
from src.payload import make_payload
from src.resumable import run_resumable
from src.s3_client import S3Client, build_s3_client
from src.single_shot import run_single_shot
from src.stats import compute_throughput
from src.storage import StorageClient

DRIVERS = {
    UploadMode.OBJECT: run_single_shot,
    UploadMode.RESUMABLE: run_resumable,
}


def build_storage_client(config: BackendConfig) -> StorageClient:
    """Create the storage backend named by the configuration."""
    if config.backend == "s3":
        return S3Client(build_s3_client(config))
    return GcsClient(
        endpoint=config.gcs_endpoint,
        access_token=config.gcs_access_token,
        timeout=config.timeout,
    )


class BenchmarkRunner:
    """Runs a throughput sweep against one storage backend."""

    def __init__(
        self,
        client: StorageClient,
        config: BenchmarkConfig,
        reporter: Optional[Any] = None,
        payload_factory: Optional[Callable[[int], bytes]] = None,
    ):
        """Initialize the runner.

        Args:
            client: Storage backend
            config: Benchmark configuration
            reporter: Optional reporter for progress callbacks
            payload_factory: Produces the upload buffer for a size
                             (defaults to random bytes)
        """
        self.client = client
        self.config = config
        self.reporter = reporter
        self.payload_factory = payload_factory or make_payload

    def run(self, mode: UploadMode) -> SweepResult:
        """Run the full size sweep in the given mode.

        Returns:
            SweepResult with one SizeResult per size.

        Raises:
            ConfigError: If the configuration is invalid (before any upload).
        """
        self.config.validate()
        driver = DRIVERS[mode]
        sweep = SweepResult(mode=mode)

        if self.reporter:
            self.reporter.on_sweep_start(mode, self.config)

        for size in self.config.sizes():
            if self.reporter:
                self.reporter.on_size_start(size)

            result = self.run_size(driver, size)
            sweep.results.append(result)

            if self.reporter:
                self.reporter.on_size_complete(result)

        if self.reporter:
            self.reporter.on_sweep_complete(sweep)

        return sweep

    def run_size(self, driver: Callable[..., list[float]], size: int) -> SizeResult:
        """Run every trial for one size and aggregate the durations."""
        payload = self.payload_factory(size)
        durations = driver(self.client, self.config, size, payload)
        units = self.config.units(size)
        return SizeResult(
            size=size,
            units=units,
            durations=durations,
            stats=compute_throughput(durations, units),
        )
