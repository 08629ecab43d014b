"""Data models for the upload throughput benchmark."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

MIB = 1 << 20

# Number of repeated trials per payload size
DEFAULT_RUNS = 16

# Sweep bounds: 1 MiB to 128 MiB inclusive, doubling
DEFAULT_MIN_SIZE = 1 * MIB
DEFAULT_MAX_SIZE = 128 * MIB


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


class UploadMode(Enum):
    """Transfer mode being benchmarked."""

    OBJECT = "obj"
    RESUMABLE = "mobj"


@dataclass
class BackendConfig:
    """Connection settings for the storage backend."""

    backend: str = "gcs"
    gcs_endpoint: str = "https://storage.googleapis.com"
    gcs_access_token: Optional[str] = None
    s3_endpoint_url: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_region: str = "us-east-1"
    s3_addressing_style: str = "path"
    timeout: Optional[float] = None


@dataclass
class BenchmarkConfig:
    """Parameters of one benchmark sweep.

    Built by the command-line layer and handed to the drivers; nothing
    below the CLI reads flags or the environment.
    """

    bucket: Optional[str]
    runs: int = DEFAULT_RUNS
    min_size: int = DEFAULT_MIN_SIZE
    max_size: int = DEFAULT_MAX_SIZE

    def validate(self) -> None:
        """Check the configuration before any network activity.

        Raises:
            ConfigError: If the bucket is unset or the sweep is malformed.
        """
        if not self.bucket:
            raise ConfigError("destination bucket must be specified (--bucket)")
        if self.runs < 1:
            raise ConfigError(f"runs must be at least 1, got {self.runs}")
        if self.min_size < 1:
            raise ConfigError(f"minimum size must be positive, got {self.min_size}")
        if self.max_size < self.min_size:
            raise ConfigError(
                f"maximum size {self.max_size} is smaller than minimum size {self.min_size}"
            )

    def sizes(self) -> Iterator[int]:
        """Yield the sweep sizes, doubling from min_size up to max_size."""
        size = self.min_size
        while size <= self.max_size:
            yield size
            size <<= 1

    def units(self, size: int) -> int:
        """Express a sweep size as a multiple of the minimum size."""
        return size // self.min_size


@dataclass
class ThroughputStats:
    """Mean throughput and its standard deviation, in units per second."""

    mean_speed: float
    std_dev: float


@dataclass
class SizeResult:
    """Measurements for one step of the sweep."""

    size: int
    units: int
    durations: list[float]
    stats: ThroughputStats

    @property
    def size_mib(self) -> int:
        return self.size // MIB


@dataclass
class SweepResult:
    """Results for every completed size of a sweep."""

    mode: UploadMode
    results: list[SizeResult] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(r.size * len(r.durations) for r in self.results)

    @property
    def total_duration(self) -> float:
        return sum(sum(r.durations) for r in self.results)
