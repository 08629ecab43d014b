"""Single-shot upload driver: every run uploads one whole object."""

from src.models import BenchmarkConfig
from src.storage import StorageClient


def object_name(units: int, run: int) -> str:
    """Object name for one run of one sweep size.

    Unique per (size, run) pair so no upload overwrites another.
    """
    return f"x-{units}-{run}"


def run_single_shot(
    client: StorageClient,
    config: BenchmarkConfig,
    size: int,
    payload: bytes,
) -> list[float]:
    """Upload payload as `config.runs` separate objects.

    Args:
        client: Storage backend
        config: Benchmark configuration
        size: Sweep size the payload was generated for
        payload: Object contents, reused for every run

    Returns:
        Per-upload durations in seconds, in upload order.
    """
    units = config.units(size)
    return [
        client.upload_object(config.bucket, object_name(units, run), payload)
        for run in range(config.runs)
    ]
