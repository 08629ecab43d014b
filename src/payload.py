"""Random payload generation for upload benchmarks."""

import os

# Generate in 1 MiB slices to keep individual urandom calls small
SLICE_SIZE = 1024 * 1024


def make_payload(size: int) -> bytes:
    """Create a buffer of random bytes.

    Args:
        size: Size of the buffer in bytes.

    Returns:
        The random buffer.
    """
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")

    slices = []
    remaining = size
    while remaining > 0:
        write_size = min(SLICE_SIZE, remaining)
        slices.append(os.urandom(write_size))
        remaining -= write_size
    return b"".join(slices)
