"""Command-line interface for the upload throughput benchmark.

Provides argument parsing and main entry point. Two subcommands are
available:

    obj   single-shot whole-object uploads
    mobj  resumable chunked uploads
"""

import argparse
import sys
from typing import Optional

import httpx
from botocore.exceptions import BotoCoreError, ClientError

from src.config import ConfigError, load_backend_config
from src.models import BenchmarkConfig, DEFAULT_RUNS, UploadMode
from src.reporters import ConsoleReporter
from src.resumable import ConsistencyError
from src.runner import BenchmarkRunner, build_storage_client
from src.storage import StorageError

# Errors raised by a backend or by the session consistency check
BENCHMARK_ERRORS = (
    ConsistencyError,
    StorageError,
    httpx.HTTPError,
    BotoCoreError,
    ClientError,
)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="upload-bench",
        description="Measure object storage upload throughput",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-b", "--bucket",
        help="Destination bucket",
    )
    common.add_argument(
        "-c", "--config",
        default="config.json",
        help="Path to configuration file (default: config.json)",
    )
    common.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output, show only result lines",
    )
    common.add_argument(
        "--backend",
        choices=["gcs", "s3"],
        help="Storage backend (overrides configuration)",
    )
    common.add_argument(
        "--runs",
        type=int,
        default=DEFAULT_RUNS,
        help=f"Uploads per payload size (default: {DEFAULT_RUNS})",
    )

    subparsers.add_parser(
        UploadMode.OBJECT.value,
        parents=[common],
        help="Benchmark single-shot object uploads",
    )
    subparsers.add_parser(
        UploadMode.RESUMABLE.value,
        parents=[common],
        help="Benchmark resumable chunked uploads",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 for success, 1 for benchmark failures, 2 for
        configuration errors
    """
    args = parse_args(argv)

    if args.command is None:
        print("Configuration error: a command is required (obj or mobj)", file=sys.stderr)
        return 2

    mode = UploadMode(args.command)
    config = BenchmarkConfig(bucket=args.bucket, runs=args.runs)

    # Validate before any configuration is loaded or client is built
    try:
        config.validate()
        backend_config = load_backend_config(args.config, backend=args.backend)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    reporter = ConsoleReporter(quiet=args.quiet)

    try:
        with build_storage_client(backend_config) as client:
            runner = BenchmarkRunner(client, config, reporter=reporter)
            runner.run(mode)
    except BENCHMARK_ERRORS as e:
        print(f"Benchmark failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
