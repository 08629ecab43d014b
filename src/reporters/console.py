"""Console reporter using Rich library for CLI output.

Result lines go to stdout in a fixed plain-text format, one per size, so
they can be collected by scripts. Progress output (sweep header, per-size
progress, final summary) goes to stderr and can be silenced with quiet.
"""

from rich.console import Console
from rich.rule import Rule

from src.models import MIB, BenchmarkConfig, SizeResult, SweepResult, UploadMode
from src.reporters.base import Reporter

MODE_TITLES = {
    UploadMode.OBJECT: "single-shot object upload",
    UploadMode.RESUMABLE: "resumable chunked upload",
}


def format_result(result: SizeResult) -> str:
    """Format the result line for one sweep size."""
    return (
        f"size={result.units:3d} MiB: mean speed={result.stats.mean_speed:.3f} MiB/s, "
        f"standard deviation={result.stats.std_dev:.6f} MiB/s"
    )


class ConsoleReporter(Reporter):
    """Rich-based console reporter for CLI output.

    Args:
        quiet: If True, suppress progress output (result lines are kept)
    """

    def __init__(self, quiet: bool = False):
        """Initialize the console reporter.

        Args:
            quiet: Suppress progress output if True
        """
        self.console = Console(highlight=False, soft_wrap=True)
        # Use legacy_windows=True for ASCII-safe output on Windows consoles
        self.err_console = Console(stderr=True, legacy_windows=True)
        self.quiet = quiet

    def on_sweep_start(self, mode: UploadMode, config: BenchmarkConfig) -> None:
        if self.quiet:
            return
        self.err_console.print(
            Rule(f"[bold cyan]{MODE_TITLES[mode]}[/bold cyan]", style="cyan", characters="-")
        )
        self.err_console.print(
            f"bucket [bold]{config.bucket}[/bold], {config.runs} runs per size, "
            f"{config.min_size // MIB}-{config.max_size // MIB} MiB"
        )

    def on_size_start(self, size: int) -> None:
        if self.quiet:
            return
        self.err_console.print(f"[dim]uploading {size // MIB} MiB...[/dim]")

    def on_size_complete(self, result: SizeResult) -> None:
        self.console.print(format_result(result), markup=False)

    def on_sweep_complete(self, result: SweepResult) -> None:
        if self.quiet:
            return
        self.err_console.print(
            f"[green]Done[/green]: {result.total_bytes // MIB} MiB uploaded "
            f"in {result.total_duration:.1f}s"
        )
