"""
Pushflow Propagation Benchmarks
"""

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Callable, List

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pushflow import DiscreteValueStream, Node, TimeVaryingValue

# =============================================================================
# Benchmark Configuration and Metrics
# =============================================================================

# Configuration
TIME_LIMIT_SECONDS = 1.0
CHAIN_LENGTH = 500  # Propagation recurses through every link
FANOUT_WIDTH = 1000
DIAMOND_COUNT = 200
NUM_ITERATIONS = 5  # Repeat each benchmark to smooth out GC noise


@dataclass
class BenchmarkResult:
    """Timing samples for one benchmark."""

    name: str
    operations: int
    samples: List[float]
    notifications: int = 0

    @property
    def median_seconds(self) -> float:
        return float(np.median(self.samples))

    @property
    def p95_seconds(self) -> float:
        return float(np.percentile(self.samples, 95))

    @property
    def ops_per_second(self) -> float:
        median = self.median_seconds
        return self.operations / median if median > 0 else float("inf")


def print_config():
    """Print the current benchmark configuration."""
    console = Console()
    console.print(
        Panel(
            f"Time limit: {TIME_LIMIT_SECONDS}s per benchmark\n"
            f"Chain length: {CHAIN_LENGTH}\n"
            f"Fan-out width: {FANOUT_WIDTH}\n"
            f"Diamonds: {DIAMOND_COUNT}\n"
            f"Iterations: {NUM_ITERATIONS}",
            title="Benchmark Configuration",
        )
    )


def _time_repeated(run: Callable[[], None]) -> List[float]:
    samples = []
    deadline = time.perf_counter() + TIME_LIMIT_SECONDS
    for _ in range(NUM_ITERATIONS):
        start = time.perf_counter()
        run()
        samples.append(time.perf_counter() - start)
        if time.perf_counter() > deadline:
            break
    return samples


# =============================================================================
# Benchmarks
# =============================================================================


def bench_creation() -> BenchmarkResult:
    count = FANOUT_WIDTH

    def run():
        for i in range(count):
            TimeVaryingValue.starting_with(i)

    return BenchmarkResult("Value creation", count, _time_repeated(run))


def bench_writes() -> BenchmarkResult:
    stream = DiscreteValueStream.manual()
    count = FANOUT_WIDTH * 10

    def run():
        for i in range(count):
            stream.add_value(i)

    return BenchmarkResult("Explicit writes", count, _time_repeated(run))


def bench_chain() -> BenchmarkResult:
    origin = TimeVaryingValue.starting_with(0)
    tail = origin
    for _ in range(CHAIN_LENGTH):
        tail = tail + 1

    counter = [0]
    tail.on_change(lambda value: counter.__setitem__(0, counter[0] + 1))

    def run():
        origin.change_to(1)

    result = BenchmarkResult("Chain propagation", CHAIN_LENGTH, _time_repeated(run))
    result.notifications = counter[0]
    return result


def bench_fanout() -> BenchmarkResult:
    origin = Node.follows(fn=lambda: None)
    for _ in range(FANOUT_WIDTH):
        Node.follows(origin, fn=lambda o: o * 2)

    def run():
        origin.set_value(1)

    return BenchmarkResult("Fan-out", FANOUT_WIDTH, _time_repeated(run))


def bench_diamonds() -> BenchmarkResult:
    origin = TimeVaryingValue.starting_with(0)
    notifications = [0]

    def count(value):
        notifications[0] += 1

    for _ in range(DIAMOND_COUNT):
        join = TimeVaryingValue.follows(origin + 1, origin * 2, fn=lambda a, b: a + b)
        join.on_change(count)

    def run():
        origin.change_to(1)

    result = BenchmarkResult("Diamond joins", DIAMOND_COUNT, _time_repeated(run))
    result.notifications = notifications[0]
    return result


# =============================================================================
# Reporting
# =============================================================================


def report(results: List[BenchmarkResult]) -> None:
    console = Console()
    table = Table(title="Performance Results")
    table.add_column("Benchmark", style="cyan")
    table.add_column("Ops", style="yellow", justify="right")
    table.add_column("Operations/sec", style="green", justify="right")
    table.add_column("Median (ms)", style="blue", justify="right")
    table.add_column("p95 (ms)", style="blue", justify="right")
    table.add_column("Hook calls", style="magenta", justify="right")

    for result in results:
        table.add_row(
            result.name,
            f"{result.operations:,}",
            f"{result.ops_per_second:,.0f}",
            f"{result.median_seconds * 1000:.3f}",
            f"{result.p95_seconds * 1000:.3f}",
            f"{result.notifications:,}" if result.notifications else "-",
        )

    console.print(table)

    diamonds = next((r for r in results if r.name == "Diamond joins"), None)
    if diamonds is not None and diamonds.samples:
        per_change = diamonds.notifications / (DIAMOND_COUNT * len(diamonds.samples))
        console.print(
            f"[yellow]Diamond joins notified {per_change:.1f}x per origin change "
            f"(glitch then settled value)[/yellow]"
        )


def run_all() -> None:
    console = Console()
    console.print(Panel("Pushflow propagation benchmarks", style="bold"))

    results = []
    for bench in (bench_creation, bench_writes, bench_chain, bench_fanout, bench_diamonds):
        console.print(f"[yellow]Running {bench.__name__[6:]} benchmark...[/yellow]")
        results.append(bench())

    console.print()
    report(results)


def main():
    """Main entry point for the benchmark suite."""
    parser = argparse.ArgumentParser(description="Pushflow Propagation Benchmarks")
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Run quick benchmarks (reduced time limits and sizes)",
    )

    args = parser.parse_args()

    if args.config:
        print_config()
        return

    global TIME_LIMIT_SECONDS, CHAIN_LENGTH, FANOUT_WIDTH
    if args.quick:
        TIME_LIMIT_SECONDS = 0.25
        CHAIN_LENGTH = 100
        FANOUT_WIDTH = 200

    # Propagation recurses once per link
    sys.setrecursionlimit(max(sys.getrecursionlimit(), CHAIN_LENGTH * 4 + 1000))

    if not args.quick:
        print_config()
        print()

    run_all()


if __name__ == "__main__":
    main()
