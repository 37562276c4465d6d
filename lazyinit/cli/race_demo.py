# lazyinit/cli/race_demo.py

"""
Race Demo CLI

Releases many threads at once against a fresh accessor and counts how many
times the factory ran. The naive check-then-create accessor usually builds
several instances; the guarded strategies must always build exactly one.
"""

import argparse
import sys
import threading
import time
from typing import Any, Callable, List, Optional, Sequence

from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from lazyinit.core.accessor import FailurePolicy, Strategy
from lazyinit.core.factory import create_accessor
from lazyinit.core.patterns.base_model import ImmutableModel, Field
from lazyinit.core.settings import get_settings
from lazyinit.utils.logger import setup_logger

console = Console()

NAIVE = "naive"
ALL_STRATEGIES = [NAIVE] + [s.value for s in Strategy]


class NaiveAccessor:
    """
    Unguarded check-then-create

    Two threads can both see the empty slot and both construct. ``window``
    widens the gap between the check and the write to make that visible.
    """

    def __init__(self, factory: Callable[[], Any], window: float = 0.0):
        self.factory = factory
        self.window = window
        self._instance = None

    def get_instance(self) -> Any:
        if self._instance is None:
            if self.window:
                time.sleep(self.window)
            self._instance = self.factory()
        return self._instance


class RaceResult(ImmutableModel):
    """Outcome of one trial"""

    strategy: str
    trial: int = 1
    callers: int
    constructions: int
    distinct_instances: int
    elapsed: float = Field(ge=0.0)

    @property
    def passed(self) -> bool:
        return self.constructions == 1 and self.distinct_instances == 1


class _Resource:
    """Stand-in for an expensive shared object"""
    pass


def run_trial(
    strategy: str,
    callers: int = 1000,
    window: float = 0.0,
    trial: int = 1,
) -> RaceResult:
    """
    Run ``callers`` threads against one fresh accessor

    Args:
        strategy: "naive" or a Strategy value
        callers: number of concurrent threads
        window: artificial delay inside construction (and, for naive,
            between check and create)
        trial: trial number for reporting

    Returns:
        RaceResult
    """
    if callers < 1:
        raise ValueError("callers must be >= 1")

    counter_lock = threading.Lock()
    constructions = [0]

    def factory() -> _Resource:
        with counter_lock:
            constructions[0] += 1
        if window and strategy != NAIVE:
            time.sleep(window)
        return _Resource()

    if strategy == NAIVE:
        accessor = NaiveAccessor(factory, window=window)
    else:
        accessor = create_accessor(
            factory,
            strategy=strategy,
            name=f"race-{strategy}-{trial}",
            policy=FailurePolicy.RETRY,
            retries=0,
        )

    barrier = threading.Barrier(callers)
    # keep the objects alive so ids cannot be reused
    seen: List[Any] = [None] * callers

    def worker(index: int) -> None:
        barrier.wait()
        seen[index] = accessor.get_instance()

    threads = [
        threading.Thread(target=worker, args=(i,), name=f"caller-{i}")
        for i in range(callers)
    ]

    started = time.perf_counter()
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    elapsed = time.perf_counter() - started

    return RaceResult(
        strategy=strategy,
        trial=trial,
        callers=callers,
        constructions=constructions[0],
        distinct_instances=len({id(obj) for obj in seen}),
        elapsed=elapsed,
    )


class RaceDemoCLI:
    """Race demo output"""

    def __init__(self):
        self.console = console

    def display(self, results: Sequence[RaceResult]) -> None:
        """
        결과 테이블 출력

        Args:
            results: trial results
        """
        self.console.print(
            Panel.fit(
                "[bold cyan]Lazy initialization race[/bold cyan]",
                border_style="cyan"
            )
        )

        table = Table(box=box.ROUNDED, border_style="green")
        table.add_column("Strategy", style="bold")
        table.add_column("Trial", justify="right", style="dim")
        table.add_column("Callers", justify="right")
        table.add_column("Constructions", justify="right")
        table.add_column("Distinct", justify="right")
        table.add_column("Time (s)", justify="right")
        table.add_column("Result")

        for result in results:
            verdict = "[green]one instance[/green]" if result.passed else "[red]RACE[/red]"
            table.add_row(
                result.strategy,
                str(result.trial),
                str(result.callers),
                str(result.constructions),
                str(result.distinct_instances),
                f"{result.elapsed:.3f}",
                verdict,
            )

        self.console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyinit-race",
        description="Race many threads against a lazily initialized singleton",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--callers",
        type=int,
        default=1000,
        help="Concurrent threads per trial"
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=5,
        help="Trials per strategy"
    )
    parser.add_argument(
        "--window",
        type=float,
        default=0.001,
        help="Artificial construction delay in seconds"
    )
    parser.add_argument(
        "--strategy",
        action="append",
        choices=ALL_STRATEGIES,
        default=None,
        help="Strategy to run (repeatable, default: all)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON lines instead of a table"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the demo

    Returns:
        0 if every guarded strategy built exactly one instance, else 1
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.callers < 1 or args.trials < 1:
        console.print("[red]--callers and --trials must be >= 1[/red]")
        return 2

    settings = get_settings()
    setup_logger(log_level=settings.log_level, log_dir=settings.logs_path)

    strategies = args.strategy or ALL_STRATEGIES
    results = [
        run_trial(strategy, callers=args.callers, window=args.window, trial=trial)
        for strategy in strategies
        for trial in range(1, args.trials + 1)
    ]

    if args.json:
        for result in results:
            print(result.to_json())
    else:
        RaceDemoCLI().display(results)

    guarded_failures = [r for r in results if r.strategy != NAIVE and not r.passed]
    return 1 if guarded_failures else 0


if __name__ == "__main__":
    sys.exit(main())
