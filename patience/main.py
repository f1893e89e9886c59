import argparse
import json
import logging
import os
import random
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field, fields, replace

import matplotlib.pyplot as plt

from patience.linked import LinkedList
from patience.patience_sort import (
    patience_sorted,
    sort,
    sort_list,
    sort_range,
    sort_through_list,
)

logger = logging.getLogger("patience")

SMOKE_INPUT = [1, 5, 1, 5, 12, 4, 104, 15, 2, 8]


def merge_sort(arr):
    """Bottom-up merge sort, ping-ponging between arr and one scratch list."""
    n = len(arr)
    src, dst = arr, [None] * n
    width = 1
    while width < n:
        for lo in range(0, n, 2 * width):
            mid = min(lo + width, n)
            hi = min(lo + 2 * width, n)
            i, j = lo, mid
            for k in range(lo, hi):
                if j >= hi or (i < mid and src[i] <= src[j]):
                    dst[k] = src[i]
                    i += 1
                else:
                    dst[k] = src[j]
                    j += 1
        src, dst = dst, src
        width *= 2

    if src is not arr:
        arr[:] = src
    return arr

def default_sort(arr):
    arr.sort()
    return arr

def patience_contiguous(arr):
    sort_range(arr)
    return arr

def patience_linked(arr):
    sort_through_list(arr)
    return arr


SORTERS = {
    "patience": patience_contiguous,
    "patience_list": patience_linked,
    "merge_sort": merge_sort,
    "default": default_sort,
}


def trend_with_jumps(n, rng, jump_prob=0.05):
    arr = []
    value = 1
    for _ in range(n):
        if rng.random() < jump_prob:
            value += rng.randint(-10, 10)
        else:
            value += rng.randint(0, 1)

        if value < 1:
            value = 1

        arr.append(value)

    return arr

def random_values(n, rng, max_value=10_000_000):
    return [rng.randint(1, max_value) for _ in range(n)]

def worst_case(n, rng=None):
    return list(range(n, 0, -1))

def best_case(n, rng=None):
    return list(range(n))

def worst_case_alternating_high_low(n, rng=None):
    high = list(range(n, 0, -1))
    low = list(range(1, n + 1))
    arr = []
    for h, l in zip(high, low):
        arr.append(h)
        arr.append(l)
    return arr[:n]

def generate_many_duplicates(n, rng, distinct_values=3, max_value=20):
    base_values = rng.sample(range(1, max_value + 1), k=distinct_values)
    return [rng.choice(base_values) for _ in range(n)]


def generate_many_unique_spread(n, rng, range_multiplier=1000):
    """
    range_multiplier - "range" of values will be n * range_multiplier
    """
    max_value = max(1, n * range_multiplier)
    return rng.sample(range(1, max_value + 1), n)


CASES = {
    "random": ("Random data sorting comparison", random_values),
    "jumps": ("Data with jumps sorting comparison", trend_with_jumps),
    "best": ("Best-case data sorting comparison", best_case),
    "worst": ("Worst-case data sorting comparison", worst_case),
    "alternating": ("Alternating-case data sorting comparison", worst_case_alternating_high_low),
    "duplicates": ("Many duplicates data sorting comparison", generate_many_duplicates),
    "unique": ("Many unique spread data sorting comparison", generate_many_unique_spread),
}


@dataclass
class BenchConfig:
    """Benchmark settings; defaults here, then JSON file, then CLI flags."""

    start: int = 1
    stop: int = 100_001
    step: int = 20_000
    reps: int = 3
    workers: int | None = None
    seed: int | None = 100
    cases: list = field(default_factory=lambda: list(CASES))
    sorters: list = field(default_factory=lambda: list(SORTERS))
    out_dir: str | None = None
    plot: bool = True
    log_level: str = "INFO"

    def sizes(self):
        return list(range(self.start, self.stop, self.step))

    def validate(self):
        if self.start < 0 or self.stop <= self.start or self.step <= 0:
            raise ValueError(
                f"invalid size range start={self.start} stop={self.stop} step={self.step}"
            )
        if self.reps <= 0:
            raise ValueError(f"reps must be > 0, got {self.reps}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be > 0, got {self.workers}")
        unknown = [c for c in self.cases if c not in CASES]
        if unknown:
            raise ValueError(f"unknown cases: {', '.join(unknown)}")
        unknown = [s for s in self.sorters if s not in SORTERS]
        if unknown:
            raise ValueError(f"unknown sorters: {', '.join(unknown)}")


def load_config(path):
    """Read a JSON object of BenchConfig fields."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must hold a JSON object")
    known = {f.name for f in fields(BenchConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys in {path}: {', '.join(unknown)}")
    return BenchConfig(**data)


def is_sorted(arr):
    return all(arr[i] <= arr[i + 1] for i in range(len(arr) - 1))

def measure(name, base_arr, reps=3):
    """Best wall time of sorter ``name`` over ``reps`` fresh copies of base_arr."""
    if len(base_arr) <= 1:
        return 0.0

    sort_fn = SORTERS[name]
    timings = []
    for _ in range(reps):
        arr = list(base_arr)
        start = time.perf_counter()
        sort_fn(arr)
        timings.append(time.perf_counter() - start)
    return min(timings)

def bench_one_n(args):
    n, base_arr, sorters, reps = args

    times = []
    for name in sorters:
        check = SORTERS[name](list(base_arr))
        if not is_sorted(check):
            raise RuntimeError(f"{name} produced unsorted output for n={n}")
        times.append(measure(name, base_arr, reps=reps))

    return n, times

def run_bench(tasks, sorters, reps=3, max_workers=None):
    """Time every sorter on every (n, base_arr) task.

    Returns a dict mapping sorter name to times listed in task order.
    """
    results = {name: [] for name in sorters}
    jobs = [(n, base_arr, sorters, reps) for n, base_arr in tasks]

    if max_workers == 1:
        outcomes = map(bench_one_n, jobs)
        for n, times in outcomes:
            logger.info("n=%d done", n)
            for name, t in zip(sorters, times):
                results[name].append(t)
        return results

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        for n, times in executor.map(bench_one_n, jobs):
            logger.info("n=%d done", n)
            for name, t in zip(sorters, times):
                results[name].append(t)

    return results

def plot_results(sizes, results, title, save_path=None):
    """Line chart of time against input size, one line per sorter.

    results maps sorter name to times listed in the order of sizes. The chart
    goes to save_path as PNG, or on screen when save_path is None.
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    for name, times in results.items():
        ax.plot(sizes, times, marker="o", markersize=3, label=name)

    ax.set_title(title)
    ax.set_xlabel("Array size")
    ax.set_ylabel("Best of reps, sec")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
        plt.close(fig)
    else:
        plt.show()


def run_cases(config):
    """Benchmark every configured case; returns {case: {sorter: times}}."""
    rng = random.Random(config.seed)
    sizes = config.sizes()
    if config.out_dir:
        os.makedirs(config.out_dir, exist_ok=True)

    all_results = {}
    for case in config.cases:
        title, generate = CASES[case]
        logger.info("Starting benchmark for %s data (%d sizes)", case, len(sizes))
        tasks = [(n, generate(n, rng)) for n in sizes]
        results = run_bench(tasks, config.sorters, reps=config.reps, max_workers=config.workers)
        all_results[case] = results

        if config.plot:
            save_path = None
            if config.out_dir:
                save_path = os.path.join(config.out_dir, f"{case}.png")
            plot_results(sizes, results, title, save_path)
            if save_path:
                logger.info("Saved chart to %s", save_path)

    return all_results


def smoke():
    """Sort the reference input through every entry point; 0 on success."""
    outputs = {}

    arr = SMOKE_INPUT.copy()
    sort(arr)
    outputs["sort"] = arr

    arr = SMOKE_INPUT.copy()
    sort_through_list(arr)
    outputs["sort_through_list"] = arr

    lst = LinkedList(SMOKE_INPUT)
    sort_list(lst)
    outputs["sort_list"] = list(lst)

    outputs["patience_sorted"] = patience_sorted(SMOKE_INPUT)

    ok = True
    for name, out in outputs.items():
        if not is_sorted(out) or sorted(out) != sorted(SMOKE_INPUT):
            logger.error("%s failed: %s", name, out)
            ok = False

    print("Success" if ok else "Failure")
    return 0 if ok else 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="patience-bench",
        description="Patience sort smoke test and benchmark against other sorts.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("smoke", help="Sort a fixed example through every entry point")

    bench = sub.add_parser("bench", help="Time sorters over growing input sizes")
    bench.add_argument("--config", help="JSON file with benchmark settings")
    bench.add_argument("--start", type=int)
    bench.add_argument("--stop", type=int)
    bench.add_argument("--step", type=int)
    bench.add_argument("--reps", type=int)
    bench.add_argument("--workers", type=int)
    bench.add_argument("--seed", type=int)
    bench.add_argument("--cases", nargs="+", metavar="CASE", help=f"any of: {', '.join(CASES)}")
    bench.add_argument("--sorters", nargs="+", metavar="SORTER", help=f"any of: {', '.join(SORTERS)}")
    bench.add_argument("--out-dir", help="Directory for PNG charts (shown on screen if omitted)")
    bench.add_argument("--no-plot", dest="plot", action="store_false", default=None)
    return parser


def config_from_args(args):
    config = load_config(args.config) if args.config else BenchConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("start", "stop", "step", "reps", "workers", "seed", "cases", "sorters", "out_dir", "plot")
        if getattr(args, name) is not None
    }
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return replace(config, **overrides)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "smoke":
        log_level = args.log_level or "INFO"
        config = None
    else:
        try:
            config = config_from_args(args)
            config.validate()
        except (OSError, ValueError) as e:
            parser.error(str(e))
        log_level = config.log_level

    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config is None:
        return smoke()

    run_cases(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
