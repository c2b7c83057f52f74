"""
Benchmark runner for RadixTree.

`run_benchmark(config, keys=None)` builds a fresh tree per repeat, times
each public operation over the workload and returns `(df, stats)`: a pandas
DataFrame with one row per operation, and the `tree_stats` of the last built
tree.

    operation | n | total_s | per_op_us | p50_us | p95_us

`total_s` is the median wall time of one repeat, `per_op_us` the median cost
of a single call, and `p50_us` / `p95_us` the percentiles of that per-call
cost across repeats.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from components.work_loads import WorkLoad
from radixtrie import RadixTree

logger = logging.getLogger(__name__)

WORKLOADS = ("words", "words_prefix", "urls", "uuids", "routes")
OPERATIONS = ("insert", "get", "longest_match", "collect", "walk", "delete")


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        workload: str, one of WORKLOADS
        num_keys: int, number of keys generated
        prefix_freq: float, shared-prefix frequency for "words_prefix"
        lookup_sample: int, number of keys/prefixes used by lookups
        repeats: int, number of independent runs
        seed: int, seed for workload generation and sampling
    """
    workload: str = "words_prefix"
    num_keys: int = 5_000
    prefix_freq: float = 0.5
    lookup_sample: int = 1_000
    repeats: int = 3
    seed: Optional[int] = None

    def __post_init__(self):
        if self.workload not in WORKLOADS:
            raise ValueError(f"workload must be one of {WORKLOADS}, got {self.workload!r}")
        if self.num_keys < 1:
            raise ValueError("num_keys must be positive")
        if not 0.0 <= self.prefix_freq <= 1.0:
            raise ValueError("prefix_freq must be between 0 and 1")
        if self.lookup_sample < 1:
            raise ValueError("lookup_sample must be positive")
        if self.repeats < 1:
            raise ValueError("repeats must be positive")


def make_keys(config: BenchConfig):
    wl = WorkLoad(config.seed)
    if config.workload == "words":
        return wl.words(config.num_keys)
    if config.workload == "words_prefix":
        return wl.words(config.num_keys, p_freq=config.prefix_freq)
    if config.workload == "urls":
        return wl.urls(config.num_keys)
    if config.workload == "uuids":
        return wl.uuids(config.num_keys)
    return wl.routes(config.num_keys)


def tree_stats(tree: RadixTree):
    return {
        "keys": len(tree),
        "nodes": tree.count_nodes(),
        "avg_branch_factor": tree.count_nodes(get_avg_branch_factor=True),
    }


def _timed(fn, args):
    start = time.perf_counter()
    for a in args:
        fn(a)
    return time.perf_counter() - start


def _run_once(keys, sample, prefixes):
    tree = RadixTree()
    timings = {}

    start = time.perf_counter()
    for i, k in enumerate(keys):
        tree.insert(k, i)
    timings["insert"] = (time.perf_counter() - start, len(keys))

    timings["get"] = (_timed(tree.get, sample), len(sample))
    timings["longest_match"] = (_timed(tree.longest_match, sample), len(sample))
    timings["collect"] = (_timed(tree.collect, prefixes), len(prefixes))

    start = time.perf_counter()
    tree.walk(lambda k, v: False)
    timings["walk"] = (time.perf_counter() - start, len(tree))

    stats = tree_stats(tree)
    unique = list(dict.fromkeys(keys))
    timings["delete"] = (_timed(tree.delete, unique), len(unique))
    return timings, stats


def run_benchmark(config: BenchConfig, keys=None):
    """Time every operation `config.repeats` times; return (DataFrame, stats)."""
    if keys is None:
        keys = make_keys(config)
    if not keys:
        raise ValueError("keys must not be empty")
    rng = random.Random(config.seed)
    sample = rng.choices(keys, k=config.lookup_sample)
    prefixes = [k[:max(1, len(k) // 2)] for k in sample]

    totals = {op: [] for op in OPERATIONS}
    counts = {}
    stats = None
    for r in range(config.repeats):
        timings, stats = _run_once(keys, sample, prefixes)
        for op, (secs, n) in timings.items():
            totals[op].append(secs)
            counts[op] = n
        logger.debug("repeat %d/%d done", r + 1, config.repeats)

    rows = []
    for op in OPERATIONS:
        secs = np.asarray(totals[op], dtype=float)
        n = max(counts[op], 1)
        per_op = secs / n * 1e6
        rows.append({
            "operation": op,
            "n": counts[op],
            "total_s": float(np.median(secs)),
            "per_op_us": float(np.median(per_op)),
            "p50_us": float(np.percentile(per_op, 50)),
            "p95_us": float(np.percentile(per_op, 95)),
        })
    df = pd.DataFrame(rows, columns=["operation", "n", "total_s", "per_op_us", "p50_us", "p95_us"])
    logger.info("benchmark %s: %d keys, %d repeats, %d nodes",
                config.workload, len(keys), config.repeats, stats["nodes"])
    return df, stats
