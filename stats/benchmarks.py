#!/usr/bin/env python3
"""
Benchmarks for the ordered containers.

This script measures:
 1. Ternary search trie build times for random word sets
 2. Per-lookup and per-remove cost in tries of various sizes
 3. Binomial heap bulk construction times
 4. Per-extract cost in heaps of various sizes
 5. Structural statistics of the built containers

Usage:
    python benchmarks.py [--sizes 1000 10000 100000] [--trials T] [--max-len L] [--seed S] [--profile]
"""
import argparse
import logging
import time
import timeit
import gc
from dataclasses import asdict
from pprint import pprint
from statistics import mean

import numpy as np
from tqdm import tqdm

from ordered_containers.ternary_trie import TernarySearchTrie, trie_stats_
from ordered_containers.binomial_heap import BinomialHeap, heap_stats_
from ordered_containers.profiling import PerformanceTracker

ALPHABET = np.array(list("abcdefghijklmnopqrstuvwxyz"))


def random_words(rng: np.random.Generator, n: int, max_len: int) -> list:
    """Draw `n` distinct random words of length 1..max_len."""
    words = set()
    while len(words) < n:
        lengths = rng.integers(1, max_len + 1, size=n - len(words))
        for length in lengths:
            words.add("".join(ALPHABET[rng.integers(0, len(ALPHABET), size=int(length))]))
    return list(words)


def build_trie(words: list) -> TernarySearchTrie:
    trie = TernarySearchTrie()
    insert = trie.insert
    for i, word in enumerate(words):
        insert(word, i)
    return trie


def bench_trie(sizes: list, trials: int, max_len: int, rng: np.random.Generator) -> None:
    for n in sizes:
        words = random_words(rng, n, max_len)
        build_times = []
        for _ in tqdm(range(trials), desc=f"trie build n={n}", leave=False):
            gc.collect()
            start = time.perf_counter()
            trie = build_trie(words)
            build_times.append(time.perf_counter() - start)
        print(f"[bench] trie build n={n}: mean {mean(build_times):.4f}s over {trials} trials")

        sample = [words[i] for i in rng.integers(0, n, size=min(n, 1000))]
        t = timeit.timeit(lambda: [trie.get(w) for w in sample], number=trials) / trials
        print(f"[bench] trie get:  {t / len(sample) * 1e6:.2f}µs per lookup")

        start = time.perf_counter()
        for word in sample:
            trie.remove(word)
        elapsed = time.perf_counter() - start
        print(f"[bench] trie remove: {elapsed / len(sample) * 1e6:.2f}µs per remove")
        pprint(asdict(trie_stats_(trie)))


def bench_heap(sizes: list, trials: int, rng: np.random.Generator) -> None:
    for n in sizes:
        priorities = [int(p) for p in rng.integers(0, 1 << 30, size=n)]
        build_times = []
        for _ in tqdm(range(trials), desc=f"heap build n={n}", leave=False):
            gc.collect()
            start = time.perf_counter()
            heap = BinomialHeap(priorities)
            build_times.append(time.perf_counter() - start)
        print(f"[bench] heap build n={n}: mean {mean(build_times):.4f}s over {trials} trials")
        pprint(asdict(heap_stats_(heap)))

        extracts = min(n, 1000)
        start = time.perf_counter()
        for _ in range(extracts):
            heap.extract_min()
        elapsed = time.perf_counter() - start
        print(f"[bench] heap extract_min: {elapsed / extracts * 1e6:.2f}µs per extract")


def main():
    parser = argparse.ArgumentParser(description="Benchmark the ordered containers")
    parser.add_argument("--sizes", type=int, nargs="+", default=[1000, 10000, 100000])
    parser.add_argument("--trials", type=int, default=3)
    parser.add_argument("--max-len", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--profile", action="store_true",
                        help="collect per-operation timings and print a report")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    rng = np.random.default_rng(args.seed)

    tracker = PerformanceTracker.get_instance()
    if args.profile:
        tracker.enable()

    bench_trie(args.sizes, args.trials, args.max_len, rng)
    bench_heap(args.sizes, args.trials, rng)

    if args.profile:
        print(tracker.report())


if __name__ == "__main__":
    main()
