"""Utility functions for testing container invariants."""

from ordered_containers.ternary_trie import TernarySearchTrie, TrieStats
from ordered_containers.binomial_heap import BinomialHeap, HeapStats

TRIE_FLAGS = (
    "is_search_tree",
    "no_dead_nodes",
)

HEAP_FLAGS = (
    "is_heap",
    "degrees_consistent",
    "roots_without_siblings",
    "front_is_min",
)


def assert_trie_invariants_tc(tc, t: TernarySearchTrie, stats: TrieStats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TRIE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False"
        )

    tc.assertEqual(
        stats.value_count, len(t),
        f"Invariant failed: value_count={stats.value_count} ≠ len={len(t)}"
    )
    if t.is_empty():
        tc.assertEqual(
            stats.node_count, 0,
            f"Invariant failed: node_count={stats.node_count} for empty trie"
        )
    else:
        tc.assertGreater(
            stats.node_count, 0,
            f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty trie"
        )
        tc.assertGreaterEqual(
            stats.height, stats.max_key_length,
            f"Invariant failed: height={stats.height} < max_key_length={stats.max_key_length}"
        )
    t.check_invariant()


def assert_heap_invariants_tc(tc, h: BinomialHeap, stats: HeapStats,
                              coalesced: bool = True) -> None:
    """
    TestCase version: use inside unittest.TestCase methods.

    With `coalesced` set, also requires the canonical forest: unique slots and
    one root per set bit of the size.
    """
    for flag in HEAP_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False"
        )

    tc.assertEqual(
        stats.item_count, len(h),
        f"Invariant failed: item_count={stats.item_count} ≠ len={len(h)}"
    )
    if coalesced:
        tc.assertTrue(
            stats.slots_unique,
            f"Invariant failed: root slots {stats.root_slots} are not unique"
        )
        tc.assertEqual(
            stats.root_count, bin(len(h)).count("1"),
            f"Invariant failed: {stats.root_count} roots for size {len(h)}"
        )
    h.check_invariant()
