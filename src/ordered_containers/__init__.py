"""
Ordered containers built from scratch.

This package provides a ternary search trie (a string-keyed map with
bottom-up pruning on removal) and a binomial heap (a mergeable priority queue
stored in leftmost-child, right-sibling form).
"""

from ordered_containers.base import (
    BLANK,
    HeapNodeView,
    TrieNodeView,
)
from ordered_containers.ternary_trie import (
    TernarySearchTrie,
    TrieStats,
    trie_stats_,
)
from ordered_containers.binomial_heap import (
    BinomialHeap,
    HeapStats,
    heap_stats_,
)

__version__ = "0.1.0"

__all__ = [
    'BLANK',
    'TrieNodeView',
    'HeapNodeView',
    'TernarySearchTrie',
    'TrieStats',
    'trie_stats_',
    'BinomialHeap',
    'HeapStats',
    'heap_stats_',
    '__version__',
]
