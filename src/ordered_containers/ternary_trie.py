"""Ternary search trie implementation"""

from __future__ import annotations
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar
)

from ordered_containers.base import (
    AbstractOrderedContainer,
    BLANK,
    TrieNodeView,
)
from ordered_containers.profiling import track_performance

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

V = TypeVar("V")

# Run check_invariant() after every successful mutation
DEBUG = False


class TrieNode:
    """
    A node of a ternary search trie.

    Attributes:
        ch: The symbol stored at this node.
        value: The value of the key terminating here, or BLANK.
        low (Optional[TrieNode]): Sibling symbols less than `ch`.
        middle (Optional[TrieNode]): The next symbol of keys passing through `ch`.
        high (Optional[TrieNode]): Sibling symbols greater than `ch`.
    """
    __slots__ = ("ch", "value", "low", "middle", "high")

    def __init__(self, ch: Any) -> None:
        self.ch = ch
        self.value = BLANK
        self.low: Optional[TrieNode] = None
        self.middle: Optional[TrieNode] = None
        self.high: Optional[TrieNode] = None

    @property
    def has_value(self) -> bool:
        return self.value is not BLANK

    @property
    def is_dead(self) -> bool:
        """True if the node holds no value and has no children."""
        return (
            self.value is BLANK
            and self.low is None
            and self.middle is None
            and self.high is None
        )

    def __repr__(self) -> str:
        return f"TrieNode(ch={self.ch!r}, value={self.value!r})"


def _check_key(key: Any, op: str) -> None:
    if not isinstance(key, Sequence):
        raise TypeError(f"{op}(): key must be a sequence of symbols, got {type(key).__name__}")


class TernarySearchTrie(AbstractOrderedContainer, Generic[V]):
    """
    A map from sequences of ordered symbols to values, backed by a ternary
    search tree. Each level of the tree is a binary search tree over sibling
    symbols; the middle link advances to the next symbol of a key.

    Nodes are created lazily on insert and pruned bottom-up on remove as soon
    as they hold no value and have no children.
    """

    def __init__(
        self,
        items: Optional[Iterable] = None,
        key_converter: Callable[[Tuple[Any, ...]], Any] = "".join,
    ) -> None:
        """
        Parameters:
            items: Optional mapping or iterable of (key, value) pairs inserted
                in order. Duplicate keys keep their first value.
            key_converter: Turns the tuple of symbols gathered during
                traversal back into a key. The default rebuilds strings; pass
                `tuple` for other symbol types.
        """
        self.root: Optional[TrieNode] = None
        self._size = 0
        self.key_converter = key_converter
        if items is not None:
            if isinstance(items, Mapping):
                items = items.items()
            for key, value in items:
                self.insert(key, value)

    def is_empty(self) -> bool:
        return self.root is None

    def __len__(self) -> int:
        return self._size

    def __str__(self):
        return "Empty TernarySearchTrie" if self.is_empty() else f"TernarySearchTrie(size={self._size})"

    __repr__ = __str__

    # Public API
    @track_performance(tag="TernarySearchTrie.insert")
    def insert(self, key: Sequence, value: V) -> bool:
        """
        Insert a key/value pair. Existing values are never overwritten.

        Args:
            key (Sequence): A non-empty sequence of mutually ordered symbols.
            value: The value to store. None is a valid value.
        Returns:
            bool: True if stored, False if the key already holds a value.

        Raises:
            TypeError: If key is not a sequence.
            ValueError: If key is empty.
        """
        _check_key(key, "insert")
        if len(key) == 0:
            raise ValueError("insert(): key must not be empty")

        if self.root is None:
            self.root = TrieNode(key[0])

        node = self.root
        i = 0
        last = len(key) - 1
        while True:
            ch = key[i]
            if ch < node.ch:
                if node.low is None:
                    node.low = TrieNode(ch)
                node = node.low
            elif ch > node.ch:
                if node.high is None:
                    node.high = TrieNode(ch)
                node = node.high
            elif i == last:
                if node.has_value:
                    return False
                node.value = value
                self._size += 1
                if DEBUG:
                    self.check_invariant()
                return True
            else:
                i += 1
                if node.middle is None:
                    node.middle = TrieNode(key[i])
                node = node.middle

    def _find(self, key: Sequence) -> Optional[TrieNode]:
        """Return the terminal node of `key`, or None if the path runs out."""
        if len(key) == 0:
            return None
        node = self.root
        i = 0
        last = len(key) - 1
        while node is not None:
            ch = key[i]
            if ch < node.ch:
                node = node.low
            elif ch > node.ch:
                node = node.high
            elif i == last:
                return node
            else:
                i += 1
                node = node.middle
        return None

    def get(self, key: Sequence, default: Any = None) -> Any:
        """
        Return the value stored for `key`, or `default` when no value is present.
        """
        _check_key(key, "get")
        node = self._find(key)
        if node is None or not node.has_value:
            return default
        return node.value

    def __getitem__(self, key: Sequence) -> V:
        ret = self.get(key, BLANK)
        if ret is BLANK:
            raise KeyError(key)
        return ret

    def contains(self, key: Sequence) -> bool:
        _check_key(key, "contains")
        node = self._find(key)
        return node is not None and node.has_value

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, Sequence):
            return False
        return self.contains(key)

    @track_performance(tag="TernarySearchTrie.remove")
    def remove(self, key: Sequence) -> bool:
        """
        Remove the value stored for `key` and prune nodes left without a value
        and without children.

        Returns:
            bool: True if a value was removed, False if the key held none.
        """
        return self._pop(key) is not BLANK

    def pop(self, key: Sequence, default: Any = BLANK) -> Any:
        """
        Remove `key` and return its value.

        Raises:
            KeyError: If the key holds no value and no default was given.
        """
        ret = self._pop(key)
        if ret is not BLANK:
            return ret
        if default is BLANK:
            raise KeyError(key)
        return default

    def _pop(self, key: Sequence) -> Any:
        _check_key(key, "remove")
        if self.root is None or len(key) == 0:
            return BLANK
        self.root, removed = self._remove(self.root, key, 0)
        if removed is not BLANK:
            self._size -= 1
            if DEBUG:
                self.check_invariant()
        return removed

    def _remove(
        self, node: Optional[TrieNode], key: Sequence, i: int
    ) -> Tuple[Optional[TrieNode], Any]:
        """
        Remove `key[i:]` below `node`.

        Returns the subtree root to store back in the parent's link (None once
        the node is pruned) and the removed value, or BLANK if nothing was
        removed.
        """
        if node is None:
            return None, BLANK

        ch = key[i]
        if ch < node.ch:
            node.low, removed = self._remove(node.low, key, i)
        elif ch > node.ch:
            node.high, removed = self._remove(node.high, key, i)
        elif i + 1 == len(key):
            # Terminal node without a value: only a longer key passes through
            if not node.has_value:
                return node, BLANK
            removed = node.value
            node.value = BLANK
        else:
            node.middle, removed = self._remove(node.middle, key, i + 1)

        if removed is not BLANK and node.is_dead:
            logger.debug(f"Pruning dead node {node!r}")
            return None, removed
        return node, removed

    def clear(self) -> None:
        self.root = None
        self._size = 0

    # Traversal
    def _walk(self, node: Optional[TrieNode], buffer: List[Any]) -> Iterator[Tuple[Tuple[Any, ...], Any]]:
        if node is None:
            return
        yield from self._walk(node.low, buffer)
        buffer.append(node.ch)
        if node.has_value:
            yield tuple(buffer), node.value
        yield from self._walk(node.middle, buffer)
        buffer.pop()
        yield from self._walk(node.high, buffer)

    def items(self) -> Iterator[Tuple[Any, V]]:
        """Yields (key, value) pairs in ascending key order."""
        convert = self.key_converter
        for symbols, value in self._walk(self.root, []):
            yield convert(symbols), value

    def keys(self) -> Iterator[Any]:
        return (k for k, _ in self.items())

    def values(self) -> Iterator[V]:
        return (v for _, v in self._walk(self.root, []))

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def structure(self) -> Optional[TrieNodeView]:
        """Return a read-only snapshot of the raw ternary tree."""
        def _view(node: Optional[TrieNode]) -> Optional[TrieNodeView]:
            if node is None:
                return None
            return TrieNodeView(
                symbol=node.ch,
                has_value=node.has_value,
                value=node.value,
                low=_view(node.low),
                middle=_view(node.middle),
                high=_view(node.high),
            )
        return _view(self.root)

    def node_count(self) -> int:
        count = 0
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            count += 1
            for child in (node.low, node.middle, node.high):
                if child is not None:
                    stack.append(child)
        return count

    def check_invariant(self) -> None:
        """
        Verifies that:
          1) Every level is a binary search tree over its symbols.
          2) No node is both valueless and childless.
          3) The number of present values equals len(self).
          4) The trie is empty exactly when it holds no values.

        Raises:
            AssertionError: if any of these conditions fails.
        """
        assert (self.root is None) == (self._size == 0), (
            f"Invariant violated: root={self.root!r} with size={self._size}"
        )

        value_count = 0
        # (node, exclusive lower bound, exclusive upper bound) within a level
        stack: List[Tuple[TrieNode, Any, Any]] = []
        if self.root is not None:
            stack.append((self.root, BLANK, BLANK))
        while stack:
            node, lo, hi = stack.pop()
            assert lo is BLANK or lo < node.ch, (
                f"Level order violated: {node.ch!r} not above {lo!r}"
            )
            assert hi is BLANK or node.ch < hi, (
                f"Level order violated: {node.ch!r} not below {hi!r}"
            )
            assert not node.is_dead, f"Invariant violated: dead node {node!r}"
            if node.has_value:
                value_count += 1
            if node.low is not None:
                stack.append((node.low, lo, node.ch))
            if node.high is not None:
                stack.append((node.high, node.ch, hi))
            if node.middle is not None:
                stack.append((node.middle, BLANK, BLANK))

        assert value_count == self._size, (
            f"Invariant violated: {value_count} values present but size={self._size}"
        )


@dataclass
class TrieStats:
    node_count: int
    value_count: int
    height: int
    max_key_length: int
    is_search_tree: bool
    no_dead_nodes: bool


def trie_stats_(trie: TernarySearchTrie) -> TrieStats:
    """
    Returns aggregated statistics for a ternary search trie in **O(n)** time.

    `height` counts nodes along the longest low/middle/high path,
    `max_key_length` counts middle levels along the longest stored key.
    """
    def _stats(node: Optional[TrieNode], key_len: int, lo: Any, hi: Any) -> TrieStats:
        if node is None:
            return TrieStats(node_count=0,
                             value_count=0,
                             height=0,
                             max_key_length=0,
                             is_search_tree=True,
                             no_dead_nodes=True)

        low = _stats(node.low, key_len, lo, node.ch)
        middle = _stats(node.middle, key_len + 1, BLANK, BLANK)
        high = _stats(node.high, key_len, node.ch, hi)
        children = (low, middle, high)

        in_bounds = (lo is BLANK or lo < node.ch) and (hi is BLANK or node.ch < hi)
        is_search_tree = in_bounds and all(c.is_search_tree for c in children)

        own_key_length = key_len + 1 if node.has_value else 0
        return TrieStats(
            node_count=1 + sum(c.node_count for c in children),
            value_count=int(node.has_value) + sum(c.value_count for c in children),
            height=1 + max(c.height for c in children),
            max_key_length=max(own_key_length, *(c.max_key_length for c in children)),
            is_search_tree=is_search_tree,
            no_dead_nodes=not node.is_dead and all(c.no_dead_nodes for c in children),
        )

    return _stats(trie.root, 0, BLANK, BLANK)
