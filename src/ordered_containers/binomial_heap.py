"""Binomial heap implementation (leftmost-child, right-sibling encoding)"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar
)

from ordered_containers.base import (
    AbstractOrderedContainer,
    HeapNodeView,
    slot_count,
    slot_index,
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

T = TypeVar("T")

# Run check_invariant() after every mutation
DEBUG = False


def _identity(item):
    return item


class HeapNode:
    """
    A node of a binomial tree.

    Attributes:
        item: The stored item.
        degree (int): Number of items in the subtree rooted here, itself included.
        leftmost_child (Optional[HeapNode]): Head of the child chain.
        right_sibling (Optional[HeapNode]): Next child of the same parent.
            Always None for roots.
    """
    __slots__ = ("item", "degree", "leftmost_child", "right_sibling")

    def __init__(self, item: Any) -> None:
        self.item = item
        self.degree = 1
        self.leftmost_child: Optional[HeapNode] = None
        self.right_sibling: Optional[HeapNode] = None

    def children(self) -> Iterator[HeapNode]:
        child = self.leftmost_child
        while child is not None:
            yield child
            child = child.right_sibling

    def __repr__(self) -> str:
        return f"HeapNode(item={self.item!r}, degree={self.degree})"


class BinomialHeap(AbstractOrderedContainer, Generic[T]):
    """
    A mergeable priority queue stored as a forest of binomial trees.

    Inserts append single-item roots without restructuring. The forest is
    brought back to at most one root per slot (slot = floor(log2(degree)))
    by `coalesce`, which runs after every extraction and after bulk loads.
    """

    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        key: Optional[Callable[[T], Any]] = None,
        reverse: bool = False,
    ) -> None:
        """
        Parameters:
            items: Optional initial items, inserted then coalesced once.
            key: Key function defining the total order. Items are compared
                directly when None.
            reverse (bool): Serve the greatest item first instead of the least.
        """
        self.key = key
        self.reverse = reverse
        self._key = key if key is not None else _identity
        self._roots: List[HeapNode] = []
        # non-owning reference to the root holding the minimum
        self._front: Optional[HeapNode] = None
        self._size = 0
        if items is not None:
            for item in items:
                self.insert(item)
            self.coalesce()

    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        return self._size

    def __str__(self):
        if self.is_empty():
            return "Empty BinomialHeap"
        return f"BinomialHeap(size={self._size}, roots={len(self._roots)}, front={self._front.item!r})"

    __repr__ = __str__

    def _precedes(self, a: Optional[HeapNode], b: Optional[HeapNode]) -> bool:
        """
        Strict ordering between two nodes. A missing node never precedes and
        is preceded by any present node.
        """
        if b is None:
            return a is not None
        if a is None:
            return False
        ka = self._key(a.item)
        kb = self._key(b.item)
        if self.reverse:
            return kb < ka
        return ka < kb

    # Public API
    @track_performance(tag="BinomialHeap.insert")
    def insert(self, item: T) -> None:
        """
        Add an item as a new single-item root in O(1). The forest is not
        coalesced until the next extraction.
        """
        node = HeapNode(item)
        self._roots.append(node)
        if not self._precedes(self._front, node):
            self._front = node
        self._size += 1
        if DEBUG:
            self.check_invariant()

    def peek_front(self) -> Optional[T]:
        """Return the least item, or None if the heap is empty."""
        if self._front is None:
            return None
        return self._front.item

    front = property(peek_front)

    @track_performance(tag="BinomialHeap.extract_min")
    def extract_min(self) -> Optional[T]:
        """
        Remove the least item and return it (None if the heap is empty).

        The children of the removed root are promoted to roots, then the forest
        is coalesced, which also recomputes the front.
        """
        to_remove = self._front
        if to_remove is None:
            return None

        if to_remove.degree > 1:
            child = to_remove.leftmost_child
            # a root of degree d has floor(log2(d)) subtrees
            for _ in range(slot_index(to_remove.degree)):
                assert child is not None, f"Child chain of {to_remove!r} is too short"
                next_child = child.right_sibling
                # promoted roots must not keep a sibling link
                child.right_sibling = None
                self._roots.append(child)
                child = next_child
            assert child is None, f"Child chain of {to_remove!r} is too long"
            logger.debug(f"Promoted {slot_index(to_remove.degree)} subtrees of {to_remove!r}")
        to_remove.leftmost_child = None

        for i, root in enumerate(self._roots):
            if root is to_remove:
                del self._roots[i]
                break
        else:
            raise AssertionError(f"Front {to_remove!r} is not in the root list")

        self._front = None
        self._size -= 1
        self.coalesce()
        if DEBUG:
            self.check_invariant()
        return to_remove.item

    def _link(self, placed: HeapNode, existing: HeapNode) -> HeapNode:
        """
        Merge two roots competing for the same slot and return the new root.
        On ties the tree already in the slot stays on top.
        """
        if self._precedes(placed, existing):
            parent, child = placed, existing
        else:
            parent, child = existing, placed
        assert child.right_sibling is None, f"Root {child!r} carries a sibling link"

        child.right_sibling = parent.leftmost_child
        parent.leftmost_child = child
        parent.degree += child.degree
        return parent

    @track_performance(tag="BinomialHeap.coalesce")
    def coalesce(self) -> None:
        """
        Restore the one-root-per-slot forest.

        Every root is placed at slot floor(log2(degree)); a collision links the
        two trees and carries the result into its higher slot, like carry
        propagation in binary addition. The root list becomes the occupied
        slots in ascending order and the front is recomputed from it.
        """
        slots: List[Optional[HeapNode]] = [None] * slot_count(self._size)

        for root in self._roots:
            assert root.right_sibling is None, f"Root {root!r} carries a sibling link"
            carry = root
            while True:
                index = slot_index(carry.degree)
                assert index < len(slots), (
                    f"Slot {index} out of range for size {self._size}"
                )
                existing = slots[index]
                if existing is None:
                    slots[index] = carry
                    break
                slots[index] = None
                carry = self._link(carry, existing)
                logger.debug(f"Carried {carry!r} out of slot {index}")

        self._roots = [node for node in slots if node is not None]
        self._front = None
        for root in self._roots:
            if self._precedes(root, self._front):
                self._front = root

    @track_performance(tag="BinomialHeap.merge")
    def merge(self, other: BinomialHeap[T]) -> None:
        """
        Move every item of `other` into this heap. `other` is left empty.

        Raises:
            TypeError: If other is not a BinomialHeap.
            ValueError: If other is this heap or orders its items differently.
        """
        if not isinstance(other, BinomialHeap):
            raise TypeError(f"merge(): expected BinomialHeap, got {type(other).__name__}")
        if other is self:
            raise ValueError("merge(): cannot merge a heap into itself")
        if other.key != self.key or other.reverse != self.reverse:
            raise ValueError("merge(): heaps must share key and reverse settings")
        if other.is_empty():
            return

        self._roots.extend(other._roots)
        self._size += other._size
        other.clear()
        self.coalesce()
        if DEBUG:
            self.check_invariant()

    def drain(self) -> Iterator[T]:
        """Extract items in order until the heap is empty."""
        while not self.is_empty():
            yield self.extract_min()

    def clear(self) -> None:
        self._roots = []
        self._front = None
        self._size = 0

    # Traversal
    def __iter__(self) -> Iterator[T]:
        """Yields every item in structural (not sorted) order."""
        stack = list(reversed(self._roots))
        while stack:
            node = stack.pop()
            yield node.item
            stack.extend(reversed(list(node.children())))

    def roots(self) -> Tuple[HeapNodeView, ...]:
        """Return read-only snapshots of the root list and their subtrees."""
        def _view(node: HeapNode) -> HeapNodeView:
            return HeapNodeView(
                item=node.item,
                degree=node.degree,
                is_front=node is self._front,
                children=tuple(_view(c) for c in node.children()),
            )
        return tuple(_view(root) for root in self._roots)

    structure = roots

    def check_invariant(self) -> None:
        """
        Verifies that:
          1) No root carries a right sibling.
          2) Every node's degree is 1 plus its children's degrees.
          3) No child precedes its parent.
          4) The degrees of the roots add up to len(self).
          5) The front is a root and no root precedes it.

        Slot uniqueness only holds right after coalescing, see heap_stats_.

        Raises:
            AssertionError: if any of these conditions fails.
        """
        total = 0
        for root in self._roots:
            assert root.right_sibling is None, f"Root {root!r} carries a sibling link"
            total += root.degree
            stack = [root]
            while stack:
                node = stack.pop()
                degree = 1
                for child in node.children():
                    assert not self._precedes(child, node), (
                        f"Heap order violated: {child!r} precedes parent {node!r}"
                    )
                    degree += child.degree
                    stack.append(child)
                assert degree == node.degree, (
                    f"Degree of {node!r} does not match its subtree size {degree}"
                )

        assert total == self._size, (
            f"Invariant violated: roots hold {total} items but size={self._size}"
        )

        if self._size == 0:
            assert self._front is None, "Invariant violated: empty heap has a front"
            return
        assert any(root is self._front for root in self._roots), (
            f"Front {self._front!r} is not a root"
        )
        for root in self._roots:
            assert not self._precedes(root, self._front), (
                f"Root {root!r} precedes front {self._front!r}"
            )


@dataclass
class HeapStats:
    item_count: int
    root_count: int
    root_slots: Tuple[int, ...]
    max_degree: int
    is_heap: bool
    degrees_consistent: bool
    roots_without_siblings: bool
    slots_unique: bool
    front_is_min: bool


def heap_stats_(heap: BinomialHeap) -> HeapStats:
    """
    Returns aggregated statistics for a binomial heap in **O(n)** time.

    Unlike `check_invariant`, failures are reported as flags so a test can
    inspect a forest that is deliberately not coalesced.
    """
    def _subtree(node: HeapNode) -> Tuple[int, bool, bool]:
        count = 1
        is_heap = True
        consistent = True
        for child in node.children():
            if heap._precedes(child, node):
                is_heap = False
            c_count, c_heap, c_consistent = _subtree(child)
            count += c_count
            is_heap = is_heap and c_heap
            consistent = consistent and c_consistent
        return count, is_heap, consistent and count == node.degree

    roots = heap._roots
    item_count = 0
    is_heap = True
    degrees_consistent = True
    for root in roots:
        count, r_heap, r_consistent = _subtree(root)
        item_count += count
        is_heap = is_heap and r_heap
        degrees_consistent = degrees_consistent and r_consistent

    root_slots = tuple(slot_index(root.degree) for root in roots)
    front = heap._front
    if not roots:
        front_is_min = front is None
    else:
        front_is_min = (
            any(root is front for root in roots)
            and not any(heap._precedes(root, front) for root in roots)
        )

    return HeapStats(
        item_count=item_count,
        root_count=len(roots),
        root_slots=root_slots,
        max_degree=max((root.degree for root in roots), default=0),
        is_heap=is_heap,
        degrees_consistent=degrees_consistent,
        roots_without_siblings=all(root.right_sibling is None for root in roots),
        slots_unique=len(set(root_slots)) == len(root_slots),
        front_is_min=front_is_min,
    )
