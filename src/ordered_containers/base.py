"""Shared building blocks for the ordered containers"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional, Tuple


class _Blank:
    """Marks an empty value slot. Distinct from None so None can be stored."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "BLANK"

    def __bool__(self) -> bool:
        return False


BLANK = _Blank()


def slot_index(degree: int) -> int:
    """
    Calculate the slot a binomial root of the given degree occupies.

    Parameters:
        degree (int): The number of items in the tree rooted at the node.

    Returns:
        int: floor(log2(degree)).

    Raises:
        ValueError: If degree is not a positive int.
    """
    if degree <= 0:
        raise ValueError(f"degree must be > 0, got {degree!r}")
    return degree.bit_length() - 1


def slot_count(size: int) -> int:
    """Number of slots needed to coalesce a forest holding `size` items."""
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size!r}")
    # floor(log2(size)) + 1, and 0 for an empty forest
    return size.bit_length()


class TrieNodeView(NamedTuple):
    """
    A read-only snapshot of one ternary trie node and its subtrees.

    Attributes:
        symbol: The symbol stored at the node.
        has_value (bool): Whether some key terminates at this node.
        value: The stored value, or BLANK if has_value is False.
        low (Optional[TrieNodeView]): Siblings ordered before `symbol`.
        middle (Optional[TrieNodeView]): The next symbol level of the key.
        high (Optional[TrieNodeView]): Siblings ordered after `symbol`.
    """
    symbol: Any
    has_value: bool
    value: Any
    low: Optional["TrieNodeView"]
    middle: Optional["TrieNodeView"]
    high: Optional["TrieNodeView"]


class HeapNodeView(NamedTuple):
    """
    A read-only snapshot of one binomial tree node.

    Attributes:
        item: The item stored at the node.
        degree (int): Number of items in the subtree rooted here.
        is_front (bool): Whether this node is the tracked minimum.
        children (Tuple[HeapNodeView, ...]): Children from the leftmost child
            along its right-sibling chain.
    """
    item: Any
    degree: int
    is_front: bool
    children: Tuple["HeapNodeView", ...]


class AbstractOrderedContainer(ABC):
    """
    Abstract base class for the single-threaded containers in this package.
    """

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every node owned by the container."""
        pass

    @abstractmethod
    def check_invariant(self) -> None:
        """
        Verify the structural invariants of the container.

        Raises:
            AssertionError: If any invariant is violated.
        """
        pass

    def __bool__(self) -> bool:
        return not self.is_empty()
