"""Tests for the ternary search trie"""
# pylint: skip-file

import unittest
import logging

from ordered_containers.base import BLANK
from ordered_containers.ternary_trie import TernarySearchTrie, trie_stats_
from tests.stats_containers import random_trie_of_size, random_words
from tests.utils import assert_trie_invariants_tc

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TrieTestCase(unittest.TestCase):
    """Base class for all trie tests"""

    def setUp(self):
        self.trie = TernarySearchTrie()

    def tearDown(self):
        stats = trie_stats_(self.trie)
        assert_trie_invariants_tc(self, self.trie, stats)

        expected_node_count = getattr(self, 'expected_node_count', None)
        if expected_node_count is not None:
            self.assertEqual(
                self.trie.node_count(), expected_node_count,
                f"Node count {self.trie.node_count()} does not match "
                f"expected {expected_node_count}"
            )

    def insert_all(self, mapping):
        for key, value in mapping.items():
            self.assertTrue(self.trie.insert(key, value), f"insert({key!r}) failed")


class TestTrieEmpty(TrieTestCase):

    def test_empty(self):
        self.assertTrue(self.trie.is_empty())
        self.assertEqual(len(self.trie), 0)
        self.assertFalse(self.trie)
        self.assertIsNone(self.trie.structure())
        self.assertEqual(list(self.trie.items()), [])
        self.expected_node_count = 0

    def test_get_on_empty(self):
        self.assertIsNone(self.trie.get("cat"))
        self.assertEqual(self.trie.get("cat", 7), 7)
        self.assertFalse(self.trie.contains("cat"))

    def test_remove_on_empty(self):
        self.assertFalse(self.trie.remove("cat"))
        self.assertEqual(len(self.trie), 0)


class TestTrieScenario(TrieTestCase):
    """cat / car / dog walk-through"""

    def setUp(self):
        super().setUp()
        self.insert_all({"cat": 1, "car": 2, "dog": 3})

    def test_lookups(self):
        self.assertEqual(self.trie.get("cat"), 1)
        self.assertEqual(self.trie.get("car"), 2)
        self.assertEqual(self.trie.get("dog"), 3)
        self.assertIsNone(self.trie.get("ca"))
        self.assertIsNone(self.trie.get("cats"))
        self.assertIsNone(self.trie.get("cow"))
        self.assertEqual(len(self.trie), 3)
        self.expected_node_count = 7

    def test_remove_leaves_siblings(self):
        self.assertTrue(self.trie.remove("cat"))
        self.assertIsNone(self.trie.get("cat"))
        self.assertFalse(self.trie.contains("cat"))
        self.assertEqual(self.trie.get("car"), 2)
        self.assertEqual(self.trie.get("dog"), 3)
        self.assertEqual(len(self.trie), 2)
        # 't' still holds 'r' in its low link
        self.expected_node_count = 7

    def test_remove_twice(self):
        self.assertTrue(self.trie.remove("cat"))
        self.assertFalse(self.trie.remove("cat"))
        self.assertEqual(len(self.trie), 2)

    def test_pruning_cascade(self):
        self.trie.remove("cat")
        self.trie.remove("car")
        # c -> (high) d -> o -> g
        self.assertEqual(self.trie.node_count(), 4)
        self.trie.remove("dog")
        self.assertTrue(self.trie.is_empty())
        self.assertIsNone(self.trie.root)
        self.expected_node_count = 0

    def test_ascending_items(self):
        self.assertEqual(list(self.trie.items()), [("car", 2), ("cat", 1), ("dog", 3)])
        self.assertEqual(list(self.trie.keys()), ["car", "cat", "dog"])
        self.assertEqual(list(self.trie), ["car", "cat", "dog"])
        self.assertEqual(list(self.trie.values()), [2, 1, 3])
        # traversal is restartable
        self.assertEqual(list(self.trie.items()), list(self.trie.items()))

    def test_structure(self):
        root = self.trie.structure()
        self.assertEqual(root.symbol, "c")
        self.assertFalse(root.has_value)
        self.assertIs(root.value, BLANK)
        self.assertIsNone(root.low)
        self.assertEqual(root.high.symbol, "d")
        self.assertEqual(root.middle.symbol, "a")
        t_view = root.middle.middle
        self.assertEqual(t_view.symbol, "t")
        self.assertEqual(t_view.value, 1)
        self.assertEqual(t_view.low.symbol, "r")
        self.assertEqual(t_view.low.value, 2)
        self.assertIsNone(t_view.high)

    def test_stats(self):
        stats = trie_stats_(self.trie)
        self.assertEqual(stats.node_count, 7)
        self.assertEqual(stats.value_count, 3)
        self.assertEqual(stats.height, 4)
        self.assertEqual(stats.max_key_length, 3)


class TestTrieInsert(TrieTestCase):

    def test_duplicate_rejected(self):
        self.assertTrue(self.trie.insert("key", 1))
        self.assertFalse(self.trie.insert("key", 2))
        self.assertEqual(self.trie.get("key"), 1)
        self.assertEqual(len(self.trie), 1)
        self.expected_node_count = 3

    def test_prefix_then_extension(self):
        self.assertTrue(self.trie.insert("cart", 2))
        self.assertTrue(self.trie.insert("car", 1))
        self.assertEqual(self.trie.get("car"), 1)
        self.assertEqual(self.trie.get("cart"), 2)
        self.assertEqual(list(self.trie.keys()), ["car", "cart"])
        self.expected_node_count = 4

    def test_none_value_is_present(self):
        self.assertTrue(self.trie.insert("x", None))
        self.assertTrue(self.trie.contains("x"))
        self.assertIn("x", self.trie)
        self.assertIsNone(self.trie.get("x", 5))
        self.assertFalse(self.trie.insert("x", 1))
        self.assertTrue(self.trie.remove("x"))
        self.assertEqual(self.trie.get("x", 5), 5)

    def test_falsy_values_are_present(self):
        self.insert_all({"zero": 0, "empty": "", "no": False})
        self.assertEqual(len(self.trie), 3)
        self.assertEqual(self.trie.get("zero", 1), 0)
        self.assertTrue(self.trie.contains("empty"))
        self.assertFalse(self.trie.insert("no", True))

    def test_empty_key_rejected(self):
        with self.assertRaises(ValueError):
            self.trie.insert("", 1)
        self.assertTrue(self.trie.is_empty())

    def test_non_sequence_key_rejected(self):
        with self.assertRaises(TypeError):
            self.trie.insert(123, 1)
        with self.assertRaises(TypeError):
            self.trie.get(123)
        self.assertNotIn(123, self.trie)

    def test_single_symbol_keys(self):
        for ch in "mdtaz":
            self.assertTrue(self.trie.insert(ch, ord(ch)))
        self.assertEqual(list(self.trie.keys()), ["a", "d", "m", "t", "z"])
        self.expected_node_count = 5

    def test_tuple_keys(self):
        self.trie = TernarySearchTrie(key_converter=tuple)
        self.assertTrue(self.trie.insert((1, 2, 3), "a"))
        self.assertTrue(self.trie.insert((1, 2), "b"))
        self.assertTrue(self.trie.insert((0, 9), "c"))
        self.assertEqual(self.trie.get((1, 2)), "b")
        self.assertEqual(
            list(self.trie.items()),
            [((0, 9), "c"), ((1, 2), "b"), ((1, 2, 3), "a")]
        )

    def test_constructor_items(self):
        self.trie = TernarySearchTrie({"zero": 0, "one": 1, "two": 2, "three": 3})
        self.assertEqual(len(self.trie), 4)
        self.assertEqual(
            list(self.trie.items()),
            [("one", 1), ("three", 3), ("two", 2), ("zero", 0)]
        )

    def test_constructor_pairs_keep_first(self):
        self.trie = TernarySearchTrie([("a", 1), ("a", 2), ("b", 3)])
        self.assertEqual(self.trie["a"], 1)
        self.assertEqual(len(self.trie), 2)


class TestTrieRemove(TrieTestCase):

    def test_prefix_never_inserted(self):
        self.trie.insert("Spongebob", 50)
        self.assertFalse(self.trie.remove("Sponge"))
        self.assertEqual(self.trie.get("Spongebob"), 50)
        self.assertEqual(len(self.trie), 1)
        self.expected_node_count = len("Spongebob")

    def test_longer_key_than_stored(self):
        self.trie.insert("car", 1)
        self.assertFalse(self.trie.remove("cart"))
        self.assertFalse(self.trie.remove("asdvrvwervas"))
        self.assertEqual(self.trie.get("car"), 1)
        self.expected_node_count = 3

    def test_remove_prefix_keeps_extension(self):
        self.trie.insert("car", 1)
        self.trie.insert("cart", 2)
        self.assertTrue(self.trie.remove("car"))
        self.assertIsNone(self.trie.get("car"))
        self.assertEqual(self.trie.get("cart"), 2)
        self.expected_node_count = 4

    def test_remove_extension_keeps_prefix(self):
        self.trie.insert("car", 1)
        self.trie.insert("cart", 2)
        self.assertTrue(self.trie.remove("cart"))
        self.assertEqual(self.trie.get("car"), 1)
        self.expected_node_count = 3

    def test_remove_empty_key(self):
        self.trie.insert("a", 1)
        self.assertFalse(self.trie.remove(""))
        self.assertIsNone(self.trie.get(""))
        self.assertFalse(self.trie.contains(""))
        self.assertEqual(len(self.trie), 1)

    def test_remove_root_with_siblings(self):
        self.insert_all({"m": 1, "c": 2, "x": 3})
        self.assertTrue(self.trie.remove("m"))
        # 'm' keeps its low and high links
        self.assertEqual(self.trie.root.ch, "m")
        self.assertEqual(list(self.trie.keys()), ["c", "x"])
        self.assertTrue(self.trie.remove("c"))
        self.assertTrue(self.trie.remove("x"))
        self.expected_node_count = 0

    def test_pop(self):
        self.insert_all({"zero": 0, "one": 1})
        self.assertEqual(self.trie.pop("zero"), 0)
        self.assertNotIn("zero", self.trie)
        self.assertIsNone(self.trie.pop("zero", None))
        with self.assertRaises(KeyError):
            self.trie.pop("zero")

    def test_getitem(self):
        self.insert_all({"two": 2, "three": 3})
        self.assertEqual(self.trie["two"], 2)
        with self.assertRaises(KeyError):
            self.trie["t"]

    def test_clear(self):
        self.insert_all({"a": 1, "b": 2})
        self.trie.clear()
        self.assertTrue(self.trie.is_empty())
        self.assertEqual(len(self.trie), 0)
        self.assertTrue(self.trie.insert("a", 3))


class TestTrieRandom(TrieTestCase):
    """Round trips over random word sets with shared prefixes"""

    def setUp(self):
        super().setUp()
        self.trie, self.expected = random_trie_of_size(400, seed=1234)

    def test_round_trip(self):
        for word, value in self.expected.items():
            self.assertEqual(self.trie.get(word), value)
        self.assertEqual(len(self.trie), len(self.expected))
        self.assertEqual(list(self.trie.items()), sorted(self.expected.items()))

    def test_never_inserted(self):
        for word in random_words(200, seed=99):
            if word not in self.expected:
                self.assertIsNone(self.trie.get(word))
                self.assertFalse(self.trie.contains(word))

    def test_remove_half(self):
        words = list(self.expected)
        removed, kept = words[::2], words[1::2]
        for word in removed:
            self.assertTrue(self.trie.remove(word))
        for word in removed:
            self.assertFalse(self.trie.contains(word))
            self.assertFalse(self.trie.remove(word))
        for word in kept:
            self.assertEqual(self.trie.get(word), self.expected[word])
        self.assertEqual(len(self.trie), len(kept))

    def test_remove_all_prunes_everything(self):
        for word in self.expected:
            self.assertTrue(self.trie.remove(word))
        self.assertEqual(len(self.trie), 0)
        self.assertEqual(list(self.trie.items()), [])
        self.expected_node_count = 0


if __name__ == "__main__":
    unittest.main()
