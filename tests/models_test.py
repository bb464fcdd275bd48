import unittest

import numpy as np

from huffcodec.models import FrequencyTable, LeafNode, InternalNode, CodeTable, PackedBits
from huffcodec.errors import InvalidArgumentError, StreamCorruptionError
from huffcodec.settings import HuffmanCoderSettings

class TestFrequencyTable(unittest.TestCase):
    def test_counts_bytes(self):
        table = FrequencyTable.from_data(b"AAABBC")
        self.assertEqual(table.count(ord('A')), 3)
        self.assertEqual(table.count(ord('B')), 2)
        self.assertEqual(table.count(ord('C')), 1)
        self.assertEqual(table.count(ord('D')), 0)
        self.assertEqual(table.symbols(), [65, 66, 67])
        self.assertEqual(table.distinct_count(), 3)
        self.assertEqual(table.total(), 6)

    def test_empty_data(self):
        table = FrequencyTable.from_data(b"")
        self.assertEqual(table.distinct_count(), 0)
        self.assertEqual(table.total(), 0)

    def test_counts_are_read_only(self):
        table = FrequencyTable.from_data(b"abc")
        with self.assertRaises(ValueError):
            table.counts[0] = 5

    def test_source_array_is_copied(self):
        counts = np.zeros(256, dtype=np.int64)
        table = FrequencyTable(counts)
        counts[1] = 4
        self.assertEqual(table.count(1), 0)

    def test_bytes_round_trip(self):
        table = FrequencyTable.from_data(b"hello world")
        serialized = table.to_bytes()
        self.assertEqual(len(serialized), 1024)
        self.assertEqual(FrequencyTable.from_bytes(serialized), table)

    def test_invalid_tables(self):
        with self.assertRaises(InvalidArgumentError):
            FrequencyTable([1, 2, 3])
        with self.assertRaises(InvalidArgumentError):
            FrequencyTable([-1] + [0] * 255)
        with self.assertRaises(InvalidArgumentError):
            FrequencyTable.from_data("text")
        with self.assertRaises(StreamCorruptionError):
            FrequencyTable.from_bytes(b"\x00" * 10)


class TestTreeNodes(unittest.TestCase):
    def test_internal_weight_is_sum(self):
        node = InternalNode(LeafNode(1, 2), LeafNode(2, 5))
        self.assertEqual(node.weight, 7)
        self.assertFalse(node.is_leaf())
        self.assertTrue(node.left.is_leaf())

    def test_ordering(self):
        self.assertLess(LeafNode(1, 2), LeafNode(0, 3))
        self.assertLess(LeafNode(1, 2), InternalNode(LeafNode(2, 1), LeafNode(3, 2)))


class TestCodeTable(unittest.TestCase):
    def test_unused_symbols_are_empty(self):
        codes = [""] * 256
        codes[65] = "0"
        codes[66] = "1"
        table = CodeTable(codes)
        self.assertEqual(table.code_for(65), "0")
        self.assertEqual(table[67], "")
        self.assertEqual(list(table.items()), [(65, "0"), (66, "1")])

    def test_weighted_length(self):
        codes = [""] * 256
        codes[65] = "0"
        codes[66] = "10"
        codes[67] = "11"
        table = CodeTable(codes)
        self.assertEqual(table.weighted_length(FrequencyTable.from_data(b"AAABBC")), 9)

    def test_wrong_size(self):
        with self.assertRaises(InvalidArgumentError):
            CodeTable(["0"])


class TestPackedBits(unittest.TestCase):
    def test_equality(self):
        self.assertEqual(PackedBits(b"\x01", 3, 8), PackedBits(b"\x01", 3, 8))
        self.assertNotEqual(PackedBits(b"\x01", 3, 8), PackedBits(b"\x01", 3, 7))


class TestSettings(unittest.TestCase):
    def test_default_is_full_packing(self):
        self.assertEqual(HuffmanCoderSettings().bits_per_byte, 8)

    def test_invalid_packing(self):
        with self.assertRaises(InvalidArgumentError):
            HuffmanCoderSettings(6)

if __name__ == '__main__':
    unittest.main()
