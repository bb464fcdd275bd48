import random
import unittest
from io import BytesIO

from huffcodec.bitstream import BitOutputStream, BitInputStream
from huffcodec.coders import TextCoder, PackedCoder, TreeWalker, get_coder
from huffcodec.errors import InvalidArgumentError, StreamCorruptionError
from huffcodec.logger import Logger, CodingLog
from huffcodec.models import PackedBits
from huffcodec.settings import HuffmanCoderSettings
from huffcodec.tree import build_tree_from_data


def sample_inputs():
    random.seed(11)
    return [
        b"AAABBC",
        b"aaaa",
        b"x",
        b"ab",
        b"Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
        bytes(range(256)),
        bytes(random.randint(0, 255) for _ in range(4096)),
        bytes(random.choice(b"\x00\x00\x00\x01\xff") for _ in range(1000)),
    ]


class TestBitStreamHelpers(unittest.TestCase):
    def test_bit_output_stream(self):
        out = BytesIO()
        bos = BitOutputStream(out)
        bits = [1, 0, 1, 0, 1, 0, 1, 0]
        for bit in bits:
            bos.write(bit)
        bos.finish()
        self.assertEqual(out.getvalue(), bytes([0b10101010]))
        self.assertEqual(bos.bits_written, 8)

    def test_bit_output_stream_padding(self):
        out = BytesIO()
        bos = BitOutputStream(out)
        for bit in [1, 0, 1]:
            bos.write(bit)
        bos.finish()
        self.assertEqual(out.getvalue(), bytes([0b10100000]))

    def test_seven_bit_output_stream(self):
        out = BytesIO()
        bos = BitOutputStream(out, 7)
        for bit in [1] * 7 + [1, 0, 1]:
            bos.write(bit)
        bos.finish()
        self.assertEqual(out.getvalue(), bytes([0b1111111, 0b1010000]))

    def test_bit_input_stream(self):
        bis = BitInputStream(BytesIO(bytes([0b11001010])))
        bits = [bis.read() for _ in range(8)]
        self.assertEqual(bits, [1, 1, 0, 0, 1, 0, 1, 0])
        self.assertEqual(bis.read(), -1)

    def test_seven_bit_input_stream_skips_high_bit(self):
        bis = BitInputStream(BytesIO(bytes([0b11000001])), 7)
        self.assertEqual([bis.read() for _ in range(7)], [1, 0, 0, 0, 0, 0, 1])

    def test_invalid_bit_write(self):
        bos = BitOutputStream(BytesIO())
        with self.assertRaises(ValueError):
            bos.write(2)

    def test_invalid_group_size(self):
        with self.assertRaises(InvalidArgumentError):
            BitOutputStream(BytesIO(), 9)
        with self.assertRaises(InvalidArgumentError):
            BitInputStream(BytesIO(), 0)


class TestTextCoder(unittest.TestCase):
    def setUp(self):
        self.coder = TextCoder()

    def test_round_trip(self):
        for data in sample_inputs():
            tree = build_tree_from_data(data)
            encoded = self.coder.encode(data, tree)
            self.assertTrue(set(encoded) <= set(b"01"))
            self.assertEqual(self.coder.decode(encoded, tree), data)

    def test_encoded_length(self):
        data = b"AAABBC"
        tree = build_tree_from_data(data)
        encoded = self.coder.encode(data, tree)
        self.assertEqual(len(encoded), 9)
        expected = "".join(tree.code_table[symbol] for symbol in data).encode("ascii")
        self.assertEqual(encoded, expected)

    def test_single_symbol(self):
        tree = build_tree_from_data(b"aaaa")
        encoded = self.coder.encode(b"aaaa", tree)
        self.assertEqual(encoded, b"0000")
        self.assertEqual(self.coder.decode(encoded, tree), b"aaaa")

    def test_truncated_stream_is_corrupt(self):
        data = b"AAABBC"
        tree = build_tree_from_data(data)
        encoded = self.coder.encode(data, tree)
        with self.assertRaises(StreamCorruptionError):
            self.coder.decode(encoded[:-1], tree)

    def test_unexpected_byte_is_corrupt(self):
        tree = build_tree_from_data(b"AAABBC")
        with self.assertRaises(StreamCorruptionError):
            self.coder.decode(b"0120", tree)

    def test_one_digit_in_single_symbol_tree_is_corrupt(self):
        tree = build_tree_from_data(b"aaaa")
        with self.assertRaises(StreamCorruptionError):
            self.coder.decode(b"01", tree)

    def test_symbol_missing_from_tree(self):
        tree = build_tree_from_data(b"AAABBC")
        with self.assertRaises(InvalidArgumentError):
            self.coder.encode(b"AD", tree)

    def test_empty_data_with_tree(self):
        tree = build_tree_from_data(b"AAABBC")
        self.assertEqual(self.coder.encode(b"", tree), b"")
        self.assertEqual(self.coder.decode(b"", tree), b"")

    def test_logs_sizes(self):
        logger = Logger()
        coder = TextCoder(logger)
        tree = build_tree_from_data(b"AAABBC")
        coder.encode(b"AAABBC", tree)
        coding_logs = [log for log in logger.logs if isinstance(log, CodingLog)]
        self.assertEqual(coding_logs[0].symbol_size, 6)
        self.assertEqual(coding_logs[0].encoded_size, 9)


class TestPackedCoder(unittest.TestCase):
    def test_round_trip_both_packings(self):
        for bits_per_byte in (7, 8):
            coder = PackedCoder(HuffmanCoderSettings(bits_per_byte))
            for data in sample_inputs():
                tree = build_tree_from_data(data)
                packed = coder.encode(data, tree)
                self.assertEqual(packed.bits_per_byte, bits_per_byte)
                self.assertEqual(coder.decode(packed, tree), data)

    def test_bit_count_and_packed_bytes(self):
        data = b"AAABBC"
        tree = build_tree_from_data(data)
        bits = "".join(tree.code_table[symbol] for symbol in data)
        packed = PackedCoder().encode(data, tree)
        self.assertEqual(packed.bit_count, 9)
        padded = bits + "0" * (16 - len(bits))
        self.assertEqual(packed.data, int(padded, 2).to_bytes(2, "big"))

    def test_legacy_packing_uses_seven_low_bits(self):
        data = b"Lorem ipsum dolor sit amet"
        tree = build_tree_from_data(data)
        packed = PackedCoder(HuffmanCoderSettings(7)).encode(data, tree)
        self.assertEqual(len(packed.data), -(-packed.bit_count // 7))
        self.assertTrue(all(byte < 0x80 for byte in packed.data))
        bits = "".join(tree.code_table[symbol] for symbol in data)
        self.assertEqual(packed.data[0], int(bits[:7], 2))

    def test_padding_is_not_decoded(self):
        # "0" is a full code word here, so padding zeros would decode as symbols.
        data = b"AAAAAAB"
        tree = build_tree_from_data(data)
        self.assertEqual(len(tree.code_table[ord('A')]), 1)
        coder = PackedCoder()
        packed = coder.encode(data, tree)
        self.assertLess(packed.bit_count, len(packed.data) * 8)
        self.assertEqual(coder.decode(packed, tree), data)

    def test_bit_count_beyond_data_is_corrupt(self):
        tree = build_tree_from_data(b"AAABBC")
        with self.assertRaises(StreamCorruptionError):
            PackedCoder().decode(PackedBits(b"\x00", 9, 8), tree)

    def test_bit_count_ending_mid_code_is_corrupt(self):
        data = b"AAABBC"
        tree = build_tree_from_data(data)
        coder = PackedCoder()
        packed = coder.encode(data, tree)
        truncated = PackedBits(packed.data, packed.bit_count - 1, packed.bits_per_byte)
        with self.assertRaises(StreamCorruptionError):
            coder.decode(truncated, tree)

    def test_rejects_wrong_types(self):
        tree = build_tree_from_data(b"ab")
        with self.assertRaises(InvalidArgumentError):
            PackedCoder().decode(b"\x00", tree)
        with self.assertRaises(InvalidArgumentError):
            PackedCoder().encode("ab", tree)


class TestTreeWalker(unittest.TestCase):
    def test_walker_returns_to_root_after_symbol(self):
        tree = build_tree_from_data(b"AAABBC")
        walker = TreeWalker(tree)
        code = tree.code_table[ord('C')]
        results = [walker.step(int(digit)) for digit in code]
        self.assertEqual(results[-1], ord('C'))
        self.assertTrue(all(result is None for result in results[:-1]))
        self.assertTrue(walker.at_root())


class TestGetCoder(unittest.TestCase):
    def test_get_coder(self):
        self.assertEqual(get_coder(1).get_coder_code(), 1)
        self.assertEqual(get_coder(2, settings=HuffmanCoderSettings(7)).settings.bits_per_byte, 7)
        with self.assertRaises(InvalidArgumentError):
            get_coder(99)

if __name__ == '__main__':
    unittest.main()
