"""
coders.py

The textual and packed Huffman coders.

"""


import abc
from io import BytesIO
from typing import Iterable, Optional

from .bitstream import BitInputStream, BitOutputStream
from .errors import InvalidArgumentError, StreamCorruptionError
from .logger import Logger, CodingLog, CodingProgressStep, log_to
from .models import HuffmanTree, PackedBits
from .settings import HuffmanCoderSettings
from .validators import validate_type

ZERO_DIGIT = ord('0')
ONE_DIGIT = ord('1')


class TreeWalker:
    """
    Follows code digits from the root of a tree and reports each symbol reached.

    A single leaf tree reads every '0' digit as one symbol.
    """

    def __init__(self, tree: HuffmanTree) -> None:
        self.root = tree.root
        self.node = self.root

    def step(self, bit: int) -> Optional[int]:
        """
        Descend one edge.

        Returns:
            Optional[int]: The symbol when a leaf was reached, otherwise None.

        Raises:
            StreamCorruptionError: If the digit leads nowhere in the tree.
        """
        if self.root.is_leaf():
            if bit != 0:
                raise StreamCorruptionError("Digit 1 has no path in a single symbol tree")
            return self.root.symbol
        self.node = self.node.right if bit else self.node.left
        if self.node.is_leaf():
            symbol = self.node.symbol
            self.node = self.root
            return symbol
        return None

    def at_root(self) -> bool:
        return self.node is self.root

    def decode(self, bits: Iterable[int], logger: Optional[Logger] = None) -> bytes:
        """
        Decode a whole stream of digits.

        Raises:
            StreamCorruptionError: If the stream ends inside a code word.
        """
        out = bytearray()
        for bit in bits:
            symbol = self.step(bit)
            if symbol is not None:
                out.append(symbol)
                if logger is not None:
                    logger.log(CodingProgressStep("Decoding symbol"))
        if not self.at_root():
            raise StreamCorruptionError("Stream ended in the middle of a code word")
        return bytes(out)


class CoderBase(abc.ABC):
    """
    Abstract base class for coders.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self.logger: Optional[Logger] = logger

    @abc.abstractmethod
    def encode(self, data: bytes, tree: HuffmanTree):
        """
        Encode data with the code table of tree.

        Args:
            data (bytes): The data to be encoded.
            tree (HuffmanTree): A tree built from the same data.
        """
        pass

    @abc.abstractmethod
    def decode(self, encoded, tree: HuffmanTree) -> bytes:
        """
        Decode the output of encode back into the original bytes.

        Args:
            encoded: The encoded data.
            tree (HuffmanTree): The tree used for encoding.

        Returns:
            bytes: The decoded data.
        """
        pass

    @abc.abstractmethod
    def get_coder_code(self) -> int:
        """
        Get the code for the coder.

        Returns:
            int: The coder code.
        """
        pass

    def _check_symbols(self, data: bytes, tree: HuffmanTree) -> None:
        codes = tree.code_table
        for symbol in set(data):
            if not codes[symbol]:
                raise InvalidArgumentError(f"Symbol {symbol} has no code in the tree")


class TextCoder(CoderBase):
    """
    Writes one ASCII '0' or '1' per code digit.
    """
    coder_code = 1

    def encode(self, data: bytes, tree: HuffmanTree) -> bytes:
        validate_type(data, "Data", (bytes, bytearray))
        validate_type(tree, "Tree", HuffmanTree)
        self._check_symbols(data, tree)

        codes = tree.code_table
        encoded = "".join(codes[symbol] for symbol in data).encode("ascii")
        log_to(self.logger, CodingLog(len(data), len(encoded)))
        return encoded

    def decode(self, encoded: bytes, tree: HuffmanTree) -> bytes:
        validate_type(encoded, "Encoded data", (bytes, bytearray))
        validate_type(tree, "Tree", HuffmanTree)
        return TreeWalker(tree).decode(self._digits(encoded), self.logger)

    def get_coder_code(self) -> int:
        return self.coder_code

    @staticmethod
    def _digits(encoded: bytes) -> Iterable[int]:
        for position, digit in enumerate(encoded):
            if digit == ZERO_DIGIT:
                yield 0
            elif digit == ONE_DIGIT:
                yield 1
            else:
                raise StreamCorruptionError(f"Unexpected byte {digit} at position {position}")


class PackedCoder(CoderBase):
    """
    Packs code digits into bytes, most significant used bit first.
    """
    coder_code = 2

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        super().__init__(logger)
        self.settings: HuffmanCoderSettings = settings if settings is not None else HuffmanCoderSettings()

    def encode(self, data: bytes, tree: HuffmanTree) -> PackedBits:
        validate_type(data, "Data", (bytes, bytearray))
        validate_type(tree, "Tree", HuffmanTree)
        self._check_symbols(data, tree)

        codes = tree.code_table
        out_buffer = BytesIO()
        bit_out = BitOutputStream(out_buffer, self.settings.bits_per_byte)
        for symbol in data:
            for digit in codes[symbol]:
                bit_out.write(1 if digit == '1' else 0)
            if self.logger is not None:
                self.logger.log(CodingProgressStep("Compressing symbol", len(data)))
        bit_out.finish()

        packed = PackedBits(out_buffer.getvalue(), bit_out.bits_written, self.settings.bits_per_byte)
        log_to(self.logger, CodingLog(len(data), len(packed.data)))
        return packed

    def decode(self, packed: PackedBits, tree: HuffmanTree) -> bytes:
        validate_type(packed, "Packed data", PackedBits)
        validate_type(tree, "Tree", HuffmanTree)
        capacity = len(packed.data) * packed.bits_per_byte
        if packed.bit_count < 0 or packed.bit_count > capacity:
            raise StreamCorruptionError(
                f"Bit count {packed.bit_count} doesn't fit in {len(packed.data)} packed bytes")

        bit_in = BitInputStream(BytesIO(packed.data), packed.bits_per_byte)
        return TreeWalker(tree).decode(self._bits(bit_in, packed.bit_count), self.logger)

    def get_coder_code(self) -> int:
        return self.coder_code

    @staticmethod
    def _bits(bit_in: BitInputStream, bit_count: int) -> Iterable[int]:
        for _ in range(bit_count):
            bit = bit_in.read()
            if bit == -1:
                raise StreamCorruptionError("Packed data ended before the declared bit count")
            yield bit


def get_coder(coder_code: int, logger: Optional[Logger] = None,
              settings: Optional[HuffmanCoderSettings] = None) -> CoderBase:
    if coder_code == TextCoder.coder_code:
        return TextCoder(logger)
    elif coder_code == PackedCoder.coder_code:
        return PackedCoder(settings, logger)
    else:
        raise InvalidArgumentError(f"Invalid coder code: {coder_code}")
