"""
models.py

The shared objects used in the huffcodec.

"""


from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from .errors import InvalidArgumentError, StreamCorruptionError
from .settings import ALPHABET_SIZE

FREQUENCY_DTYPE = np.dtype('<u4')


class FrequencyTable:
    """
    Occurrence count of every byte value in an input.
    """
    def __init__(self, counts: Union[np.ndarray, List[int]]) -> None:
        counts = np.array(counts, dtype=np.int64)
        if counts.shape != (ALPHABET_SIZE,):
            raise InvalidArgumentError(f"Frequency table must hold {ALPHABET_SIZE} counts")
        if np.any(counts < 0):
            raise InvalidArgumentError("Frequencies must be non-negative")
        counts.setflags(write=False)
        self.counts: np.ndarray = counts

    @classmethod
    def from_data(cls, data: bytes) -> 'FrequencyTable':
        """
        Count every byte of data.

        Args:
            data (bytes): The input.

        Returns:
            FrequencyTable: The counts of all 256 byte values.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidArgumentError("Data must be of type bytes")
        return cls(np.bincount(np.frombuffer(bytes(data), dtype=np.uint8), minlength=ALPHABET_SIZE))

    def count(self, symbol: int) -> int:
        return int(self.counts[symbol])

    def symbols(self) -> List[int]:
        """Byte values with a non-zero count, ascending."""
        return [int(s) for s in np.flatnonzero(self.counts)]

    def distinct_count(self) -> int:
        return int(np.count_nonzero(self.counts))

    def total(self) -> int:
        return int(self.counts.sum())

    def to_bytes(self) -> bytes:
        """256 little-endian unsigned 32-bit counts."""
        if np.any(self.counts > np.iinfo(FREQUENCY_DTYPE).max):
            raise InvalidArgumentError("Frequency too large to serialize")
        return self.counts.astype(FREQUENCY_DTYPE).tobytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'FrequencyTable':
        if len(data) != ALPHABET_SIZE * FREQUENCY_DTYPE.itemsize:
            raise StreamCorruptionError("Frequency table has the wrong length")
        return cls(np.frombuffer(data, dtype=FREQUENCY_DTYPE))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrequencyTable):
            return bool(np.array_equal(self.counts, other.counts))
        return False

    def __repr__(self) -> str:
        present = {s: self.count(s) for s in self.symbols()}
        return f"FrequencyTable({present})"


class LeafNode:
    """
    A tree leaf carrying a byte value and its frequency.
    """
    def __init__(self, symbol: int, weight: int) -> None:
        self.symbol: int = symbol
        self.weight: int = weight

    def is_leaf(self) -> bool:
        return True

    def __lt__(self, other: 'TreeNode') -> bool:
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"LeafNode({self.symbol!r}, {self.weight})"


class InternalNode:
    """
    A tree node owning two subtrees; its weight is the sum of theirs.
    """
    def __init__(self, left: 'TreeNode', right: 'TreeNode') -> None:
        self.left: TreeNode = left
        self.right: TreeNode = right
        self.weight: int = left.weight + right.weight

    def is_leaf(self) -> bool:
        return False

    def __lt__(self, other: 'TreeNode') -> bool:
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"InternalNode({self.weight})"


TreeNode = Union[LeafNode, InternalNode]


class CodeTable:
    """
    The code word of every byte value; an empty string marks an unused value.
    """
    def __init__(self, codes: Optional[List[str]] = None) -> None:
        if codes is None:
            codes = [""] * ALPHABET_SIZE
        if len(codes) != ALPHABET_SIZE:
            raise InvalidArgumentError(f"Code table must hold {ALPHABET_SIZE} entries")
        self._codes: Tuple[str, ...] = tuple(codes)

    def code_for(self, symbol: int) -> str:
        return self._codes[symbol]

    def __getitem__(self, symbol: int) -> str:
        return self._codes[symbol]

    def items(self) -> Iterator[Tuple[int, str]]:
        """(symbol, code) pairs for the used byte values."""
        for symbol, code in enumerate(self._codes):
            if code:
                yield symbol, code

    def weighted_length(self, frequencies: FrequencyTable) -> int:
        """Total number of code digits needed for an input with these frequencies."""
        return sum(frequencies.count(symbol) * len(code) for symbol, code in self.items())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CodeTable):
            return self._codes == other._codes
        return False

    def __repr__(self) -> str:
        return f"CodeTable({dict(self.items())})"


class HuffmanTree:
    """
    A finished Huffman tree with the frequencies it was built from and the
    code table derived from it.
    """
    def __init__(self, root: TreeNode, frequencies: FrequencyTable, code_table: CodeTable, depth: int) -> None:
        self._root = root
        self._frequencies = frequencies
        self._code_table = code_table
        self._depth = depth

    @property
    def root(self) -> TreeNode:
        return self._root

    @property
    def frequencies(self) -> FrequencyTable:
        return self._frequencies

    @property
    def code_table(self) -> CodeTable:
        return self._code_table

    @property
    def depth(self) -> int:
        return self._depth

    def leaf_count(self) -> int:
        return self._frequencies.distinct_count()

    def __repr__(self) -> str:
        return f"HuffmanTree(leaves={self.leaf_count()}, depth={self.depth})"


class PackedBits:
    """
    Bit packed output together with the number of meaningful bits.
    """
    def __init__(self, data: bytes, bit_count: int, bits_per_byte: int) -> None:
        self.data: bytes = data
        self.bit_count: int = bit_count
        self.bits_per_byte: int = bits_per_byte

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PackedBits):
            return (self.data == other.data
                    and self.bit_count == other.bit_count
                    and self.bits_per_byte == other.bits_per_byte)
        return False

    def __repr__(self) -> str:
        return f"PackedBits({len(self.data)} bytes, bit_count={self.bit_count}, bits_per_byte={self.bits_per_byte})"
