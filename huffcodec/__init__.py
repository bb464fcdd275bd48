"""
huffcodec: A Python library for byte level Huffman coding, textual and bit packed.
"""

from .priority_queue import (
    MinHeapPriorityQueue,
    PriorityQueueIterator,
)

from .models import (
    FrequencyTable,
    LeafNode,
    InternalNode,
    CodeTable,
    HuffmanTree,
    PackedBits,
)

from .tree import (
    leaf_queue,
    merge_queue,
    derive_code_table,
    build_tree,
    build_tree_from_data,
)

from .bitstream import (
    BitOutputStream,
    BitInputStream,
)

from .coders import (
    TreeWalker,
    CoderBase,
    TextCoder,
    PackedCoder,
    get_coder,
)

from .codecs import (
    CompressedHuffman,
    CompressedHuffmanFile,
    HuffmanCodec,
    HuffmanCodecFile,
    HuffmanSession,
)

from .settings import HuffmanCoderSettings

from .errors import (
    HuffmanError,
    InvalidArgumentError,
    EmptyInputError,
    EmptyQueueError,
    StreamCorruptionError,
    UnsupportedOperationError,
    UnimplementedPathError,
    IOFailureError,
)

from .logger import (
    Logger,
    Log,
    LogLevel,
    StatusLog,
    FrequencyCountLog,
    TreeConstructionLog,
    CodingLog,
    CodingProgressStep,
)

__all__ = [

    "MinHeapPriorityQueue",
    "PriorityQueueIterator",

    "FrequencyTable",
    "LeafNode",
    "InternalNode",
    "CodeTable",
    "HuffmanTree",
    "PackedBits",

    "leaf_queue",
    "merge_queue",
    "derive_code_table",
    "build_tree",
    "build_tree_from_data",

    "BitOutputStream",
    "BitInputStream",

    "TreeWalker",
    "CoderBase",
    "TextCoder",
    "PackedCoder",
    "get_coder",

    "CompressedHuffman",
    "CompressedHuffmanFile",
    "HuffmanCodec",
    "HuffmanCodecFile",
    "HuffmanSession",

    "HuffmanCoderSettings",

    "HuffmanError",
    "InvalidArgumentError",
    "EmptyInputError",
    "EmptyQueueError",
    "StreamCorruptionError",
    "UnsupportedOperationError",
    "UnimplementedPathError",
    "IOFailureError",

    "Logger",
    "Log",
    "LogLevel",
    "StatusLog",
    "FrequencyCountLog",
    "TreeConstructionLog",
    "CodingLog",
    "CodingProgressStep",
]
