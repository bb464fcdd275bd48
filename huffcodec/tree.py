"""
tree.py

Huffman tree construction and code table derivation.

"""


from typing import List, Optional, Tuple

from .errors import EmptyInputError, InvalidArgumentError
from .logger import Logger, FrequencyCountLog, TreeConstructionLog, log_to
from .models import CodeTable, FrequencyTable, HuffmanTree, InternalNode, LeafNode, TreeNode
from .priority_queue import MinHeapPriorityQueue
from .settings import ALPHABET_SIZE


def leaf_queue(frequencies: FrequencyTable) -> MinHeapPriorityQueue[TreeNode]:
    """
    Create a priority queue holding one leaf per symbol present in frequencies.

    Args:
        frequencies (FrequencyTable): The symbol counts.

    Returns:
        MinHeapPriorityQueue[TreeNode]: Leaves ordered by weight.
    """
    pq: MinHeapPriorityQueue[TreeNode] = MinHeapPriorityQueue()
    for symbol in frequencies.symbols():
        pq.insert(LeafNode(symbol, frequencies.count(symbol)))
    return pq


def merge_queue(pq: MinHeapPriorityQueue[TreeNode]) -> TreeNode:
    """
    Merge the two lightest subtrees until one root remains.

    The first node extracted becomes the left child.

    Args:
        pq (MinHeapPriorityQueue[TreeNode]): A non-empty queue of subtrees.

    Returns:
        TreeNode: The root of the merged tree.
    """
    while pq.size() > 1:
        left = pq.extract_min()
        right = pq.extract_min()
        pq.insert(InternalNode(left, right))
    return pq.extract_min()


def derive_code_table(root: TreeNode) -> Tuple[CodeTable, int]:
    """
    Walk the tree depth first, appending '0' for left edges and '1' for right edges.

    A tree made of a single leaf gives that symbol the code "0".

    Args:
        root (TreeNode): Root of the tree.

    Returns:
        Tuple[CodeTable, int]: The code table and the depth of the tree.
    """
    codes: List[str] = [""] * ALPHABET_SIZE
    if root.is_leaf():
        codes[root.symbol] = "0"
        return CodeTable(codes), 0

    depth = 0
    stack: List[Tuple[TreeNode, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf():
            codes[node.symbol] = path
            depth = max(depth, len(path))
        else:
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
    return CodeTable(codes), depth


def build_tree(frequencies: FrequencyTable, logger: Optional[Logger] = None) -> HuffmanTree:
    """
    Build the Huffman tree and code table for a frequency table.

    Args:
        frequencies (FrequencyTable): The symbol counts.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        HuffmanTree: The tree with its code table.

    Raises:
        EmptyInputError: If no symbol has a non-zero count.
    """
    if not isinstance(frequencies, FrequencyTable):
        raise InvalidArgumentError("Frequencies must be an instance of FrequencyTable")
    if frequencies.distinct_count() == 0:
        raise EmptyInputError("Can't build a Huffman tree from an empty input")

    log_to(logger, FrequencyCountLog(frequencies.distinct_count(), frequencies.total()))
    root = merge_queue(leaf_queue(frequencies))
    code_table, depth = derive_code_table(root)
    log_to(logger, TreeConstructionLog(frequencies.distinct_count(), depth))
    return HuffmanTree(root, frequencies, code_table, depth)


def build_tree_from_data(data: bytes, logger: Optional[Logger] = None) -> HuffmanTree:
    """
    Count the bytes of data and build their Huffman tree.

    Raises:
        EmptyInputError: If data is empty.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise InvalidArgumentError("Data must be of type bytes")
    if len(data) == 0:
        raise EmptyInputError("Can't build a Huffman tree from an empty input")
    return build_tree(FrequencyTable.from_data(data), logger)
