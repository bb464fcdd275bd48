"""
priority_queue.py

Array backed binary min-heap used to assemble Huffman trees.

"""


from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from .errors import EmptyQueueError, UnsupportedOperationError

T = TypeVar("T")


class MinHeapPriorityQueue(Generic[T]):
    """
    A minimum priority queue over items ordered by a weight.

    Items live in slots 1..N of the backing list; slot 0 is never used.
    The backing list doubles when full and halves once only a quarter
    of it is in use.
    """

    def __init__(self, key: Optional[Callable[[T], Any]] = None) -> None:
        """
        Args:
            key (Optional[Callable]): Maps an item to its weight. Items are
                compared directly when no key is given.
        """
        self._key = key
        self._pq: List[Optional[T]] = [None] * 2
        self._n: int = 0

    def size(self) -> int:
        return self._n

    def is_empty(self) -> bool:
        return self._n == 0

    def __len__(self) -> int:
        return self._n

    @property
    def capacity(self) -> int:
        """Number of usable slots in the backing list."""
        return len(self._pq) - 1

    def insert(self, item: T) -> None:
        """
        Add an item and move it up until its parent is not heavier.

        Args:
            item (T): The item to add.
        """
        if self._n == len(self._pq) - 1:
            self._resize(2 * len(self._pq))
        self._n += 1
        self._pq[self._n] = item
        self._swim(self._n)

    def peek_min(self) -> T:
        """
        Return the lightest item without removing it.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if self.is_empty():
            raise EmptyQueueError("Priority queue underflow")
        return self._pq[1]

    def extract_min(self) -> T:
        """
        Remove and return the lightest item.

        The last item is moved into the root slot and sunk back into place.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if self.is_empty():
            raise EmptyQueueError("Priority queue underflow")

        minimum = self._pq[1]
        self._exchange(1, self._n)
        self._n -= 1
        self._pq[self._n + 1] = None
        self._sink(1)
        if self._n > 0 and self._n == len(self._pq) // 4:
            self._resize(len(self._pq) // 2)
        return minimum

    def duplicate(self) -> "MinHeapPriorityQueue[T]":
        """
        Build an independent queue holding the same items.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if self.is_empty():
            raise EmptyQueueError("Priority queue underflow")

        copy: MinHeapPriorityQueue[T] = MinHeapPriorityQueue(self._key)
        for i in range(1, self._n + 1):
            copy.insert(self._pq[i])
        return copy

    def is_min_heap(self) -> bool:
        """Check the slot layout and the heap order of every parent."""
        if self._pq[0] is not None:
            return False
        for i in range(1, self._n + 1):
            if self._pq[i] is None:
                return False
        for i in range(self._n + 1, len(self._pq)):
            if self._pq[i] is not None:
                return False
        for k in range(1, self._n // 2 + 1):
            left, right = 2 * k, 2 * k + 1
            if self._greater(k, left):
                return False
            if right <= self._n and self._greater(k, right):
                return False
        return True

    def slot(self, k: int) -> T:
        """Return the item in live slot k, counting from 1 in heap order."""
        if not 1 <= k <= self._n:
            raise IndexError(f"Slot {k} is not live")
        return self._pq[k]

    def __iter__(self) -> "PriorityQueueIterator[T]":
        return PriorityQueueIterator(self)

    # moves the item at index k up
    def _swim(self, k: int) -> None:
        while k > 1 and self._greater(k // 2, k):
            self._exchange(k // 2, k)
            k = k // 2

    # moves the item at index k down
    def _sink(self, k: int) -> None:
        while 2 * k <= self._n:
            j = 2 * k
            if j < self._n and self._greater(j, j + 1):
                j += 1
            if not self._greater(k, j):
                break
            self._exchange(k, j)
            k = j

    def _weight(self, item: T) -> Any:
        return item if self._key is None else self._key(item)

    def _greater(self, i: int, j: int) -> bool:
        return self._weight(self._pq[j]) < self._weight(self._pq[i])

    def _exchange(self, i: int, j: int) -> None:
        self._pq[i], self._pq[j] = self._pq[j], self._pq[i]

    def _resize(self, new_size: int) -> None:
        copy: List[Optional[T]] = [None] * new_size
        copy[1:self._n + 1] = self._pq[1:self._n + 1]
        self._pq = copy


class PriorityQueueIterator(Iterator[T]):
    """Walks the live slots of a queue in heap order."""

    def __init__(self, queue: MinHeapPriorityQueue[T]) -> None:
        self._queue = queue
        self._i = 1

    def __iter__(self) -> "PriorityQueueIterator[T]":
        return self

    def __next__(self) -> T:
        if self._i > self._queue.size():
            raise StopIteration
        item = self._queue.slot(self._i)
        self._i += 1
        return item

    def remove(self) -> None:
        raise UnsupportedOperationError("Removal through the iterator is not supported")
