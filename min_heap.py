import heapq
from itertools import count


class EmptyQueueError(IndexError):
    pass


class MinHeap: # min-heap of tree nodes keyed on node.weight
    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries = [] # (weight, insertion number, node)
        self._counter = count() # equal weights leave in insertion order

    def __len__(self):
        return len(self._entries)

    @classmethod
    def from_nodes(cls, nodes, capacity: int = None) -> "MinHeap":
        nodes = list(nodes)
        heap = cls(capacity if capacity is not None else max(1, len(nodes)))
        if len(nodes) > heap.capacity:
            raise OverflowError(f"{len(nodes)} nodes exceed queue capacity {heap.capacity}")
        heap._entries = [(node.weight, next(heap._counter), node) for node in nodes]
        heapq.heapify(heap._entries) # bottom-up sift-down, linear time
        return heap

    def insert(self, node) -> None:
        if len(self._entries) >= self.capacity:
            raise OverflowError(f"queue is full (capacity {self.capacity})")
        heapq.heappush(self._entries, (node.weight, next(self._counter), node))

    def extract_min(self):
        if not self._entries:
            raise EmptyQueueError("extract_min on an empty queue")
        return heapq.heappop(self._entries)[2]
