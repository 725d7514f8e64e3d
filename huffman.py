import math
from collections import Counter
from types import MappingProxyType

from min_heap import EmptyQueueError, MinHeap

__all__ = [
    "HuffmanError", "EmptyAlphabetError", "UnknownSymbolError", "MalformedCodeError", "EmptyQueueError",
    "Leaf", "Internal", "count_frequencies", "merge_frequencies", "build_tree", "build_code_table",
    "iter_encode", "encode", "iter_decode", "decode", "iter_leaves", "tree_depth", "is_prefix_free",
    "average_code_length", "entropy",
]


class HuffmanError(Exception):
    pass


class EmptyAlphabetError(HuffmanError, ValueError):
    pass


class UnknownSymbolError(HuffmanError, LookupError):
    def __init__(self, symbol, position):
        super().__init__(f"symbol {symbol!r} at position {position} has no code")
        self.symbol = symbol
        self.position = position


class MalformedCodeError(HuffmanError, ValueError):
    def __init__(self, message, position):
        super().__init__(f"{message} (bit {position})")
        self.position = position


class Leaf: # Huffman tree leaf, one symbol of the alphabet
    __slots__ = ("symbol", "weight")

    def __init__(self, symbol, weight):
        self.symbol = symbol # any hashable value, None and '\0' included
        self.weight = weight

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.weight})"


class Internal: # merge node, always exactly two children and no symbol
    __slots__ = ("weight", "left", "right")

    def __init__(self, left, right):
        self.weight = left.weight + right.weight
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Internal({self.weight}, {self.left!r}, {self.right!r})"


def count_frequencies(symbols) -> dict: # symbol -> count, in order of first appearance
    return dict(Counter(symbols))


def merge_frequencies(*tables) -> dict:
    """
    Sum partial frequency tables symbol by symbol
    (e.g. counts taken over separate chunks of the same input)
    """
    merged = Counter()
    for table in tables:
        merged.update(table)
    return dict(merged)


def build_huffman_leaves(frequency_table): # one leaf per symbol with a positive count
    leaves = []
    for symbol, frequency in frequency_table.items():
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise TypeError(f"frequency of {symbol!r} must be an int, got {type(frequency).__name__}")
        if frequency < 0:
            raise ValueError(f"frequency of {symbol!r} is negative: {frequency}")
        if frequency > 0:
            leaves.append(Leaf(symbol, frequency))
    return leaves


def build_tree(frequency_table): # frequency_table: mapping of symbol -> count
    leaves = build_huffman_leaves(frequency_table)
    if not leaves:
        raise EmptyAlphabetError("no symbol has a positive frequency")

    # Capacity is the alphabet size: each merge pops two and pushes one
    priority_queue = MinHeap.from_nodes(leaves, capacity=len(leaves))

    while len(priority_queue) > 1:
        left = priority_queue.extract_min()
        right = priority_queue.extract_min()
        priority_queue.insert(Internal(left, right))

    return priority_queue.extract_min() # root of the tree


def build_code_table(root):
    """
    Walk the tree from the root and map every leaf symbol to its path,
    '0' for a left branch and '1' for a right branch.

    A tree made of a single leaf still gets a one-bit code ("0") so that
    encoded output stays decodable.
    """
    if isinstance(root, Leaf):
        return MappingProxyType({root.symbol: "0"})

    codes = {}
    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = path
            continue
        stack.append((node.right, path + "1")) # pushed first so the left side is visited first
        stack.append((node.left, path + "0"))
    return MappingProxyType(codes)


def iter_encode(symbols, code_table): # yields one code per input symbol
    for position, symbol in enumerate(symbols):
        try:
            yield code_table[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol, position) from None


def encode(symbols, code_table) -> str:
    return "".join(iter_encode(symbols, code_table))


def iter_decode(bitstring, root):
    if isinstance(root, Leaf): # every symbol is the single bit '0'
        for position, bit in enumerate(bitstring):
            if bit == "0":
                yield root.symbol
            elif bit == "1":
                raise MalformedCodeError("no right branch in a single-symbol tree", position)
            else:
                raise MalformedCodeError(f"invalid bit {bit!r}", position)
        return

    current_node = root
    consumed = 0
    for position, bit in enumerate(bitstring):
        if bit == "0":
            current_node = current_node.left
        elif bit == "1":
            current_node = current_node.right
        else:
            raise MalformedCodeError(f"invalid bit {bit!r}", position)
        consumed = position + 1

        if isinstance(current_node, Leaf): # reached a leaf
            yield current_node.symbol
            current_node = root # reset to the root for the next symbol

    if current_node is not root:
        raise MalformedCodeError("bit-string ends in the middle of a code", consumed)


def decode(bitstring, root) -> list:
    return list(iter_decode(bitstring, root))


def iter_leaves(root): # leaves from left to right
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def tree_depth(root) -> int: # edges on the longest root-to-leaf path
    deepest = 0
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            deepest = max(deepest, depth)
        else:
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return deepest


def is_prefix_free(code_table) -> bool:
    codes = sorted(code_table.values())
    # Sorted order puts any prefix directly before a word that extends it
    return all(not b.startswith(a) for a, b in zip(codes, codes[1:]))


def average_code_length(code_table, frequency_table) -> float: # expected bits per symbol
    total = sum(frequency_table[s] for s in code_table)
    if total == 0:
        return 0.0
    return sum(len(code) * frequency_table[s] for s, code in code_table.items()) / total


def entropy(frequency_table) -> float: # Shannon entropy in bits per symbol
    total = sum(frequency_table.values())
    if total == 0:
        return 0.0
    h = 0.0
    for frequency in frequency_table.values():
        if frequency > 0:
            p = frequency / total
            h -= p * math.log2(p)
    return h
