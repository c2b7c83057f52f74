from .node import Leaf, RadixNode
from .tree import RadixTree

__all__ = ["Leaf", "RadixNode", "RadixTree"]
