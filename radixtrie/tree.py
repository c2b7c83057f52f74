"""
Radix Tree (compressed trie / Patricia trie) mapping string keys to values.

Keys are compared character by character (Unicode code points, i.e. plain
`str` indexing), so multi-byte characters split and merge as single units.
Every node stores the run of characters unique to it (`prefix`); outgoing
edges are labeled with the first character of the child's prefix and kept
sorted, which makes the depth-first order of the tree the ascending order of
its keys.

Classes
-------
RadixTree
    Public container. Owns the root node and the key count.

Public API (high level)
-----------------------
- `insert(key, value)` → bool
    True if the key was new, False if an existing value was overwritten.
- `delete(key)` → (value, found)
    Removes the key, prunes the emptied node and merges redundant single-edge
    nodes so that no non-root node is a useless branch point.
- `get(key)` → (value, found)
- `longest_match(key)` → (matched_key, value, found)
    The longest stored key that is a prefix of `key`.
- `collect(prefix)` / `collect_keys(prefix)`
    All pairs (or keys) starting with `prefix`, ascending. Handles prefixes
    that end in the middle of a compressed node.
- `top()` / `bottom()` → (key, value, found)
    Smallest / largest stored key.
- `walk(visit)`
    Pre-order visit of every pair; `visit` returning True stops the walk.
- `items(prefix="", k=None)`
    Lazy, iterative equivalent of `collect` with an optional result limit.
- `load(mapping)` / `to_dict()` / `batch_insert(pairs)` / `batch_delete(keys)`
- `count_nodes(get_avg_branch_factor=False)`

Conventions & invariants
------------------------
- Edge labels at a node are unique and ascending.
- A child's prefix always starts with the label of the edge leading to it.
- No non-root node is left with zero edges and no leaf, or with exactly one
  edge and no leaf.
- `size` equals the number of leaf-bearing nodes.
- The empty string is a valid key and lives on the root.

Complexity (typical)
--------------------
Let L be the key length and d the node degree.
- insert / delete / get / longest_match: O(L · log d).
- collect / items: O(L · log d + size of the enumerated subtree).
- top / bottom: O(depth).
"""

import logging

from .node import Leaf, RadixNode

logger = logging.getLogger(__name__)


class RadixTree:
  __slots__ = ("root", "size")

  def __init__(self, mapping=None):
    self.root = RadixNode()
    self.size = 0
    if mapping is not None:
      self.load(mapping)


  @staticmethod
  def _lcp(a, b):
    """Helper to Return the length of the Longest Common Prefix between a and b."""
    i = 0
    n = min(len(a), len(b))
    while i < n and a[i] == b[i]:
      i += 1
    return i


  def __len__(self):
    return self.size


  def __contains__(self, key):
    if not isinstance(key, str):
      return False
    return self.get(key)[1]


  def __iter__(self):
    for key, _ in self.items():
      yield key


  _REPR_KEYS = 5

  def __repr__(self):
    head = [k for k, _ in self.items(k=self._REPR_KEYS)]
    more = ", ..." if self.size > len(head) else ""
    keys = ", ".join(repr(k) for k in head)
    return f"{self.__class__.__name__}(size={self.size}, keys=[{keys}{more}])"


  # ------------------------------------------------------------------
  # Insertion
  # ------------------------------------------------------------------

  def insert(self, key, value):
    """Insert `key` → `value`, splitting a node when `key` diverges mid-prefix.

    - Descends from the root consuming `key` against each child's prefix.
    - If no child starts with the next character, hangs a new node holding
      the whole remaining suffix.
    - If the child's prefix is only partly shared, splits it: an intermediate
      node takes the shared run, the old child keeps its tail, and the new key
      lands on the intermediate node (suffix exhausted) or on a fresh sibling.
    - If the suffix is exhausted on a node, that node takes the leaf; an
      existing leaf is overwritten in place.

    Args:
        key (str): Key to insert.
        value: Opaque payload, stored by reference.

    Returns:
        bool: True if newly inserted, False if an existing key was updated.
    """
    node = self.root
    rem = key

    while rem:
      child = node._get(rem[0])
      if child is None:
        node._add(rem[0], RadixNode(rem, Leaf(key, value)))
        self.size += 1
        return True

      i = self._lcp(rem, child.prefix)
      if i == len(child.prefix):
        rem = rem[i:]
        node = child
        continue

      # Split: node -(rem[0])- mid -+- child (old tail)
      #                             +- new leaf node (unless rem ends at mid)
      mid = RadixNode(child.prefix[:i])
      node._replace(rem[0], mid)
      child.prefix = child.prefix[i:]
      mid._add(child.prefix[0], child)
      self.size += 1

      leaf = Leaf(key, value)
      tail = rem[i:]
      if tail:
        mid._add(tail[0], RadixNode(tail, leaf))
      else:
        mid.leaf = leaf
      return True

    if node.leaf is not None:
      node.leaf.key = key
      node.leaf.value = value
      return False
    node.leaf = Leaf(key, value)
    self.size += 1
    return True


  # ------------------------------------------------------------------
  # Deletion
  # ------------------------------------------------------------------

  def delete(self, key):
    """Delete `key` and restore the compression invariant.

    - Traverses like `get`, remembering the parent and the incoming label.
      A missing edge or a prefix that diverges means the key is absent and
      nothing changes.
    - On a hit the leaf is detached, then:
      * a node left without edges is pruned from its parent;
      * a non-root node left with one edge is merged with that child;
      * a non-root, leafless parent left with one edge is merged too.

    Args:
        key (str): Key to delete.

    Returns:
        tuple[Any, bool]: `(value, True)` on success, `(None, False)` otherwise.
    """
    root = self.root
    node = root
    parent = None
    in_label = None
    rem = key

    while rem:
      child = node._get(rem[0])
      if child is None or not rem.startswith(child.prefix):
        return None, False
      parent, in_label, node = node, rem[0], child
      rem = rem[len(child.prefix):]

    leaf = node.leaf
    if leaf is None:
      return None, False
    node.leaf = None
    self.size -= 1

    if parent is not None and node._degree() == 0:
      parent._del(in_label)

    if node is not root and node._degree() == 1:
      node._merge_child()

    if (parent is not None and parent is not root
        and parent._degree() == 1 and parent.leaf is None):
      parent._merge_child()

    return leaf.value, True


  # ------------------------------------------------------------------
  # Queries
  # ------------------------------------------------------------------

  def _find(self, key):
    """Return the node `key` ends on exactly, or None."""
    node = self.root
    rem = key
    while rem:
      child = node._get(rem[0])
      if child is None or not rem.startswith(child.prefix):
        return None
      node = child
      rem = rem[len(child.prefix):]
    return node


  def _locate(self, prefix):
    """Return the subtree root holding every key that starts with `prefix`.

    The prefix may end exactly on a node or in the middle of a child's
    prefix; in the latter case that child is the subtree root.
    """
    node = self.root
    rem = prefix
    while rem:
      child = node._get(rem[0])
      if child is None:
        return None
      if rem.startswith(child.prefix):
        rem = rem[len(child.prefix):]
        node = child
        continue
      if child.prefix.startswith(rem):
        return child
      return None
    return node


  def get(self, key):
    """Return `(value, True)` if `key` is stored, else `(None, False)`."""
    node = self._find(key)
    if node is None or node.leaf is None:
      return None, False
    return node.leaf.value, True


  def longest_match(self, key):
    """Return the longest stored key that is a prefix of `key`.

    Every node on the descent path (root included) that holds a leaf is
    remembered; the last one wins.

    Returns:
        tuple[str, Any, bool]: `(matched_key, value, True)`, or
        `("", None, False)` when no stored key prefixes `key`.
    """
    last = None
    node = self.root
    rem = key
    while True:
      if node.leaf is not None:
        last = node.leaf
      if not rem:
        break
      child = node._get(rem[0])
      if child is None or not rem.startswith(child.prefix):
        break
      node = child
      rem = rem[len(child.prefix):]

    if last is None:
      return "", None, False
    return last.key, last.value, True


  def collect(self, prefix):
    """Return every `(key, value)` whose key starts with `prefix`, ascending."""
    node = self._locate(prefix)
    if node is None:
      return []
    return list(self._iter_leaves(node))


  def collect_keys(self, prefix):
    return [k for k, _ in self.collect(prefix)]


  def top(self):
    """Smallest key: a node's own leaf sorts before all of its continuations."""
    node = self.root
    while True:
      if node.leaf is not None:
        return node.leaf.key, node.leaf.value, True
      child = node._first_child()
      if child is None:
        return "", None, False
      node = child


  def bottom(self):
    """Largest key: any continuation sorts after the node's own leaf."""
    node = self.root
    while True:
      child = node._last_child()
      if child is not None:
        node = child
        continue
      if node.leaf is not None:
        return node.leaf.key, node.leaf.value, True
      return "", None, False


  # ------------------------------------------------------------------
  # Traversal
  # ------------------------------------------------------------------

  @staticmethod
  def _iter_leaves(start):
    """Pre-order `(key, value)` pairs under `start`, children by ascending label.

    Iterative: a stack of child iterators, so depth is bounded by memory
    rather than the recursion limit.
    """
    stack = [iter((start,))]
    while stack:
      node = next(stack[-1], None)
      if node is None:
        stack.pop()
        continue
      leaf = node.leaf
      if leaf is not None:
        yield leaf.key, leaf.value
      if node.children is not None:
        stack.append(iter(node.children))


  def walk(self, visit):
    """Call `visit(key, value)` for every pair in ascending key order.

    Stops as soon as `visit` returns a truthy value.
    """
    for key, value in self._iter_leaves(self.root):
      if visit(key, value):
        return


  def items(self, prefix="", k=None):
    """Generator over `(key, value)` pairs starting with `prefix`.

    - Same order as `walk` (leaf first, then children by ascending label).
    - Yields at most `k` pairs when `k` is given.

    Args:
        prefix (str): Prefix to enumerate from ("" enumerates the whole tree).
        k (int | None): Optional limit on number of results.

    Yields:
        tuple[str, Any]: Stored pairs beginning with `prefix`.
    """
    if k is not None and k <= 0:
      return
    start = self._locate(prefix)
    if start is None:
      return

    yielded = 0
    for pair in self._iter_leaves(start):
      yield pair
      yielded += 1
      if k is not None and yielded >= k:
        return


  # ------------------------------------------------------------------
  # Bulk helpers
  # ------------------------------------------------------------------

  def load(self, mapping):
    """Insert every pair of `mapping`; return the number of new keys."""
    inserted, updated = self.batch_insert(mapping.items())
    logger.debug("load: %d inserted, %d updated, size=%d",
                 inserted, updated, self.size)
    return inserted


  def to_dict(self):
    """Export the tree as a dict (keys in ascending order)."""
    out = {}

    def _store(k, v):
      out[k] = v
      return False

    self.walk(_store)
    return out


  def batch_insert(self, pairs):
    """Insert many `(key, value)` pairs; returns (inserted_count, updated_count)."""
    inserted = 0
    updated = 0
    for key, value in pairs:
      if self.insert(key, value):
        inserted += 1
      else:
        updated += 1
    return inserted, updated


  def batch_delete(self, keys):
    """Delete many keys; returns (deleted_count, missing_count)."""
    deleted = 0
    missing = 0
    for key in keys:
      if self.delete(key)[1]:
        deleted += 1
      else:
        missing += 1
    logger.debug("batch_delete: %d deleted, %d missing, size=%d",
                 deleted, missing, self.size)
    return deleted, missing


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (root included).
        If True, return average out-degree over internal nodes only:
        `sum(degree) / (# internal nodes)`.

    Returns
    -------
    int | float
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = node._degree()
      if deg:
        internal += 1
        total_deg += deg
        stack.extend(node.children)

    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes
