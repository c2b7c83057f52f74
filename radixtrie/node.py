"""
Node and edge model for the radix tree.

A `RadixNode` carries:
  - `prefix`: the characters unique to this node (empty for the root),
  - `leaf`: a `Leaf` when a stored key terminates here, else None,
  - an edge table: two parallel lists, `labels` (single characters, sorted
    ascending) and `children` (the owned child nodes).

The edge table is allocated lazily; a node without edges keeps both lists as
None. All edge operations locate labels with `bisect`, so they run in
O(log d) comparisons for a node of degree d.

Edge helpers
------------
- `_get(ch)`            → child for label `ch`, or None
- `_add(ch, child)`     → sorted insert (caller guarantees `ch` is fresh)
- `_replace(ch, child)` → swap the child behind `ch`; True if found
- `_del(ch)`            → drop the edge `ch`; True if found
- `_iter_edges()`       → `(label, child)` pairs in ascending label order
- `_degree()` / `_only_edge()` / `_first_child()` / `_last_child()`
"""

from bisect import bisect_left


class Leaf:
  """A stored key/value pair. The key is the original, undecomposed string."""
  __slots__ = ("key", "value")

  def __init__(self, key, value):
    self.key = key
    self.value = value

  def __repr__(self):
    return f"Leaf({self.key!r}, {self.value!r})"


class RadixNode:
  __slots__ = ("prefix", "leaf", "labels", "children")

  def __init__(self, prefix="", leaf=None):
    self.prefix = prefix
    self.leaf = leaf
    self.labels = None
    self.children = None


  def _index(self, ch):
    """Return the position of label `ch`, or -1."""
    labels = self.labels
    if labels is None:
      return -1
    i = bisect_left(labels, ch)
    if i < len(labels) and labels[i] == ch:
      return i
    return -1


  def _get(self, ch):
    """Return the child behind label `ch`, or None."""
    i = self._index(ch)
    return None if i < 0 else self.children[i]


  def _add(self, ch, child):
    """Insert an edge keeping labels sorted."""
    if self.labels is None:
      self.labels = [ch]
      self.children = [child]
      return
    i = bisect_left(self.labels, ch)
    self.labels.insert(i, ch)
    self.children.insert(i, child)


  def _replace(self, ch, child):
    """Point the edge `ch` at `child`; return True if the edge existed."""
    i = self._index(ch)
    if i < 0:
      return False
    self.children[i] = child
    return True


  def _del(self, ch):
    """Delete edge by label; return True if deleted."""
    i = self._index(ch)
    if i < 0:
      return False
    del self.labels[i]
    del self.children[i]
    if not self.labels:
      self.labels = None
      self.children = None
    return True


  def _iter_edges(self):
    """Yield (label, child) for all outgoing edges, ascending by label."""
    if self.labels is None:
      return iter(())
    return zip(self.labels, self.children)


  def _degree(self):
    return 0 if self.labels is None else len(self.labels)


  def _only_edge(self):
    """Return (label, child) if exactly one outgoing edge; else None."""
    if self._degree() != 1:
      return None
    return self.labels[0], self.children[0]


  def _first_child(self):
    return None if self.children is None else self.children[0]


  def _last_child(self):
    return None if self.children is None else self.children[-1]


  def _merge_child(self):
    """Absorb the sole child: extend the prefix, adopt its leaf and edges.

    No-op unless the node has exactly one edge.
    """
    only = self._only_edge()
    if only is None:
      return False
    _, child = only
    self.prefix += child.prefix
    self.leaf = child.leaf
    self.labels = child.labels
    self.children = child.children
    return True


  def __repr__(self):
    return (f"RadixNode(prefix={self.prefix!r}, leaf={self.leaf!r}, "
            f"labels={self.labels!r})")
