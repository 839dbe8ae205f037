"""k-d tree over planar points and its median-split builder.

Nodes live in two index-addressed arenas (internal nodes and leaves) and are
addressed by ``NodeRef`` values tagged with their kind, so a reference tells
null, leaf and internal node apart without any bit arithmetic.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .geometry import Point, to_stream
from .logging_utils import get_logger

logger = get_logger('plangeo.kd_tree')

__all__ = ['NodeKind', 'NodeRef', 'NULL_REF', 'KDNode', 'KDTree', 'BuildKDTree',
           'partition_segments']


class NodeKind(Enum):
    NULL = 0
    LEAF = 1
    NODE = 2


@dataclass(frozen=True)
class NodeRef:
    """Opaque reference to a tree element: arena kind plus slot index."""
    kind: NodeKind = NodeKind.NULL
    index: int = -1

    def __bool__(self) -> bool:
        return self.kind is not NodeKind.NULL


NULL_REF = NodeRef()


@dataclass
class KDNode:
    """Internal node. ``pivot`` splits along axis ``depth % dim``."""
    pivot: float = 0.0
    left: NodeRef = field(default=NULL_REF)
    right: NodeRef = field(default=NULL_REF)


class KDTree:
    """Arena-backed k-d tree.

    The tree only stores structure; ``BuildKDTree`` decides its shape. Nodes are
    created bottom-up, so the root is the internal node added last, or the
    single leaf of a one-point tree.
    """

    def __init__(self, dim: int = 2):
        self.dim = dim
        self._nodes: List[KDNode] = []
        self._leaves: List[Tuple[float, ...]] = []

    def __len__(self) -> int:
        return len(self._leaves)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def clear(self) -> None:
        self._nodes.clear()
        self._leaves.clear()

    def add_node(self, pivot: float = 0.0, left: NodeRef = NULL_REF,
                 right: NodeRef = NULL_REF) -> NodeRef:
        self._nodes.append(KDNode(float(pivot), left, right))
        return NodeRef(NodeKind.NODE, len(self._nodes) - 1)

    def add_leaf(self, point) -> NodeRef:
        self._leaves.append(tuple(float(c) for c in point))
        return NodeRef(NodeKind.LEAF, len(self._leaves) - 1)

    def root(self) -> NodeRef:
        if self._nodes:
            return NodeRef(NodeKind.NODE, len(self._nodes) - 1)
        if self._leaves:
            return NodeRef(NodeKind.LEAF, 0)
        return NULL_REF

    @staticmethod
    def is_leaf(ref: NodeRef) -> bool:
        return ref.kind is NodeKind.LEAF

    @staticmethod
    def is_null(ref: NodeRef) -> bool:
        return ref.kind is NodeKind.NULL

    def node(self, ref: NodeRef) -> KDNode:
        """Internal node behind ``ref``; null or leaf references are a caller bug."""
        assert ref.kind is NodeKind.NODE, f"not an internal node reference: {ref}"
        return self._nodes[ref.index]

    def leaf(self, ref: NodeRef) -> Tuple[float, ...]:
        assert ref.kind is NodeKind.LEAF, f"not a leaf reference: {ref}"
        return self._leaves[ref.index]

    def points(self) -> np.ndarray:
        """Read-only (N, dim) view of the leaf points."""
        arr = np.array(self._leaves, dtype=np.float64).reshape(-1, self.dim)
        arr.flags.writeable = False
        return arr


class BuildKDTree:
    """Populate a ``KDTree`` by recursive median splits.

    Each level partially partitions its range with ``numpy.argpartition`` so
    only the median element (index ``n // 2``, the lower median when values
    repeat) is guaranteed to be in its sorted position. Its coordinate on the
    current axis becomes the pivot; ``[lo, mid)`` goes left and ``[mid, hi)``
    goes right.
    """

    def __init__(self):
        self._points = np.empty((0, 2), dtype=np.float64)

    def reset(self) -> None:
        self._points = np.empty((0, 2), dtype=np.float64)

    def __call__(self, points, tree: KDTree) -> KDTree:
        self.reset()
        tree.clear()
        pts = np.array(points, dtype=np.float64).reshape(-1, tree.dim)
        self._points = pts
        self._build_subtree(tree, 0, len(pts), 0)
        logger.debug("kd-tree: %d points -> %d internal nodes", len(pts), tree.node_count)
        return tree

    def _build_subtree(self, tree: KDTree, lo: int, hi: int, depth: int) -> NodeRef:
        n = hi - lo
        if n == 0:
            return NULL_REF
        if n == 1:
            return tree.add_leaf(self._points[lo])

        axis = depth % tree.dim
        half = n // 2
        block = self._points[lo:hi]
        order = np.argpartition(block[:, axis], half)
        self._points[lo:hi] = block[order]
        mid = lo + half
        pivot = self._points[mid, axis]

        left = self._build_subtree(tree, lo, mid, depth + 1)
        right = self._build_subtree(tree, mid, hi, depth + 1)
        return tree.add_node(pivot, left, right)


def partition_segments(tree: KDTree, bounds: Optional[Tuple[Point, Point]] = None,
                       out: Optional[Tuple[list, list]] = None):
    """Split lines of a planar tree clipped to a bounding box.

    ``bounds`` is ``((min_x, min_y), (max_x, max_y))`` and defaults to the
    bounding box of the tree's points. Returns ``(vertical, horizontal)`` flat
    segment streams: x-splits give vertical lines, y-splits horizontal ones.
    """
    assert tree.dim == 2, "partition segments are only defined for planar trees"
    vertical: List[Point] = []
    horizontal: List[Point] = []
    root = tree.root()
    if root and not tree.is_leaf(root):
        if bounds is None:
            pts = tree.points()
            lo, hi = pts.min(axis=0), pts.max(axis=0)
        else:
            lo, hi = (np.asarray(b, dtype=np.float64) for b in bounds)
        _visit(tree, root, 0, (float(lo[0]), float(lo[1])), (float(hi[0]), float(hi[1])),
               vertical, horizontal)
    if out is not None:
        return to_stream(vertical, out[0]), to_stream(horizontal, out[1])
    return to_stream(vertical), to_stream(horizontal)


def _visit(tree, ref, depth, lo, hi, vertical, horizontal):
    if not ref or tree.is_leaf(ref):
        return
    node = tree.node(ref)
    if depth % 2 == 0:
        start, end = (node.pivot, lo[1]), (node.pivot, hi[1])
        vertical.extend((start, end))
    else:
        start, end = (lo[0], node.pivot), (hi[0], node.pivot)
        horizontal.extend((start, end))
    _visit(tree, node.left, depth + 1, lo, end, vertical, horizontal)
    _visit(tree, node.right, depth + 1, start, hi, vertical, horizontal)
