#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Bidirected sequence graph - handles, the read-only graph protocol consumed by
path cover, and an in-memory implementation.

A node can be traversed in forward or reverse-complement orientation. A handle
is a (node id, orientation) pair; an edge between two handles implies the
mirrored edge between their flipped counterparts.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, NamedTuple, Optional, Protocol, Set, Tuple

logger = logging.getLogger(__name__)


class Handle(NamedTuple):
    """
    Oriented visit of a node.

    Handles compare by (node_id, is_reverse), which is the total order used
    when canonicalizing windows.
    """
    node_id: int
    is_reverse: bool = False

    def flip(self) -> "Handle":
        """Same node in the opposite orientation."""
        return Handle(self.node_id, not self.is_reverse)

    def __str__(self) -> str:
        return f"{self.node_id}{'-' if self.is_reverse else '+'}"


# ============================================================================
#                           GRAPH PROTOCOL
# ============================================================================

class HandleGraph(Protocol):
    """
    Protocol defining the read-only interface path cover needs from a graph.

    Any bidirected graph implementation exposing these methods can be covered;
    BidirectedGraph is the one shipped with this package.
    """

    def get_node_count(self) -> int:
        """Return the number of nodes."""
        ...

    def min_node_id(self) -> int:
        """Return the smallest node id."""
        ...

    def max_node_id(self) -> int:
        """Return the largest node id."""
        ...

    def has_node(self, node_id: int) -> bool:
        """Return True if the node exists."""
        ...

    def for_each_handle(self) -> Iterator[Handle]:
        """Iterate over forward handles in the graph's enumeration order."""
        ...

    def get_handle(self, node_id: int, is_reverse: bool = False) -> Handle:
        """Return the handle for a node in the given orientation."""
        ...

    def get_id(self, handle: Handle) -> int:
        """Return the node id of a handle."""
        ...

    def get_is_reverse(self, handle: Handle) -> bool:
        """Return True if the handle is in reverse orientation."""
        ...

    def flip(self, handle: Handle) -> Handle:
        """Return the handle in the opposite orientation."""
        ...

    def follow_edges(self, handle: Handle, go_left: bool = False) -> Iterator[Handle]:
        """Iterate over successors (go_left=False) or predecessors of a handle."""
        ...


# ============================================================================
#                       IN-MEMORY IMPLEMENTATION
# ============================================================================

class BidirectedGraph:
    """
    In-memory bidirected graph satisfying the HandleGraph protocol.

    Nodes are enumerated in creation order and neighbors in edge creation
    order, so every traversal of the same graph is deterministic.
    """

    def __init__(self, allow_nonpositive_ids: bool = False):
        """
        Initialize an empty graph.

        Args:
            allow_nonpositive_ids: Accept node ids < 1. Only useful for
                                   exercising callers that reject such graphs.
        """
        self.allow_nonpositive_ids = allow_nonpositive_ids
        self._nodes: Dict[int, None] = {}
        # Successors of each handle; dicts keep insertion order and dedupe.
        self._right: Dict[Handle, Dict[Handle, None]] = {}
        self._edges: Set[Tuple[Handle, Handle]] = set()
        self._min_id: Optional[int] = None
        self._max_id: Optional[int] = None

    def create_node(self, node_id: int) -> Handle:
        """
        Add a node and return its forward handle.

        Raises:
            ValueError: If the id is not positive (unless allowed) or already exists
        """
        if not isinstance(node_id, int) or isinstance(node_id, bool):
            raise ValueError(f"Node id must be an integer, got {node_id!r}")
        if node_id < 1 and not self.allow_nonpositive_ids:
            raise ValueError(f"Node id must be positive, got {node_id}")
        if node_id in self._nodes:
            raise ValueError(f"Node {node_id} already exists")

        self._nodes[node_id] = None
        forward = Handle(node_id, False)
        self._right[forward] = {}
        self._right[forward.flip()] = {}
        self._min_id = node_id if self._min_id is None else min(self._min_id, node_id)
        self._max_id = node_id if self._max_id is None else max(self._max_id, node_id)
        return forward

    def create_edge(self, left: Handle, right: Handle):
        """
        Connect the end of `left` to the start of `right`.

        The mirrored edge flip(right) -> flip(left) is implied. Creating an
        edge that already exists (in either form) is a no-op.
        """
        for handle in (left, right):
            if handle.node_id not in self._nodes:
                raise KeyError(f"Node {handle.node_id} not in graph")

        mirrored = (right.flip(), left.flip())
        key = min((left, right), mirrored)
        if key in self._edges:
            return
        self._edges.add(key)

        self._right[left][right] = None
        self._right[mirrored[0]][mirrored[1]] = None

    def edge_count(self) -> int:
        """Number of distinct edges, counting an edge and its mirror once."""
        return len(self._edges)

    # ------------------------------------------------------------------
    # HandleGraph protocol
    # ------------------------------------------------------------------

    def get_node_count(self) -> int:
        return len(self._nodes)

    def min_node_id(self) -> int:
        if self._min_id is None:
            raise ValueError("Empty graph has no minimum node id")
        return self._min_id

    def max_node_id(self) -> int:
        if self._max_id is None:
            raise ValueError("Empty graph has no maximum node id")
        return self._max_id

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def for_each_handle(self) -> Iterator[Handle]:
        for node_id in self._nodes:
            yield Handle(node_id, False)

    def get_handle(self, node_id: int, is_reverse: bool = False) -> Handle:
        if node_id not in self._nodes:
            raise KeyError(f"Node {node_id} not in graph")
        return Handle(node_id, bool(is_reverse))

    def get_id(self, handle: Handle) -> int:
        return handle.node_id

    def get_is_reverse(self, handle: Handle) -> bool:
        return handle.is_reverse

    def flip(self, handle: Handle) -> Handle:
        return handle.flip()

    def follow_edges(self, handle: Handle, go_left: bool = False) -> Iterator[Handle]:
        if go_left:
            # p -> h exists exactly when flip(h) -> flip(p) does.
            for successor in self._right[handle.flip()]:
                yield successor.flip()
        else:
            yield from self._right[handle]

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"BidirectedGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"

# StrandCover v0.1.0
# Any usage is subject to this software's license.
