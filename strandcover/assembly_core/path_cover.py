#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Path cover - synthetic haplotypes for a graph without paths.

Builds `n` paths per weakly connected component so that every node and every
window of `k` consecutive oriented nodes is visited, then stores the paths in
a HaplotypeIndex. Paths are grown greedily in both directions, always taking
the neighbor whose node (short paths) or canonical k-window (once the path is
long enough) has been visited least often so far. Coverage is shared by the
`n` paths of a component, so later paths are steered toward regions earlier
ones missed.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from collections import deque
from itertools import islice
from typing import Deque, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..graph.handle_graph import Handle, HandleGraph
from ..index import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_SAMPLE_INTERVAL,
    HaplotypeIndex,
    IndexBuilder,
    PathName,
    bit_length,
    encode_node,
)

logger = logging.getLogger(__name__)

# Shortest window that still constrains the order of nodes.
PATH_COVER_MIN_K = 2
PATH_COVER_DEFAULT_K = 4
PATH_COVER_DEFAULT_N = 16

Window = Tuple[Handle, ...]
Path = Tuple[Handle, ...]


class PathCoverPreconditionError(ValueError):
    """Raised when the graph or parameters make path cover undefined."""
    pass


# ============================================================================
# Part 1: Connected Components
# ============================================================================

def weakly_connected_components(graph: HandleGraph) -> List[List[int]]:
    """
    Partition node ids into weakly connected components.

    Edge directions and orientations are ignored. Components are returned in
    discovery order and the ids within each component in DFS visit order.
    """
    if graph.get_node_count() == 0:
        return []

    min_id = graph.min_node_id()
    max_id = graph.max_node_id()
    found = np.zeros(max_id - min_id + 1, dtype=bool)

    components: List[List[int]] = []
    for start in graph.for_each_handle():
        if found[graph.get_id(start) - min_id]:
            continue
        component: List[int] = []
        stack = [start]
        while stack:
            handle = stack.pop()
            node_id = graph.get_id(handle)
            if found[node_id - min_id]:
                continue
            found[node_id - min_id] = True
            component.append(node_id)
            stack.extend(graph.follow_edges(handle, False))
            stack.extend(graph.follow_edges(handle, True))
        components.append(component)

    return components


# ============================================================================
# Part 2: Window Canonicalization
# ============================================================================

def reverse_complement(graph: HandleGraph, window: Sequence[Handle]) -> Window:
    """Reverse the handle order and flip every handle."""
    return tuple(graph.flip(handle) for handle in reversed(window))


def canonical_window(graph: HandleGraph, window: Sequence[Handle]) -> Window:
    """Smaller of a window and its reverse complement."""
    forward = tuple(window)
    reverse = reverse_complement(graph, forward)
    return forward if forward < reverse else reverse


def forward_window(graph: HandleGraph, path: Deque[Handle], successor: Handle, k: int) -> Window:
    """Canonical window of the last k - 1 handles of the path followed by `successor`."""
    window = tuple(islice(path, len(path) - (k - 1), len(path))) + (successor,)
    return canonical_window(graph, window)


def backward_window(graph: HandleGraph, path: Deque[Handle], predecessor: Handle, k: int) -> Window:
    """Canonical window of `predecessor` followed by the first k - 1 handles of the path."""
    window = (predecessor,) + tuple(islice(path, 0, k - 1))
    return canonical_window(graph, window)


# ============================================================================
# Part 3: Coverage Tracking
# ============================================================================

class ComponentCoverage:
    """
    Visit counters for one component.

    Node counters exist for every node of the component from the start; window
    counters are created on first use and keyed by canonical window only.
    Counters never decrease.
    """

    def __init__(self, component: Sequence[int]):
        self._nodes: Dict[int, int] = {node_id: 0 for node_id in component}
        self._windows: Dict[Window, int] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def min_coverage_node(self) -> int:
        """Node with the lowest coverage, smallest id first among ties."""
        node_id, _ = min(self._nodes.items(), key=lambda item: (item[1], item[0]))
        return node_id

    def node_coverage(self, node_id: int) -> int:
        return self._nodes[node_id]

    def window_coverage(self, window: Window) -> int:
        return self._windows.get(window, 0)

    def increment_node(self, node_id: int):
        if node_id not in self._nodes:
            raise KeyError(f"Node {node_id} is not in this component")
        self._nodes[node_id] += 1

    def increment_window(self, window: Window):
        self._windows[window] = self._windows.get(window, 0) + 1

    @property
    def window_count(self) -> int:
        """Number of distinct canonical windows seen."""
        return len(self._windows)

    def uncovered_nodes(self) -> List[int]:
        return [node_id for node_id, coverage in self._nodes.items() if coverage == 0]


# ============================================================================
# Part 4: Greedy Path Construction
# ============================================================================

class PathCoverBuilder:
    """
    Greedy path construction over one graph.

    One builder is used for the whole graph; coverage state is owned by the
    ComponentCoverage passed into build_path(), never by the builder.
    """

    def __init__(self, graph: HandleGraph, k: int = PATH_COVER_DEFAULT_K):
        self.graph = graph
        self.k = k

    def _priority(self, coverage: ComponentCoverage, path: Deque[Handle], candidate: Handle, forward: bool) -> int:
        if len(path) + 1 < self.k:
            return coverage.node_coverage(self.graph.get_id(candidate))
        if forward:
            return coverage.window_coverage(forward_window(self.graph, path, candidate, self.k))
        return coverage.window_coverage(backward_window(self.graph, path, candidate, self.k))

    def _extend(self, coverage: ComponentCoverage, path: Deque[Handle], forward: bool) -> bool:
        """
        Extend the path by one handle at the end (forward) or the start.

        Returns:
            False if the end of the path has no neighbors in that direction
        """
        end = path[-1] if forward else path[0]
        best: Optional[Handle] = None
        best_priority = math.inf
        for candidate in self.graph.follow_edges(end, not forward):
            priority = self._priority(coverage, path, candidate, forward)
            if priority < best_priority:
                best, best_priority = candidate, priority
        if best is None:
            return False

        if len(path) + 1 >= self.k:
            if forward:
                coverage.increment_window(forward_window(self.graph, path, best, self.k))
            else:
                coverage.increment_window(backward_window(self.graph, path, best, self.k))
        coverage.increment_node(self.graph.get_id(best))
        if forward:
            path.append(best)
        else:
            path.appendleft(best)
        return True

    def build_path(self, coverage: ComponentCoverage) -> Path:
        """
        Grow one path in the component tracked by `coverage`.

        The path starts from the least covered node in forward orientation and
        is extended alternately forward and backward until it has as many
        handles as the component has nodes or both ends are dead ends.
        """
        seed = coverage.min_coverage_node()
        path: Deque[Handle] = deque([self.graph.get_handle(seed, False)])
        coverage.increment_node(seed)

        component_size = len(coverage)
        forward_success = backward_success = True
        while (forward_success or backward_success) and len(path) < component_size:
            forward_success = self._extend(coverage, path, forward=True)
            if len(path) >= component_size:
                break
            backward_success = self._extend(coverage, path, forward=False)

        return tuple(path)

    def cover_component(self, component: Sequence[int], n: int) -> List[Path]:
        """Build `n` paths sharing the coverage state of one component."""
        coverage = ComponentCoverage(component)
        paths = [self.build_path(coverage) for _ in range(n)]
        uncovered = coverage.uncovered_nodes()
        if uncovered:
            logger.debug(f"{len(uncovered)}/{len(coverage)} nodes not covered by {n} paths")
        return paths


# ============================================================================
# Part 5: Index Assembly
# ============================================================================

def check_path_cover_preconditions(graph: HandleGraph, k: int):
    """
    Validate the window length and node ids of a non-empty graph.

    Raises:
        PathCoverPreconditionError: If k < PATH_COVER_MIN_K or the minimum
                                    node id is not positive
    """
    if k < PATH_COVER_MIN_K:
        raise PathCoverPreconditionError(
            f"Window length ({k}) must be at least {PATH_COVER_MIN_K}"
        )
    min_id = graph.min_node_id()
    if min_id < 1:
        raise PathCoverPreconditionError(f"Minimum node id ({min_id}) must be positive")


def encode_path(graph: HandleGraph, path: Sequence[Handle]) -> List[int]:
    """Encode handles as index tokens."""
    return [encode_node(graph.get_id(handle), graph.get_is_reverse(handle)) for handle in path]


def path_cover_index(
    graph: HandleGraph,
    n: int = PATH_COVER_DEFAULT_N,
    k: int = PATH_COVER_DEFAULT_K,
    batch_size: int = DEFAULT_BATCH_SIZE,
    sample_interval: int = DEFAULT_SAMPLE_INTERVAL,
    show_progress: bool = False,
) -> HaplotypeIndex:
    """
    Build a haplotype index of `n` synthetic paths per connected component.

    Path i of component c is inserted in both orientations and named
    (i, c, 0, 0). The index has n samples, n haplotypes and one contig per
    component.

    Args:
        graph: Graph to cover
        n: Paths per component
        k: Window length
        batch_size: Builder batch size (capped for small graphs)
        sample_interval: Builder sample interval
        show_progress: Log progress at INFO level instead of DEBUG

    Returns:
        The index; an empty index without metadata if the graph is empty,
        n == 0, or the preconditions fail (failures are logged as errors)
    """
    progress = logger.info if show_progress else logger.debug

    node_count = graph.get_node_count()
    if node_count == 0 or n == 0:
        return HaplotypeIndex.empty()
    try:
        check_path_cover_preconditions(graph, k)
    except PathCoverPreconditionError as e:
        logger.error(f"path_cover_index(): {e}")
        return HaplotypeIndex.empty()
    max_id = graph.max_node_id()

    components = weakly_connected_components(graph)

    node_width = bit_length(encode_node(max_id, True))
    batch_size = min(batch_size, 2 * n * (node_count + len(components)))
    builder = IndexBuilder(node_width, batch_size, sample_interval)
    metadata = builder.add_metadata()

    cover = PathCoverBuilder(graph, k)
    for contig, component in enumerate(components):
        progress(f"Processing component {contig + 1} / {len(components)}")
        paths = cover.cover_component(component, n)
        for i, path in enumerate(paths):
            builder.insert(encode_path(graph, path), both_orientations=True)
            metadata.add_path(PathName(i, contig, 0, 0))

    metadata.set_samples(n)
    metadata.set_contigs(len(components))
    metadata.set_haplotypes(n)
    index = builder.finish()
    progress(str(index.metadata))
    return index

# StrandCover v0.1.0
# Any usage is subject to this software's license.
