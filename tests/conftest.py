#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Pytest configuration and shared fixtures.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from strandcover.graph import BidirectedGraph, Handle


def build_graph(node_ids, edges, allow_nonpositive_ids=False):
    """Build a graph from node ids and ((id, reverse), (id, reverse)) edges."""
    graph = BidirectedGraph(allow_nonpositive_ids=allow_nonpositive_ids)
    for node_id in node_ids:
        graph.create_node(node_id)
    for left, right in edges:
        graph.create_edge(Handle(*left), Handle(*right))
    return graph


def chain(first, last):
    """Forward edges first -> first + 1 -> ... -> last."""
    return [((i, False), (i + 1, False)) for i in range(first, last)]


@pytest.fixture
def make_graph():
    """Factory for small graphs: make_graph(node_ids, edges)."""
    return build_graph


@pytest.fixture
def make_chain():
    """Factory for forward chain edges: make_chain(first, last)."""
    return chain


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="strandcover_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def linear_chain():
    """Five nodes 1+ -> 2+ -> 3+ -> 4+ -> 5+."""
    return build_graph(range(1, 6), chain(1, 5))


@pytest.fixture
def two_chains():
    """Disconnected chains 1..3 and 4..7."""
    return build_graph(range(1, 8), chain(1, 3) + chain(4, 7))


@pytest.fixture
def bubble():
    """Simple bubble: 1 -> {2, 3} -> 4."""
    return build_graph(
        range(1, 5),
        [
            ((1, False), (2, False)),
            ((1, False), (3, False)),
            ((2, False), (4, False)),
            ((3, False), (4, False)),
        ],
    )


@pytest.fixture
def inverted_chain():
    """1+ -> 2+ -> 3-: the last node is traversed in reverse."""
    return build_graph([1, 2, 3], [((1, False), (2, False)), ((2, False), (3, True))])


@pytest.fixture
def simple_gfa():
    """GFA text for the inverted chain plus a P-line that must be ignored."""
    return (
        "H\tVN:Z:1.0\n"
        "S\t1\tACGT\n"
        "S\t2\tGGA\n"
        "S\t3\tTTC\n"
        "L\t1\t+\t2\t+\t0M\n"
        "L\t2\t+\t3\t-\t0M\n"
        "P\tref\t1+,2+,3-\t*\n"
    )

# StrandCover v0.1.0
# Any usage is subject to this software's license.
