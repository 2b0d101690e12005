"""
StrandCover v0.1.0

Bidirected sequence graph model.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .handle_graph import Handle, HandleGraph, BidirectedGraph

__all__ = ["Handle", "HandleGraph", "BidirectedGraph"]
