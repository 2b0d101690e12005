"""
StrandCover v0.1.0

I/O utilities for graphs and path-cover output.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .gfa_loader import (
    GFAFormatError,
    GFAGraph,
    GFAPath,
    load_gfa,
    index_paths_to_gfa,
    write_paths_gfa,
)

__all__ = [
    "GFAFormatError",
    "GFAGraph",
    "GFAPath",
    "load_gfa",
    "index_paths_to_gfa",
    "write_paths_gfa",
]
