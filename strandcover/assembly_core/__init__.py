"""
StrandCover v0.1.0

Assembly core - path cover construction.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .path_cover import (
    PATH_COVER_MIN_K,
    PATH_COVER_DEFAULT_K,
    PATH_COVER_DEFAULT_N,
    PathCoverPreconditionError,
    weakly_connected_components,
    reverse_complement,
    canonical_window,
    forward_window,
    backward_window,
    ComponentCoverage,
    PathCoverBuilder,
    check_path_cover_preconditions,
    encode_path,
    path_cover_index,
)

__all__ = [
    "PATH_COVER_MIN_K",
    "PATH_COVER_DEFAULT_K",
    "PATH_COVER_DEFAULT_N",
    "PathCoverPreconditionError",
    "weakly_connected_components",
    "reverse_complement",
    "canonical_window",
    "forward_window",
    "backward_window",
    "ComponentCoverage",
    "PathCoverBuilder",
    "check_path_cover_preconditions",
    "encode_path",
    "path_cover_index",
]
