"""
StrandCover v0.1.0

Compact haplotype index: node encoding, metadata, builder and index.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .node_encoding import (
    ENDMARKER,
    encode_node,
    decode_node,
    reverse_node,
    bit_length,
)
from .metadata import PathName, IndexMetadata
from .haplotype_index import HaplotypeIndex, DEFAULT_SAMPLE_INTERVAL
from .builder import IndexBuilder, DEFAULT_BATCH_SIZE

__all__ = [
    "ENDMARKER",
    "encode_node",
    "decode_node",
    "reverse_node",
    "bit_length",
    "PathName",
    "IndexMetadata",
    "HaplotypeIndex",
    "IndexBuilder",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_SAMPLE_INTERVAL",
]
