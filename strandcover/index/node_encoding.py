#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Node token encoding for the haplotype index.

An oriented node visit is packed into one integer token as
2 * node_id + is_reverse. Token 0 is reserved as the sequence endmarker, which
is why node ids must be positive.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Tuple

import numpy as np

ENDMARKER = 0


def encode_node(node_id: int, is_reverse: bool) -> int:
    """Pack (node id, orientation) into a token."""
    return 2 * node_id + int(is_reverse)


def decode_node(token: int) -> Tuple[int, bool]:
    """Unpack a token into (node id, orientation)."""
    return token // 2, bool(token & 1)


def reverse_node(token: int) -> int:
    """Token of the same node in the opposite orientation."""
    return token ^ 1


def bit_length(value: int) -> int:
    """Number of bits needed to represent a non-negative integer (at least 1)."""
    return max(1, int(value).bit_length())


def reverse_path(tokens: np.ndarray) -> np.ndarray:
    """Reverse complement of an encoded path: reverse order, flip every token."""
    return np.bitwise_xor(tokens[::-1], 1)


def token_dtype(node_width: int) -> np.dtype:
    """
    Smallest unsigned numpy dtype that holds tokens of `node_width` bits.

    Raises:
        ValueError: If the width does not fit in 64 bits
    """
    for dtype in (np.uint8, np.uint16, np.uint32, np.uint64):
        if node_width <= np.iinfo(dtype).bits:
            return np.dtype(dtype)
    raise ValueError(f"Node width {node_width} exceeds 64 bits")

# StrandCover v0.1.0
# Any usage is subject to this software's license.
