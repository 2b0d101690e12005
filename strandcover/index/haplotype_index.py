#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Compact haplotype index - immutable, searchable store of encoded paths.

All sequences are concatenated into a single numpy token array, each one
terminated by the endmarker token 0, using the narrowest unsigned dtype that
holds the index's node width. An offsets array marks where every sequence
starts. Patterns of oriented nodes are located with vectorized scans; the
endmarkers keep matches from crossing sequence boundaries.

Saved archives are byte-identical for identical indexes: members are
written in a fixed order with a fixed timestamp.

When paths are inserted in both orientations, path p is stored as sequence
2p (forward) followed by sequence 2p + 1 (reverse complement).

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json
import logging
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..graph.handle_graph import Handle
from .metadata import IndexMetadata
from .node_encoding import ENDMARKER, decode_node, token_dtype

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_INTERVAL = 1024

# Earliest timestamp a zip entry can hold.
ARCHIVE_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class HaplotypeIndex:
    """
    Immutable index of encoded paths plus optional metadata.

    Instances are produced by IndexBuilder.finish(), HaplotypeIndex.empty()
    or HaplotypeIndex.load().
    """

    def __init__(
        self,
        tokens: np.ndarray,
        offsets: np.ndarray,
        node_width: int,
        sample_interval: int = DEFAULT_SAMPLE_INTERVAL,
        bidirectional: bool = True,
        metadata: Optional[IndexMetadata] = None,
    ):
        """
        Args:
            tokens: Concatenated sequences, each followed by ENDMARKER
            offsets: Start of every sequence plus the total length (len = sequences + 1)
            node_width: Bits needed for the largest token
            sample_interval: Sampling density carried with the index for
                             downstream tools; queries here do not use it
            bidirectional: True if every path was stored with its reverse complement
            metadata: Index metadata, or None for an index without metadata
        """
        self._tokens = np.asarray(tokens, dtype=token_dtype(node_width))
        self._offsets = np.asarray(offsets, dtype=np.int64)
        if self._offsets.size == 0 or self._offsets[-1] != self._tokens.size:
            raise ValueError("Offsets do not match token array")
        self._tokens.flags.writeable = False
        self._offsets.flags.writeable = False
        self.node_width = node_width
        self.sample_interval = sample_interval
        self.bidirectional = bidirectional
        self.metadata = metadata

    @classmethod
    def empty(cls) -> "HaplotypeIndex":
        """Index with no sequences and no metadata."""
        return cls(
            tokens=np.zeros(0, dtype=np.uint8),
            offsets=np.zeros(1, dtype=np.int64),
            node_width=1,
        )

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    @property
    def sequence_count(self) -> int:
        """Number of stored sequences (twice the paths when bidirectional)."""
        return int(self._offsets.size - 1)

    @property
    def path_count(self) -> int:
        """Number of inserted paths."""
        if self.bidirectional:
            return self.sequence_count // 2
        return self.sequence_count

    @property
    def size(self) -> int:
        """Total number of tokens including endmarkers."""
        return int(self._tokens.size)

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None

    def is_empty(self) -> bool:
        return self.sequence_count == 0

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def extract(self, sequence_id: int) -> np.ndarray:
        """
        Return the tokens of one sequence without its endmarker.

        Raises:
            IndexError: If the sequence id is out of range
        """
        if not 0 <= sequence_id < self.sequence_count:
            raise IndexError(f"Sequence {sequence_id} out of range [0, {self.sequence_count})")
        start = self._offsets[sequence_id]
        end = self._offsets[sequence_id + 1] - 1
        return self._tokens[start:end].copy()

    def path(self, path_id: int) -> Tuple[Handle, ...]:
        """Decode the forward sequence of a path into handles."""
        if not 0 <= path_id < self.path_count:
            raise IndexError(f"Path {path_id} out of range [0, {self.path_count})")
        sequence_id = 2 * path_id if self.bidirectional else path_id
        return tuple(Handle(*decode_node(int(token))) for token in self.extract(sequence_id))

    def contains(self, token: int) -> bool:
        """True if any sequence visits the oriented node."""
        if token == ENDMARKER:
            return False
        return bool(np.any(self._tokens == token))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _match_starts(self, pattern: Sequence[int]) -> np.ndarray:
        """Token positions where the pattern starts."""
        pattern = [int(token) for token in pattern]
        if not pattern or ENDMARKER in pattern:
            return np.zeros(0, dtype=np.int64)

        candidates = np.flatnonzero(self._tokens == pattern[0])
        for shift, token in enumerate(pattern[1:], start=1):
            candidates = candidates[candidates + shift < self.size]
            candidates = candidates[self._tokens[candidates + shift] == token]
            if candidates.size == 0:
                break
        return candidates

    def count(self, pattern: Sequence[int]) -> int:
        """Number of occurrences of a token sequence over all stored sequences."""
        return int(self._match_starts(pattern).size)

    def locate(self, pattern: Sequence[int]) -> List[Tuple[int, int]]:
        """
        Occurrences of a token sequence as (sequence id, offset) pairs,
        sorted by sequence id and offset.
        """
        starts = self._match_starts(pattern)
        sequence_ids = np.searchsorted(self._offsets, starts, side='right') - 1
        return [
            (int(seq), int(start - self._offsets[seq]))
            for seq, start in zip(sequence_ids, starts)
        ]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def save(self, output_path: Union[str, Path]) -> Path:
        """
        Serialize the index to a compressed numpy archive.

        Returns:
            The path written (`.npz` is appended when missing)
        """
        output_path = Path(output_path)
        if output_path.suffix != '.npz':
            output_path = output_path.with_name(output_path.name + '.npz')

        header = np.array(
            [self.node_width, self.sample_interval, int(self.bidirectional)],
            dtype=np.int64,
        )
        metadata_json = json.dumps(self.metadata.to_dict() if self.metadata else None)
        arrays = {
            'tokens': self._tokens,
            'offsets': self._offsets,
            'header': header,
            'metadata': np.array(metadata_json),
        }
        # Same layout as np.savez_compressed, without the wall-clock timestamps.
        with zipfile.ZipFile(output_path, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
            for name, array in arrays.items():
                info = zipfile.ZipInfo(f"{name}.npy", date_time=ARCHIVE_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                with archive.open(info, 'w', force_zip64=True) as f:
                    np.lib.format.write_array(f, np.asanyarray(array), allow_pickle=False)
        logger.info(f"Saved haplotype index: {output_path} ({self.sequence_count} sequences)")
        return output_path

    @classmethod
    def load(cls, input_path: Union[str, Path]) -> "HaplotypeIndex":
        """Load an index written by save()."""
        with np.load(Path(input_path), allow_pickle=False) as data:
            node_width, sample_interval, bidirectional = (int(x) for x in data['header'])
            metadata_dict = json.loads(data['metadata'].item())
            index = cls(
                tokens=data['tokens'],
                offsets=data['offsets'],
                node_width=node_width,
                sample_interval=sample_interval,
                bidirectional=bool(bidirectional),
                metadata=IndexMetadata.from_dict(metadata_dict) if metadata_dict is not None else None,
            )
        logger.debug(f"Loaded haplotype index: {input_path}")
        return index

    def __eq__(self, other) -> bool:
        if not isinstance(other, HaplotypeIndex):
            return NotImplemented
        return (
            self.node_width == other.node_width
            and self.bidirectional == other.bidirectional
            and np.array_equal(self._tokens, other._tokens)
            and np.array_equal(self._offsets, other._offsets)
            and self.metadata == other.metadata
        )

    def __repr__(self) -> str:
        return (
            f"HaplotypeIndex(sequences={self.sequence_count}, size={self.size}, "
            f"node_width={self.node_width}, metadata={self.metadata})"
        )

# StrandCover v0.1.0
# Any usage is subject to this software's license.
