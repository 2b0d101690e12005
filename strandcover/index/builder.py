#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Incremental, append-only construction of a HaplotypeIndex.

Inserted sequences are buffered as Python arrays and packed into a compact
numpy batch whenever the buffer reaches the batch size. finish() packs the
remaining buffer and concatenates all batches. Batch size and sample interval
only affect memory use; the finished index is the same for any setting.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from .haplotype_index import DEFAULT_SAMPLE_INTERVAL, HaplotypeIndex
from .metadata import IndexMetadata
from .node_encoding import ENDMARKER, reverse_path, token_dtype

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100_000_000


class IndexBuilder:
    """
    Append-only builder for HaplotypeIndex.

    Usage:
        builder = IndexBuilder(node_width=8)
        builder.add_metadata()
        builder.insert([2, 4, 7], both_orientations=True)
        builder.metadata.add_path(PathName(0, 0))
        index = builder.finish()
    """

    def __init__(
        self,
        node_width: int,
        batch_size: int = DEFAULT_BATCH_SIZE,
        sample_interval: int = DEFAULT_SAMPLE_INTERVAL,
    ):
        """
        Initialize builder.

        Args:
            node_width: Bits needed for the largest token that will be inserted
            batch_size: Buffered tokens that trigger packing into a batch
            sample_interval: Sampling density recorded in the finished index

        Raises:
            ValueError: If any parameter is out of range
        """
        if node_width < 1:
            raise ValueError(f"node_width must be >= 1, got {node_width}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if sample_interval < 1:
            raise ValueError(f"sample_interval must be >= 1, got {sample_interval}")

        self.node_width = node_width
        self.batch_size = batch_size
        self.sample_interval = sample_interval
        self.dtype = token_dtype(node_width)
        self.metadata: Optional[IndexMetadata] = None

        self._buffer: List[np.ndarray] = []
        self._buffered_tokens = 0
        self._batches: List[np.ndarray] = []
        self._lengths: List[int] = []
        self._bidirectional = True
        self._finished = False
        self.batches_flushed = 0

    def add_metadata(self) -> IndexMetadata:
        """Attach (empty) metadata to the index under construction."""
        if self.metadata is None:
            self.metadata = IndexMetadata()
        return self.metadata

    def insert(self, tokens: Sequence[int], both_orientations: bool = False):
        """
        Append one sequence, and its reverse complement if requested.

        Raises:
            RuntimeError: If the builder has already been finished
            ValueError: If a token is the endmarker or wider than node_width bits
        """
        if self._finished:
            raise RuntimeError("Cannot insert into a finished index builder")

        sequence = np.asarray(tokens, dtype=np.int64)
        if sequence.size > 0:
            if np.any(sequence <= ENDMARKER):
                raise ValueError("Sequence contains the endmarker or a negative token")
            if int(sequence.max()) >= (1 << self.node_width):
                raise ValueError(
                    f"Token {int(sequence.max())} does not fit in {self.node_width} bits"
                )

        self._append(sequence)
        if both_orientations:
            self._append(reverse_path(sequence))
        else:
            self._bidirectional = False

        if self._buffered_tokens >= self.batch_size:
            self._flush()

    def _append(self, sequence: np.ndarray):
        self._buffer.append(sequence)
        self._lengths.append(int(sequence.size) + 1)
        self._buffered_tokens += int(sequence.size) + 1

    def _flush(self):
        """Pack buffered sequences, each followed by an endmarker, into one batch."""
        if not self._buffer:
            return
        batch = np.zeros(self._buffered_tokens, dtype=self.dtype)
        position = 0
        for sequence in self._buffer:
            batch[position:position + sequence.size] = sequence
            position += sequence.size + 1
        self._batches.append(batch)
        logger.debug(f"Packed batch of {len(self._buffer)} sequences ({self._buffered_tokens} tokens)")
        self._buffer = []
        self._buffered_tokens = 0
        self.batches_flushed += 1

    def finish(self) -> HaplotypeIndex:
        """
        Pack remaining input and return the immutable index.

        Raises:
            RuntimeError: If called twice
        """
        if self._finished:
            raise RuntimeError("Index builder already finished")
        self._flush()
        self._finished = True

        if self._batches:
            tokens = np.concatenate(self._batches)
        else:
            tokens = np.zeros(0, dtype=self.dtype)
        offsets = np.zeros(len(self._lengths) + 1, dtype=np.int64)
        np.cumsum(self._lengths, out=offsets[1:])
        self._batches = []

        return HaplotypeIndex(
            tokens=tokens,
            offsets=offsets,
            node_width=self.node_width,
            sample_interval=self.sample_interval,
            bidirectional=self._bidirectional,
            metadata=self.metadata,
        )

# StrandCover v0.1.0
# Any usage is subject to this software's license.
