#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

Haplotype index metadata - sample/contig/haplotype counts and path names.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple


class PathName(NamedTuple):
    """
    Structured name of one inserted path.

    Path cover uses (path ordinal, component ordinal, 0, 0); phase and count
    are placeholders kept for compatibility with haplotype naming.
    """
    sample: int
    contig: int
    phase: int = 0
    count: int = 0


@dataclass
class IndexMetadata:
    """Index-wide counts and one name per path, in insertion order."""
    sample_count: int = 0
    haplotype_count: int = 0
    contig_count: int = 0
    path_names: List[PathName] = field(default_factory=list)

    def add_path(self, name: PathName):
        """Append the name of the next inserted path."""
        self.path_names.append(PathName(*name))

    def set_samples(self, count: int):
        self.sample_count = count

    def set_haplotypes(self, count: int):
        self.haplotype_count = count

    def set_contigs(self, count: int):
        self.contig_count = count

    @property
    def path_count(self) -> int:
        return len(self.path_names)

    def to_dict(self) -> Dict[str, Any]:
        """Export metadata as a JSON-serializable dictionary."""
        return {
            'sample_count': self.sample_count,
            'haplotype_count': self.haplotype_count,
            'contig_count': self.contig_count,
            'path_names': [list(name) for name in self.path_names],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexMetadata":
        """Rebuild metadata from to_dict() output."""
        return cls(
            sample_count=int(data.get('sample_count', 0)),
            haplotype_count=int(data.get('haplotype_count', 0)),
            contig_count=int(data.get('contig_count', 0)),
            path_names=[PathName(*name) for name in data.get('path_names', [])],
        )

    def __str__(self) -> str:
        return (
            f"{self.sample_count} samples, {self.haplotype_count} haplotypes, "
            f"{self.contig_count} contigs, {self.path_count} paths"
        )

# StrandCover v0.1.0
# Any usage is subject to this software's license.
