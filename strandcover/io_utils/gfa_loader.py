#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandCover v0.1.0

GFA I/O - load GFA v1 segments and links into a BidirectedGraph, and write
path-cover paths as GFA P-lines.

Author: StrandCover Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from ..graph.handle_graph import BidirectedGraph, Handle
from ..index.haplotype_index import HaplotypeIndex

logger = logging.getLogger(__name__)

ORIENTATIONS = {'+': False, '-': True}


class GFAFormatError(ValueError):
    """Raised for malformed GFA records."""
    pass


@dataclass
class GFAGraph:
    """Graph loaded from GFA plus the segment name <-> node id translation."""
    graph: BidirectedGraph
    segment_to_id: Dict[str, int] = field(default_factory=dict)
    id_to_segment: Dict[int, str] = field(default_factory=dict)

    def segment_name(self, node_id: int) -> str:
        return self.id_to_segment.get(node_id, str(node_id))


@dataclass
class GFAPath:
    """Represents a GFA P-line (path)."""
    name: str
    segments: List[Tuple[str, bool]]

    def to_gfa_line(self) -> str:
        """
        Convert to GFA P-line format.

        Format: P <name> <seg1+,seg2-,...> *
        """
        steps = ",".join(f"{name}{'-' if is_reverse else '+'}" for name, is_reverse in self.segments)
        return f"P\t{self.name}\t{steps}\t*"


def _parse_orientation(value: str, line_number: int) -> bool:
    if value not in ORIENTATIONS:
        raise GFAFormatError(f"Line {line_number}: invalid orientation '{value}'")
    return ORIENTATIONS[value]


def load_gfa(gfa_path: Union[str, Path]) -> GFAGraph:
    """
    Load a GFA v1 file into a bidirected graph.

    Segment names are used as node ids when they are distinct positive integers;
    otherwise ids 1..N are assigned in order of appearance. Record types
    other than S and L are skipped.

    Raises:
        GFAFormatError: On truncated records, duplicate segments, bad
                        orientations or links to unknown segments
    """
    gfa_path = Path(gfa_path)
    logger.info(f"Loading GFA: {gfa_path}")

    segments: List[str] = []
    links: List[Tuple[int, str, bool, str, bool]] = []
    skipped = 0

    with open(gfa_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip('\n\r')
            if not line or line.startswith('#'):
                continue
            fields = line.split('\t')
            record = fields[0]
            if record == 'S':
                if len(fields) < 3:
                    raise GFAFormatError(f"Line {line_number}: S-line needs a name and a sequence")
                segments.append(fields[1])
            elif record == 'L':
                if len(fields) < 5:
                    raise GFAFormatError(f"Line {line_number}: L-line needs 4 fields after the record type")
                links.append((
                    line_number,
                    fields[1], _parse_orientation(fields[2], line_number),
                    fields[3], _parse_orientation(fields[4], line_number),
                ))
            else:
                skipped += 1

    if len(set(segments)) != len(segments):
        raise GFAFormatError(f"Duplicate segment names in {gfa_path}")

    # Names such as "01" and "1" are distinct segments but the same integer.
    numeric = (
        all(name.isdigit() and int(name) > 0 for name in segments)
        and len({int(name) for name in segments}) == len(segments)
    )
    if numeric:
        segment_to_id = {name: int(name) for name in segments}
    else:
        segment_to_id = {name: i for i, name in enumerate(segments, start=1)}
        logger.info("Segment names are not distinct positive integers; assigning node ids by order")

    result = GFAGraph(
        graph=BidirectedGraph(),
        segment_to_id=segment_to_id,
        id_to_segment={node_id: name for name, node_id in segment_to_id.items()},
    )
    for name in segments:
        result.graph.create_node(segment_to_id[name])

    for line_number, from_name, from_reverse, to_name, to_reverse in links:
        for name in (from_name, to_name):
            if name not in segment_to_id:
                raise GFAFormatError(f"Line {line_number}: link to unknown segment '{name}'")
        result.graph.create_edge(
            Handle(segment_to_id[from_name], from_reverse),
            Handle(segment_to_id[to_name], to_reverse),
        )

    logger.info(
        f"Loaded {result.graph.get_node_count()} segments and "
        f"{result.graph.edge_count()} links ({skipped} other records skipped)"
    )
    return result


def index_paths_to_gfa(index: HaplotypeIndex, id_to_segment: Dict[int, str]) -> List[GFAPath]:
    """Convert the paths of an index into GFA paths named sample<i>#contig<c>."""
    if not index.has_metadata:
        names = [f"path{p}" for p in range(index.path_count)]
    else:
        names = [f"sample{name.sample}#contig{name.contig}" for name in index.metadata.path_names]

    gfa_paths = []
    for path_id, name in enumerate(names):
        handles: Sequence[Handle] = index.path(path_id)
        gfa_paths.append(GFAPath(
            name=name,
            segments=[(id_to_segment.get(h.node_id, str(h.node_id)), h.is_reverse) for h in handles],
        ))
    return gfa_paths


def write_paths_gfa(index: HaplotypeIndex, id_to_segment: Dict[int, str], output_path: Union[str, Path]):
    """Write every path of the index as a GFA P-line."""
    output_path = Path(output_path)
    gfa_paths = index_paths_to_gfa(index, id_to_segment)
    with open(output_path, 'w') as f:
        f.write("H\tVN:Z:1.0\n")
        for gfa_path in gfa_paths:
            f.write(gfa_path.to_gfa_line() + "\n")
    logger.info(f"Wrote {len(gfa_paths)} paths to {output_path}")

# StrandCover v0.1.0
# Any usage is subject to this software's license.
