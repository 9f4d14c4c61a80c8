""" ``SNPAnnotationResolver`` finds the genes nearest to each marker.

"""

"""
BSD 3-Clause License

Copyright (c) 2019, Andrew Riha
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""

import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from rs2gene.annotation import (
    Orientation,
    RecordFormatError,
    normalize_chromosome,
    parse_uint,
)
from rs2gene.candidates import (
    DistanceCandidateSet,
    GeneDistanceCandidate,
    retention_policy,
)
from rs2gene.constants import FIVE_PRIME, MINIMUM_DISTANCE_MODE, THREE_PRIME
from rs2gene.index import GeneInfo, GenomicAnnotationIndex
from rs2gene.io.reader import parse_marker_id

logger = logging.getLogger(__name__)

# marker id, chromosome, contig, position; trailing fields are ignored
MARKER_FIELDS = 4


class Marker(NamedTuple):
    """ A marker of the marker list. """

    id: int
    slot: int
    contig: str
    position: int


class MarkerAnnotation(NamedTuple):
    """ A gene retained for one side (5 or 3) of a marker. """

    rsid: int
    gene_id: int
    gene_name: str
    distance: int
    side: int


def parse_marker(fields: List[str]) -> Optional[Marker]:
    """ Parse a tab-split line of the marker list.

    Parameters
    ----------
    fields : list of str
        marker id, chromosome, contig, position, ...

    Returns
    -------
    Marker
        parsed marker, else None if the chromosome is not recognized
    """
    if len(fields) < MARKER_FIELDS:
        raise RecordFormatError(
            f"expected at least {MARKER_FIELDS} marker fields, got {len(fields)}"
        )

    chrom = normalize_chromosome(fields[1])
    if chrom is None:
        return None

    return Marker(
        id=parse_marker_id(fields[0]),
        slot=chrom - 1,
        contig=fields[2],
        position=parse_uint(fields[3], "marker position"),
    )


def gene_distances(
    position: int, orientation: Orientation, gene: GeneInfo
) -> Tuple[int, int]:
    """ Distances from a marker to the 5' and 3' ends of a gene.

    A marker inside the gene's overlap window (see
    `Orientation.overlap_window`) is at distance 0 from both ends.

    Returns
    -------
    tuple
        (5' distance, 3' distance)
    """
    start, end = orientation.overlap_window(gene.p5, gene.p3)
    if start <= position <= end:
        return 0, 0
    return abs(gene.p5 - position), abs(gene.p3 - position)


class SNPAnnotationResolver:
    def __init__(
        self,
        index: GenomicAnnotationIndex,
        distance_threshold=MINIMUM_DISTANCE_MODE,
        excluded=frozenset(),
    ):
        """ Object used to annotate markers with their nearest genes.

        Parameters
        ----------
        index : GenomicAnnotationIndex
            genes to search; not modified
        distance_threshold : int
            report every gene within this distance; if negative, report only
            the nearest genes of each side
        excluded : set of int
            ids of markers to skip
        """
        self._index = index
        self._excluded = frozenset(excluded)
        self._policy = retention_policy(distance_threshold)
        self._five_prime = DistanceCandidateSet(self._policy)
        self._three_prime = DistanceCandidateSet(self._policy)
        self._unresolved: List[int] = []

    @property
    def unresolved(self) -> List[int]:
        """ Ids of markers whose contig is not in the index, in input order.

        Returns
        -------
        list of int
        """
        return self._unresolved

    def annotate(self, marker: Marker) -> List[MarkerAnnotation]:
        """ Get the genes nearest to the 5' and 3' sides of `marker`.

        If the marker's contig is not indexed, the marker is added to
        `unresolved`.

        Parameters
        ----------
        marker : Marker

        Returns
        -------
        list of MarkerAnnotation
            5' annotations followed by 3' annotations; ties within a side are
            in no particular order
        """
        gene_sets = self._index.get(marker.slot, marker.contig)
        if gene_sets is None:
            self._unresolved.append(marker.id)
            return []

        self._five_prime.remove_all()
        self._three_prime.remove_all()

        for orientation in Orientation:
            for gene_id, gene in gene_sets.genes(orientation).items():
                p5_dist, p3_dist = gene_distances(marker.position, orientation, gene)
                self._five_prime.push(
                    GeneDistanceCandidate(gene_id, gene.name, p5_dist)
                )
                self._three_prime.push(
                    GeneDistanceCandidate(gene_id, gene.name, p3_dist)
                )

        annotations = []
        for side, candidates in (
            (FIVE_PRIME, self._five_prime),
            (THREE_PRIME, self._three_prime),
        ):
            for c in candidates.drain():
                annotations.append(
                    MarkerAnnotation(marker.id, c.gene_id, c.gene_name, c.distance, side)
                )
        return annotations

    def resolve(self, records: Iterable[List[str]]) -> Iterator[MarkerAnnotation]:
        """ Annotate the markers of a marker list, in order.

        Markers with an unrecognized chromosome and excluded markers are
        skipped. `unresolved` is complete once the iterator is exhausted.

        Parameters
        ----------
        records : iterable of list of str
            tab-split lines of the marker list

        Yields
        ------
        MarkerAnnotation
        """
        annotated = 0
        skipped = 0
        excluded = 0

        for fields in records:
            marker = parse_marker(fields)
            if marker is None:
                logger.debug(f"Skipping marker on unrecognized chromosome: {fields}")
                skipped += 1
                continue

            if marker.id in self._excluded:
                excluded += 1
                continue

            unresolved = len(self._unresolved)
            yield from self.annotate(marker)
            if len(self._unresolved) == unresolved:
                annotated += 1

        logger.info(
            f"Annotated {annotated} markers; {len(self._unresolved)} not found, "
            f"{excluded} excluded, {skipped} skipped"
        )
