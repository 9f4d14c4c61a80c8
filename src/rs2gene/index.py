""" ``GenomicAnnotationIndex`` holds the genes of each contig, by chromosome and strand.

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

from dataclasses import dataclass, field
import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np
import pandas as pd

from rs2gene.annotation import AnnotationRecordParser, CoordinateMode, Orientation
from rs2gene.constants import (
    ALTERNATE_ASSEMBLY,
    ALTERNATE_GROUP_LABEL_PATTERN,
    CHROMOSOME_SLOTS,
    PRIMARY_ASSEMBLY,
    PRIMARY_GROUP_LABEL_PATTERN,
    SPECIAL_CHROMOSOME,
)
from rs2gene.io.reader import Reader

logger = logging.getLogger(__name__)

INDEX_DTYPES = {
    "chrom": np.uint8,
    "contig": object,
    "gene_id": np.uint32,
    "gene_name": object,
    "p5": np.uint32,
    "p3": np.uint32,
    "orientation": object,
    "source": object,
}


@dataclass
class GeneInfo:
    """ A gene on one strand of a contig.

    Attributes
    ----------
    name : str
        gene display name
    p5 : int
        coordinate of the 5' end
    p3 : int
        coordinate of the 3' end
    source : str
        assembly that supplied the gene
    """

    name: str
    p5: int = 0
    p3: int = 0
    source: str = PRIMARY_ASSEMBLY


@dataclass
class OrientedGeneSets:
    """ Genes of a contig, keyed by gene id, separated by strand. """

    plus: Dict[int, GeneInfo] = field(default_factory=dict)
    minus: Dict[int, GeneInfo] = field(default_factory=dict)

    def genes(self, orientation: Orientation) -> Dict[int, GeneInfo]:
        if orientation is Orientation.PLUS:
            return self.plus
        return self.minus

    def __len__(self):
        return len(self.plus) + len(self.minus)


class GenomicAnnotationIndex:
    """ Genes by chromosome slot (0 - 23), contig, and strand. """

    def __init__(self):
        self._slots: List[Dict[str, OrientedGeneSets]] = [
            {} for _ in range(CHROMOSOME_SLOTS)
        ]

    def __len__(self):
        return self.count

    def __repr__(self):
        return f"GenomicAnnotationIndex(genes={self.count})"

    def __eq__(self, other):
        if not isinstance(other, GenomicAnnotationIndex):
            return NotImplemented
        return self._slots == other._slots

    def __iter__(self) -> Iterator[Tuple[int, str, Orientation, int, GeneInfo]]:
        """ Iterate over all genes.

        Yields
        ------
        tuple
            (slot, contig, orientation, gene_id, gene_info)
        """
        for slot, contigs in enumerate(self._slots):
            for contig, gene_sets in contigs.items():
                for orientation in Orientation:
                    for gene_id, gene in gene_sets.genes(orientation).items():
                        yield slot, contig, orientation, gene_id, gene

    @property
    def count(self) -> int:
        """ Count of genes in the index.

        Returns
        -------
        int
        """
        return sum(
            len(gene_sets) for contigs in self._slots for gene_sets in contigs.values()
        )

    @property
    def contig_count(self) -> int:
        return sum(len(contigs) for contigs in self._slots)

    def contigs(self, slot: int) -> Dict[str, OrientedGeneSets]:
        return self._slots[slot]

    def get(self, slot: int, contig: str) -> Optional[OrientedGeneSets]:
        """ Get the genes of `contig` on chromosome `slot`.

        Parameters
        ----------
        slot : int
            chromosome number - 1
        contig : str
            contig id

        Returns
        -------
        OrientedGeneSets
            genes of the contig, else None if the contig is not indexed
        """
        return self._slots[slot].get(contig)

    def get_or_create(self, slot: int, contig: str) -> OrientedGeneSets:
        contigs = self._slots[slot]
        if contig not in contigs:
            contigs[contig] = OrientedGeneSets()
        return contigs[contig]

    def to_dataframe(self) -> pd.DataFrame:
        """ Get the index as a dataframe, one row per gene and strand.

        Returns
        -------
        pandas.DataFrame
            with columns chrom (1 - 24), contig, gene_id, gene_name, p5, p3,
            orientation ("+" or "-"), and source
        """
        df = pd.DataFrame(
            [
                (
                    slot + 1,
                    contig,
                    gene_id,
                    gene.name,
                    gene.p5,
                    gene.p3,
                    orientation.sign,
                    gene.source,
                )
                for slot, contig, orientation, gene_id, gene in self
            ],
            columns=list(INDEX_DTYPES),
        )
        return df.astype(INDEX_DTYPES)


class IndexBuilder:
    """ Build a ``GenomicAnnotationIndex`` from annotation database records.

    Ingestion takes two passes over the records. The primary pass indexes
    genes of the primary assembly and collects the ids of genes seen on the
    special chromosome. The alternate pass then adds genes of the special
    chromosome's alternate assembly that the primary assembly lacks.
    """

    def __init__(self, coordinate_mode=CoordinateMode.CONTIG):
        """ Initialize an `IndexBuilder`.

        Parameters
        ----------
        coordinate_mode : CoordinateMode
            use contig-relative or chromosome-relative gene coordinates
        """
        self._parser = AnnotationRecordParser(coordinate_mode)

    def build(
        self, records: Callable[[], Iterable[List[str]]]
    ) -> GenomicAnnotationIndex:
        """ Build an index with both ingestion passes.

        Parameters
        ----------
        records : callable
            returns a new iterable of tab-split records on each call; called
            once per pass

        Returns
        -------
        GenomicAnnotationIndex
        """
        index = GenomicAnnotationIndex()
        seen = self.ingest_primary(index, records())
        self.ingest_alternate(index, records(), seen)

        logger.info(
            f"Indexed {index.count} genes on {index.contig_count} contigs"
        )
        return index

    def ingest_primary(
        self, index: GenomicAnnotationIndex, records: Iterable[List[str]]
    ) -> Set[int]:
        """ Index genes of the primary assembly.

        A gene seen again on the same contig and strand keeps its source but
        takes the coordinates of the latest record.

        Parameters
        ----------
        index : GenomicAnnotationIndex
            index to add genes to
        records : iterable of list of str
            tab-split database records

        Returns
        -------
        set of int
            ids of the genes seen on the special chromosome
        """
        seen = set()
        accepted = 0

        for fields in records:
            if not self._parser.accepts(fields, PRIMARY_GROUP_LABEL_PATTERN):
                continue

            record = self._parser.parse(fields)
            genes = index.get_or_create(record.slot, record.contig).genes(
                record.orientation
            )

            if record.gene_id not in genes:
                genes[record.gene_id] = GeneInfo(
                    record.gene_name, source=PRIMARY_ASSEMBLY
                )

            gene = genes[record.gene_id]
            gene.p5, gene.p3 = record.ends

            if record.chromosome == SPECIAL_CHROMOSOME:
                seen.add(record.gene_id)
            accepted += 1

        logger.info(f"Accepted {accepted} {PRIMARY_ASSEMBLY} gene records")
        return seen

    def ingest_alternate(
        self,
        index: GenomicAnnotationIndex,
        records: Iterable[List[str]],
        seen: Set[int],
    ):
        """ Index genes of the special chromosome's alternate assembly.

        Genes in `seen` are skipped; existing genes are never updated.

        Parameters
        ----------
        index : GenomicAnnotationIndex
            index to add genes to
        records : iterable of list of str
            tab-split database records
        seen : set of int
            ids of genes the primary assembly has on the special chromosome
        """
        added = 0

        for fields in records:
            if not self._parser.accepts(
                fields, ALTERNATE_GROUP_LABEL_PATTERN, chromosome=SPECIAL_CHROMOSOME
            ):
                continue

            record = self._parser.parse(fields)
            if record.gene_id in seen:
                continue

            genes = index.get_or_create(record.slot, record.contig).genes(
                record.orientation
            )
            if record.gene_id in genes:
                continue

            p5, p3 = record.ends
            genes[record.gene_id] = GeneInfo(
                record.gene_name, p5, p3, source=ALTERNATE_ASSEMBLY
            )
            added += 1

        logger.info(f"Added {added} {ALTERNATE_ASSEMBLY} genes")


def build_index(file, coordinate_mode=CoordinateMode.CONTIG) -> GenomicAnnotationIndex:
    """ Build a ``GenomicAnnotationIndex`` from an annotation database file.

    Parameters
    ----------
    file : str
        path to database file (plain text, gzip or zip)
    coordinate_mode : CoordinateMode
        use contig-relative or chromosome-relative gene coordinates

    Returns
    -------
    GenomicAnnotationIndex
    """
    reader = Reader(file)
    return IndexBuilder(coordinate_mode).build(reader.read_records)
