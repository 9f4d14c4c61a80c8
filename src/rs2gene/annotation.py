""" Parsing of gene annotation database records.

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

from enum import Enum
import re
from typing import List, NamedTuple, Optional, Tuple

from rs2gene.constants import (
    CHROMOSOME_NUMBERS,
    CHROMOSOME_PATTERN,
    FIELD_CHROMOSOME,
    FIELD_CHROMOSOME_END,
    FIELD_CHROMOSOME_START,
    FIELD_CONTIG,
    FIELD_CONTIG_END,
    FIELD_CONTIG_START,
    FIELD_FEATURE_TYPE,
    FIELD_GENE_ID,
    FIELD_GENE_NAME,
    FIELD_GROUP_LABEL,
    FIELD_ORIENTATION,
    FIVE_PRIME_FLANK,
    GENE_FEATURE,
    GENE_ID_PREFIX_LENGTH,
    REQUIRED_FIELDS,
    THREE_PRIME_FLANK,
    UINT32_MAX,
)


class RecordFormatError(ValueError):
    """ A required field of an input record is missing or malformed. """


class UnknownOrientationError(RecordFormatError):
    """ The orientation field of a database record is neither "+" nor "-". """


class Orientation(Enum):
    """ Strand of a gene; decides which physical coordinate is the 5' end. """

    PLUS = "+"
    MINUS = "-"

    @classmethod
    def from_signal(cls, signal: str) -> "Orientation":
        try:
            return cls(signal)
        except ValueError:
            raise UnknownOrientationError(
                f"unknown orientation signal {signal!r}"
            ) from None

    @property
    def sign(self) -> str:
        return self.value

    def assign_ends(self, first: int, second: int) -> Tuple[int, int]:
        """ Assign the two coordinates of a record to the gene ends.

        Parameters
        ----------
        first : int
            first coordinate in record order
        second : int
            second coordinate in record order

        Returns
        -------
        tuple
            (p5, p3)
        """
        if self is Orientation.PLUS:
            return first, second
        return second, first

    def overlap_window(self, p5: int, p3: int) -> Tuple[int, int]:
        """ Window around a gene inside which a marker is at distance 0.

        The window is extended upstream of the 5' end by ``FIVE_PRIME_FLANK``
        and downstream of the 3' end by ``THREE_PRIME_FLANK``, with the lower
        bound floored at 0.

        Returns
        -------
        tuple
            (start, end) with start <= end
        """
        if self is Orientation.PLUS:
            start, end = max(p5 - FIVE_PRIME_FLANK, 0), p3 + THREE_PRIME_FLANK
        else:
            start, end = max(p3 - THREE_PRIME_FLANK, 0), p5 + FIVE_PRIME_FLANK

        if start > end:
            start, end = end, start
        return start, end


class CoordinateMode(Enum):
    """ Which pair of coordinates of a record positions the gene. """

    CONTIG = "contig"
    CHROMOSOME = "chromosome"

    @property
    def fields(self) -> Tuple[int, int]:
        if self is CoordinateMode.CHROMOSOME:
            return FIELD_CHROMOSOME_START, FIELD_CHROMOSOME_END
        return FIELD_CONTIG_START, FIELD_CONTIG_END


def normalize_chromosome(chrom: str) -> Optional[int]:
    """ Convert a chromosome field to a chromosome number.

    Parameters
    ----------
    chrom : str
        "1" - "22", "X" or "Y" (either case), optionally followed by "|" and
        a suffix

    Returns
    -------
    int
        chromosome number in 1 - 24 (X is 23, Y is 24), else None if `chrom`
        is not a recognized chromosome
    """
    m = CHROMOSOME_PATTERN.match(chrom)
    if m is None:
        return None

    chrom = m.group(1).upper()
    return CHROMOSOME_NUMBERS.get(chrom) or int(chrom)


def parse_uint(value: str, name: str) -> int:
    """ Parse a required unsigned 32-bit integer field.

    Only ASCII digits are accepted; signs, whitespace, and underscores are
    malformed.
    """
    if not (value.isascii() and value.isdigit()):
        raise RecordFormatError(f"invalid {name}: {value!r}")

    result = int(value)
    if result > UINT32_MAX:
        raise RecordFormatError(f"{name} out of range: {value!r}")
    return result


class AnnotationRecord(NamedTuple):
    """ A gene feature of the annotation database. """

    slot: int
    contig: str
    orientation: Orientation
    first: int
    second: int
    gene_id: int
    gene_name: str
    group_label: str

    @property
    def chromosome(self) -> int:
        return self.slot + 1

    @property
    def ends(self) -> Tuple[int, int]:
        """ (p5, p3) of this record's gene. """
        return self.orientation.assign_ends(self.first, self.second)


class AnnotationRecordParser:
    """ Filter and parse tab-separated annotation database records. """

    def __init__(self, coordinate_mode=CoordinateMode.CONTIG):
        """ Initialize an `AnnotationRecordParser`.

        Parameters
        ----------
        coordinate_mode : CoordinateMode
            use contig-relative or chromosome-relative gene coordinates
        """
        self._coordinate_mode = CoordinateMode(coordinate_mode)
        self._start_field, self._end_field = self._coordinate_mode.fields

    @property
    def coordinate_mode(self) -> CoordinateMode:
        return self._coordinate_mode

    def accepts(
        self,
        fields: List[str],
        group_label_pattern: re.Pattern,
        chromosome: Optional[int] = None,
    ) -> bool:
        """ Check if a record passes the filters of an ingestion pass.

        Parameters
        ----------
        fields : list of str
            record split on tabs
        group_label_pattern : re.Pattern
            assembly group labels to accept
        chromosome : int, optional
            only accept records on this chromosome number

        Returns
        -------
        bool
        """
        if len(fields) < REQUIRED_FIELDS:
            raise RecordFormatError(
                f"expected at least {REQUIRED_FIELDS} fields, got {len(fields)}"
            )

        if fields[FIELD_FEATURE_TYPE] != GENE_FEATURE:
            return False

        chrom = normalize_chromosome(fields[FIELD_CHROMOSOME])
        if chrom is None:
            return False

        if chromosome is not None and chrom != chromosome:
            return False

        return group_label_pattern.match(fields[FIELD_GROUP_LABEL]) is not None

    def parse(self, fields: List[str]) -> AnnotationRecord:
        """ Parse an accepted record.

        Parameters
        ----------
        fields : list of str
            record split on tabs; see `accepts`

        Returns
        -------
        AnnotationRecord

        Raises
        ------
        RecordFormatError
            if the chromosome, a coordinate or the gene id is malformed
        UnknownOrientationError
            if the orientation is not "+" or "-"
        """
        chrom = normalize_chromosome(fields[FIELD_CHROMOSOME])
        if chrom is None:
            raise RecordFormatError(
                f"invalid chromosome: {fields[FIELD_CHROMOSOME]!r}"
            )

        return AnnotationRecord(
            slot=chrom - 1,
            contig=fields[FIELD_CONTIG],
            orientation=Orientation.from_signal(fields[FIELD_ORIENTATION]),
            first=parse_uint(fields[self._start_field], "start coordinate"),
            second=parse_uint(fields[self._end_field], "end coordinate"),
            gene_id=parse_uint(
                fields[FIELD_GENE_ID][GENE_ID_PREFIX_LENGTH:], "gene id"
            ),
            gene_name=fields[FIELD_GENE_NAME],
            group_label=fields[FIELD_GROUP_LABEL],
        )
