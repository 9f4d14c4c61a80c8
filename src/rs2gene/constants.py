""" Constants describing the gene annotation database and the flanking windows.

References
----------
1. NCBI Map Viewer ``seq_gene.md`` annotation files, GRCh37.p10 (primary
   assembly) and CRA_TCAGchr7v2 (The Centre for Applied Genomics chromosome 7
   assembly), ftp://ftp.ncbi.nlm.nih.gov/genomes/MapView/Homo_sapiens/
2. Database of Single Nucleotide Polymorphisms (dbSNP). Bethesda (MD): National
   Center for Biotechnology Information, National Library of Medicine.
   Available from: http://www.ncbi.nlm.nih.gov/SNP/

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

import re
from typing import Dict, Final

# chromosomes 1-22, X (23) and Y (24); slot = chromosome number - 1
CHROMOSOME_SLOTS: Final[int] = 24
CHROMOSOME_NUMBERS: Final[Dict[str, int]] = {"X": 23, "Y": 24}

# chromosome with a second, independently assembled annotation
SPECIAL_CHROMOSOME: Final[int] = 7

# source tags stored with each gene
PRIMARY_ASSEMBLY: Final[str] = "GRCh37"
ALTERNATE_ASSEMBLY: Final[str] = "CRA_TCAGchr7v2"

PRIMARY_GROUP_LABEL_PATTERN: Final[re.Pattern] = re.compile(r"^GRCh37\.p10")
ALTERNATE_GROUP_LABEL_PATTERN: Final[re.Pattern] = re.compile(r"^CRA_TCAGchr7v2")

# 1-22, X or Y, optionally followed by "|" and a suffix (e.g. "7|NT_007933.15")
CHROMOSOME_PATTERN: Final[re.Pattern] = re.compile(
    r"^([1-9]|1[0-9]|2[0-2]|[Xx]|[Yy])(\|.+)?$"
)

GENE_FEATURE: Final[str] = "GENE"

# length of the "GeneID:" tag in front of the numeric gene id
GENE_ID_PREFIX_LENGTH: Final[int] = 7

# columns of a seq_gene.md record
FIELD_CHROMOSOME: Final[int] = 1
FIELD_CHROMOSOME_START: Final[int] = 2
FIELD_CHROMOSOME_END: Final[int] = 3
FIELD_CONTIG: Final[int] = 5
FIELD_CONTIG_START: Final[int] = 6
FIELD_CONTIG_END: Final[int] = 7
FIELD_ORIENTATION: Final[int] = 8
FIELD_GENE_NAME: Final[int] = 9
FIELD_GENE_ID: Final[int] = 10
FIELD_FEATURE_TYPE: Final[int] = 11
FIELD_GROUP_LABEL: Final[int] = 12

REQUIRED_FIELDS: Final[int] = 13

# a marker this far upstream of the 5' end or downstream of the 3' end is
# still considered inside the gene
FIVE_PRIME_FLANK: Final[int] = 2000
THREE_PRIME_FLANK: Final[int] = 500

# distance threshold meaning "keep only the nearest genes"
MINIMUM_DISTANCE_MODE: Final[int] = -1

FIVE_PRIME: Final[int] = 5
THREE_PRIME: Final[int] = 3

# ids and coordinates are stored as numpy.uint32
UINT32_MAX: Final[int] = 0xFFFFFFFF
