"""`rs2gene`

annotate SNPs with their nearest flanking genes

"""

from rs2gene.index import GenomicAnnotationIndex as GenomicAnnotationIndex
from rs2gene.index import build_index as build_index
from rs2gene.resolver import SNPAnnotationResolver as SNPAnnotationResolver

__version__ = "0.3.0"
