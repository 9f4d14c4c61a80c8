""" Command line interface for ``rs2gene``.

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

import argparse
import logging
import sys

import rs2gene
from rs2gene.annotation import CoordinateMode, RecordFormatError
from rs2gene.constants import MINIMUM_DISTANCE_MODE
from rs2gene.index import build_index
from rs2gene.io import Reader, Writer, read_excluded_markers
from rs2gene.resolver import SNPAnnotationResolver

logger = logging.getLogger(__name__)


def parse_distance_threshold(value):
    """ Parse a distance threshold such as "-1", "5000" or "5k".

    Parameters
    ----------
    value : str
        integer, optionally suffixed with "k" (x 1000)

    Returns
    -------
    int
    """
    s = value.strip().lower()
    multiplier = 1
    if s.endswith("k"):
        s = s[:-1]
        multiplier = 1000

    try:
        return int(s) * multiplier
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid distance threshold: {value!r}"
        ) from None


def get_parser():
    parser = argparse.ArgumentParser(
        prog="rs2gene",
        description="Annotate SNPs with their nearest 5' and 3' flanking genes",
    )
    parser.add_argument(
        "--db",
        default="GENE.GZ",
        help="Gene annotation database (seq_gene.md; plain, gzip or zip) (default: GENE.GZ)",
    )
    parser.add_argument(
        "--rs",
        default="RSLIST.TXT",
        help="Marker list, one marker per line: RS<TAB>CHR<TAB>CONTIG<TAB>POS (default: RSLIST.TXT)",
    )
    parser.add_argument(
        "-e", "--exclude", default="", help="File of marker ids to exclude"
    )
    parser.add_argument(
        "-d",
        "--dist",
        type=parse_distance_threshold,
        default=MINIMUM_DISTANCE_MODE,
        help="Report all genes within this distance, may use k (x 1000); "
        "negative reports only the nearest genes (default: -1)",
    )
    parser.add_argument(
        "-c",
        "--chr-dist",
        action="store_true",
        help="Use chromosome coordinates instead of contig coordinates",
    )
    parser.add_argument(
        "-p",
        "--print-db",
        action="store_true",
        help="Just print the gene database",
    )
    parser.add_argument(
        "-o", "--output", default="", help="Output file (default: stdout)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {rs2gene.__version__}"
    )
    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=args.log_level,
        stream=sys.stderr,
    )

    coordinate_mode = (
        CoordinateMode.CHROMOSOME if args.chr_dist else CoordinateMode.CONTIG
    )
    writer = Writer(args.output or sys.stdout)

    try:
        index = build_index(args.db, coordinate_mode)

        if args.print_db:
            writer.write_database(index)
            return 0

        resolver = SNPAnnotationResolver(
            index, args.dist, read_excluded_markers(args.exclude)
        )
        annotations = list(resolver.resolve(Reader(args.rs).read_records()))
        writer.write_annotations(annotations)
    except (RecordFormatError, OSError) as err:
        logger.error(err)
        return 1

    Writer(sys.stderr, atomic=False).write_unresolved(resolver.unresolved)
    return 0
