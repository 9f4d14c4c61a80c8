import gzip
import os
import tempfile
from unittest import TestCase

from rs2gene.annotation import CoordinateMode
from rs2gene.index import IndexBuilder

INPUT_DIR = os.path.join(os.path.dirname(__file__), "input")

PRIMARY_LABEL = "GRCh37.p10-Primary Assembly"
ALTERNATE_LABEL = "CRA_TCAGchr7v2"


class BaseRs2geneTestCase(TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmpdir.name

    def tearDown(self):
        self._tmpdir.cleanup()

    @staticmethod
    def input_path(filename):
        return os.path.join(INPUT_DIR, filename)

    @staticmethod
    def make_record(
        chrom="1",
        contig="NT_1",
        start=10000,
        end=20000,
        orientation="+",
        gene_id=100,
        gene_name="GENEA",
        feature_type="GENE",
        group_label=PRIMARY_LABEL,
        chr_start=None,
        chr_end=None,
    ):
        """ Make a tab-split ``seq_gene.md`` record. """
        return [
            "9606",
            chrom,
            str(start + 100000 if chr_start is None else chr_start),
            str(end + 100000 if chr_end is None else chr_end),
            "+",
            contig,
            str(start),
            str(end),
            orientation,
            gene_name,
            f"GeneID:{gene_id}",
            feature_type,
            group_label,
            "-",
            "-",
        ]

    def make_alternate_record(self, **kwargs):
        kwargs.setdefault("chrom", "7")
        kwargs.setdefault("contig", "NT_7ALT")
        return self.make_record(group_label=ALTERNATE_LABEL, **kwargs)

    @staticmethod
    def build_index(records, coordinate_mode=CoordinateMode.CONTIG):
        return IndexBuilder(coordinate_mode).build(lambda: iter(records))

    @staticmethod
    def records_as_text(records):
        return "".join("\t".join(fields) + "\n" for fields in records)

    def write_database(self, records, filename="seq_gene.md", compress=False):
        path = os.path.join(self.tmpdir, filename)
        text = self.records_as_text(records)
        if compress:
            with gzip.open(path, "wt") as f:
                f.write(text)
        else:
            with open(path, "w") as f:
                f.write(text)
        return path

    def write_text(self, text, filename):
        path = os.path.join(self.tmpdir, filename)
        with open(path, "w") as f:
            f.write(text)
        return path
