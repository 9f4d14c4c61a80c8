import io
import os

import numpy as np

from rs2gene.io import Writer
from rs2gene.io.writer import (
    ANNOTATION_DTYPES,
    DATABASE_LINE_FORMAT,
    UNRESOLVED_HEADER,
)
from rs2gene.resolver import MarkerAnnotation
from tests import BaseRs2geneTestCase


class TestWriter(BaseRs2geneTestCase):
    def annotations(self):
        return [
            MarkerAnnotation(1, 100, "GENEA", 5000, 5),
            MarkerAnnotation(1, 100, "GENEA", 15000, 3),
            MarkerAnnotation(3, 200, "GENEB", 0, 5),
        ]

    def test_annotations_dataframe(self):
        df = Writer.annotations_dataframe(self.annotations())
        self.assertListEqual(list(df.columns), list(ANNOTATION_DTYPES))
        self.assertEqual(df.rsid.dtype, np.uint32)
        self.assertEqual(df.side.dtype, np.uint8)
        self.assertEqual(len(df), 3)

    def test_annotations_dataframe_empty(self):
        df = Writer.annotations_dataframe([])
        self.assertTrue(df.empty)
        self.assertListEqual(list(df.columns), list(ANNOTATION_DTYPES))

    def test_write_annotations_buffer(self):
        buf = io.StringIO()
        self.assertEqual(Writer(buf).write_annotations(self.annotations()), "")
        self.assertEqual(
            buf.getvalue(),
            "1\t100\tGENEA\t5000\t5\n1\t100\tGENEA\t15000\t3\n3\t200\tGENEB\t0\t5\n",
        )

    def test_write_annotations_empty(self):
        buf = io.StringIO()
        Writer(buf).write_annotations([])
        self.assertEqual(buf.getvalue(), "")

    def test_write_annotations_file(self):
        path = os.path.join(self.tmpdir, "output", "annotations.txt")
        self.assertEqual(Writer(path).write_annotations(self.annotations()), path)
        with open(path) as f:
            self.assertEqual(f.readline(), "1\t100\tGENEA\t5000\t5\n")

    def test_write_annotations_file_not_atomic(self):
        path = os.path.join(self.tmpdir, "annotations.txt")
        Writer(path, atomic=False).write_annotations(self.annotations()[2:])
        with open(path) as f:
            self.assertEqual(f.read(), "3\t200\tGENEB\t0\t5\n")

    def test_write_database(self):
        index = self.build_index(
            [
                self.make_record(),
                self.make_record(
                    start=30000, end=40000, orientation="-", gene_id=200,
                    gene_name="GENEB",
                ),
                self.make_alternate_record(gene_id=400, gene_name="GENED"),
            ]
        )
        buf = io.StringIO()
        Writer(buf).write_database(index)
        self.assertEqual(
            buf.getvalue(),
            DATABASE_LINE_FORMAT % (1, "NT_1", 100, "GENEA", 10000, 20000, "+", "GRCh37")
            + DATABASE_LINE_FORMAT
            % (1, "NT_1", 200, "GENEB", 40000, 30000, "-", "GRCh37")
            + DATABASE_LINE_FORMAT
            % (7, "NT_7ALT", 400, "GENED", 10000, 20000, "+", "CRA_TCAGchr7v2"),
        )

    def test_write_database_fixed_width(self):
        buf = io.StringIO()
        Writer(buf).write_database(self.build_index([self.make_record()]))
        self.assertEqual(
            buf.getvalue(),
            " 1            NT_1         100             GENEA"
            "     10000     20000  +          GRCh37\n",
        )

    def test_write_database_empty(self):
        buf = io.StringIO()
        Writer(buf).write_database(self.build_index([]))
        self.assertEqual(buf.getvalue(), "")

    def test_write_unresolved(self):
        buf = io.StringIO()
        Writer(buf).write_unresolved([4, 12])
        self.assertEqual(buf.getvalue(), UNRESOLVED_HEADER + "4\n12\n")

    def test_write_unresolved_none(self):
        buf = io.StringIO()
        Writer(buf).write_unresolved([])
        self.assertEqual(
            buf.getvalue(), "# The following SNPs were not found in the database:\n"
        )
