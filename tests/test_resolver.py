from rs2gene.annotation import Orientation, RecordFormatError
from rs2gene.index import GeneInfo, build_index
from rs2gene.io import Reader
from rs2gene.resolver import (
    Marker,
    MarkerAnnotation,
    SNPAnnotationResolver,
    gene_distances,
    parse_marker,
)
from tests import BaseRs2geneTestCase


class TestParseMarker(BaseRs2geneTestCase):
    def test_parse_marker(self):
        self.assertEqual(
            parse_marker(["12", "1", "NT_1", "500", "100500"]),
            Marker(id=12, slot=0, contig="NT_1", position=500),
        )

    def test_parse_marker_rs_prefix(self):
        self.assertEqual(parse_marker(["rs12", "X", "NT_X", "5"]).id, 12)

    def test_parse_marker_sex_chromosomes(self):
        self.assertEqual(parse_marker(["1", "x", "NT_X", "5"]).slot, 22)
        self.assertEqual(parse_marker(["1", "Y", "NT_Y", "5"]).slot, 23)

    def test_parse_marker_unrecognized_chromosome(self):
        self.assertIsNone(parse_marker(["1", "MT", "NT_MT", "5"]))
        self.assertIsNone(parse_marker(["1", "Un", "NT_U", "5"]))

    def test_parse_marker_malformed(self):
        with self.assertRaises(RecordFormatError):
            parse_marker(["1", "1", "NT_1"])
        with self.assertRaises(RecordFormatError):
            parse_marker(["rsX", "1", "NT_1", "5"])
        with self.assertRaises(RecordFormatError):
            parse_marker(["1", "1", "NT_1", "five"])

    def test_parse_marker_out_of_range(self):
        with self.assertRaises(RecordFormatError):
            parse_marker(["rs5000000000", "1", "NT_1", "5"])
        with self.assertRaises(RecordFormatError):
            parse_marker(["1", "1", "NT_1", "4294967296"])
        self.assertEqual(parse_marker(["rs4294967295", "1", "NT_1", "5"]).id, 4294967295)


class TestGeneDistances(BaseRs2geneTestCase):
    def test_plus_outside(self):
        gene = GeneInfo("GENEA", 10000, 20000)
        self.assertEqual(gene_distances(5000, Orientation.PLUS, gene), (5000, 15000))
        self.assertEqual(gene_distances(25000, Orientation.PLUS, gene), (15000, 5000))

    def test_plus_window_edges(self):
        gene = GeneInfo("GENEA", 10000, 20000)
        self.assertEqual(gene_distances(8000, Orientation.PLUS, gene), (0, 0))
        self.assertEqual(gene_distances(20500, Orientation.PLUS, gene), (0, 0))
        self.assertEqual(gene_distances(7999, Orientation.PLUS, gene), (2001, 12001))
        self.assertEqual(gene_distances(20501, Orientation.PLUS, gene), (10501, 501))

    def test_minus_window_edges(self):
        gene = GeneInfo("GENEB", 40000, 30000)
        self.assertEqual(gene_distances(29500, Orientation.MINUS, gene), (0, 0))
        self.assertEqual(gene_distances(42000, Orientation.MINUS, gene), (0, 0))
        self.assertEqual(gene_distances(29499, Orientation.MINUS, gene), (10501, 501))
        self.assertEqual(gene_distances(42001, Orientation.MINUS, gene), (2001, 12001))

    def test_inside_gene(self):
        gene = GeneInfo("GENEA", 1000, 2000)
        self.assertEqual(gene_distances(1500, Orientation.PLUS, gene), (0, 0))

    def test_window_floored_at_zero(self):
        # 1000 - 2000 floors at 0, so the whole [0, 2500] is inside
        gene = GeneInfo("GENEA", 1000, 2000)
        self.assertEqual(gene_distances(0, Orientation.PLUS, gene), (0, 0))
        self.assertEqual(gene_distances(500, Orientation.PLUS, gene), (0, 0))
        self.assertEqual(gene_distances(2501, Orientation.PLUS, gene), (1501, 501))


class TestSNPAnnotationResolver(BaseRs2geneTestCase):
    def setUp(self):
        super().setUp()
        self.index = self.build_index(
            [
                self.make_record(start=10000, end=20000),
                self.make_record(
                    start=30000, end=40000, orientation="-", gene_id=200,
                    gene_name="GENEB",
                ),
            ]
        )

    def annotate(self, position, distance_threshold=-1):
        resolver = SNPAnnotationResolver(self.index, distance_threshold)
        return resolver.annotate(Marker(1, 0, "NT_1", position))

    @staticmethod
    def by_side(annotations):
        return {
            side: {(a.gene_id, a.distance) for a in annotations if a.side == side}
            for side in (5, 3)
        }

    def test_nearest(self):
        self.assertListEqual(
            self.annotate(5000),
            [
                MarkerAnnotation(1, 100, "GENEA", 5000, 5),
                MarkerAnnotation(1, 100, "GENEA", 15000, 3),
            ],
        )

    def test_nearest_ties(self):
        self.assertDictEqual(
            self.by_side(self.annotate(25000)),
            {5: {(100, 15000), (200, 15000)}, 3: {(100, 5000), (200, 5000)}},
        )

    def test_inside_gene(self):
        self.assertDictEqual(
            self.by_side(self.annotate(35000)), {5: {(200, 0)}, 3: {(200, 0)}}
        )

    def test_five_prime_before_three_prime(self):
        sides = [a.side for a in self.annotate(25000)]
        self.assertListEqual(sides, [5, 5, 3, 3])

    def test_threshold(self):
        self.assertDictEqual(
            self.by_side(self.annotate(5000, distance_threshold=20000)),
            {5: {(100, 5000)}, 3: {(100, 15000)}},
        )

    def test_threshold_keeps_all_within(self):
        self.assertDictEqual(
            self.by_side(self.annotate(5000, distance_threshold=50000)),
            {5: {(100, 5000), (200, 35000)}, 3: {(100, 15000), (200, 25000)}},
        )

    def test_threshold_zero(self):
        self.assertListEqual(self.annotate(5000, distance_threshold=0), [])

    def test_unresolved(self):
        resolver = SNPAnnotationResolver(self.index)
        self.assertListEqual(resolver.annotate(Marker(7, 0, "NT_9", 5000)), [])
        self.assertListEqual(resolver.annotate(Marker(8, 1, "NT_1", 5000)), [])
        self.assertListEqual(resolver.unresolved, [7, 8])

    def test_reused_between_markers(self):
        resolver = SNPAnnotationResolver(self.index)
        resolver.annotate(Marker(1, 0, "NT_1", 35000))
        self.assertListEqual(
            resolver.annotate(Marker(2, 0, "NT_1", 5000)),
            [
                MarkerAnnotation(2, 100, "GENEA", 5000, 5),
                MarkerAnnotation(2, 100, "GENEA", 15000, 3),
            ],
        )

    def test_resolve(self):
        resolver = SNPAnnotationResolver(self.index, excluded={3})
        annotations = list(
            resolver.resolve(
                [
                    ["1", "1", "NT_1", "5000"],
                    ["2", "MT", "NT_1", "5000"],
                    ["3", "1", "NT_1", "5000"],
                    ["4", "1", "NT_9", "5000"],
                    ["5", "1", "NT_1", "35000", "extra"],
                    ["4", "1", "NT_9", "6000"],
                ]
            )
        )
        self.assertListEqual(
            annotations,
            [
                MarkerAnnotation(1, 100, "GENEA", 5000, 5),
                MarkerAnnotation(1, 100, "GENEA", 15000, 3),
                MarkerAnnotation(5, 200, "GENEB", 0, 5),
                MarkerAnnotation(5, 200, "GENEB", 0, 3),
            ],
        )
        self.assertListEqual(resolver.unresolved, [4, 4])

    def test_resolve_excluded_not_unresolved(self):
        resolver = SNPAnnotationResolver(self.index, excluded=frozenset([4]))
        self.assertListEqual(list(resolver.resolve([["4", "1", "NT_9", "1"]])), [])
        self.assertListEqual(resolver.unresolved, [])

    def test_resolve_malformed(self):
        resolver = SNPAnnotationResolver(self.index)
        with self.assertRaises(RecordFormatError):
            list(resolver.resolve([["1", "1", "NT_1", "-5"]]))

    def test_example_inside_floored_window(self):
        index = self.build_index(
            [self.make_record(contig="NT_1", start=1000, end=2000, gene_name="GENEA")]
        )
        resolver = SNPAnnotationResolver(index)
        for position in (500, 1500):
            self.assertListEqual(
                resolver.annotate(Marker(1, 0, "NT_1", position)),
                [
                    MarkerAnnotation(1, 100, "GENEA", 0, 5),
                    MarkerAnnotation(1, 100, "GENEA", 0, 3),
                ],
            )

    def test_database_file(self):
        index = build_index(self.input_path("seq_gene.md"))
        resolver = SNPAnnotationResolver(index)
        annotations = list(
            resolver.resolve(Reader(self.input_path("markers.txt")).read_records())
        )
        self.assertIn(MarkerAnnotation(7, 300, "GENEC", 0, 5), annotations)
        self.assertIn(MarkerAnnotation(8, 400, "GENED", 0, 3), annotations)
        self.assertIn(MarkerAnnotation(9, 500, "GENEX", 0, 5), annotations)
        self.assertEqual(len(annotations), 16)
        self.assertListEqual(resolver.unresolved, [4])
