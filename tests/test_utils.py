import io
import os

import pandas as pd

from rs2gene.utils import create_dir, save_df_as_csv, save_text
from tests import BaseRs2geneTestCase


class TestUtils(BaseRs2geneTestCase):
    def test_create_dir(self):
        path = os.path.join(self.tmpdir, "a", "b")
        self.assertTrue(create_dir(path))
        self.assertTrue(create_dir(path))
        self.assertTrue(os.path.isdir(path))

    def test_save_text_buffer(self):
        buf = io.StringIO()
        self.assertEqual(save_text("text\n", buf), "")
        self.assertEqual(buf.getvalue(), "text\n")

    def test_save_text_overwrites(self):
        path = os.path.join(self.tmpdir, "out", "text.txt")
        self.assertEqual(save_text("first\n", path), path)
        self.assertEqual(save_text("second\n", path), path)
        with open(path) as f:
            self.assertEqual(f.read(), "second\n")

    def test_save_df_as_csv_comment(self):
        buf = io.StringIO()
        df = pd.DataFrame({"a": [1, 2]})
        save_df_as_csv(df, buf, comment="# comment\n", index=False, lineterminator="\n")
        self.assertEqual(buf.getvalue(), "# comment\na\n1\n2\n")

    def test_save_df_as_csv_not_dataframe(self):
        with self.assertRaises(TypeError):
            save_df_as_csv([1, 2], io.StringIO())
