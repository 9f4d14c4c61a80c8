"""Class for writing marker annotations and the gene annotation database."""

import logging

import numpy as np
import pandas as pd

from rs2gene.utils import save_df_as_csv, save_text

logger = logging.getLogger(__name__)

ANNOTATION_DTYPES = {
    "rsid": np.uint32,
    "gene_id": np.uint32,
    "gene_name": object,
    "distance": np.uint32,
    "side": np.uint8,
}

# chromosome, contig, gene id, gene name, 5' end, 3' end, orientation, source
DATABASE_LINE_FORMAT = "%2d%16s%12d%18s%10d%10d%3s%16s\n"

UNRESOLVED_HEADER = "# The following SNPs were not found in the database:\n"


class Writer:
    """Class for writing results to files or buffers."""

    def __init__(self, filename="", atomic=True):
        """Initialize a `Writer`.

        Parameters
        ----------
        filename : str or buffer
            filename for file to save or buffer to write to
        atomic : bool
            atomically write output to a file on local filesystem
        """
        self._filename = filename
        self._atomic = atomic

    @staticmethod
    def annotations_dataframe(annotations):
        """Collect marker annotations into a dataframe.

        Parameters
        ----------
        annotations : iterable of MarkerAnnotation

        Returns
        -------
        pandas.DataFrame
            with columns rsid, gene_id, gene_name, distance, and side
        """
        df = pd.DataFrame(list(annotations), columns=list(ANNOTATION_DTYPES))
        return df.astype(ANNOTATION_DTYPES)

    def write_annotations(self, annotations):
        """Write one tab-separated line per marker annotation.

        Parameters
        ----------
        annotations : iterable of MarkerAnnotation

        Returns
        -------
        str
            path to file if saved, else empty str
        """
        df = self.annotations_dataframe(annotations)
        return save_df_as_csv(
            df,
            self._filename,
            atomic=self._atomic,
            sep="\t",
            header=False,
            index=False,
            lineterminator="\n",
        )

    def write_database(self, index):
        """Write one fixed-width line per gene of `index`.

        Parameters
        ----------
        index : GenomicAnnotationIndex

        Returns
        -------
        str
            path to file if saved, else empty str
        """
        df = index.to_dataframe()
        text = "".join(
            DATABASE_LINE_FORMAT % tuple(row) for row in df.itertuples(index=False)
        )
        logger.info(f"Writing {len(df)} genes")
        return save_text(text, self._filename, atomic=self._atomic)

    def write_unresolved(self, unresolved):
        """Write the ids of markers not found in the database, after a header.

        Parameters
        ----------
        unresolved : list of int

        Returns
        -------
        str
            path to file if saved, else empty str
        """
        text = UNRESOLVED_HEADER + "".join(f"{rsid}\n" for rsid in unresolved)
        return save_text(text, self._filename, atomic=self._atomic)
