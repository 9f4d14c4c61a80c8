""" Class for reading gene annotation databases and marker lists.

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

import binascii
from contextlib import contextmanager
import gzip
import io
import logging
import zipfile
import zlib

from rs2gene.annotation import parse_uint

logger = logging.getLogger(__name__)

# length of a marker-type tag such as "rs" in front of a marker id
MARKER_TAG_LENGTH = 2


class InputReadError(OSError):
    """ An input file could not be opened, read, or decompressed. """


class Reader:
    """ Class for reading tab-separated, optionally compressed, text files. """

    def __init__(self, file=""):
        """ Initialize a `Reader`.

        Parameters
        ----------
        file : str or bytes
            path to file to load or bytes to load; plain text, gzip, or zip
            (the first member is read)
        """
        self._file = file

    def __repr__(self):
        if isinstance(self._file, bytes):
            return "Reader(<bytes>)"
        return f"Reader({self._file!r})"

    def read_lines(self):
        """ Read the non-blank lines of the file that are not "#" comments.

        Yields
        ------
        str
            line without the line terminator

        Raises
        ------
        InputReadError
            if the file cannot be opened, read, or decompressed
        """
        try:
            with self._open() as f:
                for line in f:
                    line = line.rstrip("\r\n")
                    if not line.strip() or line.startswith("#"):
                        continue
                    yield line
        except (
            OSError,
            EOFError,
            UnicodeDecodeError,
            zipfile.BadZipFile,
            zlib.error,
        ) as err:
            raise InputReadError(f"Unable to read {self!r}: {err}") from err

    def read_records(self):
        """ Read the file as tab-separated records.

        Yields
        ------
        list of str
            fields of a line
        """
        for line in self.read_lines():
            yield line.split("\t")

    @contextmanager
    def _open(self):
        file = self._file
        if isinstance(file, bytes):
            head = file[:2]
            file = io.BytesIO(file)
        else:
            with open(file, "rb") as f:
                head = f.read(2)

        if self.is_gzip(head):
            with gzip.open(file, "rt", encoding="utf-8") as f:
                yield f
        elif zipfile.is_zipfile(file):
            with zipfile.ZipFile(file) as z:
                namelist = z.namelist()
                if not namelist:
                    raise InputReadError(f"{self!r} is an empty zip archive")
                with z.open(namelist[0], "r") as f:
                    yield io.TextIOWrapper(f, encoding="utf-8")
        elif isinstance(file, io.BytesIO):
            file.seek(0)
            yield io.TextIOWrapper(file, encoding="utf-8")
        else:
            with open(file, "r", encoding="utf-8") as f:
                yield f

    @staticmethod
    def is_gzip(bytes_data):
        """ Check whether or not bytes_data starts like a gzip file."""
        return binascii.hexlify(bytes_data[:2]) == b"1f8b"


def parse_marker_id(value):
    """ Parse a marker id, with or without its marker-type tag (e.g. "rs").

    Parameters
    ----------
    value : str
        e.g. "12345" or "rs12345"

    Returns
    -------
    int
    """
    if value[:MARKER_TAG_LENGTH].isalpha():
        value = value[MARKER_TAG_LENGTH:]
    return parse_uint(value, "marker id")


def read_excluded_markers(file=""):
    """ Read a list of marker ids to exclude, one per line.

    Parameters
    ----------
    file : str or bytes
        path to file to load or bytes to load; if empty, no markers are
        excluded

    Returns
    -------
    frozenset of int
    """
    if not file:
        return frozenset()

    excluded = frozenset(
        parse_marker_id(line.strip()) for line in Reader(file).read_lines()
    )
    logger.info(f"Excluding {len(excluded)} markers")
    return excluded
