""" Utility functions.

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

import logging
import os

from atomicwrites import atomic_write
import pandas as pd

logger = logging.getLogger(__name__)


def create_dir(path):
    """ Create directory specified by `path` if it doesn't already exist.

    Parameters
    ----------
    path : str
        path to directory

    Returns
    -------
    bool
        True if `path` exists
    """
    # https://stackoverflow.com/a/5032238
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as err:
        logger.warning(err)
        return False

    return os.path.exists(path)


def save_text(text, path_or_buf, atomic=True):
    """ Save `text` to a file or write it to a buffer.

    Parameters
    ----------
    text : str
        text to save
    path_or_buf : str or buffer
        path to file, or buffer (e.g., ``sys.stdout``) to write to
    atomic : bool
        atomically write output to a file on local filesystem

    Returns
    -------
    str
        path to saved file, else empty str if written to a buffer
    """
    if not isinstance(path_or_buf, str):
        path_or_buf.write(text)
        return ""

    directory = os.path.dirname(path_or_buf)
    if directory and not create_dir(directory):
        raise OSError(f"Unable to create directory {directory}")

    logger.info(f"Saving {os.path.relpath(path_or_buf)}")

    if atomic:
        with atomic_write(path_or_buf, mode="w", overwrite=True) as f:
            f.write(text)
    else:
        with open(path_or_buf, "w") as f:
            f.write(text)

    return path_or_buf


def save_df_as_csv(df, path_or_buf, comment="", atomic=True, **kwargs):
    """ Save dataframe to a CSV file or write it to a buffer.

    Parameters
    ----------
    df : pandas.DataFrame
        dataframe to save
    path_or_buf : str or buffer
        path to file, or buffer to write to
    comment : str
        header comment(s); one per line
    atomic : bool
        atomically write output to a file on local filesystem
    **kwargs
        additional parameters to `pandas.DataFrame.to_csv`

    Returns
    -------
    str
        path to saved file, else empty str if written to a buffer
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"expected a DataFrame, got {type(df).__name__}")

    return save_text(comment + df.to_csv(**kwargs), path_or_buf, atomic=atomic)
