"""Classes for reading annotation databases and marker lists, and writing results."""

from .reader import InputReadError as InputReadError
from .reader import Reader as Reader
from .reader import read_excluded_markers as read_excluded_markers
from .writer import Writer as Writer

__all__ = ["InputReadError", "Reader", "Writer", "read_excluded_markers"]
