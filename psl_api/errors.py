# psl_api/errors.py
from __future__ import annotations


class PSLDataError(Exception):
    """Base class for data pipeline failures."""
    pass


class FetchError(PSLDataError):
    """Raised when a page could not be fetched directly or through any proxy."""
    pass


class ParseError(PSLDataError):
    """Raised when no parsing rule could extract records from a page."""
    pass


class StorageError(PSLDataError):
    """Raised when the snapshot store cannot serialize or write a dataset."""
    pass


class NoDataError(PSLDataError):
    """Raised when no source (live, cached or bundled) produced a dataset."""
    pass
