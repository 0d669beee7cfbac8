"""Persistence boundary errors."""


class StorageError(Exception):
    """The address book file could not be read or written."""

    pass


class DataFormatError(StorageError):
    """The address book file exists but its contents are not valid."""

    pass
