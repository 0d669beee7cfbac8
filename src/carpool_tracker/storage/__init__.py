"""Persistence adapters for the address book."""

from .errors import DataFormatError, StorageError
from .interfaces import AddressBookStorage
from .json_storage import JsonAddressBookStorage
from .memory_impl import MemoryAddressBookStorage

__all__ = [
    "AddressBookStorage",
    "DataFormatError",
    "JsonAddressBookStorage",
    "MemoryAddressBookStorage",
    "StorageError",
]
