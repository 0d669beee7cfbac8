"""In-memory implementation of the storage interface for testing."""

from typing import Optional

from ..store.address_book import AddressBook
from .interfaces import AddressBookStorage


class MemoryAddressBookStorage(AddressBookStorage):
    """Keeps a copy of the last saved address book in memory."""

    def __init__(self, initial: Optional[AddressBook] = None):
        self._stored: Optional[AddressBook] = initial.copy() if initial is not None else None
        self.save_count = 0

    def read(self) -> Optional[AddressBook]:
        """Load a copy of the stored address book."""
        if self._stored is None:
            return None
        return self._stored.copy()

    def save(self, address_book: AddressBook) -> None:
        """Store a copy so later mutations do not leak into storage."""
        self._stored = address_book.copy()
        self.save_count += 1
