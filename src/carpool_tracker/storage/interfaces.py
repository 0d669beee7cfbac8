"""Abstract storage interface for the address book."""

from abc import ABC, abstractmethod
from typing import Optional

from ..store.address_book import AddressBook


class AddressBookStorage(ABC):
    """Loads and saves a whole address book."""

    @abstractmethod
    def read(self) -> Optional[AddressBook]:
        """
        Load the address book.

        Returns:
            The stored address book, or None if nothing has been stored yet

        Raises:
            DataFormatError: If the stored data is invalid
            DuplicatePassengerError: If the stored passengers collide
            DuplicatePoolError: If the stored pools collide
            StorageError: If the data could not be read
        """
        pass

    @abstractmethod
    def save(self, address_book: AddressBook) -> None:
        """
        Store the address book, replacing what was stored before.

        Raises:
            StorageError: If the data could not be written
        """
        pass
