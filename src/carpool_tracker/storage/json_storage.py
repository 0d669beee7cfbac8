"""JSON file implementation of the address book storage."""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as SchemaValidationError  # type: ignore

from ..domain.entities import PoolConstructionError
from ..domain.values import ValidationError
from ..store.address_book import AddressBook
from ..utils.logging_config import get_logger
from .errors import DataFormatError, StorageError
from .interfaces import AddressBookStorage
from .schemas import JsonSerializableAddressBook

logger = get_logger('storage')


class JsonAddressBookStorage(AddressBookStorage):
    """Reads and writes the address book as a single JSON document."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def read(self) -> Optional[AddressBook]:
        """
        Load the address book from the JSON file.

        Returns:
            The address book, or None if the file does not exist yet
        """
        if not self.file_path.exists():
            logger.info(f"Address book file not found: {self.file_path}")
            return None

        try:
            text = self.file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DataFormatError(f"Address book file {self.file_path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Could not read {self.file_path}: {e}") from e

        try:
            serialized = JsonSerializableAddressBook.model_validate_json(text)
        except SchemaValidationError as e:
            raise DataFormatError(f"Invalid address book file {self.file_path}: {e}") from e

        try:
            book = serialized.to_model_type()
        except (ValidationError, PoolConstructionError) as e:
            raise DataFormatError(f"Illegal values in {self.file_path}: {e}") from e

        logger.info(
            f"Loaded {len(book.passengers)} passengers and {len(book.pools)} pools "
            f"from {self.file_path}"
        )
        return book

    def save(self, address_book: AddressBook) -> None:
        """Write the address book atomically: temp file first, then rename."""
        temp_path = self.file_path.with_name(self.file_path.name + ".tmp")

        try:
            payload = JsonSerializableAddressBook.from_model(address_book).model_dump(mode="json")
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.file_path)
        except (OSError, ValueError) as e:
            # Clean up temp file if it exists
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Could not write {self.file_path}: {e}") from e

        logger.debug(
            f"Saved {len(address_book.passengers)} passengers and "
            f"{len(address_book.pools)} pools to {self.file_path}"
        )
