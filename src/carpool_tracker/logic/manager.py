"""
Runs commands against the model and persists the address book.

Each command runs under a single lock together with the save that follows
it. The address book is saved whenever its version changed, including when
the command failed after mutating it (a partial delete).
"""

import threading
from typing import Optional, Tuple

from ..commands.base import Command, CommandError, CommandResult
from ..domain.entities import Passenger, Pool
from ..storage.interfaces import AddressBookStorage
from ..store.address_book import AddressBook
from ..store.model import Model
from ..utils.logging_config import get_logger

logger = get_logger('commands')


class LogicManager:
    """Front door for the presentation layer."""

    def __init__(self, model: Model, storage: Optional[AddressBookStorage] = None):
        self.model = model
        self.storage = storage
        self._lock = threading.Lock()

    def execute(self, command: Command) -> CommandResult:
        """
        Execute a command and save the address book if it changed.

        Raises:
            CommandError: If the command was refused
            StorageError: If the changed address book could not be saved
        """
        with self._lock:
            version_before = self.model.address_book.version
            try:
                result = command.execute(self.model)
            except CommandError as e:
                logger.info(f"{command.COMMAND_WORD} failed ({e.kind.value}): {e.message}")
                raise
            finally:
                if self.model.address_book.version != version_before:
                    self._save()

        logger.debug(f"{command.COMMAND_WORD} succeeded")
        return result

    def _save(self) -> None:
        if self.storage is None:
            return
        self.storage.save(self.model.address_book)

    @property
    def address_book(self) -> AddressBook:
        return self.model.address_book

    def filtered_passengers(self) -> Tuple[Passenger, ...]:
        return self.model.filtered_passengers()

    def filtered_pools(self) -> Tuple[Pool, ...]:
        return self.model.filtered_pools()
