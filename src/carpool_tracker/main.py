"""Application wiring: configuration, logging, storage and the logic manager."""

from pathlib import Path
from typing import Optional

from .config import CarpoolConfig, config_manager, get_config
from .logic import LogicManager
from .sample_data import sample_address_book
from .storage import AddressBookStorage, JsonAddressBookStorage, StorageError
from .store.address_book import AddressBook, DuplicatePassengerError, DuplicatePoolError
from .store.model import Model
from .utils.logging_config import get_logger, initialize_logging, log_exception

logger = get_logger('main')


class CarpoolApp:
    """Everything one session of the tracker needs."""

    def __init__(
        self,
        config: Optional[CarpoolConfig] = None,
        storage: Optional[AddressBookStorage] = None,
    ):
        self.config = config if config is not None else get_config()
        initialize_logging(debug=self.config.app.debug)

        for issue in config_manager.validate_config():
            logger.warning(f"Configuration issue: {issue}")

        self.storage = storage if storage is not None else JsonAddressBookStorage(self.data_file)
        self.model = Model(self._load_address_book())
        self.logic = LogicManager(self.model, self.storage)

        logger.info(
            f"{self.config.app.app_name} {self.config.app.version} ready with "
            f"{len(self.model.address_book.passengers)} passengers and "
            f"{len(self.model.address_book.pools)} pools"
        )

    @property
    def data_file(self) -> Path:
        return config_manager.get_data_file_path()

    def _load_address_book(self) -> AddressBook:
        try:
            book = self.storage.read()
        except (StorageError, DuplicatePassengerError, DuplicatePoolError) as e:
            log_exception('main', e, {"data_file": self.data_file})
            logger.warning("Data file could not be loaded. Starting with an empty address book")
            return AddressBook()

        if book is not None:
            return book

        if self.config.storage.seed_sample_data:
            logger.info("Data file not found. Starting with a sample address book")
            return sample_address_book()

        logger.info("Data file not found. Starting with an empty address book")
        return AddressBook()


def create_app(storage: Optional[AddressBookStorage] = None) -> CarpoolApp:
    """Build the application from the process-wide configuration."""
    return CarpoolApp(get_config(), storage)
