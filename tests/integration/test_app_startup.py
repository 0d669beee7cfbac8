"""Integration tests for application start-up and the CLI against a real file."""

import json

import pytest

from carpool_tracker import cli
from carpool_tracker.config import get_config
from carpool_tracker.main import CarpoolApp
from carpool_tracker.sample_data import sample_address_book
from carpool_tracker.storage import JsonAddressBookStorage

from tests.fixtures.typical_data import get_typical_address_book


@pytest.mark.integration
class TestStartup:
    """Test how the address book is loaded on start."""

    def test_missing_file_seeds_sample_data(self, isolated_home):
        app = CarpoolApp()
        assert app.model.address_book == sample_address_book()
        # Nothing is written until a command changes the book
        assert not (isolated_home / "addressbook.json").exists()

    def test_missing_file_without_seeding(self, isolated_home):
        config = get_config()
        config.storage.seed_sample_data = False
        app = CarpoolApp(config)
        assert app.model.address_book.passengers == ()

    def test_existing_file_is_loaded(self, isolated_home):
        JsonAddressBookStorage(isolated_home / "addressbook.json").save(get_typical_address_book())
        app = CarpoolApp()
        assert app.model.address_book == get_typical_address_book()

    def test_corrupt_file_starts_empty(self, isolated_home):
        (isolated_home / "addressbook.json").write_text("{broken", encoding="utf-8")
        app = CarpoolApp()
        assert app.model.address_book.passengers == ()
        assert app.model.address_book.pools == ()

    def test_non_utf8_file_starts_empty(self, isolated_home):
        (isolated_home / "addressbook.json").write_bytes(b'{"passengers": [{"name": "\xff\xfe"}]}')
        app = CarpoolApp()
        assert app.model.address_book.passengers == ()


@pytest.mark.integration
class TestCliAgainstFile:
    """Test one-shot commands persisting between invocations."""

    def test_commands_persist(self, isolated_home, capsys):
        data_file = isolated_home / "addressbook.json"
        JsonAddressBookStorage(data_file).save(get_typical_address_book())

        assert cli.main(["delete", "3"]) == cli.EXIT_OK
        assert cli.main([
            "add", "--name", "Hoon Meier", "--phone", "8482424", "--address", "little", "india",
            "--day", "monday", "--time", "0830",
        ]) == cli.EXIT_OK
        assert cli.main([
            "pool", "--name", "Bob", "Choo", "--phone", "22222222", "--day", "monday",
            "--time", "0830", "--commuter", "7",
        ]) == cli.EXIT_OK

        data = json.loads(data_file.read_text(encoding="utf-8"))
        names = [p["name"] for p in data["passengers"]]
        assert "Carl Kurz" not in names
        assert names[-1] == "Hoon Meier"
        assert [p["passengers"][0]["name"] for p in data["pools"]][-1] == "Hoon Meier"

    def test_failed_command_leaves_file_untouched(self, isolated_home):
        data_file = isolated_home / "addressbook.json"
        JsonAddressBookStorage(data_file).save(get_typical_address_book())
        before = data_file.read_text(encoding="utf-8")

        assert cli.main(["delete", "1"]) == cli.EXIT_COMMAND_FAILED
        assert data_file.read_text(encoding="utf-8") == before

    def test_read_only_command_does_not_create_file(self, isolated_home):
        assert cli.main(["list"]) == cli.EXIT_OK
        assert not (isolated_home / "addressbook.json").exists()
