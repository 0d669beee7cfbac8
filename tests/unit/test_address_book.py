"""Tests for the AddressBook store."""

import pytest

from carpool_tracker.store.address_book import (
    AddressBook,
    DuplicatePassengerError,
    DuplicatePoolError,
    PassengerNotFoundError,
    PoolNotFoundError,
)

from tests.fixtures.typical_data import (
    ALICE,
    BENSON,
    CARL,
    DANIEL,
    HOON,
    POOL_AMY,
    get_typical_address_book,
)
from tests.helpers.builders import PassengerBuilder


@pytest.mark.unit
class TestPassengers:
    """Test passenger bookkeeping."""

    def test_new_book_is_empty(self):
        book = AddressBook()
        assert book.passengers == ()
        assert book.pools == ()
        assert book.version == 0

    def test_add_and_has(self):
        book = AddressBook()
        book.add_passenger(ALICE)
        assert book.has_passenger(ALICE)
        # Same name, other fields changed
        assert book.has_passenger(PassengerBuilder(ALICE).with_phone("11111111").build())
        assert not book.has_passenger(BENSON)

    def test_add_duplicate_rejected(self):
        book = AddressBook([ALICE])
        with pytest.raises(DuplicatePassengerError):
            book.add_passenger(PassengerBuilder(ALICE).with_address("elsewhere").build())
        assert book.passengers == (ALICE,)

    def test_set_passenger_in_place(self):
        book = AddressBook([ALICE, BENSON])
        edited = PassengerBuilder(ALICE).with_phone("11111111").build()
        book.set_passenger(ALICE, edited)
        assert book.passengers == (edited, BENSON)

    def test_set_passenger_rejects_collision(self):
        book = AddressBook([ALICE, BENSON])
        renamed = PassengerBuilder(ALICE).with_name("Benson Meier").build()
        with pytest.raises(DuplicatePassengerError):
            book.set_passenger(ALICE, renamed)

    def test_set_missing_passenger(self):
        with pytest.raises(PassengerNotFoundError):
            AddressBook().set_passenger(ALICE, BENSON)

    def test_delete_free_passenger(self):
        book = get_typical_address_book()
        assert book.delete_passenger(CARL) is True
        assert not book.has_passenger(CARL)

    def test_delete_pooled_passenger_is_refused(self):
        book = get_typical_address_book()
        version = book.version
        assert book.delete_passenger(ALICE) is False
        assert book.has_passenger(ALICE)
        assert book.version == version

    def test_delete_missing_passenger(self):
        with pytest.raises(PassengerNotFoundError):
            get_typical_address_book().delete_passenger(HOON)

    def test_pool_membership(self):
        book = get_typical_address_book()
        assert book.is_pooled(ALICE)
        assert book.is_pooled(BENSON)
        assert not book.is_pooled(CARL)
        assert book.pools_containing(BENSON) == (POOL_AMY,)


@pytest.mark.unit
class TestPools:
    """Test pool bookkeeping."""

    def test_add_duplicate_pool_rejected(self):
        book = get_typical_address_book()
        with pytest.raises(DuplicatePoolError):
            book.add_pool(POOL_AMY.with_passengers([CARL]))

    def test_delete_pool_keeps_passengers(self):
        book = get_typical_address_book()
        book.delete_pool(POOL_AMY)
        assert book.pools == ()
        assert book.has_passenger(ALICE)
        assert book.has_passenger(BENSON)
        # Passengers are free to delete once unpooled
        assert book.delete_passenger(ALICE) is True

    def test_delete_missing_pool(self):
        with pytest.raises(PoolNotFoundError):
            AddressBook([ALICE]).delete_pool(POOL_AMY)


@pytest.mark.unit
class TestWholeBook:
    """Test listings, copies and the version counter."""

    def test_list_with_predicate(self):
        book = get_typical_address_book()
        assert book.list_passengers(lambda p: p.name.value.endswith("Meier")) == (BENSON, DANIEL)
        assert book.list_pools(lambda p: False) == ()
        assert book.list_passengers() == book.passengers

    def test_version_increases_on_mutation(self):
        book = AddressBook()
        book.add_passenger(ALICE)
        after_add = book.version
        book.clear()
        assert book.version > after_add
        assert book.passengers == ()

    def test_copy_is_independent(self):
        book = get_typical_address_book()
        copy = book.copy()
        assert copy == book
        copy.delete_passenger(CARL)
        assert copy != book
        assert book.has_passenger(CARL)

    def test_reset(self):
        book = AddressBook([HOON])
        book.reset(get_typical_address_book())
        assert book == get_typical_address_book()
