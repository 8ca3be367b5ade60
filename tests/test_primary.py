"""Tests for single-primary bookkeeping."""

import pytest

from logibase.domain.errors import ValidationError
from logibase.domain.primary import reassign_after_removal, set_primary

FLAG = "is_primary_contact"


def members(*flags):
    return [{"id": n, FLAG: flag} for n, flag in enumerate(flags, start=1)]


def flags(collection):
    return [m[FLAG] for m in collection]


class TestSetPrimary:
    """Tests for set_primary."""

    def test_exactly_one_primary(self):
        """Test that the chosen member is the only primary one."""
        collection = members(True, False, True)
        set_primary(collection, 1, FLAG)
        assert flags(collection) == [False, True, False]

    def test_single_member(self):
        """Test a one-member collection."""
        collection = members(False)
        set_primary(collection, 0, FLAG)
        assert flags(collection) == [True]

    @pytest.mark.parametrize("index", [-1, 3])
    def test_index_out_of_range(self, index):
        """Test that positions outside the collection are rejected."""
        collection = members(True, False, False)
        with pytest.raises(ValidationError):
            set_primary(collection, index, FLAG)
        assert flags(collection) == [True, False, False]


class TestReassignAfterRemoval:
    """Tests for reassign_after_removal."""

    def test_removed_primary_promotes_first(self):
        """Test that the first survivor becomes primary."""
        collection = members(True, False, False)
        collection.pop(0)
        assert reassign_after_removal(collection, True, FLAG) is True
        assert flags(collection) == [True, False]
        assert collection[0]["id"] == 2

    def test_removed_primary_from_middle(self):
        """Test that index 0 is promoted even when it follows nothing removed."""
        collection = members(False, True, False)
        collection.pop(1)
        reassign_after_removal(collection, True, FLAG)
        assert flags(collection) == [True, False]

    def test_removed_non_primary(self):
        """Test that removing a non-primary member changes nothing."""
        collection = members(True, False)
        collection.pop(1)
        assert reassign_after_removal(collection, False, FLAG) is False
        assert flags(collection) == [True]

    def test_empty_after_removal(self):
        """Test that an empty collection stays empty."""
        assert reassign_after_removal([], True, FLAG) is False
