"""
Tests for the packed MatchRelation storage.
"""

import numpy as np
import pytest

from tsmatch.table.relation import MatchRelation


class TestMatchRelation:
    """Tests for MatchRelation."""

    def test_starts_empty(self):
        relation = MatchRelation(3, 5)
        assert relation.bit_count == 15
        assert relation.bits.size == 2
        assert relation.count() == 0
        assert not any(relation.get(p, s) for p in range(3) for s in range(5))

    def test_address_is_row_major(self):
        relation = MatchRelation(3, 5)
        assert relation.address(0, 4) == 4
        assert relation.address(2, 1) == 11

    def test_set_addresses(self):
        relation = MatchRelation(3, 5)
        relation.set_addresses(np.array([relation.address(1, 2), relation.address(2, 4)]))
        assert relation.get(1, 2)
        assert relation.get(2, 4)
        assert not relation.get(2, 1)
        assert relation.count() == 2

    def test_duplicate_addresses(self):
        relation = MatchRelation(4, 4)
        relation.set_addresses(np.array([5, 5, 6, 5]))
        assert relation.count() == 2

    def test_adjacent_bits_in_one_byte(self):
        relation = MatchRelation(1, 8)
        relation.set_addresses(np.arange(8))
        assert relation.bits.tolist() == [255]
        assert relation.count() == 8

    def test_empty_addresses(self):
        relation = MatchRelation(2, 2)
        relation.set_addresses(np.empty(0, dtype=np.int64))
        assert relation.count() == 0

    def test_frozen_relation_rejects_writes(self):
        relation = MatchRelation(2, 2).freeze()
        with pytest.raises(ValueError):
            relation.set_addresses(np.array([0]))

    def test_frozen_relation_unchanged(self):
        relation = MatchRelation(2, 3)
        relation.set_addresses(np.array([1]))
        relation.freeze()
        with pytest.raises(ValueError, match="frozen"):
            relation.set_addresses(np.array([0, 4]))
        assert relation.count() == 1
        assert not relation.get(0, 0)

    def test_entries_ordered(self):
        relation = MatchRelation(3, 5)
        relation.set_addresses(np.array([relation.address(2, 0), relation.address(0, 4), relation.address(1, 1)]))
        primary, secondary = relation.entries()
        assert primary.tolist() == [0, 1, 2]
        assert secondary.tolist() == [4, 1, 0]

    def test_entries_ignore_padding_bits(self):
        relation = MatchRelation(1, 3)
        relation.set_addresses(np.array([2]))
        primary, secondary = relation.entries()
        assert primary.tolist() == [0]
        assert secondary.tolist() == [2]

    def test_entries_empty(self):
        primary, secondary = MatchRelation(2, 2).entries()
        assert primary.size == 0
        assert secondary.size == 0
