"""
Tests for the match matrix builder and the MatchTable query API.
"""

import random

import numpy as np
import pytest

from tsmatch import build_match_table, MatchTable
from tsmatch.errors import BuildCancelled, IndexOutOfRange, PreconditionViolation, SequenceError
from tsmatch.index import INDEX_BACKENDS
from tsmatch.table.match_table import relation_entries
from tsmatch.models.sequence import GenomeSequence, RNA_ALPHABET, linearize, reverse_complement

RELATIONS = ("reference_reference", "reference_query", "query_reference", "query_query")


@pytest.fixture(params=sorted(INDEX_BACKENDS))
def backend(request):
    return request.param


def kmer_count(seq, length):
    return len(seq) - length + 1


def brute_force(primary, secondary, length):
    secondary_rc = reverse_complement(secondary)
    primary, secondary = linearize(primary), linearize(secondary)
    return {
        (p, s)
        for p in range(kmer_count(primary, length))
        for s in range(kmer_count(secondary, length))
        if primary[p:p + length] == secondary_rc[s:s + length]
    }


def table_entries(table, relation):
    counts = {"reference": table.reference_kmer_count, "query": table.query_kmer_count}
    primary, secondary = relation.split("_")
    accessor = getattr(table, f"has_{relation}_match")
    return {
        (p, s)
        for p in range(counts[primary])
        for s in range(counts[secondary])
        if accessor(p, s)
    }


def assert_matches_brute_force(table, reference, query, length):
    sources = {"reference": reference, "query": query}
    for relation in RELATIONS:
        primary, secondary = relation.split("_")
        assert table_entries(table, relation) == brute_force(sources[primary], sources[secondary], length), relation


class TestScenarios:
    """The three hand-checked scenarios."""

    def test_reference_reference(self, backend):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4, index_backend=backend)
        assert table.reference_kmer_count == 10
        assert table.query_kmer_count == 5
        assert table_entries(table, "reference_reference") == {(1, 2), (7, 8)}
        assert table_entries(table, "reference_query") == set()
        assert table_entries(table, "query_reference") == set()
        assert table_entries(table, "query_query") == set()

    def test_reference_query(self, backend):
        table = build_match_table("AGGGGAA", "AACCCCA", 4, index_backend=backend)
        assert table_entries(table, "reference_reference") == set()
        assert table_entries(table, "reference_query") == {(1, 1)}
        assert table_entries(table, "query_reference") == {(2, 2)}
        assert table_entries(table, "query_query") == set()

    def test_query_query(self, backend):
        table = build_match_table("AAAAAAA", "AACCCCAGGGGA", 4, index_backend=backend)
        assert table_entries(table, "reference_reference") == set()
        assert table_entries(table, "reference_query") == set()
        assert table_entries(table, "query_reference") == set()
        assert table_entries(table, "query_query") == {(7, 6), (2, 1)}

    def test_cross_relations_are_not_transposes(self):
        table = build_match_table("AGGGGAA", "AACCCCA", 4)
        assert table.has_reference_query_match(1, 1)
        assert not table.has_query_reference_match(1, 1)
        assert table.has_query_reference_match(2, 2)
        assert not table.has_reference_query_match(2, 2)


class TestBruteForce:
    """Every relation equals an exhaustive scan."""

    def test_self_match_exhaustive(self, backend):
        seq = "ACGTTGCAAGGCCTTAACGTACGATCGATG"
        table = build_match_table(seq, seq, 3, index_backend=backend)
        assert table_entries(table, "reference_reference") == brute_force(seq, seq, 3)
        assert table_entries(table, "query_query") == brute_force(seq, seq, 3)

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("length", [1, 2, 3, 5])
    def test_random_sequences(self, backend, seed, length):
        rng = random.Random(seed)
        reference = "".join(rng.choice("ACGT") for _ in range(rng.randint(length, 25)))
        query = "".join(rng.choice("ACGT") for _ in range(rng.randint(length, 25)))
        table = build_match_table(reference, query, length, index_backend=backend)
        assert_matches_brute_force(table, reference, query, length)

    def test_genome_sequence_input(self):
        reference = GenomeSequence.from_str("AUGCAUGCGCAU", RNA_ALPHABET)
        query = GenomeSequence.from_str("GCAUUUAUGC", RNA_ALPHABET)
        table = MatchTable.new(reference, query, 4)
        assert_matches_brute_force(table, reference, query, 4)

    def test_string_adopts_rna_alphabet(self):
        reference = GenomeSequence.from_str("AUGCAUGCGCAU", RNA_ALPHABET)
        table = build_match_table(reference, "gcauuuaugc", 4)
        assert_matches_brute_force(table, reference, GenomeSequence.from_str("GCAUUUAUGC", RNA_ALPHABET), 4)

    def test_mismatched_alphabets(self):
        reference = GenomeSequence.from_str("AUGCAUGC", RNA_ALPHABET)
        query = GenomeSequence.from_str("ACGTACGT")
        with pytest.raises(SequenceError, match="differs"):
            build_match_table(reference, query, 4)


class TestParallel:
    """Building with worker processes gives the same table."""

    def test_parallel_equals_brute_force(self):
        rng = random.Random(7)
        reference = "".join(rng.choice("ACGT") for _ in range(60))
        query = "".join(rng.choice("ACGT") for _ in range(45))
        table = build_match_table(reference, query, 3, processes=2)
        assert_matches_brute_force(table, reference, query, 3)

    @pytest.mark.parametrize("index_backend", ["fm", "kmer"])
    def test_parallel_other_backends(self, index_backend):
        rng = random.Random(11)
        reference = "".join(rng.choice("ACGT") for _ in range(50))
        query = "".join(rng.choice("ACGT") for _ in range(40))
        table = build_match_table(reference, query, 3, index_backend=index_backend, processes=2)
        assert_matches_brute_force(table, reference, query, 3)

    def test_parallel_scenario(self):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4, processes=3)
        assert table_entries(table, "reference_reference") == {(1, 2), (7, 8)}

    def test_invalid_process_count(self):
        with pytest.raises(ValueError):
            build_match_table("ACGT", "ACGT", 2, processes=0)


class TestPreconditions:
    """Construction failures."""

    def test_zero_minimum_length(self):
        with pytest.raises(PreconditionViolation):
            build_match_table("ACGT", "ACGT", 0)

    def test_minimum_length_longer_than_reference(self):
        with pytest.raises(PreconditionViolation, match="reference"):
            build_match_table("ACG", "ACGTACGT", 4)

    def test_minimum_length_longer_than_query(self):
        with pytest.raises(PreconditionViolation, match="query"):
            build_match_table("ACGTACGT", "ACG", 4)

    def test_precondition_is_value_error(self):
        with pytest.raises(ValueError):
            build_match_table("A", "A", 2)


class TestQueryApi:
    """Tests for the MatchTable accessors."""

    def test_sequence_length_equals_minimum_length(self):
        table = build_match_table("ACGT", "AAAAAAAA", 4)
        assert table.reference_kmer_count == 1
        # ACGT is its own reverse complement
        assert table.has_reference_reference_match(0, 0)
        with pytest.raises(IndexOutOfRange):
            table.has_reference_reference_match(1, 0)
        with pytest.raises(IndexOutOfRange):
            table.has_reference_query_match(0, 5)

    @pytest.mark.parametrize("accessor, args", [
        ("has_reference_reference_match", (10, 0)),
        ("has_reference_reference_match", (0, 10)),
        ("has_reference_query_match", (0, 5)),
        ("has_query_reference_match", (5, 0)),
        ("has_query_reference_match", (0, 10)),
        ("has_query_query_match", (0, 5)),
        ("has_query_query_match", (-1, 0)),
    ])
    def test_out_of_range(self, accessor, args):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4)
        with pytest.raises(IndexOutOfRange):
            getattr(table, accessor)(*args)

    def test_last_valid_indices(self):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4)
        assert not table.has_reference_query_match(9, 4)
        assert not table.has_query_reference_match(4, 9)

    def test_immutable(self):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4)
        with pytest.raises(AttributeError):
            table.reference_kmer_count = 3
        with pytest.raises(AttributeError):
            table.extra = 1
        assert not table._reference_reference.bits.flags.writeable

    def test_built_relations_reject_writes(self):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4)
        for relation in RELATIONS:
            with pytest.raises(ValueError, match="frozen"):
                getattr(table, f"_{relation}").set_addresses(np.array([0, 3]))
        assert table_entries(table, "reference_reference") == {(1, 2), (7, 8)}
        assert not table.has_reference_query_match(0, 3)

    def test_relation_entries_match_accessors(self):
        rng = random.Random(3)
        reference = "".join(rng.choice("ACGT") for _ in range(30))
        query = "".join(rng.choice("ACGT") for _ in range(20))
        table = build_match_table(reference, query, 2)
        for relation in RELATIONS:
            primary, secondary = relation_entries(table, relation)
            pairs = list(zip(primary.tolist(), secondary.tolist()))
            assert pairs == sorted(pairs)
            assert set(pairs) == table_entries(table, relation)

    def test_match_count(self):
        table = build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4)
        assert table.match_count() == 2
        assert table.minimum_length == 4


class TestCancellation:
    """Tests for the cancellation flag."""

    def test_cancel_immediately(self):
        with pytest.raises(BuildCancelled):
            build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4, should_cancel=lambda: True)

    def test_cancel_after_some_offsets(self):
        calls = []

        def should_cancel():
            calls.append(1)
            return len(calls) > 3

        with pytest.raises(BuildCancelled):
            build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4, should_cancel=should_cancel)
        assert len(calls) == 4

    def test_cancel_parallel_build(self):
        with pytest.raises(BuildCancelled):
            build_match_table("AGGGGAACCCCAA", "AAAAAAAA", 4, processes=2, should_cancel=lambda: True)

    def test_never_cancelled(self):
        table = build_match_table("AGGGGAA", "AACCCCA", 4, should_cancel=lambda: False)
        assert table.has_reference_query_match(1, 1)
