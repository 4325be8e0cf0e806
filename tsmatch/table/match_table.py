from ..errors import IndexOutOfRange
from .relation import MatchRelation


class MatchTable:
    """
    All error-free template switch inner entry points for a pair of
    genome strings.

    Each relation answers whether the k-mer starting at a primary index in
    the forward primary sequence equals the k-mer starting at a secondary
    index in the reverse complement of the secondary sequence. The table
    cannot be modified after construction.
    """
    __slots__ = (
        "_reference_kmer_count",
        "_query_kmer_count",
        "_minimum_length",
        "_reference_reference",
        "_reference_query",
        "_query_reference",
        "_query_query",
    )

    def __init__(self,
                 reference_kmer_count: int,
                 query_kmer_count: int,
                 minimum_length: int,
                 reference_reference: MatchRelation,
                 reference_query: MatchRelation,
                 query_reference: MatchRelation,
                 query_query: MatchRelation):
        object.__setattr__(self, "_reference_kmer_count", reference_kmer_count)
        object.__setattr__(self, "_query_kmer_count", query_kmer_count)
        object.__setattr__(self, "_minimum_length", minimum_length)
        object.__setattr__(self, "_reference_reference", reference_reference.freeze())
        object.__setattr__(self, "_reference_query", reference_query.freeze())
        object.__setattr__(self, "_query_reference", query_reference.freeze())
        object.__setattr__(self, "_query_query", query_query.freeze())

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def new(cls, reference, query, minimum_length: int, **options) -> 'MatchTable':
        """
        Compute all error-free template switch inner entry points.

        Shorthand for tsmatch.seed.match_builder.build_match_table, see
        there for the accepted options.
        """
        from ..seed.match_builder import build_match_table
        return build_match_table(reference, query, minimum_length, **options)

    @property
    def reference_kmer_count(self) -> int:
        return self._reference_kmer_count

    @property
    def query_kmer_count(self) -> int:
        return self._query_kmer_count

    @property
    def minimum_length(self) -> int:
        return self._minimum_length

    @staticmethod
    def _check(name: str, index: int, bound: int) -> None:
        if not 0 <= index < bound:
            raise IndexOutOfRange(name, index, bound)

    def has_reference_reference_match(self, primary_index: int, secondary_rc_index: int) -> bool:
        self._check("reference", primary_index, self._reference_kmer_count)
        self._check("reference rc", secondary_rc_index, self._reference_kmer_count)
        return self._reference_reference.get(primary_index, secondary_rc_index)

    def has_reference_query_match(self, reference_index: int, query_rc_index: int) -> bool:
        self._check("reference", reference_index, self._reference_kmer_count)
        self._check("query rc", query_rc_index, self._query_kmer_count)
        return self._reference_query.get(reference_index, query_rc_index)

    def has_query_reference_match(self, query_index: int, reference_rc_index: int) -> bool:
        self._check("query", query_index, self._query_kmer_count)
        self._check("reference rc", reference_rc_index, self._reference_kmer_count)
        return self._query_reference.get(query_index, reference_rc_index)

    def has_query_query_match(self, primary_index: int, secondary_rc_index: int) -> bool:
        self._check("query", primary_index, self._query_kmer_count)
        self._check("query rc", secondary_rc_index, self._query_kmer_count)
        return self._query_query.get(primary_index, secondary_rc_index)

    def match_count(self) -> int:
        """Total number of true entries over all four relations."""
        return (self._reference_reference.count() + self._reference_query.count()
                + self._query_reference.count() + self._query_query.count())

    def __repr__(self) -> str:
        return (f"MatchTable(reference_kmer_count={self._reference_kmer_count}, "
                f"query_kmer_count={self._query_kmer_count}, "
                f"minimum_length={self._minimum_length})")


def relation_entries(table: MatchTable, relation: str):
    """
    (primary indices, secondary rc indices) of every true entry of one
    relation, e.g. "reference_query". For writers inside the package;
    MatchTable itself only offers point lookups.
    """
    return getattr(table, f"_{relation}").entries()
