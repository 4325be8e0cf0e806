"""
Match matrix builder:
Computes all error-free template switch inner entry points for a pair of
genome strings and stores them in a MatchTable.
"""

from multiprocessing import Pool
from typing import Callable, Dict, Optional, Tuple, Type, Union

from ..constants.constants import BATCHESPERPROCESS, INDEXBACKEND, NUMPROCESSES
from ..errors import BuildCancelled, PreconditionViolation
from ..index import resolve_backend
from ..index.exact_index import AExactIndex
from ..models.sequence import SequenceLike, as_sequence_pair, linearize, reverse_complement
from ..parallelization.batch_kmers import _init_worker, make_batches, process_kmer_batch
from ..table.match_table import MatchTable
from ..table.relation import MatchRelation
from ..tracing import Phase, PhaseClock, Tracer
from .rc_seed import RcSeedExtractor

# primary index order used for the relation builders and the worker results
SOURCES = ("reference", "query")


def kmer_count(name: str, length: int, minimum_length: int) -> int:
    if length < minimum_length:
        raise PreconditionViolation(
            f"minimum_length {minimum_length} exceeds the {name} length {length}"
        )
    return length - minimum_length + 1


def _fill_sequential(relations: Dict[Tuple[str, str], MatchRelation],
                     rcStrings: Dict[str, str],
                     extractor: RcSeedExtractor,
                     kmerCounts: Dict[str, int],
                     should_cancel: Optional[Callable[[], bool]]) -> None:
    for secondary in SOURCES:
        addresses = extractor.seed(rcStrings[secondary], range(kmerCounts[secondary]), should_cancel)
        for primary, primary_addresses in zip(SOURCES, addresses):
            relations[(primary, secondary)].set_addresses(primary_addresses)


def _fill_parallel(relations: Dict[Tuple[str, str], MatchRelation],
                   rcStrings: Dict[str, str],
                   indexes: tuple,
                   minimum_length: int,
                   kmerCounts: Dict[str, int],
                   processes: int,
                   should_cancel: Optional[Callable[[], bool]]) -> None:
    batches = make_batches(kmerCounts, processes, BATCHESPERPROCESS)
    # workers only report addresses, every bit is written here
    with Pool(
        processes=processes,
        initializer=_init_worker,
        initargs=(indexes, rcStrings, minimum_length),
        ) as pool:
        for secondary, addresses in pool.imap_unordered(process_kmer_batch, batches):
            if should_cancel is not None and should_cancel():
                raise BuildCancelled("Cancelled between batches")
            for primary, primary_addresses in zip(SOURCES, addresses):
                relations[(primary, secondary)].set_addresses(primary_addresses)


def build_match_table(reference: SequenceLike,
                      query: SequenceLike,
                      minimum_length: int,
                      index_backend: Union[str, Type[AExactIndex]] = INDEXBACKEND,
                      tracer: Optional[Tracer] = None,
                      processes: int = NUMPROCESSES,
                      should_cancel: Optional[Callable[[], bool]] = None) -> MatchTable:
    """
    Compute all error-free template switch inner entry points.

    Bit (p, s) of relation (X, Y) is set iff the k-mer of length
    minimum_length at offset p of X equals the k-mer at offset s of the
    reverse complement of Y.

    Args:
    reference, query: GenomeSequence or plain string, a plain string takes the other alphabet (DNA by default)
    minimum_length: k-mer length, at least 1 and at most the length of both sequences
    index_backend: key of tsmatch.index.INDEX_BACKENDS or an AExactIndex subclass
    tracer: called with a PhaseEvent after linearization, indexing and building
    processes: worker processes, 1 builds in the calling process
    should_cancel: polled between outer loop iterations, raises BuildCancelled when true

    Raises:
    PreconditionViolation: minimum_length < 1 or longer than one of the sequences
    SequenceError: reference and query use different alphabets
    """
    if minimum_length < 1:
        raise PreconditionViolation(f"minimum_length must be at least 1, got {minimum_length}")
    if processes < 1:
        raise ValueError(f"processes must be at least 1, got {processes}")
    clock = PhaseClock(tracer)

    reference, query = as_sequence_pair(reference, query)
    referenceString : str = linearize(reference)
    queryString : str = linearize(query)
    rcStrings : Dict[str, str] = {
        "reference": reverse_complement(reference),
        "query": reverse_complement(query),
    }
    kmerCounts : Dict[str, int] = {
        "reference": kmer_count("reference", len(referenceString), minimum_length),
        "query": kmer_count("query", len(queryString), minimum_length),
    }
    clock.reference_length = len(referenceString)
    clock.query_length = len(queryString)
    clock.fire(Phase.LINEARIZED)

    backend = resolve_backend(index_backend)
    indexes = (backend.build(referenceString), backend.build(queryString))
    clock.fire(Phase.INDEXED, backend=backend.__name__)

    relations = {
        (primary, secondary): MatchRelation(kmerCounts[primary], kmerCounts[secondary])
        for primary in SOURCES
        for secondary in SOURCES
    }
    if processes == 1:
        extractor = RcSeedExtractor(indexes, minimum_length)
        _fill_sequential(relations, rcStrings, extractor, kmerCounts, should_cancel)
    else:
        _fill_parallel(relations, rcStrings, indexes, minimum_length, kmerCounts, processes, should_cancel)

    table = MatchTable(
        reference_kmer_count=kmerCounts["reference"],
        query_kmer_count=kmerCounts["query"],
        minimum_length=minimum_length,
        reference_reference=relations[("reference", "reference")],
        reference_query=relations[("reference", "query")],
        query_reference=relations[("query", "reference")],
        query_query=relations[("query", "query")],
    )
    clock.fire(Phase.BUILT, **kmerCounts)
    return table
