"""
tsmatch - exact template switch inner seeds

Computes, for a reference and a query sequence, every pair of positions
where a k-mer of one sequence equals a k-mer of the reverse complement of
either sequence.
"""

from .errors import (
    BuildCancelled,
    IndexOutOfRange,
    MatchTableError,
    PreconditionViolation,
    SequenceError,
)
from .index import INDEX_BACKENDS, AExactIndex, FMIndex, KmerHashIndex, SuffixArrayIndex
from .models.sequence import (
    Alphabet,
    DNA_ALPHABET,
    DNA_N_ALPHABET,
    RNA_ALPHABET,
    GenomeSequence,
    linearize,
    reverse_complement,
)
from .seed.match_builder import build_match_table
from .table.match_table import MatchTable
from .tracing import LoggingTracer, Phase, PhaseEvent

__version__ = "0.1.0"
