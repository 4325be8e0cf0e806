from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple, Union

from ..errors import SequenceError


@dataclass(frozen=True)
class Alphabet:
    """
    A fixed set of characters together with their complement.

    The complement map must be total over the characters and involutive,
    e.g. A <-> T and C <-> G for DNA.
    """
    name: str
    complement: Dict[str, str] = field(hash=False)

    def __post_init__(self):
        for c, comp in self.complement.items():
            if len(c) != 1:
                raise SequenceError(f"Alphabet {self.name}: symbol {c!r} is not a single character")
            if comp not in self.complement:
                raise SequenceError(f"Alphabet {self.name}: complement of {c!r} is not in the alphabet")
            if self.complement[comp] != c:
                raise SequenceError(f"Alphabet {self.name}: complement of {c!r} is not involutive")


DNA_ALPHABET = Alphabet("DNA", {'A': 'T', 'T': 'A', 'C': 'G', 'G': 'C'})
DNA_N_ALPHABET = Alphabet("DNA_N", {'A': 'T', 'T': 'A', 'C': 'G', 'G': 'C', 'N': 'N'})
RNA_ALPHABET = Alphabet("RNA", {'A': 'U', 'U': 'A', 'C': 'G', 'G': 'C'})


@dataclass(frozen=True)
class GenomeSequence:
    """
    Immutable sequence of symbols over one alphabet.

    Attributes:
        bases: one character per symbol
        alphabet: the alphabet all bases belong to
    """
    bases: str
    alphabet: Alphabet = DNA_ALPHABET

    def __post_init__(self):
        for i, c in enumerate(self.bases):
            if c not in self.alphabet.complement:
                raise SequenceError(f"Invalid base {c!r} at position {i} for alphabet {self.alphabet.name}")

    @classmethod
    def from_str(cls, bases: str, alphabet: Alphabet = DNA_ALPHABET) -> 'GenomeSequence':
        """
        Create a sequence from bases in any case.

        Raises:
            SequenceError: if a base is not part of the alphabet
        """
        return cls(bases=bases.upper(), alphabet=alphabet)

    def __len__(self) -> int:
        return len(self.bases)

    def reverse_complement_iter(self) -> Iterator[str]:
        comp = self.alphabet.complement
        for c in reversed(self.bases):
            yield comp[c]

    def as_string(self) -> str:
        return self.bases


SequenceLike = Union[str, GenomeSequence]


def as_genome_sequence(sequence: SequenceLike, alphabet: Alphabet = DNA_ALPHABET) -> GenomeSequence:
    if isinstance(sequence, GenomeSequence):
        return sequence
    return GenomeSequence.from_str(sequence, alphabet)


def as_sequence_pair(reference: SequenceLike, query: SequenceLike) -> Tuple[GenomeSequence, GenomeSequence]:
    """
    Coerce reference and query onto one alphabet.

    A plain string takes the alphabet of the other input, or DNA when both
    are strings.

    Raises:
        SequenceError: if the two sequences use different alphabets
    """
    alphabet = DNA_ALPHABET
    for sequence in (reference, query):
        if isinstance(sequence, GenomeSequence):
            alphabet = sequence.alphabet
            break
    reference = as_genome_sequence(reference, alphabet)
    query = as_genome_sequence(query, alphabet)
    if reference.alphabet != query.alphabet:
        raise SequenceError(
            f"Reference alphabet {reference.alphabet.name} differs from query alphabet {query.alphabet.name}"
        )
    return reference, query


def linearize(sequence: SequenceLike) -> str:
    """Render a sequence into a string where character equality is symbol equality."""
    return as_genome_sequence(sequence).as_string()


def reverse_complement(sequence: SequenceLike) -> str:
    """
    Reverse the symbol order and replace every symbol by its complement.

    Args:
    sequence: a GenomeSequence, or a plain DNA string

    Returns:
    Reverse complement string
    """
    return "".join(as_genome_sequence(sequence).reverse_complement_iter())
