from .sequence import (
    Alphabet,
    DNA_ALPHABET,
    DNA_N_ALPHABET,
    RNA_ALPHABET,
    GenomeSequence,
    as_genome_sequence,
    as_sequence_pair,
    linearize,
    reverse_complement,
)
