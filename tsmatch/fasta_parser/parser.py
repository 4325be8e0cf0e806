from typing import IO, Tuple

from ..errors import SequenceError
from ..models.sequence import Alphabet, DNA_ALPHABET, GenomeSequence


class Parser:
    """
    Reads a single-record FASTA file.

    The first line is the header, its first word without '>' is the name;
    all remaining lines are joined into the sequence.
    """
    def __init__(self, fastaFile: IO, alphabet: Alphabet = DNA_ALPHABET):
        self.fastaFile = fastaFile
        self.alphabet = alphabet

    def parseRecord(self) -> Tuple[str, GenomeSequence]:
        headerLine = self.fastaFile.readline().strip('\r\n')
        if not headerLine.startswith('>'):
            raise SequenceError("FASTA input must start with a '>' header line")
        words = headerLine[1:].split()
        name = words[0] if words else ""

        bases = "".join(line.strip() for line in self.fastaFile)
        if not bases:
            raise SequenceError(f"FASTA record {name!r} has no sequence")
        return name, GenomeSequence.from_str(bases, self.alphabet)
