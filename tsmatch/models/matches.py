from typing import IO, Iterator, Tuple

from ..table.match_table import MatchTable, relation_entries

RELATIONS = ("reference_reference", "reference_query", "query_reference", "query_query")


def iter_matches(table: MatchTable, relation: str) -> Iterator[Tuple[int, int]]:
    """Enumerate the true entries of one relation, ordered by primary then secondary index."""
    primary, secondary = relation_entries(table, relation)
    return zip(primary.tolist(), secondary.tolist())


def collect_matches(table: MatchTable) -> dict:
    return {relation: [list(m) for m in iter_matches(table, relation)] for relation in RELATIONS}


class MatchWriter:
    """
    A simple writer for match table TSV files.

    One header line, then one line per true entry:
    relation, primary index, secondary (reverse complement) index.
    """
    def __init__(self, referenceName: str, queryName: str, minimumLength: int, outputFile: IO):
        self.outputFile = outputFile
        self.outputFile.write(f"#reference={referenceName}\tquery={queryName}\tminimum_length={minimumLength}\n")

    def WriteMatchTable(self, table: MatchTable) -> int:
        """Write every true entry of the four relations, returns the number of lines written."""
        written = 0
        for relation in RELATIONS:
            for p, s in iter_matches(table, relation):
                self.outputFile.write(f"{relation}\t{p}\t{s}\n")
                written += 1
        return written
