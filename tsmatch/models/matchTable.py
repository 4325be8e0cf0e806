from dataclasses import dataclass
from typing import IO, Optional

from ..constants.constants import INDEXBACKEND, MINIMUMLENGTH, NUMPROCESSES
from ..table.match_table import MatchTable


@dataclass
class MatchTableInput:
    # required fields
    referenceGenome: IO
    queryGenome: IO

    # optional fields
    outputLocation: Optional[str] = None
    minimumLength: int = MINIMUMLENGTH
    indexBackend: str = INDEXBACKEND
    numProcesses: int = NUMPROCESSES


@dataclass
class MatchTableOutput:
    matchTable: MatchTable
    referenceName: str = ""
    queryName: str = ""
    numberOfMatches: int = -1
