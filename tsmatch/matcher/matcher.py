from abc import ABC, abstractmethod
from typing import IO, Optional
import io

from ..models.matchTable import MatchTableInput, MatchTableOutput
from ..models.matches import MatchWriter
from ..fasta_parser.parser import Parser
from ..seed.match_builder import build_match_table
from ..table.match_table import MatchTable
from ..tracing import Tracer


class ATemplateSwitchMatcher(ABC):
    @abstractmethod
    def computeMatches(self, inputData: MatchTableInput) -> MatchTableOutput:
        pass


def _as_text(handle: IO) -> IO:
    # uploads arrive as binary file objects
    if isinstance(handle, io.TextIOBase):
        return handle
    return io.StringIO(handle.read().decode("utf-8"))


class TemplateSwitchMatcher(ATemplateSwitchMatcher):
    def __init__(self, tracer: Optional[Tracer] = None):
        self.tracer = tracer

    def computeMatches(self, inputData: MatchTableInput) -> MatchTableOutput:
        referenceName, reference = Parser(_as_text(inputData.referenceGenome)).parseRecord()
        queryName, query = Parser(_as_text(inputData.queryGenome)).parseRecord()

        matchTable : MatchTable = build_match_table(
            reference,
            query,
            inputData.minimumLength,
            index_backend=inputData.indexBackend,
            tracer=self.tracer,
            processes=inputData.numProcesses,
        )

        if inputData.outputLocation:
            with open(inputData.outputLocation, "w") as outputFile:
                writer = MatchWriter(referenceName, queryName, inputData.minimumLength, outputFile)
                numberOfMatches = writer.WriteMatchTable(matchTable)
        else:
            numberOfMatches = matchTable.match_count()

        return MatchTableOutput(
            matchTable=matchTable,
            referenceName=referenceName,
            queryName=queryName,
            numberOfMatches=numberOfMatches,
        )
