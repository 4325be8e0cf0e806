from fastapi import FastAPI, Form, HTTPException, UploadFile
from pydantic import BaseModel
from typing import Annotated, Dict, List

from ..constants.constants import INDEXBACKEND, MINIMUMLENGTH
from ..matcher.matcher import ATemplateSwitchMatcher, TemplateSwitchMatcher
from ..models.matchTable import MatchTableInput, MatchTableOutput
from ..models.matches import collect_matches
from ..tracing import LoggingTracer


class MatchTableApiOutput(BaseModel):
    referenceName: str
    queryName: str
    referenceKmerCount: int
    queryKmerCount: int
    minimumLength: int
    numberOfMatches: int
    # relation name -> [primary index, secondary rc index] pairs
    matches: Dict[str, List[List[int]]]


app = FastAPI()
matcher : ATemplateSwitchMatcher = TemplateSwitchMatcher(tracer=LoggingTracer())


@app.get("/")
async def root():
    return {"message": "Template switch match table service"}


@app.post("/matches/computeMatches", response_model=MatchTableApiOutput)
def computeMatches(
    reference: UploadFile,
    query: UploadFile,
    minimumLength: Annotated[int, Form()] = MINIMUMLENGTH,
    indexBackend: Annotated[str, Form()] = INDEXBACKEND,
    ):
    matchTableInput = MatchTableInput(
        referenceGenome = reference.file,
        queryGenome     = query.file,
        minimumLength   = minimumLength,
        indexBackend    = indexBackend,
    )

    try:
        output : MatchTableOutput = matcher.computeMatches(matchTableInput)
    except ValueError as e:
        # PreconditionViolation, SequenceError and unknown index backends
        raise HTTPException(status_code=422, detail=str(e))

    table = output.matchTable
    return MatchTableApiOutput(
        referenceName=output.referenceName,
        queryName=output.queryName,
        referenceKmerCount=table.reference_kmer_count,
        queryKmerCount=table.query_kmer_count,
        minimumLength=table.minimum_length,
        numberOfMatches=output.numberOfMatches,
        matches=collect_matches(table),
    )
