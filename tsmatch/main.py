"""
Main.py:
Handles the command line front end around match table construction
"""

import argparse
import os
import sys
import time

import psutil

from .constants.constants import INDEXBACKEND, MINIMUMLENGTH, NUMPROCESSES, OUTPUTLOCATION
from .errors import MatchTableError
from .index import INDEX_BACKENDS
from .matcher.matcher import TemplateSwitchMatcher
from .models.matchTable import MatchTableInput, MatchTableOutput
from .tracing import Phase, PhaseEvent


def get_memory_usage():
    """Get current memory usage in bytes using psutil"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss


class PhaseReporter:
    """Prints the elapsed time, and optionally the memory used, at every phase boundary."""
    def __init__(self, trackMemory: bool = False):
        self.trackMemory = trackMemory
        self.baselineMemory = get_memory_usage() if trackMemory else 0
        self.peakMemory = self.baselineMemory

    def __call__(self, event: PhaseEvent):
        print(f"The '{event.phase.value}' phase finished after {event.elapsed:.4f} seconds.")
        if self.trackMemory and event.phase in (Phase.INDEXED, Phase.BUILT):
            memory = get_memory_usage()
            self.peakMemory = max(self.peakMemory, memory)
            print(f"Memory used after '{event.phase.value}': {(memory - self.baselineMemory) / 10**6:.2f} MB")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Template switch inner match table')

    # Required arguments
    parser.add_argument('-r', '--reference', required=True, help='Reference genome FASTA file')
    parser.add_argument('-q', '--query', required=True, help='Query genome FASTA file')

    # Optional arguments
    parser.add_argument('-o', '--output', default=OUTPUTLOCATION, help='Output TSV file')
    parser.add_argument('-l', '--minimum-length', type=int, default=MINIMUMLENGTH, help='K-mer length of the inners')
    parser.add_argument('-i', '--index', choices=sorted(INDEX_BACKENDS), default=INDEXBACKEND, help='Exact substring index')
    parser.add_argument('-p', '--processes', type=int, default=NUMPROCESSES, help='Worker processes')
    parser.add_argument('-m', '--memory', action='store_true', help='Track memory usage')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    startTime = time.perf_counter()
    startCpuTime = time.process_time()

    reporter = PhaseReporter(trackMemory=args.memory)
    matcher = TemplateSwitchMatcher(tracer=reporter)

    outputFolder = os.path.dirname(args.output)
    if outputFolder:
        os.makedirs(outputFolder, exist_ok=True)

    with open(args.reference, "r") as referenceFile, open(args.query, "r") as queryFile:
        inputData = MatchTableInput(
            referenceGenome=referenceFile,
            queryGenome=queryFile,
            outputLocation=args.output,
            minimumLength=args.minimum_length,
            indexBackend=args.index,
            numProcesses=args.processes,
        )
        try:
            output : MatchTableOutput = matcher.computeMatches(inputData)
        except (MatchTableError, ValueError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    elapsedTime = time.perf_counter() - startTime
    elapsedCpuTime = time.process_time() - startCpuTime

    table = output.matchTable
    print(f"Reference k-mers: {table.reference_kmer_count}, query k-mers: {table.query_kmer_count}")
    print(f"Found {output.numberOfMatches} matches, written to {args.output}.")
    if args.memory:
        print(f"Peak memory (actual): {(reporter.peakMemory - reporter.baselineMemory) / 10**6:.2f} MB")
    print(f"The 'main' part took {elapsedTime:.4f} seconds to execute.")
    print(f"The 'main cpu' part took {elapsedCpuTime:.4f} seconds to execute.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
