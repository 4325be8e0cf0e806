from typing import Dict, List, Tuple

import numpy as np

from ..seed.rc_seed import RcSeedExtractor

_EXTRACTOR : RcSeedExtractor
_RC_STRINGS : Dict[str, str]


def _init_worker(indexes: tuple, rcStrings: Dict[str, str], minimumLength: int):
    global _EXTRACTOR, _RC_STRINGS

    _EXTRACTOR = RcSeedExtractor(indexes, minimumLength)
    _RC_STRINGS = rcStrings


def make_batches(kmerCounts: Dict[str, int], numProcesses: int, batchesPerProcess: int) -> List[Tuple[str, int, int]]:
    """Split the offsets of every reverse complement into (source, start, stop) batches."""
    batches = []
    for source, count in kmerCounts.items():
        batch_size = max(1, count // (numProcesses * batchesPerProcess))
        for start in range(0, count, batch_size):
            batches.append((source, start, min(count, start + batch_size)))
    return batches


def process_kmer_batch(args) -> Tuple[str, List[np.ndarray]]:
    """Seed one batch of reverse complement offsets in a worker process"""
    global _EXTRACTOR, _RC_STRINGS
    source, start, stop = args

    addresses = _EXTRACTOR.seed(_RC_STRINGS[source], range(start, stop))
    return source, addresses
