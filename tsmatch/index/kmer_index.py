from typing import Dict, List

import numpy as np

from ..hashing.hash import Hash
from .exact_index import AExactIndex, empty_positions


class KmerHashIndex(AExactIndex):
    """
    Hashed k-mer table for small alphabets.

    One table per queried pattern length is built on first use with a
    rolling hash, so repeated length-L queries cost one hash plus a dict
    lookup. Hits are confirmed against the text, a hash collision never
    yields a false position.
    """
    def __init__(self, text: str):
        self.text = text
        self.encode = {c: i for i, c in enumerate(sorted(set(text)))}
        self.tables: Dict[int, Dict[int, List[int]]] = {}

    @classmethod
    def build(cls, text: str) -> 'KmerHashIndex':
        return cls(text)

    def _build_table(self, k: int) -> Dict[int, List[int]]:
        hasher = Hash(k, self.encode)
        seq = self.text
        table: Dict[int, List[int]] = {}

        current_hash = hasher.hash_sequence(seq[:k])
        table.setdefault(current_hash, []).append(0)
        for i in range(1, len(seq) - k + 1):
            current_hash = hasher.update(current_hash, seq[i-1], seq[i+k-1])
            table.setdefault(current_hash, []).append(i)
        return table

    def positions(self, pattern: str) -> np.ndarray:
        k = len(pattern)
        if k == 0 or k > len(self.text):
            return empty_positions()
        if any(c not in self.encode for c in pattern):
            return empty_positions()

        table = self.tables.get(k)
        if table is None:
            table = self._build_table(k)
            self.tables[k] = table

        hits = table.get(Hash(k, self.encode).hash_sequence(pattern), [])
        return np.array([p for p in hits if self.text[p:p + k] == pattern], dtype=np.int64)
