# index/fm_index.py
from collections import defaultdict
from typing import Dict, List, Tuple

import numpy as np

from .exact_index import AExactIndex, empty_positions
from .suffix_array import build_suffix_array

SENTINEL = "\x00"


class FMIndex(AExactIndex):
    """
    Plain FM-index (SA + BWT + C + Occ checkpoints).
    The text is terminated with a NUL sentinel, which must not occur in it.
    """
    def __init__(self, s: str, step: int = 128):
        if SENTINEL in s:
            raise ValueError("Text must not contain the NUL sentinel")
        self.s = s + SENTINEL
        self.n = len(self.s)
        self.sa = build_suffix_array(self.s)
        self.sa.flags.writeable = False
        self.bwt = self._bwt_from_sa(self.s, self.sa)
        self.alphabet = sorted(set(self.bwt))
        self.C = self._build_C(self.bwt)
        self.occ_chk, self.step = self._build_occ(self.bwt, self.alphabet, step)

    @classmethod
    def build(cls, text: str) -> 'FMIndex':
        return cls(text)

    @staticmethod
    def _bwt_from_sa(s: str, sa: np.ndarray) -> str:
        # s[p - 1] wraps around to the sentinel for p == 0
        return "".join(s[p - 1] for p in sa.tolist())

    @staticmethod
    def _build_C(bwt: str) -> Dict[str, int]:
        counts = defaultdict(int)
        for ch in bwt:
            counts[ch] += 1
        total = 0
        C = {}
        for ch in sorted(counts):
            C[ch] = total
            total += counts[ch]
        return C

    @staticmethod
    def _build_occ(bwt: str, alphabet: List[str], step: int):
        n = len(bwt)
        chk = {ch: [0] * ((n + step - 1) // step + 1) for ch in alphabet}
        run = {ch: 0 for ch in alphabet}
        for i, ch in enumerate(bwt):
            if i % step == 0:
                bi = i // step
                for a in alphabet:
                    chk[a][bi] = run[a]
            run[ch] += 1
        if n % step == 0:
            bi = n // step
            for a in alphabet:
                chk[a][bi] = run[a]
        return chk, step

    def _occ(self, ch: str, i: int) -> int:
        """Number of occurrences of ch in bwt[:i]."""
        if i <= 0:
            return 0
        block = i // self.step
        base = self.occ_chk[ch][block]
        start = block * self.step
        return base + self.bwt.count(ch, start, i)

    def search(self, pat: str) -> Tuple[int, int]:
        if not pat:
            return (0, self.n - 1)
        l, r = 0, self.n - 1
        for ch in reversed(pat):
            if ch not in self.C:
                return (1, 0)
            l = self.C[ch] + self._occ(ch, l)
            r = self.C[ch] + self._occ(ch, r + 1) - 1
            if l > r:
                return (1, 0)
        return (l, r)

    def locate(self, l: int, r: int) -> np.ndarray:
        if l > r:
            return empty_positions()
        return self.sa[l:r + 1]

    def positions(self, pattern: str) -> np.ndarray:
        if not pattern or len(pattern) > self.n - 1 or SENTINEL in pattern:
            return empty_positions()
        return self.locate(*self.search(pattern))
