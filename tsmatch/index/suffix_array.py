import numpy as np

from .exact_index import AExactIndex, empty_positions


def build_suffix_array(s: str) -> np.ndarray:
    """
    Suffix array by prefix doubling.

    Each round sorts the suffixes by (rank[i], rank[i + k]) with numpy
    lexsort, so construction takes O(log n) sorts. Characters are compared
    by code point, the same order Python uses for str comparison.
    """
    n = len(s)
    if n == 0:
        return np.empty(0, dtype=np.int64)

    codes = np.frombuffer(s.encode("utf-32-le"), dtype=np.uint32)
    _, rank = np.unique(codes, return_inverse=True)
    rank = rank.reshape(-1).astype(np.int64)
    idx = np.arange(n, dtype=np.int64)
    k = 1
    while True:
        # secondary key is rank[i + k], or -1 past the end of the text
        ipk = idx + k
        key2 = np.full(n, -1, dtype=np.int64)
        inside = ipk < n
        key2[inside] = rank[ipk[inside]]
        sa = np.lexsort((key2, rank))

        r_sa = rank[sa]
        k_sa = key2[sa]
        change = np.zeros(n, dtype=np.int64)
        change[1:] = (r_sa[1:] != r_sa[:-1]) | (k_sa[1:] != k_sa[:-1])
        tmp = np.empty(n, dtype=np.int64)
        tmp[sa] = np.cumsum(change)
        rank = tmp
        if rank[sa[-1]] == n - 1:
            break
        k <<= 1
    return sa.astype(np.int64, copy=False)


class SuffixArrayIndex(AExactIndex):
    """
    Sorted suffix offsets, queried by binary search over the
    lexicographic range of the pattern: O(m log n) per query.
    """
    def __init__(self, text: str, suffix_array: np.ndarray):
        self.text = text
        self.n = len(text)
        self.sa = suffix_array
        self.sa.flags.writeable = False
        self._offsets = suffix_array.tolist()

    @classmethod
    def build(cls, text: str) -> 'SuffixArrayIndex':
        return cls(text, build_suffix_array(text))

    def _lower_bound(self, pat: str) -> int:
        m = len(pat)
        lo, hi = 0, self.n
        while lo < hi:
            mid = (lo + hi) // 2
            p = self._offsets[mid]
            if self.text[p:p + m] < pat:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def _upper_bound(self, pat: str, lo: int) -> int:
        m = len(pat)
        hi = self.n
        while lo < hi:
            mid = (lo + hi) // 2
            p = self._offsets[mid]
            if self.text[p:p + m] <= pat:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def search(self, pat: str):
        """Half-open range of suffix array rows whose suffix starts with pat."""
        l = self._lower_bound(pat)
        r = self._upper_bound(pat, l)
        return l, r

    def positions(self, pattern: str) -> np.ndarray:
        if not pattern or len(pattern) > self.n:
            return empty_positions()
        l, r = self.search(pattern)
        return self.sa[l:r]
