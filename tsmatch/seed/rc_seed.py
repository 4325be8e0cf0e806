from typing import Callable, List, Optional, Sequence

import numpy as np

from ..errors import BuildCancelled
from ..index.exact_index import AExactIndex


class RcSeedExtractor:
    """
    Exact k-mer seeding of a reverse complement against forward indexes.

    seed(secondary_rc, offsets) -> one array of flat relation addresses
    (primary_pos * secondary_count + rc_offset) per index.
    """
    def __init__(self, indexes: Sequence[AExactIndex], k: int):
        self.indexes = indexes
        self.k = k

    def seed(self,
             secondary_rc: str,
             offsets: range,
             should_cancel: Optional[Callable[[], bool]] = None) -> List[np.ndarray]:
        # one secondary dimension shared by every relation fed from this rc
        secondary_count = len(secondary_rc) - self.k + 1
        hits: List[List[np.ndarray]] = [[] for _ in self.indexes]

        for j in offsets:
            if should_cancel is not None and should_cancel():
                raise BuildCancelled(f"Cancelled at reverse complement offset {j}")
            kmer = secondary_rc[j:j + self.k]
            for out, index in zip(hits, self.indexes):
                positions = index.positions(kmer)
                if positions.size:
                    out.append(positions * secondary_count + j)

        return [
            np.concatenate(h) if h else np.empty(0, dtype=np.int64)
            for h in hits
        ]
