from abc import ABC, abstractmethod

import numpy as np


class AExactIndex(ABC):
    """
    Full-text index over one string answering exact substring queries.

    Built once per text and queried many times. Implementations must be
    immutable after build so they can be shared with worker processes.
    """

    @classmethod
    @abstractmethod
    def build(cls, text: str) -> 'AExactIndex':
        pass

    @abstractmethod
    def positions(self, pattern: str) -> np.ndarray:
        """
        Return the starting offsets of every exact occurrence of pattern.

        The order of the offsets is unspecified. An empty pattern, or one
        longer than the text, yields an empty array. The returned array must
        not be written to.
        """
        pass


def empty_positions() -> np.ndarray:
    return np.empty(0, dtype=np.int64)
