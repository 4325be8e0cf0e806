import numpy as np


class MatchRelation:
    """
    Packed boolean matrix of shape primary_count x secondary_count.

    Bit (p, s) is stored at flat address p * secondary_count + s, least
    significant bit first inside each byte. The relation only grows
    (false -> true) while it is being built and is read-only once frozen.
    """
    def __init__(self, primary_count: int, secondary_count: int):
        self.primary_count = primary_count
        self.secondary_count = secondary_count
        self.bit_count = primary_count * secondary_count
        self.bits = np.zeros((self.bit_count + 7) // 8, dtype=np.uint8)
        self._frozen = False

    def address(self, primary_index: int, secondary_index: int) -> int:
        return primary_index * self.secondary_count + secondary_index

    def set_addresses(self, addresses: np.ndarray) -> None:
        """Set every bit whose flat address is listed; duplicates are fine."""
        if self._frozen:
            raise ValueError("MatchRelation is frozen")
        if addresses.size == 0:
            return
        addresses = addresses.astype(np.int64, copy=False)
        masks = np.left_shift(np.uint8(1), (addresses & 7).astype(np.uint8))
        np.bitwise_or.at(self.bits, addresses >> 3, masks)

    def freeze(self) -> 'MatchRelation':
        self._frozen = True
        self.bits.flags.writeable = False
        return self

    def get(self, primary_index: int, secondary_index: int) -> bool:
        a = self.address(primary_index, secondary_index)
        return bool((self.bits[a >> 3] >> (a & 7)) & 1)

    def count(self) -> int:
        """Number of true bits."""
        return int(np.unpackbits(self.bits, bitorder="little")[:self.bit_count].sum())

    def entries(self):
        """
        (primary indices, secondary indices) of every true bit, ordered by
        primary then secondary index.
        """
        flat = np.flatnonzero(np.unpackbits(self.bits, bitorder="little")[:self.bit_count])
        return np.divmod(flat, self.secondary_count)
