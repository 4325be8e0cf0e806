from typing import Dict


class Hash:
    """
    Polynomial rolling hash over k characters, modulo 2**64.

    Characters are encoded through `encode`; the base is the size of the
    encoding so distinct k-mers of up to 64 / log2(base) characters never
    collide.
    """
    def __init__(self, k: int, encode: Dict[str, int]):
        self.k = k
        self.encode = encode
        self.base = max(2, len(encode))
        self.mod = 2**64 - 1
        self.power = self.base**(k-1)

    def hash_sequence(self, s: str) -> int:
        h = 0
        for c in s:
            h = (h * self.base + self.encode.get(c, 0)) & self.mod
        return h

    def update(self, prev_hash: int, out_char: str, in_char: str) -> int:
        """
        Rolling hash update - removes leftmost character and adds rightmost character

        Args:
            prev_hash: The previous hash value
            out_char: Character leaving the window (leftmost)
            in_char: Character entering the window (rightmost)

        Returns:
            Updated hash value
        """
        out_val = self.encode.get(out_char, 0)
        in_val = self.encode.get(in_char, 0)

        # Remove contribution of outgoing character
        h = (prev_hash - out_val * self.power) & self.mod

        # Shift left and add incoming character
        h = (h * self.base + in_val) & self.mod

        return h
