class MatchTableError(Exception):
    """Base class for every error raised by tsmatch."""
    pass


class PreconditionViolation(MatchTableError, ValueError):
    """Raised when a match table cannot be built for the given inputs."""
    pass


class IndexOutOfRange(MatchTableError, IndexError):
    """Raised when an accessor is called with an index outside its k-mer range."""
    def __init__(self, name: str, index: int, bound: int):
        self.name = name
        self.index = index
        self.bound = bound
        super().__init__(f"{name} index {index} out of range [0, {bound})")


class BuildCancelled(MatchTableError):
    """Raised when the cancellation flag was observed during construction."""
    pass


class SequenceError(MatchTableError, ValueError):
    """Raised for symbols outside an alphabet or malformed sequence input."""
    pass
