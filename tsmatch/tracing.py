import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("tsmatch")


class Phase(Enum):
    """Phase boundaries of match table construction."""
    LINEARIZED = "linearized"
    INDEXED = "indexed"
    BUILT = "built"


@dataclass
class PhaseEvent:
    phase: Phase
    elapsed: float                  # seconds since construction started
    reference_length: int
    query_length: int
    details: Dict[str, Any] = field(default_factory=dict)


Tracer = Callable[[PhaseEvent], None]


class PhaseClock:
    """Fires PhaseEvents at phase boundaries, timed from creation."""
    def __init__(self, tracer: Optional[Tracer], reference_length: int = 0, query_length: int = 0):
        self.tracer = tracer
        self.start = time.perf_counter()
        self.reference_length = reference_length
        self.query_length = query_length

    def fire(self, phase: Phase, **details) -> None:
        if self.tracer is None:
            return
        self.tracer(PhaseEvent(
            phase=phase,
            elapsed=time.perf_counter() - self.start,
            reference_length=self.reference_length,
            query_length=self.query_length,
            details=details,
        ))


class LoggingTracer:
    """Tracer that writes every phase event to a logger at DEBUG level."""
    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def __call__(self, event: PhaseEvent) -> None:
        self.log.debug(
            "%s after %.4fs (reference=%d, query=%d) %s",
            event.phase.value, event.elapsed,
            event.reference_length, event.query_length, event.details,
        )
