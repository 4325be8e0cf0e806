from typing import Dict, Type, Union

from .exact_index import AExactIndex
from .fm_index import FMIndex
from .kmer_index import KmerHashIndex
from .suffix_array import SuffixArrayIndex, build_suffix_array

INDEX_BACKENDS: Dict[str, Type[AExactIndex]] = {
    "suffix": SuffixArrayIndex,
    "fm": FMIndex,
    "kmer": KmerHashIndex,
}


def resolve_backend(backend: Union[str, Type[AExactIndex]]) -> Type[AExactIndex]:
    if isinstance(backend, str):
        try:
            return INDEX_BACKENDS[backend]
        except KeyError:
            raise ValueError(
                f"Unknown index backend {backend!r}, expected one of {sorted(INDEX_BACKENDS)}"
            ) from None
    return backend
