"""Sparse vector returned by the encoder"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class SparseVector:
    """
    Non-zero dimensions of a hashed-term vector.

    indices[i] is a term id (unsigned 32-bit), values[i] its weight. Indices
    are unique and keep the first-occurrence order of the source text.
    """
    indices: Tuple[int, ...]
    values: Tuple[float, ...]

    def __post_init__(self):
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices and values must have equal length, got {len(self.indices)} and {len(self.values)}"
            )

    @classmethod
    def from_lists(cls, indices: Sequence[int], values: Sequence[float]) -> "SparseVector":
        return cls(indices=tuple(indices), values=tuple(values))

    def to_dict(self) -> Dict[str, List]:
        """Plain {"indices": [...], "values": [...]} for vector database upserts"""
        return {"indices": list(self.indices), "values": list(self.values)}

    def __len__(self) -> int:
        return len(self.indices)
