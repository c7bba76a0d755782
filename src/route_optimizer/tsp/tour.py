from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Tour:
    path: Tuple[int, ...] = ()  # vertex order, cyclic, start not repeated
    cost: int = 0
    improvements: int = 0
    passes: int = 0
    runtime: float = 0.0

    @classmethod
    def empty(cls) -> 'Tour':
        """The "no solution" tour."""
        return cls()

    def __len__(self) -> int:
        return len(self.path)

    def closed_path(self) -> List[int]:
        if not self.path:
            return []
        return list(self.path) + [self.path[0]]

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d['path'] = list(self.path)
        return d


def tour_cost(path: Sequence[int], cost) -> int:
    """Sum of edge costs around the cycle (last vertex back to the first)."""
    if len(path) == 0:
        return 0
    dist = np.asarray(cost)
    order = np.asarray(path, dtype=np.int64)
    return int(dist[order, np.roll(order, -1)].sum())
