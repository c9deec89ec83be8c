from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist


class SubsetData(ABC):
    """
    Interface for the data behind a subset selection problem.
    Every selectable item is identified by a unique integer ID.
    """

    @abstractmethod
    def get_ids(self) -> FrozenSet[int]:
        """Returns the IDs of all items from which a subset can be selected."""
        pass


class IdData(SubsetData):
    """Plain universe of item IDs, without any attached data."""

    def __init__(self, ids: Iterable[int]):
        ids = [int(i) for i in ids]
        self._ids = frozenset(ids)
        if len(self._ids) != len(ids):
            raise ValueError("Item IDs should be unique.")

    def get_ids(self) -> FrozenSet[int]:
        return self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"IdData(num_ids={len(self._ids)})"


class DistanceData(SubsetData):

    def __init__(self, ids: Sequence[int], distances):
        """
        Item universe with a symmetric distance matrix.

        ids: IDs of the items; row/column `i` of the matrix belongs to `ids[i]`.
        distances: square matrix of non-negative pairwise distances.
        """
        self.ids = [int(i) for i in ids]
        self._ids = frozenset(self.ids)
        if len(self._ids) != len(self.ids):
            raise ValueError("Item IDs should be unique.")

        self.distances = np.asarray(distances, dtype=float)
        n = len(self.ids)
        if self.distances.shape != (n, n):
            raise ValueError(f"Distance matrix should have shape ({n}, {n}), got {self.distances.shape}.")
        if np.any(self.distances < 0):
            raise ValueError("Distances should be non-negative.")
        if not np.allclose(self.distances, self.distances.T):
            raise ValueError("Distance matrix should be symmetric.")

        self._perform_precomputations()

    def _perform_precomputations(self):
        # ID -> row/column index in the distance matrix
        self._index: Dict[int, int] = {item_id: idx for idx, item_id in enumerate(self.ids)}

    @classmethod
    def from_coordinates(cls, coordinates, ids: Optional[Sequence[int]] = None) -> "DistanceData":
        """Builds the distance matrix from point coordinates (euclidean distance)."""
        coordinates = np.asarray(coordinates, dtype=float)
        if coordinates.ndim != 2:
            raise ValueError("Coordinates should be a 2D array with one row per item.")
        if ids is None:
            ids = range(len(coordinates))
        return cls(list(ids), cdist(coordinates, coordinates))

    def get_ids(self) -> FrozenSet[int]:
        return self._ids

    def index_of(self, item_id: int) -> int:
        return self._index[item_id]

    def get_distance(self, id1: int, id2: int) -> float:
        """Returns the distance between the items with the given IDs."""
        return float(self.distances[self._index[id1], self._index[id2]])

    def submatrix(self, item_ids: Iterable[int]) -> np.ndarray:
        """Returns the distances among the given items, in iteration order."""
        idx = [self._index[i] for i in item_ids]
        return self.distances[np.ix_(idx, idx)]

    def __len__(self) -> int:
        return len(self.ids)

    def __repr__(self) -> str:
        return f"DistanceData(num_ids={len(self.ids)})"
