from bisect import bisect_left, insort
from heapq import merge
from typing import Iterable, Iterator, List, Optional


class IdSet:
    """
    Set of item IDs that either keeps insertion order or keeps its IDs sorted.
    Membership tests are O(1) in both modes.
    """

    def __init__(self, ids: Iterable[int] = (), sorted_ids: bool = False):
        self.sorted_ids = sorted_ids
        ids = list(ids)
        self._members = set(ids)
        # insertion ordered dict, or sorted list when sorted_ids is set
        self._order = sorted(self._members) if sorted_ids else dict.fromkeys(ids)

    def add(self, item_id: int) -> bool:
        if item_id in self._members:
            return False
        self._members.add(item_id)
        if self.sorted_ids:
            insort(self._order, item_id)
        else:
            self._order[item_id] = None
        return True

    def discard(self, item_id: int) -> bool:
        if item_id not in self._members:
            return False
        self._members.remove(item_id)
        if self.sorted_ids:
            del self._order[bisect_left(self._order, item_id)]
        else:
            del self._order[item_id]
        return True

    def update(self, ids: Iterable[int]) -> List[int]:
        """Adds all given IDs at once. Returns the IDs that were not yet present."""
        added = [i for i in dict.fromkeys(ids) if i not in self._members]
        self._members.update(added)
        if self.sorted_ids:
            self._order = list(merge(self._order, sorted(added)))
        else:
            self._order.update(dict.fromkeys(added))
        return added

    def difference_update(self, ids: Iterable[int]) -> List[int]:
        """Removes all given IDs at once. Returns the IDs that were actually present."""
        removed = [i for i in dict.fromkeys(ids) if i in self._members]
        self._members.difference_update(removed)
        if self.sorted_ids:
            self._order = [i for i in self._order if i in self._members]
        else:
            for i in removed:
                del self._order[i]
        return removed

    def __contains__(self, item_id) -> bool:
        return item_id in self._members

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other) -> bool:
        if isinstance(other, IdSet):
            return self._members == other._members
        if isinstance(other, (set, frozenset)):
            return self._members == other
        return NotImplemented

    def as_frozenset(self) -> frozenset:
        return frozenset(self._members)

    def __repr__(self) -> str:
        return "{" + ", ".join(map(str, self._order)) + "}"


class SubsetSolution:
    """
    Partition of a fixed universe of item IDs into selected and unselected IDs.
    Searches mutate it in place through `select` and `deselect`.
    """

    def __init__(self, all_ids: Iterable[int], sorted_ids: bool = False, selected_ids: Optional[Iterable[int]] = None):
        self.sorted_ids = sorted_ids
        self._all_ids = IdSet(all_ids, sorted_ids)
        self._selected = IdSet(sorted_ids=sorted_ids)
        self._unselected = IdSet(self._all_ids, sorted_ids)
        if selected_ids is not None:
            self.select_all(selected_ids)

    @property
    def all_ids(self) -> IdSet:
        return self._all_ids

    @property
    def selected_ids(self) -> IdSet:
        return self._selected

    @property
    def unselected_ids(self) -> IdSet:
        return self._unselected

    def _check_id(self, item_id: int):
        if item_id not in self._all_ids:
            raise ValueError(f"ID {item_id} is not part of the universe of this solution.")

    def select(self, item_id: int) -> bool:
        """Selects an ID. Returns False if it was already selected."""
        self._check_id(item_id)
        if not self._selected.add(item_id):
            return False
        self._unselected.discard(item_id)
        return True

    def deselect(self, item_id: int) -> bool:
        """Deselects an ID. Returns False if it was not selected."""
        self._check_id(item_id)
        if not self._selected.discard(item_id):
            return False
        self._unselected.add(item_id)
        return True

    def select_all(self, ids: Iterable[int]) -> bool:
        ids = list(ids)
        for item_id in ids:
            self._check_id(item_id)
        added = self._selected.update(ids)
        self._unselected.difference_update(added)
        return bool(added)

    def deselect_all(self, ids: Optional[Iterable[int]] = None) -> bool:
        """Deselects the given IDs, or every selected ID if none are given."""
        ids = list(self._selected if ids is None else ids)
        for item_id in ids:
            self._check_id(item_id)
        removed = self._selected.difference_update(ids)
        self._unselected.update(removed)
        return bool(removed)

    def is_selected(self, item_id: int) -> bool:
        return item_id in self._selected

    def get_num_selected_ids(self) -> int:
        return len(self._selected)

    def get_num_unselected_ids(self) -> int:
        return len(self._unselected)

    def get_total_num_ids(self) -> int:
        return len(self._all_ids)

    def selected_list(self) -> List[int]:
        return list(self._selected)

    def copy(self) -> "SubsetSolution":
        return SubsetSolution(self._all_ids, self.sorted_ids, self._selected)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SubsetSolution):
            return NotImplemented
        return self._all_ids == other._all_ids and self._selected == other._selected

    def __hash__(self) -> int:
        return hash(self._selected.as_frozenset())

    def __repr__(self) -> str:
        return f"SubsetSolution(selected={self._selected!r}, num_selected={len(self._selected)}/{len(self._all_ids)})"
