"""
Priority list.

Partitions a collection into a ranked "prioritized" sequence and an
unranked "remaining" sequence, and moves elements between them.
"""

from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class PriorityList(Generic[T]):
    """
    A dynamic list which labels elements by priority.

    Rank 0 of the prioritized sequence is the highest priority. Elements in
    the remaining sequence keep their arrival order and carry no rank until
    promoted.

    Index-based mutations never raise for out-of-range arguments. They
    return True when applied and False when they had no effect, in which
    case both sequences are left untouched.

    Example:
        >>> plist = PriorityList()
        >>> plist.append(1)
        >>> plist.append(3)
        >>> plist.append(77)
        >>> plist.view_remaining()
        (1, 3, 77)
        >>> plist.promote_to_top(0)
        True
        >>> plist.view_prioritized()
        (1,)
    """

    def __init__(self, sequence: Optional[Iterable[T]] = None):
        """
        Initialize the list.

        Args:
            sequence: Optional initial elements. They become the prioritized
                sequence in the given order; remaining starts empty.
        """
        self._prioritized: List[T] = list(sequence) if sequence is not None else []
        self._remaining: List[T] = []

    @classmethod
    def from_sequence(cls, sequence: Iterable[T]) -> "PriorityList[T]":
        """Create a list whose prioritized side is seeded from sequence."""
        return cls(sequence)

    # Insertion

    def append(self, element: T) -> None:
        """Add an unranked element to the end of the remaining sequence."""
        self._remaining.append(element)

    def insert_as_top_priority(self, element: T) -> None:
        """Add an element as the highest priority, shifting the rest down."""
        self._prioritized.insert(0, element)

    # Read access

    def highest_priority(self) -> Optional[T]:
        """Return the element at rank 0, or None if nothing is prioritized."""
        return self.priority_at_rank(0)

    def priority_at_rank(self, rank: int) -> Optional[T]:
        """Return the element at the given rank, or None if out of range."""
        if 0 <= rank < len(self._prioritized):
            return self._prioritized[rank]
        return None

    def view_prioritized(self) -> Tuple[T, ...]:
        """Snapshot of the prioritized sequence, highest rank first."""
        return tuple(self._prioritized)

    def view_remaining(self) -> Tuple[T, ...]:
        """Snapshot of the remaining sequence in arrival order."""
        return tuple(self._remaining)

    @property
    def prioritized_count(self) -> int:
        return len(self._prioritized)

    @property
    def remaining_count(self) -> int:
        return len(self._remaining)

    # Promotion

    def promote(self, index: int) -> bool:
        """
        Move remaining[index] to the end of the prioritized sequence.

        Args:
            index: Position in the remaining sequence.

        Returns:
            True if the element was moved.
        """
        return self.promote_to_rank(index, len(self._prioritized))

    def promote_to_rank(self, index: int, rank: int) -> bool:
        """
        Move remaining[index] into the prioritized sequence at rank.

        Args:
            index: Position in the remaining sequence.
            rank: Target rank, 0 <= rank <= number of prioritized elements.
                A rank equal to that number appends.

        Returns:
            True if the element was moved, False if either argument was
            out of range.
        """
        if not 0 <= index < len(self._remaining):
            return False
        if not 0 <= rank <= len(self._prioritized):
            return False

        element = self._remaining.pop(index)
        self._prioritized.insert(rank, element)
        return True

    def promote_to_top(self, index: int) -> bool:
        """Move remaining[index] to rank 0. See promote_to_rank."""
        return self.promote_to_rank(index, 0)

    # Serialization

    def to_dict(self, encode: Optional[Callable[[T], Any]] = None) -> Dict[str, List[Any]]:
        """
        Convert to a dictionary with "prioritized" and "remaining" lists.

        Args:
            encode: Optional per-element converter, e.g. a record's to_dict.
        """
        if encode is None:
            encode = _identity
        return {
            "prioritized": [encode(e) for e in self._prioritized],
            "remaining": [encode(e) for e in self._remaining],
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        decode: Optional[Callable[[Any], T]] = None,
    ) -> "PriorityList[T]":
        """
        Rebuild a list produced by to_dict.

        Missing keys are treated as empty sequences.

        Raises:
            ValueError: If a sequence field is not a list.
        """
        if decode is None:
            decode = _identity

        plist: "PriorityList[T]" = cls()
        for key in ("prioritized", "remaining"):
            items = data.get(key) or []
            if not isinstance(items, list):
                raise ValueError(f"'{key}' must be a list, got {type(items).__name__}")
            getattr(plist, f"_{key}").extend(decode(item) for item in items)
        return plist

    def __len__(self) -> int:
        return len(self._prioritized) + len(self._remaining)

    def __contains__(self, element: object) -> bool:
        return element in self._prioritized or element in self._remaining

    def __repr__(self) -> str:
        return f"PriorityList(prioritized={self._prioritized!r}, remaining={self._remaining!r})"


def _identity(value: Any) -> Any:
    return value
