"""
Data models for the attendee matcher.

Core data structures representing attendees, the attendee universe,
candidate match-sets (chromosomes), and final match results.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional


class NoAttendeesError(ValueError):
    """Raised when there are no attendees to match."""
    pass


@dataclass(frozen=True, eq=False)
class Attendee:
    """
    A conference attendee.

    Equality and hashing are by object identity: two attendees with the
    same attribute lists are still different people.

    Attributes:
        id: Integer identifier, unique within a run
        attributes: Attribute tokens this attendee has
        desired_attributes: Attribute tokens this attendee looks for in others
    """
    id: int
    attributes: tuple[str, ...]
    desired_attributes: tuple[str, ...]

    def __post_init__(self):
        """Freeze token sequences into tuples."""
        for name in ("attributes", "desired_attributes"):
            if isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a sequence of tokens, not a string")
        object.__setattr__(self, 'attributes', tuple(self.attributes))
        object.__setattr__(self, 'desired_attributes', tuple(self.desired_attributes))

    def is_interested_in(self, other: "Attendee") -> bool:
        """
        Check whether another attendee is a qualifying match for this one.

        Args:
            other: Candidate attendee

        Returns:
            True if other is not self and has at least one desired attribute
        """
        if other is self:
            return False
        return any(attr in other.attributes for attr in self.desired_attributes)

    def __repr__(self) -> str:
        return f"Attendee(id={self.id})"


class AttendeeRegistry:
    """
    The fixed, ordered universe of attendees for one matching run.

    Raises:
        NoAttendeesError: If no attendees are supplied
        ValueError: If two attendees share an id
    """

    def __init__(self, attendees: Iterable[Attendee]):
        self._attendees = tuple(attendees)

        if not self._attendees:
            raise NoAttendeesError("No attendees to match")

        self._by_id = {}
        for attendee in self._attendees:
            if attendee.id in self._by_id:
                raise ValueError(f"Duplicate attendee id: {attendee.id}")
            self._by_id[attendee.id] = attendee

    @property
    def attendees(self) -> tuple[Attendee, ...]:
        return self._attendees

    def get_by_id(self, attendee_id: int) -> Optional[Attendee]:
        """Look up an attendee by id, or None if unknown."""
        return self._by_id.get(attendee_id)

    def __len__(self) -> int:
        return len(self._attendees)

    def __iter__(self) -> Iterator[Attendee]:
        return iter(self._attendees)

    def __getitem__(self, index: int) -> Attendee:
        return self._attendees[index]

    def __contains__(self, attendee: object) -> bool:
        return any(a is attendee for a in self._attendees)


def unique_in_order(attendees: Iterable[Attendee]) -> List[Attendee]:
    """
    Remove duplicate attendees, keeping the first occurrence of each.

    Args:
        attendees: Attendees, possibly with repeats

    Returns:
        New list with relative order preserved
    """
    seen = set()
    unique = []
    for attendee in attendees:
        if attendee not in seen:
            seen.add(attendee)
            unique.append(attendee)
    return unique


@dataclass(eq=False)
class Chromosome:
    """
    A candidate recommendation set for one owner attendee.

    Attributes:
        matches: Ordered attendees, no duplicates (removed at construction)
        fitness: Score from the last evaluation, 0 until evaluated
    """
    matches: List[Attendee]
    fitness: int = 0

    def __post_init__(self):
        """Copy and de-duplicate the match list."""
        self.matches = unique_in_order(self.matches)

    def contains(self, attendee: Attendee) -> bool:
        return attendee in self.matches

    def __len__(self) -> int:
        return len(self.matches)


@dataclass
class MatchResult:
    """
    Final recommendations for one attendee.

    Attributes:
        attendee: The attendee receiving recommendations
        matches: Ranked recommended attendees
        qualifying_count: How many entries match a desired attribute
        status: "complete" when the requested number was reached, else "partial"
        metadata: Extra information (padding source counts, etc.)
    """
    attendee: Attendee
    matches: List[Attendee]
    qualifying_count: int
    status: str = "complete"
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        """Validate status."""
        if self.status not in ["complete", "partial"]:
            raise ValueError(f"Invalid status: {self.status}. Must be 'complete' or 'partial'")

    @property
    def is_partial(self) -> bool:
        return self.status == "partial"

    def match_ids(self) -> List[int]:
        """Ids of the recommended attendees, in rank order."""
        return [match.id for match in self.matches]

    def to_rows(self) -> List[dict]:
        """
        Convert to one dictionary per recommendation for CSV export.

        Returns:
            List of row dictionaries with string-serializable values
        """
        return [
            {
                "attendee_id": self.attendee.id,
                "rank": rank,
                "match_id": match.id,
                "qualifying": self.attendee.is_interested_in(match),
                "status": self.status,
            }
            for rank, match in enumerate(self.matches, start=1)
        ]

    def __len__(self) -> int:
        return len(self.matches)

