"""
Result extraction for the attendee matcher.

Turns each attendee's best chromosome into a ranked list of
recommendations, padding with other attendees when too few qualify.
"""

from typing import Dict, Iterable, List
import numpy as np

from .data_models import Attendee, AttendeeRegistry, Chromosome, MatchResult


class ResultExtractor:
    """
    Builds the final recommendation list for one attendee.

    Padding order when fewer than the requested number qualify:
        1. Random draws from the best chromosome's match list, at most
           padding.max_random_draws of them
        2. Remaining entries of the best chromosome, in order
        3. Remaining attendees of the universe, in registry order

    Self and already-selected attendees are always skipped. If the universe
    runs out the result is returned with status "partial".
    """

    def __init__(self, registry: AttendeeRegistry, config: Dict, rng: np.random.Generator):
        self.registry = registry
        self.rng = rng
        self.count = config.get('recommendations', 5)
        self.max_random_draws = config.get('padding', {}).get('max_random_draws', 100)

    def extract(self, owner: Attendee, chromosome: Chromosome) -> MatchResult:
        """
        Extract recommendations for owner from its best chromosome.

        Args:
            owner: Attendee receiving recommendations
            chromosome: Owner's best chromosome

        Returns:
            MatchResult with up to `recommendations` distinct non-self attendees
        """
        selected = [m for m in chromosome.matches if owner.is_interested_in(m)][:self.count]

        random_added = self._pad_randomly(owner, chromosome, selected)
        chromosome_added = self._pad_in_order(owner, chromosome.matches, selected)
        universe_added = self._pad_in_order(owner, self.registry, selected)
        qualifying_count = sum(1 for m in selected if owner.is_interested_in(m))

        status = "complete" if len(selected) >= self.count else "partial"

        return MatchResult(
            attendee=owner,
            matches=selected,
            qualifying_count=qualifying_count,
            status=status,
            metadata={
                'random_padding': random_added,
                'chromosome_padding': chromosome_added,
                'universe_padding': universe_added,
            }
        )

    def _pad_randomly(self, owner: Attendee, chromosome: Chromosome, selected: List[Attendee]) -> int:
        matches = chromosome.matches
        if not matches:
            return 0

        added = 0
        draws = 0
        while len(selected) < self.count and draws < self.max_random_draws:
            candidate = matches[int(self.rng.integers(0, len(matches)))]
            draws += 1
            if candidate is not owner and candidate not in selected:
                selected.append(candidate)
                added += 1
        return added

    def _pad_in_order(self, owner: Attendee, candidates: Iterable[Attendee], selected: List[Attendee]) -> int:
        added = 0
        for candidate in candidates:
            if len(selected) >= self.count:
                break
            if candidate is not owner and candidate not in selected:
                selected.append(candidate)
                added += 1
        return added
