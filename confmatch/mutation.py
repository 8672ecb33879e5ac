"""
Mutation operator for the attendee matcher.

A mutation toggles the membership of one attendee drawn from the full
universe: present attendees are removed, absent ones are appended.
"""

from typing import Dict, List, Sequence, Tuple
import numpy as np

from .data_models import Attendee, Chromosome


def toggle_membership(chromosome: Chromosome, attendee: Attendee) -> str:
    """
    Remove the attendee if present, otherwise append it. Modifies in place.

    Args:
        chromosome: Chromosome to mutate
        attendee: Attendee to toggle

    Returns:
        Operation log entry
    """
    if chromosome.contains(attendee):
        chromosome.matches.remove(attendee)
        return f"toggle: removed attendee {attendee.id}"

    chromosome.matches.append(attendee)
    return f"toggle: added attendee {attendee.id}"


def mutate(
    chromosome: Chromosome,
    universe: Sequence[Attendee],
    config: Dict,
    rng: np.random.Generator
) -> Tuple[Chromosome, List[str]]:
    """
    Apply at most one membership toggle, with probability mutation_rate.

    The chromosome is modified in place and also returned. Its fitness is
    left stale until the population is re-evaluated.

    Args:
        chromosome: Chromosome to mutate
        universe: All attendees of the run
        config: GA configuration with 'mutation_rate'
        rng: Random number generator

    Returns:
        Tuple of (chromosome, operation_log)
    """
    mutation_rate = config.get('mutation_rate', 0.1)

    if rng.random() >= mutation_rate:
        return chromosome, ["no_mutation: skipped (probability)"]

    if len(universe) == 0:
        return chromosome, ["no_mutation: empty universe"]

    attendee = universe[int(rng.integers(0, len(universe)))]
    return chromosome, [toggle_membership(chromosome, attendee)]
