"""
Crossover operator for the attendee matcher.

Implements single split-point crossover between two match lists with
order-preserving de-duplication.
"""

from typing import Dict, Tuple
import numpy as np

from .data_models import Chromosome


def combine_at(
    parent_a: Chromosome,
    parent_b: Chromosome,
    split_a: int,
    split_b: int
) -> Chromosome:
    """
    Build a child from fixed split indices.

    The child's match list is parent_a.matches[:split_a] followed by
    parent_b.matches[split_b:], keeping the first occurrence of any attendee.

    Args:
        parent_a: Parent contributing the head
        parent_b: Parent contributing the tail
        split_a: Split index into parent_a
        split_b: Split index into parent_b

    Returns:
        New Chromosome with fitness 0
    """
    head = parent_a.matches[:split_a]
    tail = parent_b.matches[split_b:]
    return Chromosome(matches=head + tail)


def draw_split(length: int, rng: np.random.Generator) -> int:
    """Uniform split index in [0, length), or 0 for an empty list."""
    if length == 0:
        return 0
    return int(rng.integers(0, length))


def split_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator
) -> Tuple[Chromosome, Dict]:
    """
    Combine two parents at independently drawn split points.

    Args:
        parent_a: First parent (head)
        parent_b: Second parent (tail)
        rng: Random number generator

    Returns:
        Tuple of (child, split_info) where split_info records both split indices
    """
    split_a = draw_split(len(parent_a), rng)
    split_b = draw_split(len(parent_b), rng)

    child = combine_at(parent_a, parent_b, split_a, split_b)

    return child, {'split_a': split_a, 'split_b': split_b}


def crossover_pair(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator
) -> Tuple[Chromosome, Chromosome]:
    """
    Produce the two children child(A, B) and child(B, A).

    Split points are drawn separately for each child.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator

    Returns:
        Tuple of (child_ab, child_ba)
    """
    child_ab, _ = split_point_crossover(parent_a, parent_b, rng)
    child_ba, _ = split_point_crossover(parent_b, parent_a, rng)
    return child_ab, child_ba
