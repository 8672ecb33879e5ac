"""
Population management for the attendee matcher.

Each attendee owns one Population of chromosomes, evolved independently
of every other attendee's population. This module provides fitness
evaluation, fitness-proportional parent selection, elite extraction and
the per-generation evolution step.
"""

from typing import Dict, Iterator, List, Optional, Sequence
import numpy as np

from .data_models import Attendee, AttendeeRegistry, Chromosome
from .crossover import crossover_pair
from .mutation import mutate


def evaluate_fitness(chromosome: Chromosome, owner: Attendee) -> int:
    """
    Count the chromosome's qualifying matches for the owner.

    A match qualifies when it is not the owner and has at least one of the
    owner's desired attributes.

    Args:
        chromosome: Chromosome to score
        owner: Attendee the chromosome belongs to

    Returns:
        Non-negative fitness, at most len(chromosome)
    """
    return sum(1 for other in chromosome.matches if owner.is_interested_in(other))


def select_parent(chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> Chromosome:
    """
    Roulette-wheel selection over current fitness scores.

    Draws a value in [0, total_fitness) and returns the first chromosome
    whose cumulative fitness reaches it. With zero total fitness a
    chromosome is chosen uniformly instead.

    Args:
        chromosomes: Non-empty sequence of evaluated chromosomes
        rng: Random number generator

    Returns:
        Selected chromosome (not copied)
    """
    if not chromosomes:
        raise ValueError("Cannot select a parent from an empty population")

    total_fitness = sum(c.fitness for c in chromosomes)
    if total_fitness <= 0:
        return chromosomes[int(rng.integers(0, len(chromosomes)))]

    selected_value = int(rng.integers(0, total_fitness))

    cumulative = 0
    for chromosome in chromosomes:
        cumulative += chromosome.fitness
        if cumulative >= selected_value:
            return chromosome

    return chromosomes[int(rng.integers(0, len(chromosomes)))]


def best_chromosomes(chromosomes: Sequence[Chromosome], count: int) -> List[Chromosome]:
    """
    Top chromosomes by fitness, highest first.

    Ties keep their population order.
    """
    return sorted(chromosomes, key=lambda c: c.fitness, reverse=True)[:count]


class Population:
    """
    Fixed-size set of chromosomes evolved for one owner attendee.

    Attributes:
        owner: Attendee whose recommendations are being searched
        registry: Attendee universe shared by all populations
        config: GA configuration
        rng: Random number generator
        chromosomes: Current generation
        elite: Top chromosomes of the current generation
        generation: Number of completed generations
    """

    def __init__(
        self,
        owner: Attendee,
        registry: AttendeeRegistry,
        config: Dict,
        rng: np.random.Generator,
        chromosomes: Optional[List[Chromosome]] = None
    ):
        self.owner = owner
        self.registry = registry
        self.config = config
        self.rng = rng
        self.size = config.get('population_size', 13)
        self.elite_count = config.get('elite_count', 3)
        self.generation = 0

        if chromosomes is None:
            chromosomes = self._random_chromosomes()
        self.chromosomes = list(chromosomes)
        self.elite: List[Chromosome] = []
        self.evaluate()

    def _random_chromosomes(self) -> List[Chromosome]:
        """Each chromosome is a random permutation of the whole universe."""
        universe = list(self.registry)
        chromosomes = []
        for _ in range(self.size):
            order = self.rng.permutation(len(universe))
            chromosomes.append(Chromosome(matches=[universe[i] for i in order]))
        return chromosomes

    def evaluate(self) -> None:
        """Re-score every chromosome and recompute the elite set."""
        for chromosome in self.chromosomes:
            chromosome.fitness = evaluate_fitness(chromosome, self.owner)
        self.elite = best_chromosomes(self.chromosomes, self.elite_count)

    def total_fitness(self) -> int:
        return sum(c.fitness for c in self.chromosomes)

    def select_parent(self) -> Chromosome:
        return select_parent(self.chromosomes, self.rng)

    def best(self) -> Chromosome:
        """Rank-0 elite chromosome."""
        return self.elite[0]

    def evolve(self) -> None:
        """
        Advance one generation.

        Algorithm:
            1. Seed the pool with the current elite (same objects)
            2. Fill with crossover children of roulette-selected parents
               from the current generation, capped at population size
            3. Mutate every pool member in place, elite included
            4. Re-evaluate; the pool becomes the current generation
        """
        pool = list(self.elite)

        while len(pool) < self.size:
            parent_a = self.select_parent()
            parent_b = self.select_parent()
            pool.extend(crossover_pair(parent_a, parent_b, self.rng))

        pool = pool[:self.size]

        universe = self.registry.attendees
        for chromosome in pool:
            mutate(chromosome, universe, self.config, self.rng)

        self.chromosomes = pool
        self.evaluate()
        self.generation += 1

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self.chromosomes)
