"""
Match engine for the attendee matcher.

Runs one independent Population per attendee, advances all of them in
lock-step for a fixed number of generations, and extracts the final
recommendations.
"""

from typing import Dict, Iterable, List, Optional, Union
import numpy as np

from .config import default_match_config, validate_match_config
from .data_models import Attendee, AttendeeRegistry, MatchResult
from .population import Population
from .results import ResultExtractor


class MatchEngine:
    """
    Orchestrates the per-attendee genetic search.

    Generations are the outer loop and attendees the inner loop, so every
    population finishes generation g before any starts generation g + 1.
    There is no early stopping.

    Attributes:
        registry: Attendee universe
        config: Validated GA configuration
        rng: Random number generator shared by all populations
        populations: Population per attendee (after initialize())
        history: Best fitness per attendee id, one entry per generation
                 plus the initial one
    """

    def __init__(
        self,
        attendees: Union[AttendeeRegistry, Iterable[Attendee]],
        config: Optional[Dict] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Args:
            attendees: Registry or iterable of attendees (must be non-empty)
            config: GA configuration (defaults used if None)
            rng: Random number generator (seeded from config if None)

        Raises:
            NoAttendeesError: If there are no attendees
            ConfigValidationError: If config is invalid
        """
        if isinstance(attendees, AttendeeRegistry):
            self.registry = attendees
        else:
            self.registry = AttendeeRegistry(attendees)

        self.config = config if config is not None else default_match_config()
        validate_match_config(self.config)

        if rng is None:
            rng = np.random.default_rng(self.config.get('random_seed'))
        self.rng = rng

        self.populations: Dict[Attendee, Population] = {}
        self.history: Dict[int, List[int]] = {}
        self.generation = 0

    def initialize(self) -> None:
        """Create and evaluate one random population per attendee."""
        self.populations = {}
        self.history = {}
        self.generation = 0

        for attendee in self.registry:
            population = Population(attendee, self.registry, self.config, self.rng)
            self.populations[attendee] = population
            self.history[attendee.id] = [population.best().fitness]

    def run_generation(self) -> None:
        """Advance every attendee's population by one generation."""
        if not self.populations:
            self.initialize()

        for attendee in self.registry:
            population = self.populations[attendee]
            population.evolve()
            self.history[attendee.id].append(population.best().fitness)

        self.generation += 1

    def run(self, verbose: bool = False) -> Dict[Attendee, MatchResult]:
        """
        Run the full search and extract results.

        Args:
            verbose: Print progress every 10 generations

        Returns:
            MatchResult per attendee, in registry order
        """
        self.initialize()
        num_generations = self.config['generations']

        if verbose:
            print(f"Evolving {len(self.registry)} populations for {num_generations} generations...")

        for g in range(num_generations):
            self.run_generation()

            if verbose and ((g + 1) % 10 == 0 or g == num_generations - 1):
                print(f"  Progress: {g+1}/{num_generations} generations "
                      f"(mean best fitness {self.mean_best_fitness():.2f})")

        return self.extract_results()

    def extract_results(self) -> Dict[Attendee, MatchResult]:
        """
        Build recommendations from each attendee's current best chromosome.

        Returns:
            MatchResult per attendee, in registry order
        """
        if not self.populations:
            raise RuntimeError("Engine has not been initialized; call run() first")

        extractor = ResultExtractor(self.registry, self.config, self.rng)
        return {
            attendee: extractor.extract(attendee, self.populations[attendee].best())
            for attendee in self.registry
        }

    def match_attendees(self, verbose: bool = False) -> Dict[Attendee, List[Attendee]]:
        """
        Run the search and return plain recommendation lists.

        Returns:
            Mapping attendee -> ranked recommended attendees
        """
        results = self.run(verbose=verbose)
        return {attendee: result.matches for attendee, result in results.items()}

    def mean_best_fitness(self) -> float:
        """Mean of the latest best fitness across attendees."""
        if not self.history:
            return 0.0
        return float(np.mean([scores[-1] for scores in self.history.values()]))
