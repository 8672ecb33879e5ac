"""
Tests for populations, the match engine, and result extraction.
"""

import unittest
import numpy as np

from confmatch.config import default_match_config, ConfigValidationError
from confmatch.data_models import Attendee, AttendeeRegistry, Chromosome, NoAttendeesError
from confmatch.engine import MatchEngine
from confmatch.population import Population
from confmatch.results import ResultExtractor


def make_universe():
    """Eight attendees; 'python' and 'design' are both common."""
    specs = [
        (1, ["python"], ["design"]),
        (2, ["design"], ["python"]),
        (3, ["python", "ml"], ["ml"]),
        (4, ["design", "ux"], ["ux", "python"]),
        (5, ["ml"], ["python"]),
        (6, ["ux"], ["design"]),
        (7, ["python", "design"], ["ml"]),
        (8, ["ops"], []),
    ]
    return AttendeeRegistry(
        Attendee(id=i, attributes=tuple(attrs), desired_attributes=tuple(desired))
        for i, attrs, desired in specs
    )


def assert_population_invariants(test, population):
    test.assertEqual(len(population), population.size)
    for chromosome in population:
        test.assertEqual(len(chromosome.matches), len(set(chromosome.matches)))
        test.assertGreaterEqual(chromosome.fitness, 0)
        test.assertLessEqual(chromosome.fitness, len(chromosome))

    elite_ids = {id(c) for c in population.elite}
    non_elite = [c.fitness for c in population if id(c) not in elite_ids]
    test.assertEqual(len(population.elite), population.elite_count)
    if non_elite:
        test.assertGreaterEqual(min(c.fitness for c in population.elite), max(non_elite))


class TestPopulation(unittest.TestCase):
    """Test population initialization and evolution."""

    def setUp(self):
        self.registry = make_universe()
        self.owner = self.registry[0]
        self.config = default_match_config()
        self.rng = np.random.default_rng(42)

    def test_initial_chromosomes_are_permutations(self):
        population = Population(self.owner, self.registry, self.config, self.rng)

        self.assertEqual(len(population), 13)
        for chromosome in population:
            self.assertEqual(len(chromosome), len(self.registry))
            self.assertEqual(set(chromosome.matches), set(self.registry))

    def test_initial_evaluation(self):
        """Attendees 2, 4, 7 have 'design'; every permutation scores 3."""
        population = Population(self.owner, self.registry, self.config, self.rng)

        self.assertEqual([c.fitness for c in population], [3] * 13)
        self.assertEqual(population.total_fitness(), 39)
        assert_population_invariants(self, population)

    def test_elite_members_belong_to_population(self):
        population = Population(self.owner, self.registry, self.config, self.rng)
        for chromosome in population.elite:
            self.assertTrue(any(chromosome is c for c in population))

    def test_invariants_hold_across_generations(self):
        population = Population(self.owner, self.registry, self.config, self.rng)

        for _ in range(30):
            population.evolve()
            assert_population_invariants(self, population)

        self.assertEqual(population.generation, 30)

    def test_zero_fitness_population_evolves(self):
        """An attendee with no desired attributes never scores."""
        loner = self.registry.get_by_id(8)
        population = Population(loner, self.registry, self.config, self.rng)

        for _ in range(20):
            population.evolve()
            self.assertEqual(population.total_fitness(), 0)
            self.assertEqual(len(population), 13)

    def test_elite_carried_by_reference_and_mutated(self):
        """Previous elite objects lead the new pool and are mutated in place."""
        self.config['mutation_rate'] = 1.0
        population = Population(self.owner, self.registry, self.config, self.rng)
        previous_elite = list(population.elite)
        previous_matches = [list(c.matches) for c in previous_elite]

        population.evolve()

        for chromosome, before in zip(previous_elite, previous_matches):
            self.assertTrue(any(chromosome is c for c in population))
            self.assertNotEqual(chromosome.matches, before)
            self.assertEqual(abs(len(chromosome) - len(before)), 1)
        for i, chromosome in enumerate(previous_elite):
            self.assertIs(population.chromosomes[i], chromosome)

    def test_explicit_chromosomes(self):
        chromosomes = [Chromosome(matches=[]) for _ in range(13)]
        population = Population(self.owner, self.registry, self.config, self.rng, chromosomes)

        self.assertEqual(population.total_fitness(), 0)
        population.evolve()
        assert_population_invariants(self, population)


class TestResultExtractor(unittest.TestCase):
    """Test recommendation extraction and padding."""

    def setUp(self):
        self.owner = Attendee(id=1, attributes=("x",), desired_attributes=("y",))
        self.a = Attendee(id=2, attributes=("y",), desired_attributes=())
        self.b = Attendee(id=3, attributes=("z",), desired_attributes=())
        self.c = Attendee(id=4, attributes=("z",), desired_attributes=())
        self.d = Attendee(id=5, attributes=("z",), desired_attributes=())
        self.e = Attendee(id=6, attributes=("z",), desired_attributes=())
        self.registry = AttendeeRegistry([self.owner, self.a, self.b, self.c, self.d, self.e])
        self.rng = np.random.default_rng(42)

    def test_deterministic_fallback_order(self):
        """Without random draws: qualifying, then chromosome order, then universe."""
        config = default_match_config()
        config['padding']['max_random_draws'] = 0
        extractor = ResultExtractor(self.registry, config, self.rng)

        result = extractor.extract(self.owner, Chromosome(matches=[self.c, self.owner, self.a]))

        self.assertEqual(result.matches, [self.a, self.c, self.b, self.d, self.e])
        self.assertEqual(result.qualifying_count, 1)
        self.assertEqual(result.status, "complete")
        self.assertEqual(result.metadata['chromosome_padding'], 1)
        self.assertEqual(result.metadata['universe_padding'], 3)

    def test_qualifying_capped_in_chromosome_order(self):
        many = [Attendee(id=10 + i, attributes=("y",), desired_attributes=()) for i in range(7)]
        registry = AttendeeRegistry([self.owner] + many)
        extractor = ResultExtractor(registry, default_match_config(), self.rng)

        result = extractor.extract(self.owner, Chromosome(matches=list(reversed(many))))

        self.assertEqual(result.matches, list(reversed(many))[:5])
        self.assertEqual(result.qualifying_count, 5)

    def test_random_padding_from_chromosome(self):
        extractor = ResultExtractor(self.registry, default_match_config(), self.rng)
        chromosome = Chromosome(matches=[self.owner, self.a, self.b, self.c, self.d, self.e])

        result = extractor.extract(self.owner, chromosome)

        self.assertEqual(len(result), 5)
        self.assertIs(result.matches[0], self.a)
        self.assertNotIn(self.owner, result.matches)
        self.assertEqual(len(set(result.matches)), 5)

    def test_empty_chromosome_padded_from_universe(self):
        extractor = ResultExtractor(self.registry, default_match_config(), self.rng)

        result = extractor.extract(self.owner, Chromosome(matches=[]))

        self.assertEqual(result.matches, [self.a, self.b, self.c, self.d, self.e])
        self.assertEqual(result.qualifying_count, 1)
        rows = result.to_rows()
        self.assertEqual([row["qualifying"] for row in rows], [True, False, False, False, False])

    def test_padded_qualifying_attendee_is_counted(self):
        """A qualifying attendee added by universe padding still counts."""
        config = default_match_config()
        config['padding']['max_random_draws'] = 0
        extractor = ResultExtractor(self.registry, config, self.rng)

        result = extractor.extract(self.owner, Chromosome(matches=[self.c]))

        self.assertEqual(result.matches, [self.c, self.a, self.b, self.d, self.e])
        self.assertEqual(result.qualifying_count, 1)
        self.assertEqual(
            [row["qualifying"] for row in result.to_rows()],
            [False, True, False, False, False]
        )

    def test_single_attendee_returns_partial(self):
        """No non-self candidate exists; must terminate with an empty list."""
        registry = AttendeeRegistry([self.owner])
        extractor = ResultExtractor(registry, default_match_config(), self.rng)

        result = extractor.extract(self.owner, Chromosome(matches=[self.owner]))

        self.assertEqual(result.matches, [])
        self.assertEqual(result.status, "partial")


class TestMatchEngine(unittest.TestCase):
    """Test the full matching run."""

    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.config = default_match_config()
        self.config['generations'] = 30

    def test_empty_universe_fails_fast(self):
        with self.assertRaises(NoAttendeesError):
            MatchEngine([], self.config, self.rng)

    def test_invalid_config_rejected(self):
        self.config['mutation_rate'] = 2.0
        with self.assertRaises(ConfigValidationError):
            MatchEngine(make_universe(), self.config, self.rng)

    def test_extract_before_run_rejected(self):
        engine = MatchEngine(make_universe(), self.config, self.rng)
        with self.assertRaises(RuntimeError):
            engine.extract_results()

    def test_every_attendee_gets_five_distinct_peers(self):
        registry = make_universe()
        engine = MatchEngine(registry, self.config, self.rng)

        results = engine.run()

        self.assertEqual(list(results.keys()), list(registry))
        for attendee, result in results.items():
            self.assertEqual(len(result), 5)
            self.assertEqual(len(set(result.matches)), 5)
            self.assertNotIn(attendee, result.matches)
            self.assertEqual(result.status, "complete")
            self.assertEqual(
                result.qualifying_count,
                sum(1 for match in result.matches if attendee.is_interested_in(match))
            )

    def test_populations_keep_invariants(self):
        engine = MatchEngine(make_universe(), self.config, self.rng)
        engine.run()

        self.assertEqual(engine.generation, 30)
        for population in engine.populations.values():
            assert_population_invariants(self, population)

    def test_lock_step_generations(self):
        engine = MatchEngine(make_universe(), self.config, self.rng)
        engine.initialize()

        engine.run_generation()
        engine.run_generation()

        self.assertTrue(all(p.generation == 2 for p in engine.populations.values()))

    def test_history_tracks_each_generation(self):
        registry = make_universe()
        engine = MatchEngine(registry, self.config, self.rng)
        engine.run()

        self.assertEqual(set(engine.history), {a.id for a in registry})
        for scores in engine.history.values():
            self.assertEqual(len(scores), 31)
            self.assertTrue(all(s >= 0 for s in scores))
        self.assertGreaterEqual(engine.mean_best_fitness(), 0.0)

    def test_two_attendee_mutual_match(self):
        """A wants 'y' which B has; B is the only possible recommendation."""
        a = Attendee(id=1, attributes=("x",), desired_attributes=("y",))
        b = Attendee(id=2, attributes=("y",), desired_attributes=("x",))
        engine = MatchEngine([a, b], default_match_config(), self.rng)

        matches = engine.match_attendees()

        self.assertEqual(matches[a], [b])
        self.assertEqual(matches[b], [a])

    def test_two_attendee_results_are_partial(self):
        a = Attendee(id=1, attributes=("x",), desired_attributes=("y",))
        b = Attendee(id=2, attributes=("y",), desired_attributes=("x",))
        engine = MatchEngine([a, b], self.config, self.rng)

        results = engine.run()

        self.assertEqual(results[a].status, "partial")
        self.assertEqual(results[a].matches, [b])

    def test_empty_desired_attendee_is_all_padding(self):
        registry = make_universe()
        loner = registry.get_by_id(8)
        engine = MatchEngine(registry, self.config, self.rng)

        results = engine.run()

        self.assertTrue(all(f == 0 for f in engine.history[8]))
        self.assertEqual(results[loner].qualifying_count, 0)
        self.assertEqual(len(results[loner]), 5)
        self.assertNotIn(loner, results[loner].matches)

    def test_single_attendee_universe_terminates(self):
        solo = Attendee(id=1, attributes=("x",), desired_attributes=("x",))
        engine = MatchEngine([solo], self.config, self.rng)

        results = engine.run()

        self.assertEqual(results[solo].matches, [])
        self.assertTrue(results[solo].is_partial)

    def test_seeded_runs_are_reproducible(self):
        first = MatchEngine(make_universe(), self.config, np.random.default_rng(7)).run()
        second = MatchEngine(make_universe(), self.config, np.random.default_rng(7)).run()

        self.assertEqual(
            [r.match_ids() for r in first.values()],
            [r.match_ids() for r in second.values()]
        )

    def test_seed_from_config(self):
        self.config['random_seed'] = 11
        first = MatchEngine(make_universe(), self.config).run()
        second = MatchEngine(make_universe(), self.config).run()

        self.assertEqual(
            [r.match_ids() for r in first.values()],
            [r.match_ids() for r in second.values()]
        )


if __name__ == '__main__':
    unittest.main()
