"""
Conference Attendee Matcher

This package recommends peers for each conference attendee by evolving
an independent genetic-algorithm population of candidate match-sets per
attendee.

Key Features:
- One population per attendee, no gene flow between attendees
- Fitness-proportional selection with a zero-fitness fallback
- Split-point crossover and membership-toggle mutation
- Bounded padding so every attendee gets a full list when possible
- Injectable numpy random generator for reproducible runs

Modules:
- data_models: Core data structures (Attendee, AttendeeRegistry, Chromosome, MatchResult)
- config: GA configuration defaults, YAML loading and validation
- population: Fitness, selection and the per-generation evolution step
- crossover: Split-point crossover operator
- mutation: Membership-toggle mutation operator
- engine: MatchEngine orchestrating all populations in lock-step
- results: ResultExtractor turning best chromosomes into recommendations
- io_utils: Attendee file parsing, result CSV export, console report
- orchestration: Per-file matching workflow
- visualization: Fitness history plots
- cli: Command-line interface
"""

__version__ = "0.1.0"
__author__ = "Conference Matching Team"

from .data_models import Attendee, AttendeeRegistry, Chromosome, MatchResult, NoAttendeesError
from .engine import MatchEngine

__all__ = [
    "Attendee",
    "AttendeeRegistry",
    "Chromosome",
    "MatchResult",
    "NoAttendeesError",
    "MatchEngine",
]
