"""
Orchestration module for the attendee matcher.

Implements the per-file matching workflow: load attendees, run the
engine, print the report, and optionally save results and plots.
"""

from typing import Dict, List, Optional, Sequence, Union
from pathlib import Path
import time
import numpy as np

from .data_models import Attendee, MatchResult
from .engine import MatchEngine
from .io_utils import load_attendees, save_matches_to_csv, print_match_report
from .visualization import plot_fitness_history


def setup_rng(config: Dict, seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the run's random number generator.

    Uses the explicit seed, then config['random_seed'], and otherwise draws
    a fresh seed. The seed in use is printed and stored back into config.
    """
    if seed is None:
        seed = config.get('random_seed')
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    config['random_seed'] = seed
    print(f"Random seed: {seed}")
    return np.random.default_rng(seed)


def output_paths_for(input_path: Union[str, Path], output_root: Path, plot: bool = False) -> List[Path]:
    """Output files a run of input_path writes under output_root."""
    stem = Path(input_path).stem
    paths = [output_root / f"{stem}_matches.csv"]
    if plot:
        paths.append(output_root / f"{stem}_fitness.png")
    return paths


def check_outputs_writable(paths: Sequence[Path], overwrite: bool = False) -> None:
    """Raise FileExistsError if any output exists and overwrite is off."""
    if overwrite:
        return
    for path in paths:
        if Path(path).exists():
            raise FileExistsError(f"Output file already exists: {path}")


def run_match_file(
    input_path: Union[str, Path],
    config: Dict,
    rng: np.random.Generator,
    output_root: Optional[Path] = None,
    overwrite: bool = False,
    plot: bool = False,
    verbose: bool = True
) -> Dict[Attendee, MatchResult]:
    """
    Match all attendees of one input file.

    Args:
        input_path: Attendee file
        config: Validated GA configuration
        rng: Random number generator
        output_root: Directory for <stem>_matches.csv (and plot); None skips saving
        overwrite: Overwrite existing output files
        plot: Save a fitness history plot (requires output_root)
        verbose: Print engine progress

    Returns:
        MatchResult per attendee
    """
    input_path = Path(input_path)
    if output_root is not None:
        output_root = Path(output_root)
        check_outputs_writable(output_paths_for(input_path, output_root, plot), overwrite)

    print("=" * 70)
    print(f"MATCHING: {input_path}")
    print("=" * 70)

    registry = load_attendees(input_path)
    print(f"Loaded {len(registry)} attendees")

    start_time = time.time()
    engine = MatchEngine(registry, config, rng)
    results = engine.run(verbose=verbose)
    elapsed_time = time.time() - start_time
    print(f"Matching completed in {elapsed_time:.3f} seconds\n")

    print_match_report(registry, results)

    if output_root is not None:
        csv_path = save_matches_to_csv(
            results, output_root / f"{input_path.stem}_matches.csv", overwrite=overwrite
        )
        print(f"  ✓ CSV: {csv_path}")

        if plot:
            plot_path = output_root / f"{input_path.stem}_fitness.png"
            plot_fitness_history(engine.history, plot_path, title=f"Best fitness: {input_path.name}")
            print(f"  ✓ Plot: {plot_path}")

    partial = [r for r in results.values() if r.is_partial]
    print(f"Summary: {len(results)} attendees matched, {len(partial)} partial")

    return results


def run_match_files(
    input_paths: Sequence[Union[str, Path]],
    config: Dict,
    seed: Optional[int] = None,
    output_root: Optional[Union[str, Path]] = None,
    overwrite: bool = False,
    plot: bool = False,
    verbose: bool = True
) -> List[Dict[Attendee, MatchResult]]:
    """
    Match each input file independently with a fresh engine.

    One generator is shared across files so a seeded run is reproducible
    as a whole.

    Returns:
        Results per input file, in argument order
    """
    if not input_paths:
        raise ValueError("No input files given")

    rng = setup_rng(config, seed)

    if output_root is not None:
        output_root = Path(output_root)
        output_root.mkdir(parents=True, exist_ok=True)
        for input_path in input_paths:
            check_outputs_writable(output_paths_for(input_path, output_root, plot), overwrite)
        print(f"Output directory: {output_root}")
    print()

    all_results = []
    for i, input_path in enumerate(input_paths):
        all_results.append(run_match_file(
            input_path, config, rng,
            output_root=output_root, overwrite=overwrite, plot=plot, verbose=verbose
        ))
        print(f"  Progress: {i+1}/{len(input_paths)} files matched\n")

    return all_results
