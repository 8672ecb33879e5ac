"""
CLI module for the attendee matcher.

Handles argument parsing, configuration loading, and dispatch to the
orchestration workflow.
"""

from typing import List, Optional
import argparse

from .config import load_match_config, validate_match_config, ConfigValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="match_cli.py",
        description="Recommend peers for conference attendees with a per-attendee genetic algorithm."
    )
    parser.add_argument("inputs", nargs="*",
                        help="Attendee files (id<TAB>attributes<TAB>desired attributes)")
    parser.add_argument("--config", default=None,
                        help="GA configuration YAML (default: packaged match_config.yaml)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (overrides config random_seed)")
    parser.add_argument("--generations", type=int, default=None,
                        help="Override number of generations")
    parser.add_argument("--output-dir", default=None,
                        help="Directory for <input>_matches.csv files")
    parser.add_argument("--overwrite", action="store_true",
                        help="Overwrite existing output files")
    parser.add_argument("--plot", action="store_true",
                        help="Save a fitness history plot per input (requires --output-dir)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress per-generation progress")
    return parser


def run_from_args(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, load configuration, and match every input file.

    This is the main entry point called by match_cli.py.

    Returns:
        Process exit status

    Raises:
        FileNotFoundError: If a config or input file doesn't exist
        ConfigValidationError: If configuration or arguments are invalid
        Various exceptions from the matching workflow
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.inputs:
        print("No arguments given")
        parser.print_usage()
        return 1

    if args.plot and args.output_dir is None:
        raise ConfigValidationError("--plot requires --output-dir")

    config = load_match_config(args.config)
    if args.generations is not None:
        config['generations'] = args.generations
        validate_match_config(config)

    print(f"Configuration: population={config['population_size']}, "
          f"generations={config['generations']}, mutation_rate={config['mutation_rate']}, "
          f"elite={config['elite_count']}, recommendations={config['recommendations']}")

    from .orchestration import run_match_files
    run_match_files(
        args.inputs,
        config,
        seed=args.seed,
        output_root=args.output_dir,
        overwrite=args.overwrite,
        plot=args.plot,
        verbose=not args.quiet
    )

    print("\n✅ Run completed successfully!")
    return 0
