#!/usr/bin/env python3
"""
Attendee Matcher CLI - Minimal entry point.

Recommends five peers for every attendee of one or more attendee files.
GA parameters come from a YAML configuration file.

Usage:
    python3 match_cli.py attendees.tsv [more.tsv ...]
    python3 match_cli.py attendees.tsv --config my_config.yaml --seed 42
    python3 match_cli.py --help

Examples:
    # Match a single file and print the report
    python3 match_cli.py data/attendees.tsv

    # Save CSV results and fitness plots
    python3 match_cli.py data/day1.tsv data/day2.tsv --output-dir results --plot
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point for the matcher CLI."""
    try:
        from confmatch.cli import run_from_args
        sys.exit(run_from_args(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
