"""
I/O utilities for the attendee matcher.

Handles attendee file parsing, match result serialization, and the
console match report.
"""

import csv
from pathlib import Path
from typing import Dict, List, Union

from .data_models import Attendee, AttendeeRegistry, MatchResult


RESULT_COLUMNS = ['attendee_id', 'rank', 'match_id', 'qualifying', 'status']


def parse_tokens(field: str) -> List[str]:
    """Split a comma-separated token field, dropping empty tokens."""
    return [token.strip() for token in field.split(',') if token.strip()]


def load_attendees(input_path: Union[str, Path]) -> AttendeeRegistry:
    """
    Load an attendee file into an AttendeeRegistry.

    File format (tab-separated, one attendee per line):
        1<TAB>python,ml<TAB>design,ux
        2<TAB>design<TAB>python

    Args:
        input_path: Path to attendee file

    Returns:
        AttendeeRegistry in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a line is malformed or ids repeat
        NoAttendeesError: If the file holds no attendees
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Attendee file not found: {input_path}")

    attendees = []
    with open(input_path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip('\r\n')
            if not line.strip():
                continue

            parts = line.split('\t')
            if len(parts) < 3:
                raise ValueError(
                    f"{input_path}:{line_number}: expected 3 tab-separated columns "
                    f"(id, attributes, desired attributes), got {len(parts)}"
                )

            try:
                attendee_id = int(parts[0].strip())
            except ValueError:
                raise ValueError(f"{input_path}:{line_number}: invalid attendee id: {parts[0]!r}")

            attendees.append(Attendee(
                id=attendee_id,
                attributes=tuple(parse_tokens(parts[1])),
                desired_attributes=tuple(parse_tokens(parts[2])),
            ))

    return AttendeeRegistry(attendees)


def save_matches_to_csv(
    results: Dict[Attendee, MatchResult],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save match results to a CSV file, one row per recommendation.

    Args:
        results: MatchResult per attendee
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_COLUMNS)
        writer.writeheader()
        for result in results.values():
            writer.writerows(result.to_rows())

    return output_path


def format_match_report(registry: AttendeeRegistry, results: Dict[Attendee, MatchResult]) -> str:
    """
    Render results as the plain-text console report.

    Args:
        registry: Attendees, in report order
        results: MatchResult per attendee

    Returns:
        Report text
    """
    lines = []
    for attendee in registry:
        result = results[attendee]
        lines.append(f"Attendee {attendee.id} matches:")
        for match in result.matches:
            lines.append(f"  - Attendee {match.id}")
        if result.is_partial:
            lines.append(f"  (partial: only {len(result)} eligible candidates)")
        lines.append("")
    return "\n".join(lines)


def print_match_report(registry: AttendeeRegistry, results: Dict[Attendee, MatchResult]) -> None:
    print(format_match_report(registry, results))
