"""
Visualization utilities for the attendee matcher.

Plots how the best fitness of each attendee's population develops over
the generations of a run.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def plot_fitness_history(
    history: Dict[int, List[int]],
    output_path: Union[str, Path],
    title: Optional[str] = None
) -> Path:
    """
    Save a plot of mean and max best-fitness per generation.

    Args:
        history: Best fitness per attendee id, one value per generation
        output_path: PNG file to write
        title: Optional plot title

    Returns:
        Path to saved image

    Raises:
        ValueError: If history is empty or series lengths differ
    """
    if not history:
        raise ValueError("No fitness history to plot")

    lengths = {len(scores) for scores in history.values()}
    if len(lengths) != 1:
        raise ValueError(f"Fitness histories have different lengths: {sorted(lengths)}")

    scores = np.array(list(history.values()), dtype=float)
    generations = np.arange(scores.shape[1])

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(generations, scores.mean(axis=0), label='Mean best fitness', color='tab:blue')
    ax.plot(generations, scores.max(axis=0), label='Max best fitness', color='tab:orange', linestyle='--')
    ax.fill_between(generations, scores.min(axis=0), scores.max(axis=0), color='tab:blue', alpha=0.15)

    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness (qualifying matches)')
    ax.set_title(title or f'Best fitness over {scores.shape[1] - 1} generations ({scores.shape[0]} attendees)')
    ax.grid(True, alpha=0.3)
    ax.legend()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path
