"""Best-partition selection among completed attempts."""

from __future__ import annotations

from typing import Callable

from teammate.engine.quality import calculate_quality_score
from teammate.team_models import Partition


Scorer = Callable[[Partition], float]


def rank_partitions(
    candidates: list[Partition],
    scorer: Scorer = calculate_quality_score,
) -> list[tuple[float, Partition]]:
    """Score every non-empty candidate, keeping completion order."""
    return [(scorer(c), c) for c in candidates if c]


def select_best_partition(
    candidates: list[Partition],
    scorer: Scorer = calculate_quality_score,
) -> Partition:
    """Pick the highest-scoring partition.

    Empty partitions are skipped. A strictly greater score replaces the
    current best, so ties keep the earliest candidate.

    Returns:
        The winning partition, or an empty list when there is none.
    """
    return select_from_ranked(rank_partitions(candidates, scorer))


def select_from_ranked(ranked: list[tuple[float, Partition]]) -> Partition:
    """Pick the winner from already scored (score, partition) pairs; ties keep the earliest."""
    best: Partition = []
    best_score: float | None = None
    for score, partition in ranked:
        if best_score is None or score > best_score:
            best_score = score
            best = partition
    return best
