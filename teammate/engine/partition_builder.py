"""Randomized greedy construction of one candidate partition.

Each call works on its own copy of the participant pool and draws every
random decision from the ``random.Random`` it is given, so parallel attempts
diverge while a seeded attempt stays reproducible.
"""

from __future__ import annotations

import logging
import math
import random
import threading

from teammate.engine.fit_scoring import score_candidate
from teammate.participant_models import Participant, PersonalityCategory
from teammate.team_models import Partition, Team


logger = logging.getLogger(__name__)

_SMALL_TEAM_MAX = 3


# ---------------------------------------------------------------------------
# Team construction steps
# ---------------------------------------------------------------------------
def _take_by_category(
    team: Team,
    pool: list[Participant],
    category: PersonalityCategory,
    how_many: int,
    capacity: int,
) -> None:
    """Move up to *how_many* members of *category* from *pool* into *team*.

    Candidates are taken in pool order and never beyond *capacity*.
    """
    added = 0
    i = 0
    while i < len(pool) and added < how_many and team.size < capacity:
        if pool[i].personality_category == category:
            team.add_member(pool.pop(i))
            added += 1
        else:
            i += 1


def _pick_best_candidate(
    team: Team,
    pool: list[Participant],
    team_size: int,
    capacity: int,
    rng: random.Random,
) -> int | None:
    """Index of the highest-scoring pool member; first seen wins ties."""
    best_index: int | None = None
    best_score = -math.inf
    for i, candidate in enumerate(pool):
        score = score_candidate(team, candidate, team_size, rng, capacity)
        if score > best_score:
            best_score = score
            best_index = i
    return best_index


def build_team(
    pool: list[Participant],
    team_size: int,
    capacity: int,
    rng: random.Random,
) -> Team:
    """Build one team, consuming its members from *pool*.

    Seeds one Leader, then one Thinker (team size <= 3) or up to two
    Thinkers, and fills the remaining capacity greedily by fit score.
    """
    team = Team()

    _take_by_category(team, pool, "Leader", 1, capacity)
    thinkers_needed = 1 if team_size <= _SMALL_TEAM_MAX else 2
    _take_by_category(team, pool, "Thinker", thinkers_needed, capacity)

    while team.size < capacity and pool:
        best = _pick_best_candidate(team, pool, team_size, capacity, rng)
        if best is None:
            break
        team.add_member(pool.pop(best))

    return team


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def build_partition(
    participants: list[Participant],
    team_size: int,
    max_teams: int = 0,
    rng: random.Random | None = None,
    cancel_event: threading.Event | None = None,
    min_fill_ratio: float = 0.0,
    log: logging.Logger | None = None,
) -> Partition:
    """Partition *participants* into teams with the greedy heuristic.

    Args:
        participants: The pool; it is copied, never mutated.
        team_size: Target size of every team (>= 1).
        max_teams: Maximum number of teams, 0 for unbounded.
        rng: Private random source for the shuffle and jitter.
        cancel_event: When set, construction stops at the next team boundary.
        min_fill_ratio: Teams smaller than ``ceil(min_fill_ratio * team_size)``
            are dropped; 0 keeps any non-empty team.
        log: Logger to report through (defaults to this module's logger).

    Returns:
        Ordered list of teams, possibly empty.

    Raises:
        ValueError: If team_size < 1 or max_teams < 0.
    """
    if team_size < 1:
        raise ValueError(f"team_size must be >= 1, got {team_size}")
    if max_teams < 0:
        raise ValueError(f"max_teams must be >= 0, got {max_teams}")

    log = log or logger
    rng = rng or random.Random()
    min_members = max(1, math.ceil(min_fill_ratio * team_size))

    pool = list(participants)
    rng.shuffle(pool)
    teams: Partition = []

    while pool and (max_teams == 0 or len(teams) < max_teams):
        if cancel_event is not None and cancel_event.is_set():
            log.debug("Partition build cancelled after %d teams", len(teams))
            break
        if len(pool) < team_size and teams:
            break

        capacity = min(team_size, len(pool))
        team = build_team(pool, team_size, capacity, rng)
        if team.size >= min_members:
            teams.append(team)
        else:
            log.debug("Dropped under-filled team of %d (minimum %d)", team.size, min_members)

    return teams
