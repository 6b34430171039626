"""Candidate fit scoring used by the greedy fill loop.

All functions are *pure* apart from drawing tie-break jitter from the
caller's random source.
"""

from __future__ import annotations

import math
import random

from teammate.participant_models import Participant
from teammate.team_models import Team


# A candidate scoring this is only picked when nobody else is available.
EXCLUDED_SCORE = -999999.0

_MAX_SAME_ACTIVITY = 2
_JITTER = 3.0


# ---------------------------------------------------------------------------
# Team composition helpers
# ---------------------------------------------------------------------------
def count_same_activity(team: Team, activity: str) -> int:
    """Count members whose preferred activity matches (case-insensitive)."""
    wanted = activity.lower()
    return sum(1 for m in team.members if m.preferred_activity.lower() == wanted)


def has_role(team: Team, role: str) -> bool:
    return any(m.preferred_role == role for m in team.members)


def count_unique_roles(team: Team) -> int:
    return len({m.preferred_role for m in team.members})


def skill_spread(team: Team, candidate: Participant) -> float:
    """Population standard deviation of team-plus-candidate skill levels.

    Returns 0.0 while the team is still empty.
    """
    if not team.members:
        return 0.0
    skills = [m.skill_level for m in team.members] + [candidate.skill_level]
    mean = sum(skills) / len(skills)
    variance = sum((s - mean) ** 2 for s in skills) / len(skills)
    return math.sqrt(variance)


# ---------------------------------------------------------------------------
# Personality fit
# ---------------------------------------------------------------------------
def score_personality_fit(
    team: Team,
    candidate: Participant,
    target_size: int,
    capacity: int | None = None,
) -> float:
    """Reward the candidate's category according to what the team still lacks.

    A Balanced candidate earns more once the team is within two seats of
    *capacity*, which defaults to *target_size*.
    """
    if capacity is None:
        capacity = target_size
    leaders = sum(1 for m in team.members if m.personality_category == "Leader")
    thinkers = sum(1 for m in team.members if m.personality_category == "Thinker")

    category = candidate.personality_category
    if category == "Leader":
        return 12.0 if leaders == 0 else -20.0
    if category == "Thinker":
        if thinkers == 0:
            return 10.0
        if thinkers == 1 and target_size > 3:
            return 8.0
        return -10.0

    # Balanced
    if leaders > 0 and thinkers > 0:
        return 6.0
    if team.size >= capacity - 2:
        return 4.0
    return 2.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def score_candidate(
    team: Team,
    candidate: Participant,
    target_size: int,
    rng: random.Random,
    capacity: int | None = None,
) -> float:
    """Score how well *candidate* fits *team* (higher is better).

    Args:
        team: The team under construction.
        candidate: A participant still in the pool.
        target_size: Requested team size for this invocation.
        rng: The builder's private random source, used for tie-break jitter.
        capacity: Seats this team can actually fill, min(target_size, pool
            remaining); defaults to *target_size*.

    Returns:
        The fit score, or ``EXCLUDED_SCORE`` when the candidate's activity
        already appears twice in the team.
    """
    same_activity = count_same_activity(team, candidate.preferred_activity)
    if same_activity >= _MAX_SAME_ACTIVITY:
        return EXCLUDED_SCORE

    score = 20.0 if same_activity == 0 else 10.0

    new_role = not has_role(team, candidate.preferred_role)
    if new_role:
        score += 15.0
        if target_size > 5 and team.size >= 3 and count_unique_roles(team) < 3:
            score += 10.0

    score += score_personality_fit(team, candidate, target_size, capacity)
    score -= skill_spread(team, candidate) * 2
    score += rng.uniform(0.0, _JITTER)
    return score
