"""Partition quality scoring: skill balance, variety, diversity and mix.

All functions are *pure*: the same partition always yields the same score.
"""

from __future__ import annotations

from collections import Counter

import numpy as np
from pydantic import BaseModel

from teammate.team_models import Partition, Team, partition_size


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------
SKILL_BALANCE_WEIGHT = 20.0
ACTIVITY_VARIETY_WEIGHT = 15.0
ROLE_DIVERSITY_WEIGHT = 12.0
PERSONALITY_MIX_WEIGHT = 10.0
PEOPLE_BONUS_PER_MEMBER = 0.5

_ROLE_SHORTFALL_SCORE = 30.0


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
class QualityBreakdown(BaseModel):
    """Per-term scores of a partition (each term before weighting)."""

    skill_balance: float = 0.0
    activity_variety: float = 0.0
    role_diversity: float = 0.0
    personality_mix: float = 0.0
    people_bonus: float = 0.0
    total: float = 0.0


# ---------------------------------------------------------------------------
# Per-term scores
# ---------------------------------------------------------------------------
def score_skill_balance(teams: Partition) -> float:
    """100 minus the population variance of team average skills, floored at 0."""
    averages = np.array([t.average_skill for t in teams], dtype=float)
    variance = float(np.var(averages))
    return max(0.0, 100.0 - variance)


def _team_activity_variety(team: Team) -> float:
    if team.size == 0:
        return 0.0
    counts = Counter(m.preferred_activity.lower() for m in team.members)
    if any(c > 2 for c in counts.values()):
        return 0.0
    return len(counts) / team.size * 100.0


def _team_role_diversity(team: Team) -> float:
    if team.size == 0:
        return 0.0
    unique_roles = len({m.preferred_role for m in team.members})
    if team.size > 5 and unique_roles < 3:
        return _ROLE_SHORTFALL_SCORE
    return unique_roles / team.size * 100.0


def _team_personality_mix(team: Team) -> float:
    counts = Counter(m.personality_category for m in team.members)
    leaders = counts["Leader"]
    thinkers = counts["Thinker"]

    score = 50.0
    if leaders == 1:
        score += 30.0
    elif leaders == 0:
        score += 10.0

    if 1 <= thinkers <= 2:
        score += 20.0
    elif thinkers == 0:
        score += 10.0
    return score


def score_activity_variety(teams: Partition) -> float:
    return float(np.mean([_team_activity_variety(t) for t in teams]))


def score_role_diversity(teams: Partition) -> float:
    return float(np.mean([_team_role_diversity(t) for t in teams]))


def score_personality_mix(teams: Partition) -> float:
    return float(np.mean([_team_personality_mix(t) for t in teams]))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def calculate_quality_breakdown(teams: Partition) -> QualityBreakdown:
    """Score every term of *teams* and combine them into the weighted total.

    An empty partition scores 0 on every term.
    """
    if not teams:
        return QualityBreakdown()

    skill = score_skill_balance(teams)
    variety = score_activity_variety(teams)
    roles = score_role_diversity(teams)
    mix = score_personality_mix(teams)
    bonus = partition_size(teams) * PEOPLE_BONUS_PER_MEMBER

    total = (
        skill * SKILL_BALANCE_WEIGHT
        + variety * ACTIVITY_VARIETY_WEIGHT
        + roles * ROLE_DIVERSITY_WEIGHT
        + mix * PERSONALITY_MIX_WEIGHT
        + bonus
    )

    return QualityBreakdown(
        skill_balance=skill,
        activity_variety=variety,
        role_diversity=roles,
        personality_mix=mix,
        people_bonus=bonus,
        total=total,
    )


def calculate_quality_score(teams: Partition) -> float:
    """Weighted quality score of *teams*; higher is better."""
    return calculate_quality_breakdown(teams).total
