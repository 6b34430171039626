"""Composition statistics for single teams and the whole club."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from teammate.participant_models import PERSONALITY_CATEGORIES, Participant
from teammate.team_models import Team


class TeamStatistics(BaseModel):
    """Counts by activity, role and personality for one team."""

    team_number: int
    size: int
    average_skill: float
    activities: dict[str, int] = Field(default_factory=dict)
    roles: dict[str, int] = Field(default_factory=dict)
    personalities: dict[str, int] = Field(default_factory=dict)


class ClubStatistics(BaseModel):
    """Club-wide member counts."""

    total_members: int = Field(ge=0)
    leaders: int = Field(ge=0)
    balanced: int = Field(ge=0)
    thinkers: int = Field(ge=0)
    average_skill: float = Field(ge=0.0)


def calculate_team_statistics(team: Team) -> TeamStatistics:
    return TeamStatistics(
        team_number=team.team_number,
        size=team.size,
        average_skill=round(team.average_skill, 2),
        activities=dict(Counter(m.preferred_activity for m in team.members)),
        roles=dict(Counter(m.preferred_role for m in team.members)),
        personalities=dict(Counter(m.personality_category for m in team.members)),
    )


def calculate_club_statistics(participants: list[Participant]) -> ClubStatistics:
    """Summarise the member pool by personality category and skill."""
    counts = Counter(p.personality_category for p in participants)
    leaders, balanced, thinkers = (counts[c] for c in PERSONALITY_CATEGORIES)
    avg = sum(p.skill_level for p in participants) / len(participants) if participants else 0.0
    return ClubStatistics(
        total_members=len(participants),
        leaders=leaders,
        balanced=balanced,
        thinkers=thinkers,
        average_skill=round(avg, 2),
    )
