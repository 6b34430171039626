"""Participant definitions for team formation.

Defines the closed role catalog, the activity catalog offered by the
registration survey and the three personality categories derived from the
personality score (Leader / Balanced / Thinker).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------
ROLES: tuple[str, ...] = (
    "Strategist",
    "Attacker",
    "Defender",
    "Supporter",
    "Coordinator",
)

ACTIVITY_CATALOG: tuple[str, ...] = (
    "FIFA",
    "Valorant",
    "CS:GO",
    "DOTA 2",
    "Basketball",
    "Chess",
    "Badminton",
)

PersonalityCategory = Literal["Leader", "Balanced", "Thinker"]

PERSONALITY_CATEGORIES: tuple[PersonalityCategory, ...] = ("Leader", "Balanced", "Thinker")

_LEADER_THRESHOLD = 90
_BALANCED_THRESHOLD = 70


def classify_personality(score: int) -> PersonalityCategory:
    """Classify a personality score into its category.

    Args:
        score: Personality score, nominally 0-100.

    Returns:
        "Leader" (>= 90), "Balanced" (70-89) or "Thinker" (< 70).
    """
    if score >= _LEADER_THRESHOLD:
        return "Leader"
    if score >= _BALANCED_THRESHOLD:
        return "Balanced"
    return "Thinker"


def parse_role(text: str) -> str:
    """Resolve a role name case-insensitively to its canonical spelling.

    Raises:
        ValueError: If *text* names no known role.
    """
    wanted = text.strip().lower()
    for role in ROLES:
        if role.lower() == wanted:
            return role
    raise ValueError(f"Unknown role: {text}")


def canonical_activity(text: str) -> str:
    """Spell a catalog activity the catalog's way; other activities are kept as typed."""
    stripped = text.strip()
    wanted = stripped.lower()
    for activity in ACTIVITY_CATALOG:
        if activity.lower() == wanted:
            return activity
    return stripped


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class Participant(BaseModel):
    """A single club member as loaded from the participant records."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = ""
    preferred_activity: str = Field(..., min_length=1)
    skill_level: int = Field(..., ge=1, le=10)
    preferred_role: str
    personality_score: int = Field(..., ge=0, le=100)

    @field_validator("preferred_activity")
    @classmethod
    def validate_activity(cls, v: str) -> str:
        activity = canonical_activity(v)
        if not activity:
            raise ValueError("preferred_activity must not be blank")
        return activity

    @field_validator("preferred_role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        """Normalise the role against the closed catalog."""
        return parse_role(v)

    @property
    def personality_category(self) -> PersonalityCategory:
        """Category recomputed from the score on every access."""
        return classify_personality(self.personality_score)

    def __str__(self) -> str:
        return (
            f"{self.name} ({self.preferred_activity}) - {self.personality_category} "
            f"| Role: {self.preferred_role} | Skill: {self.skill_level} | {self.id}"
        )
