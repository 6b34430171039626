"""Balanced team formation for the gaming club."""

from .participant_models import Participant, classify_personality
from .team_builder import TeamBuilder
from .team_models import Team

__all__ = [
    "Participant",
    "Team",
    "TeamBuilder",
    "classify_personality",
]
