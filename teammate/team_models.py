"""Team and partition models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from teammate.participant_models import Participant


class Team(BaseModel):
    """An ordered group of participants produced by one builder run.

    Members are only added while the owning builder constructs the team.
    ``team_number`` stays 0 until the coordinator numbers the winning
    partition.
    """

    team_number: int = Field(default=0, ge=0)
    members: list[Participant] = Field(default_factory=list)

    def add_member(self, participant: Participant) -> None:
        self.members.append(participant)

    def set_team_number(self, team_number: int) -> None:
        """Assign the display number (post-selection renumbering only)."""
        self.team_number = team_number

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def average_skill(self) -> float:
        """Mean member skill level, 0.0 for an empty team."""
        if not self.members:
            return 0.0
        return sum(m.skill_level for m in self.members) / len(self.members)

    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]


# One builder attempt's output: an ordered list of teams.
Partition = list[Team]


def partition_size(partition: Partition) -> int:
    """Total number of participants placed across *partition*."""
    return sum(team.size for team in partition)
