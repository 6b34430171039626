"""Plain-text rendering of teams and club statistics."""

from __future__ import annotations

from teammate.engine.statistics import ClubStatistics
from teammate.team_models import Team


def format_team(team: Team) -> str:
    lines = [f"=== TEAM {team.team_number} ({team.size} members) ==="]
    lines.extend(f"  • {member}" for member in team.members)
    lines.append(f"Average skill: {team.average_skill:.2f}")
    return "\n".join(lines) + "\n"


def format_teams(teams: list[Team]) -> str:
    """Render every team, separated by blank lines."""
    return "\n".join(format_team(t) for t in teams)


def format_club_statistics(stats: ClubStatistics) -> str:
    return "\n".join([
        "=== CLUB STATISTICS ===",
        f"Total members: {stats.total_members}",
        f"Leaders: {stats.leaders}",
        f"Balanced: {stats.balanced}",
        f"Thinkers: {stats.thinkers}",
        f"Average skill level: {stats.average_skill:.2f}/10",
    ])
