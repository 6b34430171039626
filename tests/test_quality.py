"""Tests for teammate/engine/quality.py."""

import pytest

from teammate.engine.quality import (
    QualityBreakdown,
    calculate_quality_breakdown,
    calculate_quality_score,
    score_activity_variety,
    score_personality_mix,
    score_role_diversity,
    score_skill_balance,
)
from teammate.participant_models import Participant
from teammate.team_models import Team


def _p(pid, activity="Chess", role="Attacker", score=75, skill=5) -> Participant:
    return Participant(
        id=pid, name=pid, preferred_activity=activity, skill_level=skill,
        preferred_role=role, personality_score=score,
    )


def _pair_team() -> Team:
    return Team(members=[
        _p("L", activity="Chess", role="Strategist", score=95, skill=6),
        _p("T", activity="FIFA", role="Attacker", score=55, skill=4),
    ])


# ---------------------------------------------------------------------------
# Per-term scores
# ---------------------------------------------------------------------------
class TestSkillBalance:
    def test_single_team_is_perfect(self):
        assert score_skill_balance([_pair_team()]) == 100.0

    def test_variance_of_team_averages(self):
        low = Team(members=[_p("a", skill=2)])
        high = Team(members=[_p("b", skill=8)])
        # averages 2 and 8 → population variance 9
        assert score_skill_balance([low, high]) == pytest.approx(91.0)


class TestActivityVariety:
    def test_all_distinct(self):
        assert score_activity_variety([_pair_team()]) == pytest.approx(100.0)

    def test_three_of_same_activity_is_violation(self):
        team = Team(members=[_p(f"c{i}", activity="Chess") for i in range(3)])
        assert score_activity_variety([team]) == 0.0

    def test_two_of_same_activity_allowed(self):
        team = Team(members=[_p("a", activity="Chess"), _p("b", activity="Chess"), _p("c", activity="FIFA")])
        assert score_activity_variety([team]) == pytest.approx(2 / 3 * 100)

    def test_activity_case_ignored(self):
        team = Team(members=[
            _p("a", activity="Chess"), _p("b", activity="chess"), _p("c", activity="CHESS"),
        ])
        assert score_activity_variety([team]) == 0.0

    def test_unlisted_activity_case_ignored(self):
        team = Team(members=[_p("a", activity="Darts"), _p("b", activity="darts")])
        assert score_activity_variety([team]) == pytest.approx(50.0)


class TestRoleDiversity:
    def test_ratio_of_distinct_roles(self):
        team = Team(members=[_p("a", role="Attacker"), _p("b", role="Attacker"),
                             _p("c", role="Defender"), _p("d", role="Supporter")])
        assert score_role_diversity([team]) == pytest.approx(75.0)

    def test_large_team_shortfall(self):
        team = Team(members=[_p(f"m{i}", role="Attacker" if i % 2 else "Defender") for i in range(6)])
        assert score_role_diversity([team]) == 30.0


class TestPersonalityMix:
    def test_ideal_mix(self):
        assert score_personality_mix([_pair_team()]) == 100.0

    def test_two_leaders_no_thinker(self):
        team = Team(members=[_p("a", score=95), _p("b", score=91)])
        assert score_personality_mix([team]) == 60.0

    def test_no_leader_three_thinkers(self):
        team = Team(members=[_p(f"t{i}", score=40) for i in range(3)])
        assert score_personality_mix([team]) == 60.0

    def test_averaged_over_teams(self):
        ideal = _pair_team()
        balanced_only = Team(members=[_p("b", score=80)])
        # 100 and 50 + 10 + 10 = 70
        assert score_personality_mix([ideal, balanced_only]) == pytest.approx(85.0)


# ---------------------------------------------------------------------------
# Weighted total
# ---------------------------------------------------------------------------
class TestQualityScore:
    def test_empty_partition(self):
        assert calculate_quality_score([]) == 0.0
        assert calculate_quality_breakdown([]) == QualityBreakdown()

    def test_hand_computed_total(self):
        # 100*20 + 100*15 + 100*12 + 100*10 + 2*0.5
        assert calculate_quality_score([_pair_team()]) == pytest.approx(5701.0)

    def test_breakdown_terms(self):
        result = calculate_quality_breakdown([_pair_team()])
        assert result.skill_balance == 100.0
        assert result.people_bonus == 1.0
        assert result.total == pytest.approx(5701.0)

    def test_deterministic(self):
        teams = [_pair_team(), Team(members=[_p("x", skill=9), _p("y", activity="FIFA", skill=1)])]
        first = calculate_quality_score(teams)
        assert all(calculate_quality_score(teams) == first for _ in range(5))

    def test_more_people_breaks_tie(self):
        a = [_pair_team()]
        b = [_pair_team(), _pair_team()]
        assert calculate_quality_score(b) > calculate_quality_score(a)
