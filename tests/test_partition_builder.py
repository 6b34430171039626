"""Tests for teammate/engine/partition_builder.py."""

import random
import threading
from unittest.mock import patch

import pytest

from teammate.engine import partition_builder
from teammate.engine.partition_builder import build_partition, build_team
from teammate.participant_models import ACTIVITY_CATALOG, ROLES, Participant


def _p(pid, activity="Chess", role="Attacker", score=75, skill=5) -> Participant:
    return Participant(
        id=pid, name=pid, preferred_activity=activity, skill_level=skill,
        preferred_role=role, personality_score=score,
    )


def _pool(n: int, seed: int = 0) -> list[Participant]:
    rng = random.Random(seed)
    return [
        _p(
            f"P{i:04d}",
            activity=rng.choice(ACTIVITY_CATALOG),
            role=rng.choice(ROLES),
            score=rng.randint(20, 100),
            skill=rng.randint(1, 10),
        )
        for i in range(n)
    ]


def _all_ids(teams) -> list[str]:
    return [pid for t in teams for pid in t.member_ids()]


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------
class TestEdgeCases:
    def test_empty_pool(self):
        assert build_partition([], 5, rng=random.Random(1)) == []

    def test_invalid_team_size(self):
        with pytest.raises(ValueError, match="team_size"):
            build_partition(_pool(5), 0)

    def test_negative_max_teams(self):
        with pytest.raises(ValueError, match="max_teams"):
            build_partition(_pool(5), 3, max_teams=-1)

    def test_input_not_mutated(self):
        pool = _pool(20)
        snapshot = list(pool)
        build_partition(pool, 4, rng=random.Random(3))
        assert pool == snapshot

    def test_pool_smaller_than_team_size(self):
        teams = build_partition(_pool(3), 5, rng=random.Random(2))
        assert len(teams) == 1
        assert teams[0].size == 3


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------
class TestInvariants:
    @pytest.mark.parametrize("team_size", [1, 2, 3, 5, 7])
    def test_team_size_never_exceeded(self, team_size):
        teams = build_partition(_pool(41, seed=team_size), team_size, rng=random.Random(5))
        assert teams
        assert all(1 <= t.size <= team_size for t in teams)

    def test_no_duplicates(self):
        teams = build_partition(_pool(60), 5, rng=random.Random(9))
        ids = _all_ids(teams)
        assert len(ids) == len(set(ids))

    def test_unbounded_stops_before_trailing_partial_team(self):
        teams = build_partition(_pool(12), 5, rng=random.Random(4))
        assert [t.size for t in teams] == [5, 5]

    def test_max_teams_respected(self):
        teams = build_partition(_pool(50), 4, max_teams=3, rng=random.Random(4))
        assert len(teams) == 3
        assert sum(t.size for t in teams) == 12

    def test_max_teams_with_small_pool(self):
        teams = build_partition(_pool(10), 4, max_teams=5, rng=random.Random(4))
        assert len(teams) <= 5
        ids = _all_ids(teams)
        assert len(ids) <= 10
        assert len(ids) == len(set(ids))

    def test_same_seed_same_partition(self):
        pool = _pool(30)
        a = build_partition(pool, 5, rng=random.Random(42))
        b = build_partition(pool, 5, rng=random.Random(42))
        assert [t.member_ids() for t in a] == [t.member_ids() for t in b]


# ---------------------------------------------------------------------------
# Seeding rules
# ---------------------------------------------------------------------------
class TestSeeding:
    def test_leader_and_thinker_pair(self):
        leader = _p("L", score=95)
        thinker = _p("T", score=55, activity="FIFA")
        teams = build_partition([leader, thinker], 2, rng=random.Random(1))
        assert len(teams) == 1
        assert set(teams[0].member_ids()) == {"L", "T"}

    def test_team_starts_with_leader_then_thinkers(self):
        pool = [_p("L1", score=95), _p("T1", score=50), _p("T2", score=60)]
        pool += [_p(f"B{i}", score=80, activity=ACTIVITY_CATALOG[i]) for i in range(5)]
        team = build_team(list(pool), 5, 5, random.Random(0))
        categories = [m.personality_category for m in team.members]
        assert categories[:3] == ["Leader", "Thinker", "Thinker"]
        assert team.size == 5

    def test_small_team_seeds_one_thinker(self):
        pool = [_p("L1", score=95), _p("T1", score=50), _p("T2", score=60), _p("B1", score=80)]
        team = build_team(list(pool), 3, 3, random.Random(0))
        assert [m.personality_category for m in team.members][:2] == ["Leader", "Thinker"]

    def test_seeding_respects_capacity(self):
        pool = [_p("L1", score=95), _p("T1", score=50), _p("T2", score=60)]
        team = build_team(list(pool), 1, 1, random.Random(0))
        assert team.member_ids() == ["L1"]

    def test_excluded_candidate_used_when_no_alternative(self):
        pool = [_p(f"C{i}", activity="Chess", score=80) for i in range(3)]
        team = build_team(list(pool), 3, 3, random.Random(0))
        assert team.size == 3

    def test_fill_scores_against_capacity(self):
        pool = [_p("L1", score=95), _p("B1", activity="FIFA"), _p("B2", activity="Chess")]
        with patch.object(
            partition_builder, "score_candidate", wraps=partition_builder.score_candidate,
        ) as scorer:
            team = build_team(list(pool), 5, 3, random.Random(0))
        assert team.size == 3
        assert scorer.call_count > 0
        assert all(c.args[4] == 3 for c in scorer.call_args_list)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
class TestOptions:
    def test_cancel_event_stops_construction(self):
        cancel = threading.Event()
        cancel.set()
        assert build_partition(_pool(20), 5, rng=random.Random(1), cancel_event=cancel) == []

    def test_min_fill_ratio_drops_small_team(self):
        assert build_partition(_pool(3), 5, rng=random.Random(1), min_fill_ratio=0.8) == []

    def test_min_fill_ratio_keeps_full_teams(self):
        teams = build_partition(_pool(10), 5, rng=random.Random(1), min_fill_ratio=0.8)
        assert [t.size for t in teams] == [5, 5]
