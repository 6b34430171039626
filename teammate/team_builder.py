"""Parallel team formation: runs several greedy attempts and keeps the best.

Each attempt builds a full partition on its own copy of the pool with its
own random source. Finished partitions are collected in a lock-protected
store, scored with the quality scorer, and the winner is numbered 1..K.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait

from pydantic import BaseModel, Field

from teammate.engine.partition_builder import build_partition
from teammate.engine.quality import calculate_quality_score
from teammate.engine.selection import rank_partitions, select_from_ranked
from teammate.engine.statistics import calculate_team_statistics
from teammate.formation_config import FormationConfig
from teammate.participant_models import Participant
from teammate.team_models import Partition, partition_size


# ---------------------------------------------------------------------------
# Shared result collection
# ---------------------------------------------------------------------------
class CandidateStore:
    """Thread-safe collection of finished partitions, in completion order."""

    def __init__(self) -> None:
        self._candidates: list[Partition] = []
        self._lock = threading.Lock()
        self._closed = False

    def add(self, partition: Partition) -> bool:
        """Append *partition*; returns False when the store is already closed."""
        with self._lock:
            if self._closed:
                return False
            self._candidates.append(partition)
            return True

    def close(self) -> list[Partition]:
        """Stop accepting results and return what was collected."""
        with self._lock:
            self._closed = True
            return list(self._candidates)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._candidates)


# ---------------------------------------------------------------------------
# Exact-count feasibility
# ---------------------------------------------------------------------------
class FeasibilityReport(BaseModel):
    """Whether a pool can fill an exact team-count request."""

    people_needed: int = Field(ge=0)
    people_available: int = Field(ge=0)
    leaders_needed: int = Field(ge=0)
    leaders_available: int = Field(ge=0)
    thinkers_needed: int = Field(ge=0)
    thinkers_available: int = Field(ge=0)
    problems: list[str] = Field(default_factory=list)

    @property
    def feasible(self) -> bool:
        return not self.problems


def assess_exact_request(
    participants: list[Participant],
    team_size: int,
    team_count: int,
) -> FeasibilityReport:
    """Check a pool against an exact request before calling the builder.

    Every team needs one Leader and one Thinker (two when team_size > 3).

    Raises:
        ValueError: If team_size or team_count is below 1.
    """
    if team_size < 1:
        raise ValueError(f"team_size must be >= 1, got {team_size}")
    if team_count < 1:
        raise ValueError(f"team_count must be >= 1, got {team_count}")

    people_needed = team_size * team_count
    leaders = sum(1 for p in participants if p.personality_category == "Leader")
    thinkers = sum(1 for p in participants if p.personality_category == "Thinker")
    leaders_needed = team_count
    thinkers_needed = team_count * (2 if team_size > 3 else 1)

    problems: list[str] = []
    if people_needed > len(participants):
        problems.append(f"Need {people_needed} participants, only {len(participants)} available")
    if leaders_needed > leaders:
        problems.append(f"Need {leaders_needed} Leaders, only {leaders} available")
    if thinkers_needed > thinkers:
        problems.append(f"Need {thinkers_needed} Thinkers, only {thinkers} available")

    return FeasibilityReport(
        people_needed=people_needed,
        people_available=len(participants),
        leaders_needed=leaders_needed,
        leaders_available=leaders,
        thinkers_needed=thinkers_needed,
        thinkers_available=thinkers,
        problems=problems,
    )


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------
class TeamBuilder:
    """Runs parallel greedy attempts and returns the best-scoring partition."""

    def __init__(
        self,
        config: FormationConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize with formation settings and the logger to report through."""
        self.config = config or FormationConfig()
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def form_teams(self, participants: list[Participant], team_size: int) -> Partition:
        """Form as many full teams as the pool allows."""
        team_size = self._valid_team_size(team_size)
        if not participants:
            return []

        self.logger.info(
            "Starting team formation: %d participants, target team size = %d",
            len(participants), team_size,
        )
        teams = self._search(participants, team_size, max_teams=0)
        self.logger.info("Team formation completed: %d teams created", len(teams))
        self._log_detailed_statistics(teams)
        return teams

    def form_exact_teams(
        self,
        participants: list[Participant],
        team_size: int,
        team_count: int,
    ) -> Partition:
        """Form at most *team_count* teams of *team_size*.

        Infeasible requests are not rejected; the result is simply smaller.
        Use ``assess_exact_request`` beforehand to check the pool.
        """
        team_size = self._valid_team_size(team_size)
        if team_count <= 0:
            self.logger.warning("Invalid team count %d, using 1", team_count)
            team_count = 1
        if not participants:
            return []

        self.logger.info(
            "Starting team formation: %d participants, %d teams of size %d",
            len(participants), team_count, team_size,
        )
        if team_count * team_size > len(participants):
            self.logger.warning(
                "Not enough participants for requested teams: need %d, have %d",
                team_count * team_size, len(participants),
            )

        teams = self._search(participants, team_size, max_teams=team_count)
        self.logger.info(
            "Team formation completed: %d teams created with %d participants",
            len(teams), partition_size(teams),
        )
        self._log_detailed_statistics(teams)
        return teams

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _valid_team_size(self, team_size: int) -> int:
        if team_size <= 0:
            self.logger.warning(
                "Invalid team size %d, using default %d",
                team_size, self.config.default_team_size,
            )
            return self.config.default_team_size
        return team_size

    def _attempt_rng(self, attempt: int) -> random.Random:
        if self.config.seed is None:
            return random.Random()
        return random.Random(self.config.seed + attempt)

    def _run_attempt(
        self,
        attempt: int,
        participants: list[Participant],
        team_size: int,
        max_teams: int,
        store: CandidateStore,
        cancel_event: threading.Event,
    ) -> None:
        started = time.monotonic()
        try:
            partition = build_partition(
                participants,
                team_size,
                max_teams=max_teams,
                rng=self._attempt_rng(attempt),
                cancel_event=cancel_event,
                min_fill_ratio=self.config.min_fill_ratio,
                log=self.logger,
            )
        except Exception as e:
            self.logger.error("Attempt %d failed: %s", attempt, e, exc_info=True)
            return

        if store.add(partition):
            self.logger.debug(
                "Attempt %d finished in %.3fs: %d teams",
                attempt, time.monotonic() - started, len(partition),
            )
        else:
            self.logger.debug("Attempt %d finished after timeout, result discarded", attempt)

    def _search(
        self,
        participants: list[Participant],
        team_size: int,
        max_teams: int,
    ) -> Partition:
        store = CandidateStore()
        cancel_event = threading.Event()
        attempts = self.config.attempts

        executor = ThreadPoolExecutor(max_workers=attempts, thread_name_prefix="team-attempt")
        try:
            futures = [
                executor.submit(
                    self._run_attempt,
                    attempt,
                    list(participants),
                    team_size,
                    max_teams,
                    store,
                    cancel_event,
                )
                for attempt in range(attempts)
            ]
            _, not_done = wait(futures, timeout=self.config.timeout_seconds)
            candidates = store.close()
            if not_done:
                self.logger.warning(
                    "Timed out after %.1fs: %d of %d attempts still running, continuing with %d results",
                    self.config.timeout_seconds, len(not_done), attempts, len(candidates),
                )
        finally:
            cancel_event.set()
            executor.shutdown(wait=False, cancel_futures=True)

        ranked = rank_partitions(candidates, calculate_quality_score)
        for i, (score, partition) in enumerate(ranked):
            self.logger.debug(
                "Candidate %d: score=%.2f teams=%d people=%d",
                i + 1, score, len(partition), partition_size(partition),
            )

        best = select_from_ranked(ranked)
        for number, team in enumerate(best, start=1):
            team.set_team_number(number)
        return best

    def _log_detailed_statistics(self, teams: Partition) -> None:
        self.logger.info("========== DETAILED TEAM STATISTICS ==========")
        for team in teams:
            stats = calculate_team_statistics(team)
            self.logger.info(
                "Team %d: Size=%d, AvgSkill=%.2f", stats.team_number, stats.size, stats.average_skill,
            )
            self.logger.info("  Activities: %s", stats.activities)
            self.logger.info("  Roles: %s", stats.roles)
            self.logger.info("  Personalities: %s", stats.personalities)
        self.logger.info("=============================================")
