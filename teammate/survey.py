"""New-member registration survey."""

from __future__ import annotations

from teammate.participant_models import Participant
from teammate.participant_repository import next_participant_id


SURVEY_QUESTIONS: list[str] = [
    "I enjoy taking the lead and guiding others during group activities.",
    "I prefer analyzing situations and coming up with strategic solutions.",
    "I work well with others and enjoy collaborative teamwork.",
    "I am calm under pressure and can help maintain team morale.",
    "I like making quick decisions and adapting in dynamic situations.",
]

ANSWER_MIN = 1
ANSWER_MAX = 5
_SCORE_SCALE = 4  # 5 answers of 1-5 → 20-100


def score_personality_survey(answers: list[int]) -> int:
    """Turn five 1-5 Likert answers into a personality score (20-100).

    Raises:
        ValueError: On a wrong answer count or an answer outside 1-5.
    """
    if len(answers) != len(SURVEY_QUESTIONS):
        raise ValueError(
            f"Expected {len(SURVEY_QUESTIONS)} answers, got {len(answers)}"
        )
    for i, answer in enumerate(answers, 1):
        if not ANSWER_MIN <= answer <= ANSWER_MAX:
            raise ValueError(f"Answer {i} must be between {ANSWER_MIN} and {ANSWER_MAX}, got {answer}")
    return sum(answers) * _SCORE_SCALE


def register_participant(
    existing: list[Participant],
    name: str,
    email: str,
    activity: str,
    role: str,
    answers: list[int],
    skill_level: int,
) -> Participant:
    """Create a participant from survey input.

    Blank names and emails fall back to numbered defaults; the id continues
    the ``P%03d`` sequence of *existing*.
    """
    number = len(existing) + 101
    return Participant(
        id=next_participant_id(existing),
        name=name.strip() or f"Participant_{number}",
        email=email.strip() or f"user{number}@rgu.ac.uk",
        preferred_activity=activity,
        skill_level=skill_level,
        preferred_role=role,
        personality_score=score_personality_survey(answers),
    )
