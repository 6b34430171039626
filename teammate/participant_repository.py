"""CSV persistence for participants and formed teams."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
import threading

from pydantic import ValidationError

from teammate.exceptions import FileProcessingError, InvalidParticipantDataError
from teammate.participant_models import Participant
from teammate.team_models import Team


logger = logging.getLogger(__name__)

PARTICIPANT_COLUMNS = [
    "ID", "Name", "Email", "PreferredGame", "SkillLevel",
    "PreferredRole", "PersonalityScore", "PersonalityType",
]
TEAM_COLUMNS = ["TeamNumber", "ParticipantID", "Name", "Game", "Role", "Personality", "Skill"]


class ParticipantRepository:
    """Thread-safe access to the participant CSV file."""

    def __init__(self, csv_path: str = "data/participants_sample.csv") -> None:
        self._path = Path(csv_path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def is_empty(self) -> bool:
        """True when the file is missing or has zero bytes."""
        return not self._path.exists() or self._path.stat().st_size == 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load_participants(self) -> list[Participant]:
        """Read every participant row; the header row is skipped.

        Blank rows and rows with fewer than 8 fields are skipped with a
        warning.

        Raises:
            FileProcessingError: If the file is missing, empty or unreadable,
                or a row holds invalid data.
        """
        with self._lock:
            if not self._path.exists():
                raise FileProcessingError(f"Participants file not found: {self._path}")
            try:
                with open(self._path, newline="", encoding="utf-8") as fh:
                    return self._parse(csv.reader(fh))
            except InvalidParticipantDataError as e:
                raise FileProcessingError(f"Failed to read file: {self._path}: {e}") from e
            except OSError as e:
                raise FileProcessingError(f"Failed to read file: {self._path}") from e

    def append_participant(self, participant: Participant) -> None:
        """Append one participant row, writing the header for a new file."""
        with self._lock:
            new_file = self.is_empty()
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, "a", newline="", encoding="utf-8") as fh:
                    writer = csv.writer(fh)
                    if new_file:
                        writer.writerow(PARTICIPANT_COLUMNS)
                    writer.writerow(_participant_row(participant))
            except OSError as e:
                raise FileProcessingError("Could not save new member to file") from e
        logger.info("Participant %s appended to %s", participant.id, self._path)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _parse(self, reader) -> list[Participant]:
        if next(reader, None) is None:
            raise FileProcessingError(f"CSV file is empty: {self._path}")

        participants: list[Participant] = []
        for line_number, row in enumerate(reader, start=2):
            if not any(cell.strip() for cell in row):
                continue
            if len(row) < len(PARTICIPANT_COLUMNS):
                logger.warning("Skipping malformed line %d: %s", line_number, ",".join(row))
                continue
            participants.append(_parse_row(row, line_number))

        logger.info("Loaded %d participants from %s", len(participants), self._path)
        return participants


def _parse_row(row: list[str], line_number: int) -> Participant:
    cells = [c.strip() for c in row]
    try:
        skill = int(cells[4])
        score = int(cells[6])
    except ValueError as e:
        raise InvalidParticipantDataError(
            f"Invalid number on line {line_number}: {','.join(row)}", line_number
        ) from e
    try:
        return Participant(
            id=cells[0],
            name=cells[1],
            email=cells[2],
            preferred_activity=cells[3],
            skill_level=skill,
            preferred_role=cells[5],
            personality_score=score,
        )
    except ValidationError as e:
        raise InvalidParticipantDataError(
            f"Invalid participant on line {line_number}: {','.join(row)}", line_number
        ) from e


def _participant_row(p: Participant) -> list[str | int]:
    return [
        p.id, p.name, p.email, p.preferred_activity, p.skill_level,
        p.preferred_role, p.personality_score, p.personality_category,
    ]


def next_participant_id(participants: list[Participant]) -> str:
    """ID for the next registered member, e.g. ``P042``."""
    return f"P{len(participants) + 1:03d}"


def write_teams(teams: list[Team], filepath: str) -> str:
    """Export teams to CSV, one row per member (atomic write).

    Returns:
        The filepath written.

    Raises:
        FileProcessingError: If the file cannot be written.
    """
    path = Path(filepath)
    tmp = path.with_suffix(".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(TEAM_COLUMNS)
            for index, team in enumerate(teams, start=1):
                label = f"Team {team.team_number or index}"
                for m in team.members:
                    writer.writerow([
                        label, m.id, m.name, m.preferred_activity,
                        m.preferred_role, m.personality_category, m.skill_level,
                    ])
        tmp.replace(path)
    except OSError as e:
        if tmp.exists():
            tmp.unlink()
        raise FileProcessingError(f"Could not write file: {filepath}") from e

    logger.info("Teams saved to %s", filepath)
    return filepath
