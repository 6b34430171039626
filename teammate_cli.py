#!/usr/bin/env python3
"""TeamMate command line: gaming club team formation.

Usage:
    python3 teammate_cli.py form --team-size 5
    python3 teammate_cli.py form --team-size 4 --teams 6 --output formed_teams.csv
    python3 teammate_cli.py stats
    python3 teammate_cli.py register --name Ana --activity Chess --role Defender \
        --answers 4 5 3 4 4 --skill 7

Settings come from TEAMMATE_* variables, optionally in a .env file.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from dotenv import load_dotenv

from teammate.engine.statistics import calculate_club_statistics
from teammate.exceptions import FileProcessingError
from teammate.formation_config import load_formation_config
from teammate.participant_models import ACTIVITY_CATALOG, ROLES
from teammate.participant_repository import ParticipantRepository, write_teams
from teammate.reporting import format_club_statistics, format_teams
from teammate.survey import register_participant
from teammate.team_builder import TeamBuilder, assess_exact_request

logger = logging.getLogger("teammate")

DEFAULT_PARTICIPANTS = "data/participants_sample.csv"
DEFAULT_OUTPUT = "formed_teams.csv"


def configure_logging() -> None:
    """Log to stderr, and append to TEAMMATE_LOG_FILE when set."""
    level = os.getenv("TEAMMATE_LOG_LEVEL", "INFO").upper()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv("TEAMMATE_LOG_FILE", "")
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] %(levelname)-5s %(name)s %(message)s",
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Form balanced gaming club teams.")
    parser.add_argument("--participants", default=DEFAULT_PARTICIPANTS, help="participant CSV file")
    sub = parser.add_subparsers(dest="command", required=True)

    form = sub.add_parser("form", help="form balanced teams")
    form.add_argument("--team-size", type=int, default=5)
    form.add_argument("--teams", type=int, default=0, help="exact number of teams (0 = as many as possible)")
    form.add_argument("--output", default=DEFAULT_OUTPUT)

    sub.add_parser("stats", help="show club statistics")

    register = sub.add_parser("register", help="add a new club member")
    register.add_argument("--name", default="")
    register.add_argument("--email", default="")
    register.add_argument("--activity", choices=ACTIVITY_CATALOG, required=True)
    register.add_argument("--role", choices=ROLES, required=True)
    register.add_argument("--answers", type=int, nargs=5, required=True, metavar="N")
    register.add_argument("--skill", type=int, required=True)
    return parser


def cmd_form(args: argparse.Namespace, repo: ParticipantRepository) -> int:
    participants = repo.load_participants()
    if not participants:
        print("No participants available. Please add members first.")
        return 0

    config = load_formation_config()
    team_size = args.team_size
    if team_size <= 0:
        logger.warning("Invalid team size %d, using default %d", team_size, config.default_team_size)
        team_size = config.default_team_size

    builder = TeamBuilder(config)
    start = time.monotonic()
    if args.teams > 0:
        report = assess_exact_request(participants, team_size, args.teams)
        for problem in report.problems:
            print(f"Warning: {problem}")
        teams = builder.form_exact_teams(participants, team_size, args.teams)
    else:
        teams = builder.form_teams(participants, team_size)
    elapsed_ms = (time.monotonic() - start) * 1000

    print(f"Created {len(teams)} teams in {elapsed_ms:.0f} ms\n")
    print(format_teams(teams))
    write_teams(teams, args.output)
    print(f"Teams exported to '{args.output}'")
    return 0


def cmd_stats(args: argparse.Namespace, repo: ParticipantRepository) -> int:
    participants = repo.load_participants()
    if not participants:
        print("No data available yet.")
        return 0
    print(format_club_statistics(calculate_club_statistics(participants)))
    return 0


def cmd_register(args: argparse.Namespace, repo: ParticipantRepository) -> int:
    existing = [] if repo.is_empty() else repo.load_participants()
    try:
        member = register_participant(
            existing,
            name=args.name,
            email=args.email,
            activity=args.activity,
            role=args.role,
            answers=args.answers,
            skill_level=args.skill,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    repo.append_participant(member)
    print(f"SUCCESS! {member.name} has been added and saved.")
    print(f"→ ID: {member.id} | Game: {member.preferred_activity} | Role: {member.preferred_role}")
    print(f"→ Personality: {member.personality_category} (Score: {member.personality_score})")
    print(f"→ Skill Level: {member.skill_level}/10")
    return 0


_COMMANDS = {
    "form": cmd_form,
    "stats": cmd_stats,
    "register": cmd_register,
}


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    configure_logging()
    args = build_parser().parse_args(argv)
    repo = ParticipantRepository(args.participants)
    try:
        return _COMMANDS[args.command](args, repo)
    except FileProcessingError as e:
        logger.error("File error: %s", e)
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
