"""Core contest state transitions (pure, no I/O).

This module owns the global contest state and implements every scoreboard
operation as an in-place transition on a single ``Contest`` object.

Architecture:
- Teams live in an owned dict keyed by unique name; entries are never removed
- Commands are validated payloads (see commands.ValidatedCmd) with a 'type' field
- apply_command() dispatches one command and returns a CommandOutcome
- A rejected command raises PreconditionViolation before touching any state;
  apply_command() turns it into a rejected outcome so replay can continue

Key concepts:
- Ranks are assigned by re-rank passes (START, FLUSH, SCROLL) and are read,
  not recomputed, by QUERY_RANKING
- While frozen, submissions to problems that were unsolved at freeze time are
  buffered and hidden from ranking until SCROLL reveals them
- Every submission is appended to the team log regardless of freeze state

State transitions:
- ADDTEAM: Register a team (only before START, names unique)
- START: Fix duration and problem set (A, B, ...), initial re-rank
- SUBMIT: Log a submission and score or buffer it
- FLUSH: Full re-rank, no reveal
- FREEZE: Arm the freeze on every currently unsolved problem
- SCROLL: Reveal every buffered problem, emit rank changes, unfreeze
- QUERY_RANKING / QUERY_SUBMISSION: Read-only lookups
- END: Close the contest; later commands are rejected
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from string import ascii_uppercase
from typing import Any, Dict

from .commands import ValidatedCmd, validate_command
from .config import ContestSettings
from .errors import PreconditionViolation
from .freeze import FreezeController
from .problem import Submission, record_submission
from .ranking import BoardRow, build_board, re_rank
from .scroll import ScrollResult, ScrollSimulator
from .team import Team, TeamStanding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingQuery:
    team_name: str
    rank: int
    # Ranking may hide frozen results until the next scroll.
    stale: bool


@dataclass(frozen=True)
class SubmissionQuery:
    team_name: str
    submission: Submission | None

    @property
    def found(self) -> bool:
        return self.submission is not None


@dataclass
class CommandOutcome:
    """Result of applying one command."""

    type: str
    ok: bool
    result: Any = None
    error: PreconditionViolation | None = None


class Contest:
    def __init__(self, settings: ContestSettings | None = None):
        self.settings = settings or ContestSettings()
        self.teams: Dict[str, Team] = {}
        self.started = False
        self.ended = False
        self.duration = 0
        self.problem_ids: list[str] = []
        self.freezer = FreezeController()
        self.scroller = ScrollSimulator(
            accepted_verdict=self.settings.accepted_verdict,
            wrong_attempt_penalty=self.settings.wrong_attempt_penalty,
        )

    @property
    def frozen(self) -> bool:
        return self.freezer.active

    def _require_open(self) -> None:
        if self.ended:
            raise PreconditionViolation("competition_ended", "competition has ended")

    def _require_team(self, team_name: str) -> Team:
        team = self.teams.get(team_name)
        if team is None:
            raise PreconditionViolation("unknown_team", "cannot find the team")
        return team

    def _re_rank(self) -> list[Team]:
        return re_rank(self.teams.values(), self.settings.wrong_attempt_penalty)

    def board(self) -> tuple[BoardRow, ...]:
        return build_board(
            self.teams.values(), self.problem_ids, self.settings.wrong_attempt_penalty
        )

    def standing(self, team_name: str) -> TeamStanding:
        """Visible standing of one team, scored with this contest's penalty."""
        team = self._require_team(team_name)
        return team.standing(self.settings.wrong_attempt_penalty)

    def add_team(self, team_name: str) -> Team:
        self._require_open()
        if self.started:
            raise PreconditionViolation("competition_started", "competition has started")
        if team_name in self.teams:
            raise PreconditionViolation("duplicate_team", "duplicated team name")
        team = Team(name=team_name)
        self.teams[team_name] = team
        logger.debug(f"Added team {team_name}")
        return team

    def start(self, duration: int, problem_count: int) -> tuple[str, ...]:
        self._require_open()
        if self.started:
            raise PreconditionViolation("competition_started", "competition has started")
        if problem_count < 1 or problem_count > self.settings.max_problems:
            raise PreconditionViolation(
                "invalid_problem_count",
                f"problem count must be 1-{self.settings.max_problems}",
            )
        self.started = True
        self.duration = duration
        self.problem_ids = list(ascii_uppercase[:problem_count])
        self._re_rank()
        logger.info(
            f"Competition started: {len(self.teams)} teams, "
            f"{problem_count} problems, {duration} minutes"
        )
        return tuple(self.problem_ids)

    def submit(self, problem_id: str, team_name: str, verdict: str, time: int) -> Submission:
        self._require_open()
        if not self.started:
            raise PreconditionViolation(
                "competition_not_started", "competition has not started"
            )
        team = self._require_team(team_name)
        if problem_id not in self.problem_ids:
            raise PreconditionViolation("unknown_problem", f"unknown problem {problem_id}")
        submission = Submission(problem=problem_id, verdict=verdict, time=time)
        team.submissions.append(submission)
        buffered = record_submission(
            team.record(problem_id),
            submission,
            freeze_active=self.frozen,
            accepted_verdict=self.settings.accepted_verdict,
        )
        logger.debug(
            f"Submission {team_name}/{problem_id} {verdict} at {time}"
            f"{' (buffered)' if buffered else ''}"
        )
        return submission

    def flush(self) -> tuple[BoardRow, ...]:
        self._require_open()
        self._re_rank()
        return self.board()

    def freeze(self) -> None:
        self._require_open()
        self.freezer.arm(self.teams.values(), self.problem_ids)

    def scroll(self) -> ScrollResult:
        self._require_open()
        self.freezer.require_active()
        result = self.scroller.run(self.teams, self.problem_ids)
        self.freezer.disarm(self.teams.values())
        return result

    def query_ranking(self, team_name: str) -> RankingQuery:
        self._require_open()
        team = self._require_team(team_name)
        return RankingQuery(team_name=team_name, rank=team.rank, stale=self.frozen)

    def query_submission(
        self,
        team_name: str,
        problem: str | None = None,
        verdict: str | None = None,
    ) -> SubmissionQuery:
        self._require_open()
        team = self._require_team(team_name)
        return SubmissionQuery(
            team_name=team_name, submission=team.last_submission(problem, verdict)
        )

    def end(self) -> None:
        self._require_open()
        self.ended = True
        logger.info("Competition ended")


def _dispatch(contest: Contest, cmd) -> Any:
    ctype = cmd.type
    if ctype == "ADDTEAM":
        return contest.add_team(cmd.team)
    if ctype == "START":
        return contest.start(cmd.duration, cmd.problemCount)
    if ctype == "SUBMIT":
        return contest.submit(cmd.problem, cmd.team, cmd.verdict, cmd.time)
    if ctype == "FLUSH":
        return contest.flush()
    if ctype == "FREEZE":
        return contest.freeze()
    if ctype == "SCROLL":
        return contest.scroll()
    if ctype == "QUERY_RANKING":
        return contest.query_ranking(cmd.team)
    if ctype == "QUERY_SUBMISSION":
        return contest.query_submission(cmd.team, cmd.problemFilter, cmd.statusFilter)
    if ctype == "END":
        return contest.end()
    raise ValueError(f"unsupported command type {ctype}")


def apply_command(contest: Contest, cmd: Any) -> CommandOutcome:
    """Apply one command to the contest.

    Args:
        contest: Contest to mutate in place
        cmd: ValidatedCmd, or a plain dict that is validated first

    Returns:
        CommandOutcome with ok=False and the violation when the command is
        rejected; the contest is unchanged in that case.

    Raises:
        CommandParseError: If a dict payload fails validation
    """
    if not isinstance(cmd, ValidatedCmd):
        cmd = validate_command(cmd)
    try:
        result = _dispatch(contest, cmd)
    except PreconditionViolation as exc:
        logger.warning(f"{cmd.type} rejected: {exc.kind}")
        return CommandOutcome(type=cmd.type, ok=False, error=exc)
    return CommandOutcome(type=cmd.type, ok=True, result=result)
