"""Scroll (reveal) simulation.

Starting from the frozen board, hidden results are revealed one problem at a
time: always the worst-ranked team that still has a frozen problem, and of its
frozen problems the one with the smallest id. After each reveal only the
revealed team is moved to its new slot, which gives the same order as a full
re-rank; when it climbs, a RankChange names the team it jumped over (the team
now right below it).

The loop performs exactly one reveal per frozen record, so it always
terminates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from .problem import ACCEPTED, reveal
from .ranking import BoardRow, build_board, re_rank, reposition
from .team import DEFAULT_WRONG_ATTEMPT_PENALTY, Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankChange:
    team_name: str
    displaced_name: str
    solved_count: int
    penalty: int


@dataclass(frozen=True)
class ScrollResult:
    initial_board: tuple[BoardRow, ...]
    events: tuple[RankChange, ...]
    final_board: tuple[BoardRow, ...]
    reveals: int


class ScrollSimulator:
    def __init__(
        self,
        accepted_verdict: str = ACCEPTED,
        wrong_attempt_penalty: int = DEFAULT_WRONG_ATTEMPT_PENALTY,
    ):
        self.accepted_verdict = accepted_verdict
        self.wrong_attempt_penalty = wrong_attempt_penalty

    def run(self, teams: Mapping[str, Team], problem_ids: Sequence[str]) -> ScrollResult:
        ordered = re_rank(teams.values(), self.wrong_attempt_penalty)
        initial_board = build_board(ordered, problem_ids, self.wrong_attempt_penalty)
        standings = {team.name: team.standing(self.wrong_attempt_penalty) for team in ordered}
        # Frozen ids per team, smallest first; each is revealed exactly once.
        queued = {team.name: team.frozen_problems() for team in ordered}

        events: list[RankChange] = []
        reveals = 0
        while True:
            team = next((t for t in reversed(ordered) if queued[t.name]), None)
            if team is None:
                break
            problem_id = queued[team.name].pop(0)
            old_rank = team.rank
            reveal(team.problems[problem_id], self.accepted_verdict)
            reveals += 1
            # Only this team's standing changed, so moving it alone keeps the
            # order identical to a full re-rank.
            reposition(ordered, team, standings, self.wrong_attempt_penalty)
            new_rank = team.rank
            logger.debug(
                f"Revealed {team.name}/{problem_id}: rank {old_rank} -> {new_rank}"
            )
            if new_rank >= old_rank or new_rank >= len(ordered):
                continue
            displaced = ordered[new_rank]
            standing = standings[team.name]
            events.append(
                RankChange(
                    team_name=team.name,
                    displaced_name=displaced.name,
                    solved_count=standing.solved_count,
                    penalty=standing.penalty,
                )
            )

        final_board = build_board(ordered, problem_ids, self.wrong_attempt_penalty)
        logger.info(f"Scroll finished: {reveals} reveals, {len(events)} rank changes")
        return ScrollResult(
            initial_board=initial_board,
            events=tuple(events),
            final_board=final_board,
            reveals=reveals,
        )
