"""Freeze control: the Open -> Frozen -> Open state machine."""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .errors import PreconditionViolation
from .problem import reset_freeze_state
from .team import Team

logger = logging.getLogger(__name__)


class FreezeController:
    def __init__(self) -> None:
        self.active = False

    def arm(self, teams: Iterable[Team], problem_ids: Sequence[str]) -> None:
        """Freeze the scoreboard and mark every currently unsolved problem.

        Only problems marked here can be buffered until the next scroll.
        """
        if self.active:
            raise PreconditionViolation("already_frozen", "scoreboard has been frozen")
        self.active = True
        armed = 0
        for team in teams:
            for pid in problem_ids:
                rec = team.record(pid)
                rec.was_unsolved_at_freeze = not rec.solved
                armed += int(rec.was_unsolved_at_freeze)
        logger.info(f"Scoreboard frozen ({armed} unsolved team/problem pairs armed)")

    def require_active(self) -> None:
        if not self.active:
            raise PreconditionViolation("not_frozen", "scoreboard has not been frozen")

    def disarm(self, teams: Iterable[Team]) -> None:
        self.active = False
        for team in teams:
            for rec in team.problems.values():
                reset_freeze_state(rec)
        logger.info("Scoreboard unfrozen")
