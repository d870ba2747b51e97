"""Team state: submission log, per-problem records and derived standing."""
from __future__ import annotations

from dataclasses import dataclass, field

from .problem import ProblemRecord, Submission


DEFAULT_WRONG_ATTEMPT_PENALTY = 20


@dataclass(frozen=True)
class TeamStanding:
    name: str
    solved_count: int
    penalty: int
    # Effective solve times, largest first.
    solve_times: tuple[int, ...]


@dataclass
class Team:
    name: str
    problems: dict[str, ProblemRecord] = field(default_factory=dict)
    submissions: list[Submission] = field(default_factory=list)
    rank: int = 0

    def record(self, problem_id: str) -> ProblemRecord:
        rec = self.problems.get(problem_id)
        if rec is None:
            rec = ProblemRecord()
            self.problems[problem_id] = rec
        return rec

    def standing(self, wrong_attempt_penalty: int) -> TeamStanding:
        """Derive solved count, penalty and solve times from visible solves.

        Solves still hidden behind the freeze are not counted.
        """
        effective = [rec for rec in self.problems.values() if rec.solved and not rec.frozen]
        penalty = sum(
            wrong_attempt_penalty * rec.wrong_attempts + int(rec.solve_time or 0)
            for rec in effective
        )
        times = sorted((int(rec.solve_time or 0) for rec in effective), reverse=True)
        return TeamStanding(
            name=self.name,
            solved_count=len(effective),
            penalty=penalty,
            solve_times=tuple(times),
        )

    def frozen_problems(self) -> list[str]:
        return sorted(pid for pid, rec in self.problems.items() if rec.frozen)

    def last_submission(
        self, problem: str | None = None, verdict: str | None = None
    ) -> Submission | None:
        """Most recent logged submission matching both filters (None matches all)."""
        for sub in reversed(self.submissions):
            if problem is not None and sub.problem != problem:
                continue
            if verdict is not None and sub.verdict != verdict:
                continue
            return sub
        return None
