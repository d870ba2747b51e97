"""Per team/problem submission bookkeeping.

A ProblemRecord is the tally one team keeps for one problem: wrong attempts,
the solve time, and the freeze buffer that hides submissions made after the
scoreboard was frozen until they are revealed by a scroll.
"""
from __future__ import annotations

from dataclasses import dataclass, field


ACCEPTED = "Accepted"


@dataclass(frozen=True)
class Submission:
    problem: str
    verdict: str
    time: int


@dataclass
class ProblemRecord:
    wrong_attempts: int = 0
    solve_time: int | None = None
    # Armed by freeze; only problems unsolved at that instant can be buffered.
    was_unsolved_at_freeze: bool = False
    frozen: bool = False
    wrong_before_freeze: int = 0
    submissions_after_freeze: int = 0
    pending: list[Submission] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.solve_time is not None

    @property
    def attempted(self) -> bool:
        return self.solved or self.wrong_attempts > 0 or self.frozen


def apply_verdict(
    record: ProblemRecord, submission: Submission, accepted_verdict: str = ACCEPTED
) -> None:
    """Score one submission against an unfrozen record.

    Submissions to a solved problem have no scoring effect; the solve time is
    set exactly once.
    """
    if record.solved:
        return
    if submission.verdict == accepted_verdict:
        record.solve_time = submission.time
    else:
        record.wrong_attempts += 1


def buffer_submission(record: ProblemRecord, submission: Submission) -> None:
    if not record.frozen:
        record.frozen = True
        record.wrong_before_freeze = record.wrong_attempts
    record.submissions_after_freeze += 1
    record.pending.append(submission)


def record_submission(
    record: ProblemRecord,
    submission: Submission,
    *,
    freeze_active: bool,
    accepted_verdict: str = ACCEPTED,
) -> bool:
    """Route a submission to the freeze buffer or straight to scoring.

    Returns True when the submission was buffered.
    """
    if freeze_active and record.was_unsolved_at_freeze:
        buffer_submission(record, submission)
        return True
    apply_verdict(record, submission, accepted_verdict)
    return False


def reveal(record: ProblemRecord, accepted_verdict: str = ACCEPTED) -> None:
    """Replay buffered submissions in arrival order and unfreeze the record."""
    for submission in record.pending:
        if record.solved:
            break
        apply_verdict(record, submission, accepted_verdict)
    record.pending.clear()
    record.frozen = False


def reset_freeze_state(record: ProblemRecord) -> None:
    record.was_unsolved_at_freeze = False
    record.frozen = False
    record.submissions_after_freeze = 0


def display_token(record: ProblemRecord | None) -> str:
    """Board cell for one problem.

    - ``.``      never attempted
    - ``-3/2``   frozen: 3 wrong before the freeze, 2 hidden submissions
    - ``0/2``    frozen with no wrong attempts before the freeze
    - ``+`` / ``+2``  solved, optionally with wrong attempts
    - ``-2``     attempted but unsolved
    """
    if record is None or not record.attempted:
        return "."
    if record.frozen:
        prefix = f"-{record.wrong_before_freeze}" if record.wrong_before_freeze > 0 else "0"
        return f"{prefix}/{record.submissions_after_freeze}"
    if record.solved:
        return f"+{record.wrong_attempts}" if record.wrong_attempts > 0 else "+"
    return f"-{record.wrong_attempts}"
