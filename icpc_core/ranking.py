"""ICPC ranking engine (comparator + full re-rank pass).

Order, best first:
- more solved problems;
- lower penalty;
- solve times compared largest-first, the smaller time at the first
  difference ranks better;
- lexicographically smaller team name (always decisive, so ranks are unique).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Sequence

from .problem import display_token
from .team import DEFAULT_WRONG_ATTEMPT_PENALTY, Team, TeamStanding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardRow:
    team_name: str
    rank: int
    solved_count: int
    penalty: int
    tokens: tuple[str, ...]


def compare_standings(a: TeamStanding, b: TeamStanding) -> int:
    """Negative when ``a`` ranks better than ``b``."""
    if a.solved_count != b.solved_count:
        return -1 if a.solved_count > b.solved_count else 1
    if a.penalty != b.penalty:
        return -1 if a.penalty < b.penalty else 1
    # A strict prefix leaves this rule undecided.
    for time_a, time_b in zip(a.solve_times, b.solve_times):
        if time_a != time_b:
            return -1 if time_a < time_b else 1
    if a.name != b.name:
        return -1 if a.name < b.name else 1
    return 0


def re_rank(
    teams: Iterable[Team], wrong_attempt_penalty: int = DEFAULT_WRONG_ATTEMPT_PENALTY
) -> list[Team]:
    """Sort every team from scratch and assign 1-based ranks."""
    standings = [(team.standing(wrong_attempt_penalty), team) for team in teams]
    standings.sort(key=cmp_to_key(lambda x, y: compare_standings(x[0], y[0])))
    ordered: list[Team] = []
    for pos, (_, team) in enumerate(standings, start=1):
        team.rank = pos
        ordered.append(team)
    logger.debug(f"Re-ranked {len(ordered)} teams")
    return ordered


def reposition(
    ordered: list[Team],
    team: Team,
    standings: dict[str, TeamStanding],
    wrong_attempt_penalty: int = DEFAULT_WRONG_ATTEMPT_PENALTY,
) -> None:
    """Move one team whose standing changed back to its sorted slot.

    ``ordered`` must be sorted with ``ordered[i].rank == i + 1`` and only
    ``team``'s standing may have changed since; the result then equals a full
    re_rank. ``standings`` is updated for ``team``.
    """
    old_index = team.rank - 1
    ordered.pop(old_index)
    standing = team.standing(wrong_attempt_penalty)
    standings[team.name] = standing
    lo, hi = 0, len(ordered)
    while lo < hi:
        mid = (lo + hi) // 2
        if compare_standings(standings[ordered[mid].name], standing) < 0:
            lo = mid + 1
        else:
            hi = mid
    ordered.insert(lo, team)
    for pos in range(min(old_index, lo), max(old_index, lo) + 1):
        ordered[pos].rank = pos + 1


def build_board(
    teams: Iterable[Team],
    problem_ids: Sequence[str],
    wrong_attempt_penalty: int = DEFAULT_WRONG_ATTEMPT_PENALTY,
) -> tuple[BoardRow, ...]:
    """Board rows in current rank order (ranks as last assigned by re_rank)."""
    rows: list[BoardRow] = []
    for team in sorted(teams, key=lambda t: (t.rank, t.name)):
        standing = team.standing(wrong_attempt_penalty)
        rows.append(
            BoardRow(
                team_name=team.name,
                rank=team.rank,
                solved_count=standing.solved_count,
                penalty=standing.penalty,
                tokens=tuple(display_token(team.problems.get(pid)) for pid in problem_ids),
            )
        )
    return tuple(rows)
