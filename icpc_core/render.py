"""Text rendering of command outcomes (one list of output lines per command)."""
from __future__ import annotations

from typing import Iterable

from .contest import CommandOutcome, RankingQuery, SubmissionQuery
from .ranking import BoardRow
from .scroll import RankChange, ScrollResult


_SUCCESS = {
    "ADDTEAM": "[Info]Add successfully.",
    "START": "[Info]Competition starts.",
    "FLUSH": "[Info]Flush scoreboard.",
    "FREEZE": "[Info]Freeze scoreboard.",
    "SCROLL": "[Info]Scroll scoreboard.",
    "QUERY_RANKING": "[Info]Complete query ranking.",
    "QUERY_SUBMISSION": "[Info]Complete query submission.",
    "END": "[Info]Competition ends.",
}

_FAILURE = {
    "ADDTEAM": "Add failed",
    "START": "Start failed",
    "SUBMIT": "Submit failed",
    "FLUSH": "Flush failed",
    "FREEZE": "Freeze failed",
    "SCROLL": "Scroll failed",
    "QUERY_RANKING": "Query ranking failed",
    "QUERY_SUBMISSION": "Query submission failed",
    "END": "End failed",
}

STALE_WARNING = (
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)
NOT_FOUND = "Cannot find any submission."


def format_board_row(row: BoardRow) -> str:
    return " ".join(
        [row.team_name, str(row.rank), str(row.solved_count), str(row.penalty), *row.tokens]
    )


def format_rank_change(event: RankChange) -> str:
    return f"{event.team_name} {event.displaced_name} {event.solved_count} {event.penalty}"


def format_board(rows: Iterable[BoardRow]) -> list[str]:
    return [format_board_row(row) for row in rows]


def _render_scroll(result: ScrollResult) -> list[str]:
    lines = format_board(result.initial_board)
    lines.extend(format_rank_change(event) for event in result.events)
    lines.extend(format_board(result.final_board))
    return lines


def _render_ranking(query: RankingQuery) -> list[str]:
    lines = [STALE_WARNING] if query.stale else []
    lines.append(f"{query.team_name} NOW AT RANKING {query.rank}")
    return lines


def _render_submission(query: SubmissionQuery) -> list[str]:
    sub = query.submission
    if sub is None:
        return [NOT_FOUND]
    return [f"{query.team_name} {sub.problem} {sub.verdict} {sub.time}"]


def render_outcome(outcome: CommandOutcome) -> list[str]:
    if not outcome.ok:
        message = outcome.error.message if outcome.error is not None else "rejected"
        return [f"[Error]{_FAILURE.get(outcome.type, 'Command failed')}: {message}."]

    lines: list[str] = []
    if outcome.type in _SUCCESS:
        lines.append(_SUCCESS[outcome.type])
    if outcome.type == "SCROLL":
        lines.extend(_render_scroll(outcome.result))
    elif outcome.type == "QUERY_RANKING":
        lines.extend(_render_ranking(outcome.result))
    elif outcome.type == "QUERY_SUBMISSION":
        lines.extend(_render_submission(outcome.result))
    return lines
