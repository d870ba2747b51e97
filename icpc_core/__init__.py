from .commands import ValidatedCmd, parse_command_line, validate_command
from .config import ContestSettings
from .contest import (
    CommandOutcome,
    Contest,
    RankingQuery,
    SubmissionQuery,
    apply_command,
)
from .errors import CommandParseError, ContestError, PreconditionViolation
from .freeze import FreezeController
from .problem import (
    ACCEPTED,
    ProblemRecord,
    Submission,
    apply_verdict,
    display_token,
    record_submission,
    reveal,
)
from .ranking import BoardRow, build_board, compare_standings, re_rank, reposition
from .scroll import RankChange, ScrollResult, ScrollSimulator
from .team import Team, TeamStanding

__all__ = [
    "ACCEPTED",
    "BoardRow",
    "CommandOutcome",
    "CommandParseError",
    "Contest",
    "ContestError",
    "ContestSettings",
    "FreezeController",
    "PreconditionViolation",
    "ProblemRecord",
    "RankChange",
    "RankingQuery",
    "ScrollResult",
    "ScrollSimulator",
    "Submission",
    "SubmissionQuery",
    "Team",
    "TeamStanding",
    "ValidatedCmd",
    "apply_command",
    "apply_verdict",
    "build_board",
    "compare_standings",
    "display_token",
    "parse_command_line",
    "re_rank",
    "record_submission",
    "reposition",
    "reveal",
    "validate_command",
]
