"""
Command decoding and validation using Pydantic v2
Turns text lines and plain dicts into ValidatedCmd payloads
"""

import logging
import re
from typing import Any, Dict, List, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import CommandParseError

logger = logging.getLogger(__name__)

ALL_FILTER = "ALL"

COMMAND_TYPES = {
    "ADDTEAM",
    "START",
    "SUBMIT",
    "FLUSH",
    "FREEZE",
    "SCROLL",
    "QUERY_RANKING",
    "QUERY_SUBMISSION",
    "END",
}

_WORD = re.compile(r"\S+")


class ValidatedCmd(BaseModel):
    """Scoreboard command with per-type field requirements"""

    type: str = Field(..., min_length=1, max_length=50, description="Command type")

    team: Optional[str] = Field(None, min_length=1, max_length=255, description="Team name")

    # SUBMIT
    problem: Optional[str] = Field(None, min_length=1, max_length=8, description="Problem id")
    verdict: Optional[str] = Field(None, min_length=1, max_length=50, description="Verdict")
    time: Optional[int] = Field(None, ge=0, description="Minutes since contest start")

    # START
    duration: Optional[int] = Field(None, ge=0, description="Contest length in minutes")
    problemCount: Optional[int] = Field(None, ge=1, le=26, description="Number of problems")

    # QUERY_SUBMISSION (None matches everything)
    problemFilter: Optional[str] = Field(None, min_length=1, max_length=8)
    statusFilter: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        v = v.strip().upper()
        if v not in COMMAND_TYPES:
            raise ValueError(f"type must be one of {sorted(COMMAND_TYPES)}, got {v}")
        return v

    @field_validator("team", "problem", "verdict", "problemFilter", "statusFilter")
    @classmethod
    def validate_word(cls, v: Optional[str]) -> Optional[str]:
        """Names, problem ids and verdicts are single whitespace-free tokens"""
        if v is None:
            return v
        if not _WORD.fullmatch(v):
            raise ValueError("value must be a single non-empty word")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        required: Dict[str, List[str]] = {
            "ADDTEAM": ["team"],
            "START": ["duration", "problemCount"],
            "SUBMIT": ["problem", "team", "verdict", "time"],
            "QUERY_RANKING": ["team"],
            "QUERY_SUBMISSION": ["team"],
        }
        for name in required.get(self.type, []):
            if getattr(self, name) is None:
                raise ValueError(f"{self.type} requires {name}")
        return self

    model_config = ConfigDict(extra="forbid")


def validate_command(payload: Dict[str, Any]) -> ValidatedCmd:
    """
    Validate a command dictionary

    Raises:
        CommandParseError: If validation fails
    """
    try:
        return ValidatedCmd(**payload)
    except ValidationError as e:
        logger.warning(f"Command validation failed: {e}")
        raise CommandParseError(f"Invalid command: {e}") from e


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token, 10)
    except ValueError:
        raise CommandParseError(f"{what} must be an integer, got {token!r}") from None


def _expect(tokens: List[str], index: int, keyword: str, line: str) -> None:
    if len(tokens) <= index or tokens[index] != keyword:
        raise CommandParseError(f"expected {keyword} in {line!r}")


def _filter_value(token: str, prefix: str, line: str) -> Optional[str]:
    if not token.startswith(prefix):
        raise CommandParseError(f"expected {prefix}<value> in {line!r}")
    value = token[len(prefix):]
    if not value:
        raise CommandParseError(f"empty {prefix[:-1]} filter in {line!r}")
    return None if value == ALL_FILTER else value


def parse_command_line(line: str) -> Optional[ValidatedCmd]:
    """
    Decode one line of the command stream.

    Grammar:
        ADDTEAM <team>
        START DURATION <minutes> PROBLEM <count>
        SUBMIT <problem> BY <team> WITH <verdict> AT <time>
        FLUSH | FREEZE | SCROLL | END
        QUERY_RANKING <team>
        QUERY_SUBMISSION <team> WHERE PROBLEM=<problem|ALL> AND STATUS=<verdict|ALL>

    Returns None for blank lines.

    Raises:
        CommandParseError: If the line does not match the grammar
    """
    tokens = line.split()
    if not tokens:
        return None
    keyword = tokens[0]
    payload: Dict[str, Any] = {"type": keyword}

    if keyword == "ADDTEAM":
        if len(tokens) != 2:
            raise CommandParseError(f"ADDTEAM takes one team name: {line!r}")
        payload["team"] = tokens[1]

    elif keyword == "START":
        _expect(tokens, 1, "DURATION", line)
        _expect(tokens, 3, "PROBLEM", line)
        if len(tokens) != 5:
            raise CommandParseError(f"malformed START: {line!r}")
        payload["duration"] = _parse_int(tokens[2], "duration")
        payload["problemCount"] = _parse_int(tokens[4], "problem count")

    elif keyword == "SUBMIT":
        _expect(tokens, 2, "BY", line)
        _expect(tokens, 4, "WITH", line)
        _expect(tokens, 6, "AT", line)
        if len(tokens) != 8:
            raise CommandParseError(f"malformed SUBMIT: {line!r}")
        payload["problem"] = tokens[1]
        payload["team"] = tokens[3]
        payload["verdict"] = tokens[5]
        payload["time"] = _parse_int(tokens[7], "time")

    elif keyword == "QUERY_RANKING":
        if len(tokens) != 2:
            raise CommandParseError(f"QUERY_RANKING takes one team name: {line!r}")
        payload["team"] = tokens[1]

    elif keyword == "QUERY_SUBMISSION":
        _expect(tokens, 2, "WHERE", line)
        _expect(tokens, 4, "AND", line)
        if len(tokens) != 6:
            raise CommandParseError(f"malformed QUERY_SUBMISSION: {line!r}")
        payload["team"] = tokens[1]
        payload["problemFilter"] = _filter_value(tokens[3], "PROBLEM=", line)
        payload["statusFilter"] = _filter_value(tokens[5], "STATUS=", line)

    elif keyword in {"FLUSH", "FREEZE", "SCROLL", "END"}:
        if len(tokens) != 1:
            raise CommandParseError(f"{keyword} takes no arguments: {line!r}")

    else:
        raise CommandParseError(f"unknown command {keyword!r}")

    return validate_command(payload)


__all__ = [
    "ALL_FILTER",
    "COMMAND_TYPES",
    "ValidatedCmd",
    "parse_command_line",
    "validate_command",
]
