"""Contest settings."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .problem import ACCEPTED
from .team import DEFAULT_WRONG_ATTEMPT_PENALTY


class ContestSettings(BaseModel):
    """Scoring knobs shared by the engine and the CLI."""

    accepted_verdict: str = Field(
        ACCEPTED, min_length=1, max_length=50, description="Verdict that solves a problem"
    )
    wrong_attempt_penalty: int = Field(
        DEFAULT_WRONG_ATTEMPT_PENALTY, ge=0, le=1000, description="Minutes per wrong attempt"
    )
    # Problem ids are single letters.
    max_problems: int = Field(26, ge=1, le=26)

    @field_validator("accepted_verdict")
    @classmethod
    def validate_accepted_verdict(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("accepted_verdict must be a single non-empty word")
        return v

    model_config = ConfigDict(frozen=True)
