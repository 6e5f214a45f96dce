"""Pydantic models for tuning results.

A tuning call resolves to a ``TuningOutcome``: either a ``TuningSuccess``
carrying the HTML, or a ``TuningFailure`` tagged with a ``FailureKind``.
Callers match on ``status`` instead of checking for truthy text.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TuningResult(BaseModel):
    html: str  # HTML fragment, not a full document
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    instruction_version: str = ""


class FailureKind(str, Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    EMPTY_OUTPUT = "empty_output"
    BACKEND = "backend"


class TuningSuccess(BaseModel):
    status: Literal["success"] = "success"
    result: TuningResult


class TuningFailure(BaseModel):
    status: Literal["failure"] = "failure"
    kind: FailureKind
    message: str
    detail: str = ""


TuningOutcome = Annotated[
    Union[TuningSuccess, TuningFailure],
    Field(discriminator="status"),
]
