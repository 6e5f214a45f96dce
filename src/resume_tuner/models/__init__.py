"""Data models for the resume tuner."""

from resume_tuner.models.resume import IngestedFile, ResumeState, UploadedFile
from resume_tuner.models.status import AppStatus
from resume_tuner.models.tuning import (
    FailureKind,
    TuningFailure,
    TuningOutcome,
    TuningResult,
    TuningSuccess,
)

__all__ = [
    "AppStatus",
    "FailureKind",
    "IngestedFile",
    "ResumeState",
    "TuningFailure",
    "TuningOutcome",
    "TuningResult",
    "TuningSuccess",
    "UploadedFile",
]
