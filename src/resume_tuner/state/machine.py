"""Wizard state for one user session: upload -> submit -> result.

Status moves IDLE -> LOADING -> SUCCESS | ERROR, and back to IDLE on reset.
Only one tuning request is in flight at a time: ``submit`` is refused while
LOADING. A reset during LOADING cancels the running request and bumps the
generation counter, and the next ``submit`` waits for the cancelled request
to wind down before calling the backend again.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from resume_tuner.exceptions import MissingInputError, ValidationError
from resume_tuner.ingest.file_ingestion import (
    DEFAULT_MAX_BYTES,
    UploadLike,
    ingest_path,
    ingest_upload,
)
from resume_tuner.models.resume import IngestedFile, ResumeState
from resume_tuner.models.status import AppStatus
from resume_tuner.models.tuning import TuningFailure, TuningOutcome, TuningSuccess
from resume_tuner.tuning.tuner import ResumeTuner

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to tune resume. Please try again. Ensure your PDF is text-readable."

TransitionListener = Callable[[AppStatus, AppStatus], None]


class TuningSession:
    """Owns the résumé, description, result and status of one wizard run."""

    def __init__(
        self,
        tuner: ResumeTuner,
        *,
        max_file_bytes: int = DEFAULT_MAX_BYTES,
        on_transition: TransitionListener | None = None,
    ):
        self.tuner = tuner
        self.max_file_bytes = max_file_bytes
        self.on_transition = on_transition
        self.status = AppStatus.IDLE
        self.resume = ResumeState()
        self.job_description = ""
        self.result = ""
        self.error_message = ""
        self.last_failure: TuningFailure | None = None
        self._generation = 0
        self._inflight: asyncio.Task | None = None

    # -- derived -------------------------------------------------------------

    @property
    def has_inputs(self) -> bool:
        return self.resume.is_loaded and bool(self.job_description.strip())

    @property
    def submit_enabled(self) -> bool:
        return self.status in (AppStatus.IDLE, AppStatus.ERROR) and self.has_inputs

    # -- inputs --------------------------------------------------------------

    def select_file(self, ingested: IngestedFile) -> bool:
        """Replace the résumé wholesale with a freshly ingested file."""
        if self.status == AppStatus.LOADING:
            logger.warning("Ignoring file selection while a request is in flight")
            return False
        self.resume = ResumeState.from_ingested(ingested)
        self.error_message = ""
        return True

    def reject_file(self, error: ValidationError) -> None:
        """Surface a file validation failure; the current résumé is kept."""
        self.error_message = str(error)

    async def select_upload(self, upload: UploadLike) -> bool:
        try:
            ingested = await ingest_upload(upload, max_bytes=self.max_file_bytes)
        except ValidationError as e:
            self.reject_file(e)
            return False
        return self.select_file(ingested)

    async def select_path(self, path: str | Path) -> bool:
        try:
            ingested = await ingest_path(path, max_bytes=self.max_file_bytes)
        except ValidationError as e:
            self.reject_file(e)
            return False
        return self.select_file(ingested)

    def set_job_description(self, text: str) -> None:
        self.job_description = text

    # -- transitions ---------------------------------------------------------

    def _transition(self, new: AppStatus) -> None:
        old = self.status
        self.status = new
        logger.info("Status %s -> %s", old.value, new.value)
        if self.on_transition:
            self.on_transition(old, new)

    async def submit(self) -> TuningOutcome | None:
        """Run one tuning request.

        Returns the outcome, or None when no request was issued (guard
        failed, already loading) or when its response was discarded by a
        reset.
        """
        if self.status == AppStatus.LOADING:
            logger.warning("Submit ignored: a tuning request is already in flight")
            return None
        if self.status == AppStatus.SUCCESS:
            logger.warning("Submit ignored: reset before tuning again")
            return None
        if not self.has_inputs:
            self.error_message = str(MissingInputError())
            return None

        generation = self._generation
        self.error_message = ""
        self.last_failure = None
        self._transition(AppStatus.LOADING)

        previous = self._inflight
        if previous is not None and not previous.done():
            logger.debug("Waiting for the cancelled request to finish")
            await asyncio.wait([previous])
            if generation != self._generation:
                return None

        task = asyncio.ensure_future(
            self.tuner.tune_outcome(self.resume.encoded_content or "", self.job_description)
        )
        self._inflight = task
        try:
            outcome = await task
        except asyncio.CancelledError:
            if generation == self._generation:
                raise
            logger.info("Tuning request cancelled by reset")
            return None
        finally:
            if self._inflight is task:
                self._inflight = None

        if generation != self._generation:
            logger.info("Discarding tuning response issued before reset")
            return None

        if isinstance(outcome, TuningSuccess):
            self.result = outcome.result.html
            self._transition(AppStatus.SUCCESS)
        else:
            self.last_failure = outcome
            self.error_message = GENERIC_ERROR_MESSAGE
            self._transition(AppStatus.ERROR)
        return outcome

    def reset(self) -> None:
        """Back to IDLE with every field cleared.

        A request still in flight is cancelled; its response, if it lands
        anyway, is dropped.
        """
        self._generation += 1
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self.resume = ResumeState()
        self.job_description = ""
        self.result = ""
        self.error_message = ""
        self.last_failure = None
        if self.status != AppStatus.IDLE:
            self._transition(AppStatus.IDLE)
