"""Resume Tuner - rewrites a PDF résumé against a job description."""

from __future__ import annotations

import logging

import anthropic

from resume_tuner.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_tuner.config import LLMConfig
from resume_tuner.exceptions import EmptyModelOutputError, MissingInputError
from resume_tuner.ingest.file_ingestion import strip_data_url_prefix
from resume_tuner.models.tuning import (
    FailureKind,
    TuningFailure,
    TuningOutcome,
    TuningResult,
    TuningSuccess,
)
from resume_tuner.tuning.prompts import (
    SYSTEM_INSTRUCTION,
    SYSTEM_INSTRUCTION_VERSION,
    build_tuning_prompt,
)
from resume_tuner.utils.fences import strip_code_fences

logger = logging.getLogger(__name__)

FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.AUTHENTICATION: "The model provider rejected the API key.",
    FailureKind.RATE_LIMIT: "The model provider is rate limiting requests.",
    FailureKind.CONNECTION: "Could not reach the model provider.",
    FailureKind.TIMEOUT: "The model provider did not respond in time.",
    FailureKind.EMPTY_OUTPUT: "The model returned no text.",
    FailureKind.BACKEND: "The model provider returned an error.",
}


def classify_failure(exc: BaseException) -> FailureKind:
    """Map a backend/transport exception to a ``FailureKind``."""
    if isinstance(exc, EmptyModelOutputError):
        return FailureKind.EMPTY_OUTPUT
    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return FailureKind.AUTHENTICATION
    if isinstance(exc, anthropic.RateLimitError):
        return FailureKind.RATE_LIMIT
    # APITimeoutError subclasses APIConnectionError
    if isinstance(exc, anthropic.APITimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(exc, anthropic.APIConnectionError):
        return FailureKind.CONNECTION
    return FailureKind.BACKEND


class ResumeTuner:
    """Issues one tuning request per call and normalizes the HTML output."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.2,
        max_tokens: int = 8192,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def tune(self, encoded_resume: str, job_description: str) -> TuningResult:
        """Tune the résumé. Backend errors propagate unchanged.

        Args:
            encoded_resume: Base64 PDF, with or without a data-URL prefix.
            job_description: Target job description; must not be blank.

        Raises:
            MissingInputError: Résumé or description is missing.
            EmptyModelOutputError: The model answered without text.
        """
        if not encoded_resume or not job_description.strip():
            raise MissingInputError()

        response = await self.llm.generate_with_pdf(
            pdf_base64=strip_data_url_prefix(encoded_resume),
            prompt=build_tuning_prompt(job_description),
            system=SYSTEM_INSTRUCTION,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        text = response.text.strip()
        if not text:
            raise EmptyModelOutputError(self.model)

        html = strip_code_fences(text)
        logger.info("Tuned resume: %d chars of HTML", len(html))
        return TuningResult(
            html=html,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            instruction_version=SYSTEM_INSTRUCTION_VERSION,
        )

    async def tune_outcome(self, encoded_resume: str, job_description: str) -> TuningOutcome:
        """Like ``tune`` but folds backend failures into a ``TuningFailure``.

        Validation errors still raise; they never reach the backend.
        """
        try:
            result = await self.tune(encoded_resume, job_description)
        except MissingInputError:
            raise
        except Exception as exc:
            kind = classify_failure(exc)
            logger.error("Tuning failed (%s)", kind.value, exc_info=True)
            return TuningFailure(kind=kind, message=FAILURE_MESSAGES[kind], detail=str(exc))
        return TuningSuccess(result=result)


def create_tuner(config: LLMConfig, api_key: str | None = None) -> ResumeTuner:
    """Build a tuner with an explicitly injected API key."""
    llm = LLMClient(
        api_key=api_key,
        timeout=config.timeout,
        max_attempts=config.max_attempts,
    )
    return ResumeTuner(
        llm,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
