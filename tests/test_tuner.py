"""Tests for ResumeTuner (request contract and response normalization)."""

from __future__ import annotations

import base64
from unittest.mock import patch

import anthropic
import httpx
import pytest

from resume_tuner.clients.llm_client import LLMResponse
from resume_tuner.config import LLMConfig
from resume_tuner.exceptions import EmptyModelOutputError, MissingInputError
from resume_tuner.ingest.file_ingestion import encode_data_url
from resume_tuner.models.tuning import FailureKind, TuningFailure, TuningSuccess
from resume_tuner.tuning.prompts import SYSTEM_INSTRUCTION, SYSTEM_INSTRUCTION_VERSION
from resume_tuner.tuning.tuner import ResumeTuner, classify_failure, create_tuner

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, status: int):
    return cls("error", response=httpx.Response(status, request=_REQUEST), body=None)


def _respond(mock_llm_client, text: str) -> None:
    mock_llm_client.generate_with_pdf.return_value = LLMResponse(
        text=text, model="m", input_tokens=1, output_tokens=1
    )


class TestTuneRequest:
    async def test_strips_data_url_prefix(self, tuner, mock_llm_client, sample_pdf_bytes, sample_job_description):
        await tuner.tune(encode_data_url(sample_pdf_bytes), sample_job_description)

        kwargs = mock_llm_client.generate_with_pdf.call_args.kwargs
        assert base64.b64decode(kwargs["pdf_base64"]) == sample_pdf_bytes
        assert not kwargs["pdf_base64"].startswith("data:")

    async def test_raw_base64_passed_unchanged(self, tuner, mock_llm_client, sample_job_description):
        await tuner.tune("QUJDRA==", sample_job_description)
        assert mock_llm_client.generate_with_pdf.call_args.kwargs["pdf_base64"] == "QUJDRA=="

    async def test_sends_system_instruction_and_description(self, tuner, mock_llm_client, sample_job_description):
        await tuner.tune("QUJDRA==", sample_job_description)

        kwargs = mock_llm_client.generate_with_pdf.call_args.kwargs
        assert kwargs["system"] == SYSTEM_INSTRUCTION
        assert sample_job_description in kwargs["prompt"]

    async def test_single_backend_call(self, tuner, mock_llm_client, sample_job_description):
        await tuner.tune("QUJDRA==", sample_job_description)
        mock_llm_client.generate_with_pdf.assert_awaited_once()

    @pytest.mark.parametrize("description", ["", "   ", "\n\t "])
    async def test_blank_description_never_calls_backend(self, tuner, mock_llm_client, description):
        with pytest.raises(MissingInputError):
            await tuner.tune("QUJDRA==", description)
        mock_llm_client.generate_with_pdf.assert_not_awaited()

    async def test_missing_resume_never_calls_backend(self, tuner, mock_llm_client, sample_job_description):
        with pytest.raises(MissingInputError):
            await tuner.tune("", sample_job_description)
        mock_llm_client.generate_with_pdf.assert_not_awaited()


class TestTuneResponse:
    async def test_returns_html_result(self, tuner, sample_html, sample_job_description):
        result = await tuner.tune("QUJDRA==", sample_job_description)
        assert result.html == sample_html
        assert result.instruction_version == SYSTEM_INSTRUCTION_VERSION
        assert result.input_tokens == 1200

    async def test_strips_html_fence(self, tuner, mock_llm_client, sample_html, sample_job_description):
        _respond(mock_llm_client, f"```html\n{sample_html}\n```")
        result = await tuner.tune("QUJDRA==", sample_job_description)
        assert result.html == sample_html

    async def test_strips_bare_fence(self, tuner, mock_llm_client, sample_html, sample_job_description):
        _respond(mock_llm_client, f"\n```\n{sample_html}\n```  ")
        result = await tuner.tune("QUJDRA==", sample_job_description)
        assert result.html == sample_html

    @pytest.mark.parametrize("text", ["", "   \n  "])
    async def test_empty_output_raises(self, tuner, mock_llm_client, text, sample_job_description):
        _respond(mock_llm_client, text)
        with pytest.raises(EmptyModelOutputError):
            await tuner.tune("QUJDRA==", sample_job_description)

    async def test_backend_error_propagates_unchanged(self, tuner, mock_llm_client, sample_job_description):
        error = anthropic.APIConnectionError(request=_REQUEST)
        mock_llm_client.generate_with_pdf.side_effect = error
        with pytest.raises(anthropic.APIConnectionError) as exc_info:
            await tuner.tune("QUJDRA==", sample_job_description)
        assert exc_info.value is error
        mock_llm_client.generate_with_pdf.assert_awaited_once()


class TestTuneOutcome:
    async def test_success_is_tagged(self, tuner, sample_html, sample_job_description):
        outcome = await tuner.tune_outcome("QUJDRA==", sample_job_description)
        assert isinstance(outcome, TuningSuccess)
        assert outcome.status == "success"
        assert outcome.result.html == sample_html

    async def test_failure_is_tagged(self, tuner, mock_llm_client, sample_job_description):
        mock_llm_client.generate_with_pdf.side_effect = anthropic.APIConnectionError(request=_REQUEST)
        outcome = await tuner.tune_outcome("QUJDRA==", sample_job_description)
        assert isinstance(outcome, TuningFailure)
        assert outcome.status == "failure"
        assert outcome.kind == FailureKind.CONNECTION

    async def test_empty_output_is_tagged(self, tuner, mock_llm_client, sample_job_description):
        _respond(mock_llm_client, "")
        outcome = await tuner.tune_outcome("QUJDRA==", sample_job_description)
        assert isinstance(outcome, TuningFailure)
        assert outcome.kind == FailureKind.EMPTY_OUTPUT

    async def test_validation_still_raises(self, tuner):
        with pytest.raises(MissingInputError):
            await tuner.tune_outcome("QUJDRA==", " ")


class TestClassifyFailure:
    @pytest.mark.parametrize(
        "exc, kind",
        [
            (EmptyModelOutputError(), FailureKind.EMPTY_OUTPUT),
            (_status_error(anthropic.AuthenticationError, 401), FailureKind.AUTHENTICATION),
            (_status_error(anthropic.PermissionDeniedError, 403), FailureKind.AUTHENTICATION),
            (_status_error(anthropic.RateLimitError, 429), FailureKind.RATE_LIMIT),
            (_status_error(anthropic.InternalServerError, 500), FailureKind.BACKEND),
            (anthropic.APITimeoutError(request=_REQUEST), FailureKind.TIMEOUT),
            (anthropic.APIConnectionError(request=_REQUEST), FailureKind.CONNECTION),
            (RuntimeError("boom"), FailureKind.BACKEND),
        ],
    )
    def test_kinds(self, exc, kind):
        assert classify_failure(exc) == kind


def test_create_tuner_injects_api_key():
    config = LLMConfig(model="claude-haiku-4-5-20251001", timeout=30, max_attempts=2)
    with patch("resume_tuner.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
        tuner = create_tuner(config, api_key="sk-test")
    mock_cls.assert_called_once_with(api_key="sk-test", timeout=30)
    assert isinstance(tuner, ResumeTuner)
    assert tuner.model == "claude-haiku-4-5-20251001"
    assert tuner.llm.max_attempts == 2
