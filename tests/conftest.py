"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from unittest.mock import AsyncMock

import pytest

from resume_tuner.clients.llm_client import LLMClient, LLMResponse
from resume_tuner.ingest.file_ingestion import ingest_file
from resume_tuner.models.resume import IngestedFile
from resume_tuner.state.machine import TuningSession
from resume_tuner.tuning.tuner import ResumeTuner

SAMPLE_HTML = (
    '<h1 class="text-3xl font-bold text-center uppercase text-slate-800 mb-1">JANE DOE</h1>'
    '<p class="text-center text-sm text-gray-600 mb-4 border-b-2 border-gray-800 pb-2">'
    "555-0100 • jane@example.com • Berlin</p>"
    '<h2 class="text-lg font-bold uppercase text-slate-800 border-b border-gray-300 mb-3 mt-5">Experience</h2>'
    '<div class="flex justify-between items-baseline mb-0">'
    '<strong class="text-base text-gray-900">Acme Corp</strong>'
    '<span class="text-sm text-gray-600 font-medium">2020 - Present</span></div>'
    '<div class="italic text-sm text-gray-700 mb-1">Senior Backend Engineer</div>'
    '<ul class="list-disc list-outside ml-4 text-sm text-gray-700 space-y-1">'
    "<li>Built distributed job scheduler in Go handling 2M tasks/day</li>"
    "<li>Cut p99 latency by 40% with gRPC connection pooling</li>"
    "</ul>"
)


@dataclass
class FakeUpload:
    """Stand-in for streamlit's UploadedFile."""

    name: str
    type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def getvalue(self) -> bytes:
        return self.data


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    # Not a renderable PDF, but carries the magic header and arbitrary bytes
    return b"%PDF-1.4\n" + bytes(range(256)) * 200 + b"\n%%EOF\n"


@pytest.fixture
def sample_job_description() -> str:
    return "Senior Backend Engineer, Go, distributed systems"


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def make_upload():
    return FakeUpload


@pytest.fixture
def pdf_upload(sample_pdf_bytes) -> FakeUpload:
    return FakeUpload(name="resume.pdf", type="application/pdf", data=sample_pdf_bytes)


@pytest.fixture
def docx_upload() -> FakeUpload:
    return FakeUpload(
        name="resume.docx",
        type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        data=b"PK\x03\x04 not a pdf",
    )


@pytest.fixture
def ingested_pdf(sample_pdf_bytes) -> IngestedFile:
    return ingest_file("resume.pdf", "application/pdf", sample_pdf_bytes)


@pytest.fixture
def mock_llm_client(sample_html) -> LLMClient:
    """Create a mock LLM client that answers with sample HTML."""
    client = AsyncMock(spec=LLMClient)
    client.generate_with_pdf = AsyncMock(
        return_value=LLMResponse(
            text=sample_html,
            model="claude-sonnet-4-5-20250929",
            input_tokens=1200,
            output_tokens=800,
        )
    )
    return client


@pytest.fixture
def tuner(mock_llm_client) -> ResumeTuner:
    return ResumeTuner(mock_llm_client)


@pytest.fixture
def session(tuner) -> TuningSession:
    return TuningSession(tuner)
