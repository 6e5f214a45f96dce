"""Streamlit Web UI for resume-tuner.

Upload a PDF resume, paste a job description, get back a tuned resume
rendered as a letter-width page with a PDF download.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so load_api_key() sees it
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from resume_tuner.config import load_api_key, load_config
from resume_tuner.export.exporter import ResultExporter
from resume_tuner.export.pdf_renderer import render_result_html
from resume_tuner.models.status import AppStatus
from resume_tuner.state.machine import TuningSession
from resume_tuner.tuning.tuner import create_tuner

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="ResuTune AI",
    page_icon=":page_facing_up:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Session setup
# ---------------------------------------------------------------------------


@st.cache_resource
def _get_config():
    return load_config()


@st.cache_resource
def _get_api_key() -> str | None:
    # Read once per process; a missing key only fails on the first request
    return load_api_key()


def _get_session() -> TuningSession:
    if "tuning_session" not in st.session_state:
        config = _get_config()
        tuner = create_tuner(config.llm, api_key=_get_api_key())
        st.session_state.tuning_session = TuningSession(
            tuner,
            max_file_bytes=config.ingest.max_file_bytes,
        )
        st.session_state.uploader_key = 0
    return st.session_state.tuning_session


def _get_exporter() -> ResultExporter:
    if "exporter" not in st.session_state:
        st.session_state.exporter = ResultExporter(_get_config().export)
    return st.session_state.exporter


def _reset() -> None:
    """Start Over: clear the session and every widget bound to it."""
    _get_session().reset()
    st.session_state.pop("pdf_bytes", None)
    st.session_state.pop("last_upload_id", None)
    st.session_state["jd_text"] = ""
    st.session_state.uploader_key += 1


session = _get_session()

st.title("ResuTune AI")
st.caption("Powered by Claude")

# ---------------------------------------------------------------------------
# Results view
# ---------------------------------------------------------------------------


def _results_view() -> None:
    exporter = _get_exporter()
    head, actions = st.columns([3, 2])
    with head:
        st.subheader("Your Tuned Resume")
    with actions:
        col_pdf, col_reset = st.columns(2)
        with col_pdf:
            if "pdf_bytes" in st.session_state:
                st.download_button(
                    label="Download PDF",
                    data=st.session_state["pdf_bytes"],
                    file_name=exporter.filename,
                    mime="application/pdf",
                    type="primary",
                )
            elif st.button("Prepare PDF", type="primary", disabled=exporter.busy):
                with st.spinner("Generating PDF..."):
                    pdf_bytes = exporter.export(session.result)
                if pdf_bytes is not None:
                    st.session_state["pdf_bytes"] = pdf_bytes
                    st.rerun()
        with col_reset:
            st.button("Start Over", on_click=_reset)

    components.html(
        render_result_html(session.result, settings=_get_config().export),
        height=1100,
        scrolling=True,
    )


# ---------------------------------------------------------------------------
# Input view
# ---------------------------------------------------------------------------


def _input_view() -> None:
    col_inputs, col_info = st.columns(2, gap="large")

    with col_inputs:
        st.markdown("#### 1. Upload Resume")
        upload = st.file_uploader(
            "Upload a file or drag and drop",
            help="PDF up to 10MB",
            key=f"resume_upload_{st.session_state.uploader_key}",
        )
        if upload is not None:
            upload_id = (upload.name, upload.size)
            if st.session_state.get("last_upload_id") != upload_id:
                st.session_state["last_upload_id"] = upload_id
                asyncio.run(session.select_upload(upload))
        if session.resume.is_loaded:
            st.success(f"{session.resume.display_name}")

        st.markdown("#### 2. Job Description")
        jd_text = st.text_area(
            "Job description",
            key="jd_text",
            height=220,
            placeholder="Paste the job description here...",
            label_visibility="collapsed",
        )
        session.set_job_description(jd_text)

        if session.error_message:
            st.error(session.error_message)

        label = "Tune My Resume"
        if session.status == AppStatus.LOADING:
            label = "Tuning Resume... This might take a minute."
        if st.button(label, type="primary", use_container_width=True, disabled=not session.submit_enabled):
            with st.spinner("Tuning Resume... This might take a minute."):
                asyncio.run(session.submit())
            st.rerun()

    with col_info:
        st.markdown("#### How it works")
        st.markdown(
            "**1. Context Analysis**  \n"
            "We read your PDF to understand your career history, skills, and achievements.\n\n"
            "**2. Job Matching**  \n"
            "We analyze the job description to find the keywords and qualifications the recruiter needs.\n\n"
            "**3. Optimization**  \n"
            "Claude rewrites your resume to highlight the matches, increasing your chances of getting hired."
        )


if session.status == AppStatus.SUCCESS:
    _results_view()
else:
    _input_view()
