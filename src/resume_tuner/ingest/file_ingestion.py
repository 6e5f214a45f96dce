"""Validate a selected résumé file and encode it as a base64 data URL.

Uploads from the web UI (picker or drag-and-drop) and local paths from the
CLI both go through ``ingest_file`` so validation and encoding never diverge.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Protocol

from resume_tuner.exceptions import EmptyFileError, FileTooLargeError, InvalidFileTypeError
from resume_tuner.models.resume import IngestedFile, UploadedFile

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class UploadLike(Protocol):
    """The subset of ``streamlit.runtime.uploaded_file_manager.UploadedFile`` we use."""

    name: str
    type: str

    def getvalue(self) -> bytes: ...


def encode_data_url(data: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def strip_data_url_prefix(value: str) -> str:
    """Return the raw base64 payload of a data URL.

    Everything up to and including the first comma is dropped. Input without
    a comma is returned unchanged.
    """
    _, sep, payload = value.partition(",")
    return payload if sep else value


def _check_content_type(name: str, content_type: str | None) -> None:
    if content_type != PDF_MIME_TYPE:
        logger.info("Rejected %r: content type %r", name, content_type)
        raise InvalidFileTypeError(content_type, name)


def ingest_file(
    name: str,
    content_type: str | None,
    data: bytes,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> IngestedFile:
    """Validate the declared type and size, then encode the bytes."""
    _check_content_type(name, content_type)
    if not data:
        raise EmptyFileError(name)
    if len(data) > max_bytes:
        raise FileTooLargeError(len(data), max_bytes)

    file = UploadedFile(name=name, content_type=content_type, data=data)
    logger.debug("Encoded %r (%d bytes)", name, len(data))
    return IngestedFile(file=file, data_url=encode_data_url(data, content_type))


async def ingest_upload(upload: UploadLike, *, max_bytes: int = DEFAULT_MAX_BYTES) -> IngestedFile:
    """Ingest a browser upload using its reported MIME type."""
    # Reject before reading the bytes
    _check_content_type(upload.name, upload.type)
    data = await asyncio.to_thread(upload.getvalue)
    return ingest_file(upload.name, upload.type, data, max_bytes=max_bytes)


async def ingest_path(path: str | Path, *, max_bytes: int = DEFAULT_MAX_BYTES) -> IngestedFile:
    """Ingest a local file, deriving its MIME type from the suffix."""
    path = Path(path)
    content_type, _ = mimetypes.guess_type(path.name)
    _check_content_type(path.name, content_type)
    data = await asyncio.to_thread(path.read_bytes)
    return ingest_file(path.name, content_type, data, max_bytes=max_bytes)
