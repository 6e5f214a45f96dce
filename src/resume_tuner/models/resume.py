"""Pydantic models for the uploaded résumé."""

from __future__ import annotations

from pydantic import BaseModel


class UploadedFile(BaseModel):
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class IngestedFile(BaseModel):
    """A validated upload plus its data-URL encoding."""

    file: UploadedFile
    data_url: str


class ResumeState(BaseModel):
    file: UploadedFile | None = None
    encoded_content: str | None = None  # data URL
    display_name: str | None = None

    @property
    def is_loaded(self) -> bool:
        return bool(self.encoded_content)

    @classmethod
    def from_ingested(cls, ingested: IngestedFile) -> ResumeState:
        return cls(
            file=ingested.file,
            encoded_content=ingested.data_url,
            display_name=ingested.file.name,
        )
