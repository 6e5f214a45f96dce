"""Download action for the results view."""

from __future__ import annotations

import logging

from resume_tuner.config import ExportConfig
from resume_tuner.exceptions import ExportError
from resume_tuner.export.pdf_renderer import export_pdf

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports tuned HTML to PDF, tracking a busy flag for the UI.

    Failures are logged and reported as ``None``; the caller stays on the
    results view and may try again.
    """

    def __init__(self, settings: ExportConfig | None = None):
        self.settings = settings or ExportConfig()
        self.busy = False
        self.last_error: ExportError | None = None

    @property
    def filename(self) -> str:
        return self.settings.filename

    def export(self, fragment: str) -> bytes | None:
        if self.busy:
            logger.warning("Export already in progress")
            return None
        self.busy = True
        self.last_error = None
        try:
            pdf = export_pdf(fragment, self.settings)
        except ExportError as e:
            self.last_error = e
            logger.error("PDF generation failed", exc_info=True)
            return None
        finally:
            self.busy = False
        logger.info("Exported %s (%d bytes)", self.filename, len(pdf))
        return pdf
