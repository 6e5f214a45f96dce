from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_tuner.config import ExportConfig
from resume_tuner.exceptions import ExportError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def render_result_html(
    fragment: str,
    title: str = "Tuned Resume",
    settings: ExportConfig | None = None,
) -> str:
    """Wrap the model's HTML fragment in a styled, page-width document.

    The fragment is inserted verbatim, without escaping or sanitizing.
    """
    settings = settings or ExportConfig()
    css = (TEMPLATES_DIR / "resume.css").read_text(encoding="utf-8")
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
    )
    template = env.get_template("result.html")
    return template.render(
        title=title,
        css=Markup(css),
        body=Markup(fragment),
        page_size=settings.page_size,
        orientation=settings.orientation,
        margin_in=settings.margin_in,
        page_width_px=settings.page_width_px,
    )


def export_pdf(fragment: str, settings: ExportConfig | None = None) -> bytes:
    """Render the fragment and convert it to PDF bytes."""
    settings = settings or ExportConfig()
    try:
        html = render_result_html(fragment, settings=settings)
        return _html_to_pdf(html, settings)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"PDF generation failed: {e}") from e


def _html_to_pdf(html: str, settings: ExportConfig) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        # WeasyPrint caps JPEG quality at 95
        quality = min(95, round(settings.image_quality * 100))
        return HTML(string=html).write_pdf(jpeg_quality=quality)
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_tuner.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(html, settings)
