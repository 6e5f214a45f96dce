"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from io import BytesIO
from pathlib import Path

from fpdf import FPDF

from resume_tuner.config import ExportConfig

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (Linux, macOS, Windows)
_UNICODE_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

# Typographic characters the built-in Helvetica cannot encode
_LATIN1_REPLACEMENTS = {
    "\u2022": "\u00b7",  # bullet -> middle dot
    "\u2013": "-",
    "\u2014": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
}

_SKIP_TAGS = {"style", "script", "head", "title"}
_BLOCK_TAGS = {"h1", "h2", "h3", "p", "li", "div", "ul", "ol", "br"}


def _find_unicode_font() -> str | None:
    """Search for a Unicode-capable TTF font on the system."""
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


class _ResumeHTMLParser(HTMLParser):
    """Flatten résumé HTML into (kind, text) lines.

    Kinds: name, contact, section, entry ("title\\tdate"), sub, bullet,
    text, break.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.lines: list[tuple[str, str]] = []
        self._stack: list[tuple[str, str]] = []
        self._buf: list[str] = []
        self._entry_parts: list[str] = []
        self._skip = 0

    @property
    def _kind(self) -> str:
        return self._stack[-1][1] if self._stack else "text"

    def handle_starttag(self, tag, attrs):
        if tag in _SKIP_TAGS:
            self._skip += 1
            return
        classes = (dict(attrs).get("class") or "").split()
        if tag in _BLOCK_TAGS or (self._kind == "entry" and tag in ("strong", "span")):
            self._flush()
        if tag == "h1":
            self._stack.append((tag, "name"))
        elif tag in ("h2", "h3"):
            self._stack.append((tag, "section"))
        elif tag == "p":
            self._stack.append((tag, "contact" if "text-center" in classes else "text"))
        elif tag == "li":
            self._stack.append((tag, "bullet"))
        elif tag == "div":
            if "flex" in classes:
                kind = "entry"
            elif "italic" in classes:
                kind = "sub"
            else:
                kind = "text"
            self._stack.append((tag, kind))

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            self._skip = max(0, self._skip - 1)
            return
        if tag in _BLOCK_TAGS or (self._kind == "entry" and tag in ("strong", "span")):
            self._flush()
        if self._stack and self._stack[-1][0] == tag:
            _, kind = self._stack.pop()
            if kind == "entry" and self._entry_parts:
                self.lines.append(("entry", "\t".join(self._entry_parts)))
                self._entry_parts = []
        if tag in ("ul", "ol"):
            self.lines.append(("break", ""))

    def handle_data(self, data):
        if not self._skip:
            self._buf.append(data)

    def close(self):
        super().close()
        self._flush()

    def _flush(self):
        text = " ".join("".join(self._buf).split())
        self._buf = []
        if not text:
            return
        if self._kind == "entry":
            self._entry_parts.append(text)
        else:
            self.lines.append((self._kind, text))


def _parse_html_to_lines(body_html: str) -> list[tuple[str, str]]:
    parser = _ResumeHTMLParser()
    parser.feed(body_html)
    parser.close()
    return parser.lines


def html_to_pdf_fpdf2(html_content: str, settings: ExportConfig | None = None) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    settings = settings or ExportConfig()
    body_match = re.search(r"<body[^>]*>(.*?)</body>", html_content, re.DOTALL)
    body = body_match.group(1) if body_match else html_content

    pdf = FPDF(
        orientation="L" if settings.orientation == "landscape" else "P",
        unit="in",
        format=settings.page_size,
    )
    pdf.set_margins(settings.margin_in, settings.margin_in, settings.margin_in)
    pdf.set_auto_page_break(auto=True, margin=settings.margin_in)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("ResumeFont", "", unicode_font)
            font_name = "ResumeFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)

    def set_font(size: float, style: str = "") -> None:
        # Custom TTF is registered without bold/italic variants
        pdf.set_font(font_name, style if font_name == "Helvetica" else "", size)

    for kind, text in _parse_html_to_lines(body):
        text = _safe_text(text, builtin_font=font_name == "Helvetica")
        try:
            if kind == "name":
                set_font(18, "B")
                pdf.multi_cell(0, 0.35, text.upper(), align="C", new_x="LMARGIN", new_y="NEXT")
            elif kind == "contact":
                set_font(9)
                pdf.multi_cell(0, 0.2, text, align="C", new_x="LMARGIN", new_y="NEXT")
                pdf.set_line_width(0.02)
                pdf.line(pdf.l_margin, pdf.get_y() + 0.04, pdf.w - pdf.r_margin, pdf.get_y() + 0.04)
                pdf.ln(0.12)
            elif kind == "section":
                pdf.ln(0.1)
                set_font(11, "B")
                pdf.multi_cell(0, 0.25, text.upper(), new_x="LMARGIN", new_y="NEXT")
                pdf.set_line_width(0.01)
                pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
                pdf.ln(0.06)
            elif kind == "entry":
                title, _, date = text.partition("\t")
                set_font(10, "B")
                pdf.cell(0, 0.2, title)
                pdf.set_x(pdf.l_margin)
                set_font(9)
                pdf.cell(0, 0.2, date, align="R")
                pdf.ln(0.2)
            elif kind == "sub":
                set_font(9, "I")
                pdf.multi_cell(0, 0.18, text, new_x="LMARGIN", new_y="NEXT")
            elif kind == "bullet":
                set_font(9)
                pdf.multi_cell(0, 0.18, f"  - {text}", new_x="LMARGIN", new_y="NEXT")
            elif kind == "break":
                pdf.ln(0.06)
            else:
                set_font(9)
                pdf.multi_cell(0, 0.18, text, new_x="LMARGIN", new_y="NEXT")
        except Exception:
            logger.debug("Failed to render line: %s %s", kind, text[:30])

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _safe_text(text: str, builtin_font: bool) -> str:
    """Make text encodable by a built-in font; TTF fonts pass through."""
    if not builtin_font:
        return text
    for src, dst in _LATIN1_REPLACEMENTS.items():
        text = text.replace(src, dst)
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
