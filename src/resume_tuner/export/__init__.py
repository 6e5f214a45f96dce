"""PDF export module for resume-tuner."""
from resume_tuner.export.exporter import ResultExporter
from resume_tuner.export.pdf_renderer import export_pdf, render_result_html

__all__ = ["ResultExporter", "export_pdf", "render_result_html"]
