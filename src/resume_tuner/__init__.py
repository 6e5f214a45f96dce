"""Tailor a PDF résumé to a job description with Claude and export it as PDF."""

__version__ = "0.1.0"
