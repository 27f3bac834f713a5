"""
Module: output

Purpose:
    Encoders for finished documents.
    PDF via ReportLab, DOCX structure reports via python-docx.

Key Functions:
    - render_to_pdf(): Render a LayoutResult to PDF bytes
    - build_structure_docx(): Describe a PDF's pages as DOCX

Dependencies:
    - reportlab: PDF generation
    - python-docx: DOCX generation
    - PIL: Image handling

Used By:
    - controller: Job orchestration
"""

from .renderer import render_to_pdf
from .docx_writer import build_structure_docx

__all__ = [
    "render_to_pdf",
    "build_structure_docx",
]
