"""
Module: builder.output

Purpose:
    Render backends for the flow engine.
    PdfCanvasBackend encodes pages with ReportLab; RecordingBackend keeps the
    instructions in memory for inspection and dry runs.

Key Classes:
    - RenderBackend: Backend protocol
    - PdfCanvasBackend: PDF output
    - RecordingBackend: In-memory output
    - RenderError: Backend failure

Dependencies:
    - reportlab: PDF generation

Used By:
    - builder.controller: Pipeline orchestration
"""

from .backend import RenderBackend, RecordingBackend, RenderError
from .renderer import PdfCanvasBackend

__all__ = [
    "RenderBackend",
    "RecordingBackend",
    "RenderError",
    "PdfCanvasBackend",
]
