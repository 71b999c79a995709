"""
Module: builder.output.backend

Purpose:
    The narrow interface the flow engine draws through, plus an in-memory
    backend that records instructions instead of encoding a PDF.

Key Classes:
    - RenderBackend: new_page / draw_text / finalize_page / save protocol
    - RenderError: Backend misuse or I/O failure
    - RecordingBackend: Records pages of TextPlacements, saves them as JSON

Dependencies:
    - json, pathlib (std)
    - builder.layout.models: TextPlacement

Used By:
    - builder.layout.paginator: Engine output
    - builder.controller: Dry runs
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Protocol

from interview_toolkit.builder.layout.models import TextPlacement

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Render backend failure (misuse or unwritable destination)."""
    pass


class RenderBackend(Protocol):
    """
    Drawing surface owned exclusively by one flow engine.

    Exactly one page is open at a time; it must be finalized before the next
    is opened and is never revisited.
    """

    def new_page(self, width: float, height: float) -> None:
        ...

    def draw_text(self, font: str, size: float, x: float, y: float, text: str) -> None:
        ...

    def finalize_page(self) -> None:
        ...

    def save(self, destination: Path) -> Path:
        ...


class RecordingBackend:
    """
    Backend that keeps every instruction in memory.

    Example:
        >>> backend = RecordingBackend()
        >>> backend.new_page(595, 842)
        >>> backend.draw_text("Helvetica", 10, 50, 792, "hello")
        >>> backend.finalize_page()
        >>> backend.page_count
        1
    """

    def __init__(self) -> None:
        self.pages: List[List[TextPlacement]] = []
        self.page_sizes: List[tuple[float, float]] = []
        self._open: Optional[List[TextPlacement]] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def instructions(self) -> List[tuple[str, float, float, float, str]]:
        """All finalized (font, size, x, y, text) instructions in order."""
        return [placement.as_tuple() for page in self.pages for placement in page]

    def new_page(self, width: float, height: float) -> None:
        if self._open is not None:
            raise RenderError("Previous page was not finalized")
        self._open = []
        self.page_sizes.append((width, height))

    def draw_text(self, font: str, size: float, x: float, y: float, text: str) -> None:
        if self._open is None:
            raise RenderError("draw_text called with no open page")
        self._open.append(TextPlacement(font, size, x, y, text))

    def finalize_page(self) -> None:
        if self._open is None:
            raise RenderError("finalize_page called with no open page")
        self.pages.append(self._open)
        self._open = None

    def save(self, destination: Path) -> Path:
        """Write the recorded pages as JSON."""
        if self._open is not None:
            raise RenderError("Cannot save with an open page")

        payload = {
            "pages": [
                {
                    "index": index,
                    "size": list(self.page_sizes[index]),
                    "placements": [list(p.as_tuple()) for p in page],
                }
                for index, page in enumerate(self.pages)
            ]
        }
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(destination, "w") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise RenderError(f"Failed to write {destination}: {e}") from e

        logger.info(f"Recorded {self.page_count} pages to {destination}")
        return destination
