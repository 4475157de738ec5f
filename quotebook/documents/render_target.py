"""Headless render targets used to capture a quote outside the visible view.

An :class:`OffscreenHost` plays the role of the page body: surfaces are
attached to it for the duration of one capture and must be detached again.
:func:`headless_surface` is the only supported way to obtain one, and it
detaches the surface on every exit path.
"""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from quotebook.documents.base import PRINT_AREA_ID

_LOGGER = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0


@dataclass(frozen=True)
class SurfaceStyle:
    """Placement of an off-screen surface: invisible, inert and outside the viewport."""

    width_mm: float = A4_WIDTH_MM
    opacity: float = 0.0
    interactive: bool = False
    left_px: int = -10_000
    top_px: int = 0


class RenderSurface:
    def __init__(self, surface_id: int, style: SurfaceStyle) -> None:
        self.surface_id = surface_id
        self.style = style
        self._elements: Dict[str, Any] = {}

    def mount(self, element_id: str, content: Any) -> None:
        self._elements[element_id] = content

    def query(self, element_id: str) -> Optional[Any]:
        return self._elements.get(element_id)

    def clear(self) -> None:
        self._elements.clear()

    def __repr__(self) -> str:
        return f"RenderSurface(surface_id={self.surface_id}, elements={sorted(self._elements)})"


class OffscreenHost:
    """Tracks the surfaces currently attached for capture."""

    def __init__(self) -> None:
        self._surfaces: Dict[int, RenderSurface] = {}
        self._ids = itertools.count(1)

    @property
    def attached(self) -> tuple:
        return tuple(self._surfaces.values())

    def attach(self, style: Optional[SurfaceStyle] = None) -> RenderSurface:
        surface = RenderSurface(next(self._ids), style or SurfaceStyle())
        self._surfaces[surface.surface_id] = surface
        _LOGGER.debug("Attached off-screen surface %s", surface.surface_id)
        return surface

    def detach(self, surface: RenderSurface) -> None:
        surface.clear()
        if self._surfaces.pop(surface.surface_id, None) is not None:
            _LOGGER.debug("Detached off-screen surface %s", surface.surface_id)

    def __contains__(self, surface: object) -> bool:
        return isinstance(surface, RenderSurface) and surface.surface_id in self._surfaces


@contextmanager
def headless_surface(host: OffscreenHost, style: Optional[SurfaceStyle] = None) -> Iterator[RenderSurface]:
    surface = host.attach(style)
    try:
        yield surface
    finally:
        host.detach(surface)


def mount_preview(surface: RenderSurface, preview: Any) -> None:
    """Default renderer: place the document model under the print-area id."""
    surface.mount(PRINT_AREA_ID, preview)


Renderer = Callable[[RenderSurface, Any], None]
