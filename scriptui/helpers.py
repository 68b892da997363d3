"""Formatting helpers and the drawing bundle handed to custom Info views."""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union, Mapping

from .backend import RenderBackend
from .theme import LABEL_COLOR, RGB, Palette, resolve_palette, scale


def format_number(n) -> str:
    """1234567 -> "1.2M", 1234 -> "1.2K", 123 -> "123"."""
    if n >= 1_000_000:
        return "%.1fM" % (n / 1_000_000)
    if n >= 1_000:
        return "%.1fK" % (n / 1_000)
    return "%d" % n


def format_time(seconds) -> str:
    """Seconds as ``HH:MM:SS``."""
    seconds = int(math.floor(seconds))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return "%02d:%02d:%02d" % (h, m, s)


def per_hour(count, elapsed_seconds) -> int:
    """Whole units per hour; 0 until a full second has elapsed."""
    if not elapsed_seconds or elapsed_seconds < 1:
        return 0
    return int(math.floor(count * 3600 / elapsed_seconds))


def draw_label(backend: RenderBackend, text: str):
    backend.text(text, LABEL_COLOR)


def draw_section_header(backend: RenderBackend, text: str, palette: Optional[Palette] = None):
    """Header text in the palette's glow tone (light grey without a palette)."""
    color = palette.glow if palette is not None else (0.8, 0.8, 0.8)
    backend.text(text, color)


def draw_flavor_text(backend: RenderBackend, palette: Palette, text: str):
    backend.text(text, scale(palette.glow, 0.6))


def draw_text(backend: RenderBackend, text: str, color: Optional[RGB] = None):
    backend.text(text, color)


def draw_row(backend: RenderBackend, label: str, value: str,
             label_color: Optional[RGB] = None, value_color: Optional[RGB] = None):
    backend.table_row(label, value, label_color or (1.0, 1.0, 1.0), value_color)


def draw_progress_bar(backend: RenderBackend, progress: float, height: int, text: str, color: RGB):
    backend.progress_bar(max(0.0, min(1.0, progress)), height, text, color)


def draw_button(backend: RenderBackend, label: str, color: RGB, width: int = -1,
                height: int = 28, widget_id: Optional[str] = None) -> bool:
    return backend.button(label, widget_id or label, color, width, height)


def push_theme(backend: RenderBackend, theme: Union[str, Palette, Mapping]) -> Callable[[], None]:
    """Push a theme and return the function that pops it."""
    backend.push_theme(resolve_palette(theme))
    return backend.pop_theme


@dataclass(frozen=True)
class HelperBundle:
    """Drawing and formatting functions bound to one backend and palette."""
    label: Callable
    text: Callable
    section_header: Callable
    flavor_text: Callable
    row: Callable
    progress_bar: Callable
    button: Callable
    format_number: Callable
    format_time: Callable
    per_hour: Callable


def build_helpers(backend: RenderBackend, palette: Palette) -> HelperBundle:
    return HelperBundle(
        label=lambda text: draw_label(backend, text),
        text=lambda text, color=None: draw_text(backend, text, color),
        section_header=lambda text: draw_section_header(backend, text, palette),
        flavor_text=lambda text: draw_flavor_text(backend, palette, text),
        row=lambda label, value, label_color=None, value_color=None: draw_row(
            backend, label, value, label_color, value_color),
        progress_bar=lambda progress, height, text, color: draw_progress_bar(
            backend, progress, height, text, color),
        button=lambda label, color, width=-1, height=28, widget_id=None: draw_button(
            backend, label, color, width, height, widget_id),
        format_number=format_number,
        format_time=format_time,
        per_hour=per_hour,
    )
