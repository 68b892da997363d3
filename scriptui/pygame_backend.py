"""Pygame implementation of the immediate-mode backend.

Widgets are laid out top to bottom with a cursor. Mouse and keyboard input
collected in ``new_frame`` is applied to the widgets drawn during that frame.
Window content is buffered and flushed in ``end_window`` so the background can
be sized to the content, like an auto-height window.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

# Import pygame at module level so it is available throughout
try:
    import pygame
except ImportError:
    pygame = None

from .backend import RenderBackend
from .theme import TEXT_COLOR, THEMES, DEFAULT_THEME, Palette, blend, scale, to_rgb255
from .utils import clamp, log_exception, log_runtime_event

DEFAULT_SCREEN_WIDTH = 480
DEFAULT_SCREEN_HEIGHT = 720
DEFAULT_FPS = 30

WINDOW_POS = (20, 20)
WINDOW_PADDING = (14, 10)
ITEM_SPACING = 4
SPACING = 6
TITLE_HEIGHT = 26
TAB_HEIGHT = 24
FRAME_HEIGHT = 22
CHECKBOX_SIZE = 16
ROUNDING = 4
FONT_SIZE = 18
BACKDROP = (12, 12, 14)


@dataclass
class _WindowState:
    active_tabs: Dict[str, str] = field(default_factory=dict)
    focused: Optional[str] = None
    dragging: Optional[str] = None


@dataclass
class _TabBar:
    bar_id: str
    y: int
    x: int
    seen: List[str] = field(default_factory=list)


class PygameBackend(RenderBackend):
    """Draws scriptui windows onto a pygame display surface."""

    def __init__(self, size: Tuple[int, int] = (DEFAULT_SCREEN_WIDTH, DEFAULT_SCREEN_HEIGHT),
                 caption: str = "scriptui", fps: int = DEFAULT_FPS):
        self.size = size
        self.caption = caption
        self.fps = fps
        self.screen = None
        self.clock = None
        self.font = None
        self.quit_requested = False
        self._pygame_initialized = False
        self._display_initialized = False

        # Per-frame input
        self.mouse_pos = (0, 0)
        self.mouse_down = False
        self.mouse_pressed = False
        self.mouse_clicked = False
        self.typed: List[str] = []
        self.backspaces = 0

        # Per-window layout
        self._states: Dict[str, _WindowState] = {}
        self._state: Optional[_WindowState] = None
        self._themes: List[Palette] = []
        self._ops: List[Callable[[], None]] = []
        self._x = 0
        self._y = 0
        self._w = 0
        self._win_rect = None
        self._title = ""
        self._tab_bars: List[_TabBar] = []
        self._columns: List[Tuple[str, float]] = []

    # -- lifecycle ------------------------------------------------------------

    def _ensure_pygame_initialized(self):
        if self._pygame_initialized:
            return
        if pygame is None:
            log_runtime_event("pygame is None - not available", level="ERROR")
            raise RuntimeError("pygame is required for the interactive backend.")
        if not pygame.get_init():
            pygame.init()
        pygame.font.init()
        self.font = pygame.font.SysFont(None, FONT_SIZE)
        self._pygame_initialized = True
        log_runtime_event("pygame initialization completed")

    def _ensure_display_initialized(self):
        if self._display_initialized:
            return
        try:
            self._ensure_pygame_initialized()
            pygame.display.set_caption(self.caption)
            self.screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
            self.clock = pygame.time.Clock()
            pygame.key.start_text_input()
            self._display_initialized = True
            log_runtime_event("Display initialized", f"size={self.screen.get_size()}, "
                              f"driver={os.environ.get('SDL_VIDEODRIVER', 'default')}")
        except Exception as e:
            log_exception(e, "_ensure_display_initialized")
            raise

    def new_frame(self) -> bool:
        """Pump pygame events and clear the screen. Returns ``False`` once the user closes the app."""
        self._ensure_display_initialized()
        self.mouse_pressed = False
        self.mouse_clicked = False
        self.typed = []
        self.backspaces = 0
        for event in pygame.event.get():
            self.process_event(event)
        self.mouse_pos = pygame.mouse.get_pos()
        self.screen.fill(BACKDROP)
        return not self.quit_requested

    def process_event(self, event):
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.mouse_down = True
            self.mouse_pressed = True
            self.mouse_pos = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.mouse_down = False
            self.mouse_clicked = True
            self.mouse_pos = event.pos
        elif event.type == pygame.MOUSEMOTION:
            self.mouse_pos = event.pos
        elif event.type == pygame.TEXTINPUT:
            self.typed.append(event.text)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self.backspaces += 1
            elif event.key in (pygame.K_RETURN, pygame.K_ESCAPE, pygame.K_TAB) and self._states:
                for st in self._states.values():
                    st.focused = None
        elif event.type == pygame.VIDEORESIZE:
            self.size = (event.w, event.h)

    def present(self):
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.fps)

    def quit(self):
        """Close the display; pygame itself stays initialized for the caller."""
        try:
            pygame.display.quit()
        except Exception as e:
            log_runtime_event("Error during pygame display quit", f"error={e}")
        self.screen = None
        self._display_initialized = False

    # -- helpers --------------------------------------------------------------

    @property
    def _palette(self) -> Palette:
        return self._themes[-1] if self._themes else THEMES[DEFAULT_THEME]

    def _queue(self, op: Callable[[], None]):
        self._ops.append(op)

    def _rect(self, height: int, width: int = -1):
        w = self._w if width is None or width < 0 else min(width, self._w)
        r = pygame.Rect(self._x, self._y, w, height)
        self._y += height + ITEM_SPACING
        return r

    def _hovered(self, rect) -> bool:
        return rect.collidepoint(self.mouse_pos)

    def _clicked(self, rect) -> bool:
        return self.mouse_clicked and rect.collidepoint(self.mouse_pos)

    def _fill(self, rect, color, radius=ROUNDING):
        c = to_rgb255(color)
        self._queue(lambda: pygame.draw.rect(self.screen, c, rect, border_radius=radius))

    def _blit_text(self, text: str, pos, color, center_in=None):
        surf = self.font.render(text, True, to_rgb255(color))

        def op():
            if center_in is not None:
                self.screen.blit(surf, surf.get_rect(center=center_in.center))
            else:
                self.screen.blit(surf, pos)
        self._queue(op)
        return surf.get_size()

    def _wrap(self, text: str, width: int) -> List[str]:
        lines = []
        for para in str(text).split("\n"):
            words = para.split(" ")
            line = ""
            for word in words:
                candidate = word if not line else line + " " + word
                if self.font.size(candidate)[0] <= width or not line:
                    line = candidate
                else:
                    lines.append(line)
                    line = word
            lines.append(line)
        return lines

    # -- RenderBackend --------------------------------------------------------

    def begin_window(self, title, window_id, width):
        self._ensure_display_initialized()
        self._state = self._states.setdefault(window_id, _WindowState())
        self._ops = []
        self._title = title.split("###")[0]
        x0, y0 = WINDOW_POS
        self._w = width - 2 * WINDOW_PADDING[0]
        self._x = x0 + WINDOW_PADDING[0]
        self._y = y0 + TITLE_HEIGHT + WINDOW_PADDING[1]
        self._win_rect = pygame.Rect(x0, y0, width, 0)
        if not self.mouse_down:
            self._state.dragging = None
        return True

    def end_window(self):
        p = self._palette
        rect = self._win_rect
        rect.height = self._y - rect.y + WINDOW_PADDING[1]
        title_rect = pygame.Rect(rect.x, rect.y, rect.width, TITLE_HEIGHT)
        pygame.draw.rect(self.screen, to_rgb255(p.dark), rect, border_radius=6)
        pygame.draw.rect(self.screen, to_rgb255(p.medium), title_rect,
                         border_top_left_radius=6, border_top_right_radius=6)
        title = self.font.render(self._title, True, to_rgb255(TEXT_COLOR))
        self.screen.blit(title, (title_rect.x + 8, title_rect.centery - title.get_height() // 2))
        for op in self._ops:
            op()
        self._ops = []
        self._state = None

    def push_theme(self, palette):
        self._themes.append(palette)

    def pop_theme(self):
        if self._themes:
            self._themes.pop()

    def begin_tab_bar(self, bar_id):
        self._tab_bars.append(_TabBar(bar_id, self._y, self._x))
        self._y += TAB_HEIGHT + ITEM_SPACING
        return True

    def end_tab_bar(self):
        bar = self._tab_bars.pop()
        active = self._state.active_tabs
        if bar.seen and active.get(bar.bar_id) not in bar.seen:
            active[bar.bar_id] = bar.seen[0]

    def begin_tab_item(self, label, tab_id, select=False):
        bar = self._tab_bars[-1]
        active = self._state.active_tabs
        p = self._palette
        w = self.font.size(label)[0] + 16
        rect = pygame.Rect(bar.x, bar.y, w, TAB_HEIGHT)
        bar.x += w + 2
        bar.seen.append(tab_id)
        if select or self._clicked(rect) or bar.bar_id not in active:
            active[bar.bar_id] = tab_id
        selected = active[bar.bar_id] == tab_id
        if selected:
            color = scale(p.bright, 0.7)
        elif self._hovered(rect):
            color = blend(p.medium, p.light, 0.5)
        else:
            color = scale(p.medium, 0.7)
        self._fill(rect, color)
        self._blit_text(label, None, TEXT_COLOR, center_in=rect)
        return selected

    def end_tab_item(self):
        pass

    def text(self, text, color=None):
        color = color or TEXT_COLOR
        line_h = self.font.get_linesize()
        for line in self._wrap(text, self._w):
            self._blit_text(line, (self._x, self._y), color)
            self._y += line_h
        self._y += ITEM_SPACING

    def spacing(self):
        self._y += SPACING

    def separator(self):
        c = to_rgb255(scale(self._palette.light, 0.8))
        y, x, w = self._y, self._x, self._w
        self._queue(lambda: pygame.draw.line(self.screen, c, (x, y), (x + w, y)))
        self._y += 1 + ITEM_SPACING

    def checkbox(self, label, widget_id, value):
        p = self._palette
        row = self._rect(CHECKBOX_SIZE + 2)
        box = pygame.Rect(row.x, row.y, CHECKBOX_SIZE, CHECKBOX_SIZE)
        changed = self._clicked(row)
        if changed:
            value = not value
        self._fill(box, p.light if self._hovered(row) else scale(p.medium, 0.5))
        if value:
            self._fill(box.inflate(-6, -6), p.glow, radius=2)
        self._blit_text(label, (box.right + 8, row.y), TEXT_COLOR)
        return changed, value

    def slider_int(self, widget_id, value, lo, hi, fmt):
        p = self._palette
        rect = self._rect(FRAME_HEIGHT)
        if self.mouse_pressed and rect.collidepoint(self.mouse_pos):
            self._state.dragging = widget_id
        changed = False
        if self._state.dragging == widget_id and hi > lo:
            t = clamp((self.mouse_pos[0] - rect.x) / max(1, rect.width), 0.0, 1.0)
            new = int(round(lo + t * (hi - lo)))
            if new != value:
                value, changed = new, True
        self._fill(rect, scale(p.medium, 0.5))
        t = 0.0 if hi == lo else (value - lo) / (hi - lo)
        grab = pygame.Rect(rect.x + int(t * (rect.width - 10)), rect.y + 2, 10, rect.height - 4)
        self._fill(grab, p.glow if self._state.dragging == widget_id else p.bright, radius=2)
        try:
            label = fmt % value
        except (TypeError, ValueError):
            label = str(value)
        self._blit_text(label, None, TEXT_COLOR, center_in=rect)
        return changed, value

    def combo(self, widget_id, index, options):
        """Click cycles forward through the options."""
        p = self._palette
        rect = self._rect(FRAME_HEIGHT)
        changed = False
        if self._clicked(rect) and options:
            index = (index + 1) % len(options)
            changed = True
        self._fill(rect, p.light if self._hovered(rect) else scale(p.medium, 0.5))
        current = options[index] if 0 <= index < len(options) else ""
        self._blit_text(current, (rect.x + 6, rect.y + 3), TEXT_COLOR)
        self._blit_text("v", (rect.right - 14, rect.y + 3), p.glow)
        return changed, index

    def input_text(self, widget_id, value, max_len):
        p = self._palette
        rect = self._rect(FRAME_HEIGHT)
        state = self._state
        if self.mouse_clicked:
            if rect.collidepoint(self.mouse_pos):
                state.focused = widget_id
            elif state.focused == widget_id:
                state.focused = None
        changed = False
        if state.focused == widget_id:
            new = value
            if self.backspaces:
                new = new[:-self.backspaces] if self.backspaces < len(new) else ""
            if self.typed:
                new = (new + "".join(self.typed))[:max_len]
            if new != value:
                value, changed = new, True
        focused = state.focused == widget_id
        self._fill(rect, scale(p.bright, 0.5) if focused else scale(p.medium, 0.5))
        shown = value + ("|" if focused else "")
        self._blit_text(shown, (rect.x + 6, rect.y + 3), TEXT_COLOR)
        return changed, value

    def button(self, label, widget_id, color, width=-1, height=28):
        rect = self._rect(height, width)
        hovered = self._hovered(rect)
        if hovered and self.mouse_down:
            fill = scale(color, 1.4)
        elif hovered:
            fill = scale(color, 1.2)
        else:
            fill = color
        self._fill(rect, fill)
        self._blit_text(label, None, TEXT_COLOR, center_in=rect)
        return self._clicked(rect)

    def progress_bar(self, fraction, height, overlay, color):
        rect = self._rect(height)
        self._fill(rect, scale(color, 0.2))
        filled = pygame.Rect(rect.x, rect.y, int(rect.width * clamp(fraction, 0.0, 1.0)), rect.height)
        if filled.width > 0:
            self._fill(filled, scale(color, 0.7))
        self._blit_text(overlay, None, TEXT_COLOR, center_in=rect)

    def begin_table(self, table_id, columns):
        total = sum(w for _, w in columns) or 1.0
        self._columns = [(name, w / total) for name, w in columns]
        return True

    def table_row(self, label, value, label_color=None, value_color=None):
        line_h = self.font.get_linesize()
        cells = [(label, label_color or TEXT_COLOR), (value, value_color or TEXT_COLOR)]
        x = self._x
        tallest = 0
        for (_, weight), (text, color) in zip(self._columns or [("", 0.5), ("", 0.5)], cells):
            col_w = int(self._w * weight)
            lines = self._wrap(text, col_w - 4)
            for i, line in enumerate(lines):
                self._blit_text(line, (x, self._y + i * line_h), color)
            tallest = max(tallest, len(lines) * line_h)
            x += col_w
        self._y += tallest + ITEM_SPACING

    def end_table(self):
        self._columns = []
