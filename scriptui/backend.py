"""Immediate-mode drawing backends.

The render adapter only talks to ``RenderBackend``; concrete backends turn the
calls into pixels (``PygameBackend``) or into a call log (``RecordingBackend``).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .theme import RGB, Palette

Column = Tuple[str, float]


class RenderBackend(ABC):
    """Primitive widget calls used by the render adapter.

    Value widgets return ``(changed, value)``; buttons return ``True`` on the
    frame they were clicked. ``widget_id`` is unique per window.
    """

    @abstractmethod
    def begin_window(self, title: str, window_id: str, width: int) -> bool:
        """Start a window; returns whether its content is visible."""

    @abstractmethod
    def end_window(self): ...

    @abstractmethod
    def push_theme(self, palette: Palette): ...

    @abstractmethod
    def pop_theme(self): ...

    @abstractmethod
    def begin_tab_bar(self, bar_id: str) -> bool: ...

    @abstractmethod
    def end_tab_bar(self): ...

    @abstractmethod
    def begin_tab_item(self, label: str, tab_id: str, select: bool = False) -> bool:
        """Draw a tab header; returns ``True`` if this tab's content should be drawn."""

    @abstractmethod
    def end_tab_item(self): ...

    @abstractmethod
    def text(self, text: str, color: Optional[RGB] = None): ...

    @abstractmethod
    def spacing(self): ...

    @abstractmethod
    def separator(self): ...

    @abstractmethod
    def checkbox(self, label: str, widget_id: str, value: bool) -> Tuple[bool, bool]: ...

    @abstractmethod
    def slider_int(self, widget_id: str, value: int, lo: int, hi: int, fmt: str) -> Tuple[bool, int]: ...

    @abstractmethod
    def combo(self, widget_id: str, index: int, options: Sequence[str]) -> Tuple[bool, int]: ...

    @abstractmethod
    def input_text(self, widget_id: str, value: str, max_len: int) -> Tuple[bool, str]: ...

    @abstractmethod
    def button(self, label: str, widget_id: str, color: RGB,
               width: int = -1, height: int = 28) -> bool: ...

    @abstractmethod
    def progress_bar(self, fraction: float, height: int, overlay: str, color: RGB): ...

    @abstractmethod
    def begin_table(self, table_id: str, columns: Sequence[Column]) -> bool: ...

    @abstractmethod
    def table_row(self, label: str, value: str,
                  label_color: Optional[RGB] = None, value_color: Optional[RGB] = None): ...

    @abstractmethod
    def end_table(self): ...

    def error_text(self, text: str):
        from .theme import ERROR_COLOR
        self.text(text, ERROR_COLOR)


class RecordingBackend(RenderBackend):
    """Headless backend that logs every call.

    Interaction is scripted: ids in ``clicks`` report a click the next time
    the button is drawn, ``edits`` maps widget ids to the value the user
    "enters". Both are consumed when used. Tab selection follows the rules of
    a real tab bar: a ``select`` request wins, otherwise the last selected tab
    stays active, otherwise the first visible tab.
    """

    def __init__(self):
        self.calls: List[Tuple[Any, ...]] = []
        self.frame: List[Tuple[Any, ...]] = []
        self.clicks: Set[str] = set()
        self.edits: Dict[str, Any] = {}
        self.active_tabs: Dict[str, str] = {}
        self.visible = True
        self.theme_depth = 0
        self.windows = 0
        self._bar_stack: List[str] = []
        self._tabs_seen: Dict[str, List[str]] = {}

    def _log(self, *call):
        self.calls.append(call)
        self.frame.append(call)

    # -- scripting ------------------------------------------------------------

    def click(self, widget_id: str):
        self.clicks.add(widget_id)

    def edit(self, widget_id: str, value):
        self.edits[widget_id] = value

    def _take_edit(self, widget_id, current):
        if widget_id in self.edits:
            value = self.edits.pop(widget_id)
            return value != current, value
        return False, current

    # -- inspection -----------------------------------------------------------

    def names(self) -> List[str]:
        return [c[0] for c in self.frame]

    def texts(self) -> List[str]:
        return [c[1] for c in self.frame if c[0] == "text"]

    def buttons(self) -> List[str]:
        return [c[2] for c in self.frame if c[0] == "button"]

    def tab_labels(self) -> List[str]:
        return [c[1] for c in self.frame if c[0] == "tab"]

    def rows(self) -> List[Tuple[str, str]]:
        return [(c[1], c[2]) for c in self.frame if c[0] == "row"]

    def active_tab(self, bar_id: str) -> Optional[str]:
        return self.active_tabs.get(bar_id)

    # -- RenderBackend --------------------------------------------------------

    def begin_window(self, title, window_id, width):
        self.frame = []
        self.windows += 1
        self._log("begin_window", title, window_id, width)
        return self.visible

    def end_window(self):
        self._log("end_window")

    def push_theme(self, palette):
        self.theme_depth += 1
        self._log("push_theme", palette)

    def pop_theme(self):
        self.theme_depth -= 1
        self._log("pop_theme")

    def begin_tab_bar(self, bar_id):
        self._bar_stack.append(bar_id)
        self._tabs_seen[bar_id] = []
        self._log("begin_tab_bar", bar_id)
        return True

    def end_tab_bar(self):
        bar_id = self._bar_stack.pop()
        seen = self._tabs_seen.pop(bar_id, [])
        if seen and self.active_tabs.get(bar_id) not in seen:
            self.active_tabs[bar_id] = seen[0]
        self._log("end_tab_bar", bar_id)

    def begin_tab_item(self, label, tab_id, select=False):
        bar_id = self._bar_stack[-1]
        self._tabs_seen[bar_id].append(tab_id)
        if select or bar_id not in self.active_tabs:
            self.active_tabs[bar_id] = tab_id
        self._log("tab", label, tab_id, select)
        return self.active_tabs[bar_id] == tab_id

    def end_tab_item(self):
        self._log("end_tab_item")

    def text(self, text, color=None):
        self._log("text", text, color)

    def spacing(self):
        self._log("spacing")

    def separator(self):
        self._log("separator")

    def checkbox(self, label, widget_id, value):
        changed, value = self._take_edit(widget_id, value)
        self._log("checkbox", label, widget_id, value)
        return changed, value

    def slider_int(self, widget_id, value, lo, hi, fmt):
        changed, value = self._take_edit(widget_id, value)
        self._log("slider", widget_id, value, lo, hi, fmt)
        return changed, value

    def combo(self, widget_id, index, options):
        changed, index = self._take_edit(widget_id, index)
        self._log("combo", widget_id, index, tuple(options))
        return changed, index

    def input_text(self, widget_id, value, max_len):
        changed, value = self._take_edit(widget_id, value)
        if isinstance(value, str) and len(value) > max_len:
            value = value[:max_len]
        self._log("input", widget_id, value, max_len)
        return changed, value

    def button(self, label, widget_id, color, width=-1, height=28):
        clicked = widget_id in self.clicks
        self.clicks.discard(widget_id)
        self._log("button", label, widget_id, color)
        return clicked

    def progress_bar(self, fraction, height, overlay, color):
        self._log("progress", fraction, overlay, color)

    def begin_table(self, table_id, columns):
        self._log("begin_table", table_id, tuple(columns))
        return True

    def table_row(self, label, value, label_color=None, value_color=None):
        self._log("row", label, value, label_color, value_color)

    def end_table(self):
        self._log("end_table")
