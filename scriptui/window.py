"""Window builder: the public entry point of scriptui.

Usage::

    ui = Window("My Script", "teal")
    ui.add_section("Combat")
    ui.add_checkbox("camp_boss", "Camp Boss", False, "Stay at the boss instead of banking")
    ui.add_slider("health_food", "Eat Food (%)", 60, 0, 100, "%d%%")
    ui.load_config()

    while ui.draw(data):       # once per tick
        if ui.is_cancelled() or ui.is_stopped():
            break
        if ui.is_started() and not ui.is_paused():
            ...
"""

import time
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from .backend import RecordingBackend, RenderBackend
from .config import ConfigStore, compute_identity
from .fields import ConfigValue, FieldRegistry, coerce_value
from .helpers import format_time
from .renderer import render_frame
from .session import Session, Tab
from .theme import DEFAULT_THEME, Palette, StateColors, resolve_palette
from .utils import get_logger, log_runtime_event

logger = get_logger("scriptui.window")

DEFAULT_WIDTH = 360
DEFAULT_TITLE = "Script"

SummaryRows = Callable[[Dict[str, ConfigValue]], Sequence[Tuple[str, str]]]
InfoDraw = Callable[[object, Palette, object], None]


class Window:
    """Config fields, session state and persistence for one script window."""

    def __init__(self, title: Optional[str] = None, theme: Union[str, Palette, Mapping] = DEFAULT_THEME,
                 width: Optional[int] = None, *, config_dir: Optional[str] = None,
                 backend: Optional[RenderBackend] = None,
                 clock: Callable[[], float] = time.monotonic):
        # Unknown theme names fail here, before any state exists
        self.palette = resolve_palette(theme)
        self.title = title or DEFAULT_TITLE
        self.width = width or DEFAULT_WIDTH
        self.identity = compute_identity(self.title)
        self.registry = FieldRegistry()
        self.store = ConfigStore(self.identity, config_dir)
        self.session = Session(on_start=self.save_config, clock=clock)
        self.state_colors = StateColors()
        self.backend = backend if backend is not None else RecordingBackend()
        self.custom_info_draw: Optional[InfoDraw] = None
        self.summary_rows: Optional[SummaryRows] = None
        log_runtime_event("Window created", f"identity={self.identity}, path={self.store.path}", level="DEBUG")

    # -- fields ---------------------------------------------------------------

    def add_section(self, label: str, desc: Optional[str] = None):
        return self.registry.add_section(label, desc)

    def add_checkbox(self, key: str, label: str, default: bool, desc: Optional[str] = None):
        return self.registry.add_checkbox(key, label, default, desc)

    def add_slider(self, key: str, label: str, default: int, min: int, max: int,
                   fmt: Optional[str] = None, desc: Optional[str] = None):
        return self.registry.add_slider(key, label, default, min, max, fmt, desc)

    def add_combo(self, key: str, label: str, default: int, options: Sequence[str],
                  desc: Optional[str] = None):
        return self.registry.add_combo(key, label, default, options, desc)

    def add_input(self, key: str, label: str, default: str, desc: Optional[str] = None,
                  max_len: Optional[int] = None):
        return self.registry.add_input(key, label, default, desc, max_len)

    def add_separator(self):
        return self.registry.add_separator()

    def add_spacing(self):
        return self.registry.add_spacing()

    @property
    def fields(self):
        return self.registry.get_all()

    # -- customization --------------------------------------------------------

    def add_state_color(self, state: str, r: float, g: float, b: float):
        self.state_colors.add(state, r, g, b)

    def set_custom_info_tab(self, fn: Optional[InfoDraw]):
        """Replace the Info view; ``fn(data, palette, helpers)``."""
        self.custom_info_draw = fn

    def set_summary_rows(self, fn: Optional[SummaryRows]):
        """Rows shown on the Config tab while running; ``fn(config) -> [(label, value), ...]``."""
        self.summary_rows = fn

    # -- config ---------------------------------------------------------------

    def save_config(self) -> bool:
        return self.store.save(self.registry.config, self.registry.get_all())

    def load_config(self) -> Dict[str, ConfigValue]:
        return self.store.load(self.registry.get_all(), self.registry.config)

    def get_config(self) -> Dict[str, ConfigValue]:
        return dict(self.registry.config)

    def get(self, key: str, default=None):
        return self.registry.config.get(key, default)

    def set(self, key: str, value):
        field = self.registry.field_for(key)
        if field is not None:
            value = coerce_value(field, value)
        elif key not in self.registry.config:
            logger.debug("Setting unregistered config key %s", key)
        self.registry.config[key] = value

    # -- session --------------------------------------------------------------

    @property
    def open(self) -> bool:
        return self.session.open

    @property
    def started(self) -> bool:
        return self.session.started

    @property
    def paused(self) -> bool:
        return self.session.paused

    @property
    def stopped(self) -> bool:
        return self.session.stopped

    @property
    def cancelled(self) -> bool:
        return self.session.cancelled

    def is_started(self) -> bool:
        return self.session.started

    def is_paused(self) -> bool:
        return self.session.paused

    def is_stopped(self) -> bool:
        return self.session.stopped

    def is_cancelled(self) -> bool:
        return self.session.cancelled

    def start(self) -> bool:
        """Save the config and enter the running phase."""
        fired = self.session.start()
        if fired:
            log_runtime_event("Script started", f"identity={self.identity}")
        return fired

    def pause(self) -> bool:
        return self.session.pause()

    def resume(self) -> bool:
        return self.session.resume()

    def stop(self) -> bool:
        return self.session.stop()

    def cancel(self) -> bool:
        return self.session.cancel()

    def close(self):
        self.session.close()

    def reset(self):
        self.session.reset()

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.session.warnings.as_tuple()

    def add_warning(self, msg: str):
        self.session.warnings.push(msg)
        logger.warning("[%s] %s", self.identity, msg)

    def clear_warnings(self):
        self.session.warnings.clear()

    def show_config_tab(self):
        self.session.tabs.request(Tab.CONFIG)

    def show_info_tab(self):
        self.session.tabs.request(Tab.INFO)

    def show_warnings_tab(self):
        self.session.tabs.request(Tab.WARNINGS)

    def runtime_string(self) -> str:
        return format_time(self.session.elapsed())

    # -- frame ----------------------------------------------------------------

    def draw(self, data=None, backend: Optional[RenderBackend] = None) -> bool:
        """Draw one frame; returns whether the window is still open."""
        return render_frame(self, backend or self.backend, data)

