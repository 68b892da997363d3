"""Per-frame rendering of a scriptui window.

Decides which tabs exist, which view each tab shows and which clicks change
the session. All drawing goes through a ``RenderBackend``.
"""

from typing import TYPE_CHECKING

from .backend import RenderBackend
from .fields import Checkbox, Combo, Input, Section, Separator, Slider, Spacing
from .helpers import (
    build_helpers, draw_button, draw_flavor_text, draw_label, draw_progress_bar,
    draw_row, draw_section_header, format_number,
)
from .session import Tab
from .snapshot import RuntimeSnapshot, as_snapshot
from .theme import (
    BUTTON_DISMISS, BUTTON_NEUTRAL, BUTTON_RESUME, BUTTON_STOP, FASTEST_COLOR,
    HISTORY_COLOR, MUTED_COLOR, PAUSED_COLOR, RUNNING_COLOR, SLOWEST_COLOR,
    TEXT_COLOR, WARNING_COLOR,
)
from .utils import clamp, log_exception

if TYPE_CHECKING:
    from .window import Window

START_BUTTON_HEIGHT = 32
HEALTH_BAR_HEIGHT = 28
SUMMARY_COLUMNS = (("lbl", 0.4), ("val", 0.6))
INFO_COLUMNS = (("lbl", 0.35), ("val", 0.65))
KILL_COLUMNS = (("kc", 0.3), ("dur", 0.7))


def _wid(window: "Window", name: str) -> str:
    return f"##{name}{window.identity}"


def _divider(backend: RenderBackend):
    backend.spacing()
    backend.separator()
    backend.spacing()


def render_frame(window: "Window", backend: RenderBackend, data=None) -> bool:
    """Draw one frame of ``window`` and return whether it is still open."""
    title = f"{window.title} - {window.runtime_string()}###{window.identity}"
    backend.push_theme(window.palette)
    try:
        if backend.begin_window(title, window.identity, window.width):
            try:
                draw_content(window, backend, data)
            except Exception as e:
                log_exception(e, f"render_frame[{window.identity}]")
                backend.error_text(f"UI Error: {e}")
    finally:
        backend.end_window()
        backend.pop_theme()
    return window.open


def draw_content(window: "Window", backend: RenderBackend, data=None):
    session = window.session
    bar_id = _wid(window, "maintabs")
    if not backend.begin_tab_bar(bar_id):
        return
    try:
        select = session.tabs.consume(Tab.CONFIG)
        if backend.begin_tab_item("Config", f"###config{window.identity}", select):
            backend.spacing()
            draw_config_tab(window, backend)
            backend.end_tab_item()

        if session.started:
            select = session.tabs.consume(Tab.INFO)
            if backend.begin_tab_item("Info", f"###info{window.identity}", select):
                backend.spacing()
                draw_info_tab(window, backend, data)
                backend.end_tab_item()

        # Count is read live each frame
        count = len(session.warnings)
        if count > 0:
            select = session.tabs.consume(Tab.WARNINGS)
            if backend.begin_tab_item(f"Warnings ({count})", f"###warnings{window.identity}", select):
                backend.spacing()
                draw_warnings_tab(window, backend)
                backend.end_tab_item()
    finally:
        backend.end_tab_bar()


# -- Config tab -----------------------------------------------------------------

def draw_config_tab(window: "Window", backend: RenderBackend):
    if window.session.started:
        draw_running_view(window, backend)
    else:
        draw_fields(window, backend)


def draw_running_view(window: "Window", backend: RenderBackend):
    session = window.session
    if session.paused:
        backend.text("PAUSED", PAUSED_COLOR)
    else:
        backend.text("Running", RUNNING_COLOR)
    backend.spacing()
    backend.separator()

    if window.summary_rows is not None:
        try:
            rows = window.summary_rows(window.get_config())
        except Exception as e:
            log_exception(e, "summary_rows")
            backend.error_text(f"UI Error: {e}")
            rows = None
        if rows:
            if backend.begin_table(_wid(window, "cfgsummary"), SUMMARY_COLUMNS):
                for label, value in rows:
                    draw_row(backend, str(label), str(value))
                backend.end_table()
            _divider(backend)

    if session.paused:
        if draw_button(backend, "Resume Script", BUTTON_RESUME, widget_id=_wid(window, "resume")):
            session.resume()
    else:
        if draw_button(backend, "Pause Script", BUTTON_NEUTRAL, widget_id=_wid(window, "pause")):
            session.pause()
    backend.spacing()

    if draw_button(backend, "Stop Script", BUTTON_STOP, widget_id=_wid(window, "stop")):
        session.stop()


def draw_fields(window: "Window", backend: RenderBackend):
    """Pre-start view: every field in order, edits written straight to the config."""
    p = window.palette
    cfg = window.registry.config

    for field in window.registry.get_all():
        if isinstance(field, Section):
            _divider(backend)
            draw_section_header(backend, field.label, p)
            if field.desc:
                draw_flavor_text(backend, p, field.desc)
            backend.spacing()

        elif isinstance(field, Separator):
            _divider(backend)

        elif isinstance(field, Spacing):
            backend.spacing()

        elif isinstance(field, Checkbox):
            if field.desc:
                draw_flavor_text(backend, p, field.desc)
            changed, val = backend.checkbox(field.label, _wid(window, field.key), cfg[field.key])
            if changed:
                cfg[field.key] = bool(val)

        elif isinstance(field, Slider):
            draw_label(backend, field.label)
            if field.desc:
                draw_flavor_text(backend, p, field.desc)
            changed, val = backend.slider_int(_wid(window, field.key), cfg[field.key], field.min, field.max, field.fmt)
            if changed:
                cfg[field.key] = int(val)

        elif isinstance(field, Combo):
            draw_label(backend, field.label)
            if field.desc:
                draw_flavor_text(backend, p, field.desc)
            index = clamp(cfg[field.key], 0, len(field.options) - 1)
            changed, val = backend.combo(_wid(window, field.key), index, field.options)
            if changed:
                cfg[field.key] = int(val)

        elif isinstance(field, Input):
            draw_label(backend, field.label)
            if field.desc:
                draw_flavor_text(backend, p, field.desc)
            changed, val = backend.input_text(_wid(window, field.key), cfg[field.key], field.max_len)
            if changed:
                cfg[field.key] = str(val)[:field.max_len]

        else:
            raise TypeError(f"No renderer for field type {type(field).__name__}")

    _divider(backend)

    if draw_button(backend, f"Start {window.title}", p.bright, -1, START_BUTTON_HEIGHT,
                   widget_id=_wid(window, "start")):
        window.start()
    backend.spacing()

    if draw_button(backend, "Cancel", BUTTON_NEUTRAL, widget_id=_wid(window, "cancel")):
        window.session.cancel()


# -- Info tab -------------------------------------------------------------------

def draw_info_tab(window: "Window", backend: RenderBackend, data=None):
    """Custom or default Info view; errors stay inside this tab."""
    try:
        if window.custom_info_draw is not None:
            window.custom_info_draw(data if data is not None else {}, window.palette,
                                    build_helpers(backend, window.palette))
        else:
            draw_default_info(window, backend, as_snapshot(data))
    except Exception as e:
        log_exception(e, "info tab")
        backend.error_text(f"UI Error: {e}")


def draw_default_info(window: "Window", backend: RenderBackend, data: RuntimeSnapshot):
    p = window.palette

    state = data.state or "Idle"
    if window.session.paused:
        state = "Paused"
    backend.text(state, window.state_colors.get(state))
    _divider(backend)

    if data.has_boss_health:
        pct = clamp(data.boss_health / data.boss_max_health, 0.0, 1.0)
        text = "%s: %s / %s (%.1f%%)" % (
            data.boss_name or "Boss",
            format_number(data.boss_health),
            format_number(data.boss_max_health),
            pct * 100,
        )
        draw_progress_bar(backend, pct, HEALTH_BAR_HEIGHT, text, p.glow)
        _divider(backend)

    if data.has_stats and backend.begin_table(_wid(window, "infostats"), INFO_COLUMNS):
        if data.kills is not None:
            kph = data.kills_per_hour if data.kills_per_hour is not None else 0
            draw_row(backend, "Kills", "%d (%s/hr)" % (data.kills, kph))
        if data.deaths is not None:
            draw_row(backend, "Deaths", str(data.deaths))
        if data.gp is not None:
            gph = data.gp_per_hour if data.gp_per_hour is not None else 0
            draw_row(backend, "GP", "%s (%s/hr)" % (format_number(data.gp), format_number(gph)))
        if data.kill_timer is not None:
            draw_row(backend, "Kill Timer", str(data.kill_timer))
        if data.fastest_kill is not None:
            draw_row(backend, "Fastest", data.fastest_kill, TEXT_COLOR, FASTEST_COLOR)
        if data.slowest_kill is not None:
            draw_row(backend, "Slowest", data.slowest_kill, TEXT_COLOR, SLOWEST_COLOR)
        if data.average_kill is not None:
            draw_row(backend, "Average", data.average_kill)
        backend.end_table()

    if data.kill_data:
        _divider(backend)
        draw_section_header(backend, "Recent Kills", p)
        if backend.begin_table(_wid(window, "recentkills"), KILL_COLUMNS):
            draw_row(backend, "Kill #", "Duration", TEXT_COLOR, TEXT_COLOR)
            for number, kill in data.recent_kills():
                draw_row(backend, str(number), kill.fight_duration or "--", HISTORY_COLOR, HISTORY_COLOR)
            backend.end_table()

    names = data.unique_names()
    if names:
        _divider(backend)
        draw_section_header(backend, "Unique Drops", p)
        for name in names:
            backend.text(name, TEXT_COLOR)


# -- Warnings tab ---------------------------------------------------------------

def draw_warnings_tab(window: "Window", backend: RenderBackend):
    warnings = window.session.warnings
    if not warnings:
        backend.text("No warnings.", MUTED_COLOR)
        return

    for warning in warnings:
        backend.text("! " + warning, WARNING_COLOR)
        backend.spacing()

    _divider(backend)

    if draw_button(backend, "Dismiss Warnings", BUTTON_DISMISS, widget_id=_wid(window, "clearwarn")):
        warnings.clear()
