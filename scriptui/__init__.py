"""scriptui - declarative config and session state for script control windows."""

__version__ = "1.0.0"

from .errors import ScriptUIError, UnknownThemeError, DuplicateFieldKeyError, ConfigTypeError
from .theme import Palette, THEMES, StateColors, resolve_palette
from .fields import (
    FieldRegistry, Section, Separator, Spacing, Checkbox, Slider, Combo, Input,
)
from .config import ConfigStore, compute_identity, load_config, save_config
from .session import Session, Phase, Tab, TabRequests, WarningLog, MAX_WARNINGS
from .snapshot import RuntimeSnapshot, KillRecord
from .helpers import HelperBundle, format_number, format_time, per_hour, push_theme
from .backend import RenderBackend, RecordingBackend
from .window import Window
from .utils import setup_logging, get_logger

__all__ = [
    "Window", "Palette", "THEMES", "StateColors", "resolve_palette",
    "FieldRegistry", "Section", "Separator", "Spacing", "Checkbox", "Slider",
    "Combo", "Input", "ConfigStore", "compute_identity", "load_config",
    "save_config", "Session", "Phase", "Tab", "TabRequests", "WarningLog",
    "MAX_WARNINGS", "RuntimeSnapshot", "KillRecord", "HelperBundle",
    "format_number", "format_time", "per_hour", "push_theme", "RenderBackend",
    "RecordingBackend", "ScriptUIError", "UnknownThemeError",
    "DuplicateFieldKeyError", "ConfigTypeError", "setup_logging", "get_logger",
]
