"""Theme palettes and color helpers for scriptui windows."""

from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Sequence, Tuple, Union

from .errors import UnknownThemeError

RGB = Tuple[float, float, float]

TONES = ("dark", "medium", "light", "bright", "glow")


def hex2rgb(h: str) -> RGB:
    """Convert ``#rrggbb`` (or ``#rgb``) into float channels in [0, 1]."""
    h = h.strip().lstrip("#")
    if len(h) == 3:
        h = "".join([c*2 for c in h])
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {h!r}")
    return tuple(int(h[i:i+2], 16) / 255.0 for i in (0, 2, 4))


def to_rgb255(color: Sequence[float]) -> Tuple[int, int, int]:
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in color[:3])


def scale(color: Sequence[float], factor: float) -> RGB:
    """Multiply each channel, clamped to [0, 1]."""
    return tuple(max(0.0, min(1.0, c * factor)) for c in color[:3])


def blend(a: Sequence[float], b: Sequence[float], t: float) -> RGB:
    return tuple(a[i]*(1-t) + b[i]*t for i in range(3))


class Palette(NamedTuple):
    """Five-tone ramp, darkest to brightest."""
    dark: RGB
    medium: RGB
    light: RGB
    bright: RGB
    glow: RGB


def _rgb(value, tone: str) -> RGB:
    if isinstance(value, str):
        return hex2rgb(value)
    channels = tuple(float(c) for c in value)
    if len(channels) != 3:
        raise ValueError(f"Tone '{tone}' must have 3 channels, got {len(channels)}")
    for c in channels:
        if not 0.0 <= c <= 1.0:
            raise ValueError(f"Tone '{tone}' channel {c} outside [0, 1]")
    return channels


def palette_from_mapping(d: Mapping[str, Union[str, Sequence[float]]]) -> Palette:
    """Build a palette from a mapping with the five tone keys."""
    missing = [t for t in TONES if t not in d]
    if missing:
        raise ValueError(f"Custom palette missing tones: {', '.join(missing)}")
    return Palette(**{t: _rgb(d[t], t) for t in TONES})


# Built-in themes, dark -> glow
THEMES: Mapping[str, Palette] = MappingProxyType({
    "teal": Palette(
        dark=(0.06, 0.08, 0.10),
        medium=(0.08, 0.18, 0.25),
        light=(0.15, 0.35, 0.45),
        bright=(0.25, 0.55, 0.65),
        glow=(0.40, 0.80, 0.90),
    ),
    "purple": Palette(
        dark=(0.09, 0.09, 0.09),
        medium=(0.18, 0.08, 0.25),
        light=(0.35, 0.18, 0.45),
        bright=(0.55, 0.28, 0.65),
        glow=(0.75, 0.45, 0.85),
    ),
    "crimson": Palette(
        dark=(0.09, 0.06, 0.06),
        medium=(0.25, 0.08, 0.10),
        light=(0.45, 0.15, 0.18),
        bright=(0.65, 0.25, 0.28),
        glow=(0.90, 0.40, 0.40),
    ),
    "inferno": Palette(
        dark=(0.08, 0.05, 0.02),
        medium=(0.30, 0.12, 0.04),
        light=(0.55, 0.22, 0.08),
        bright=(0.75, 0.35, 0.10),
        glow=(1.00, 0.55, 0.15),
    ),
    "emerald": Palette(
        dark=(0.05, 0.08, 0.06),
        medium=(0.06, 0.20, 0.12),
        light=(0.12, 0.38, 0.22),
        bright=(0.20, 0.58, 0.35),
        glow=(0.35, 0.85, 0.50),
    ),
    "gold": Palette(
        dark=(0.08, 0.07, 0.04),
        medium=(0.25, 0.20, 0.06),
        light=(0.45, 0.38, 0.12),
        bright=(0.70, 0.58, 0.18),
        glow=(1.00, 0.85, 0.30),
    ),
    "ice": Palette(
        dark=(0.06, 0.07, 0.10),
        medium=(0.08, 0.15, 0.28),
        light=(0.15, 0.30, 0.50),
        bright=(0.25, 0.50, 0.75),
        glow=(0.45, 0.75, 1.00),
    ),
})

DEFAULT_THEME = "teal"

# Fixed UI colors that do not follow the palette
TEXT_COLOR: RGB = (1.0, 1.0, 1.0)
LABEL_COLOR: RGB = (0.9, 0.9, 0.9)
MUTED_COLOR: RGB = (0.6, 0.6, 0.65)
ERROR_COLOR: RGB = (1.0, 0.3, 0.3)
WARNING_COLOR: RGB = (1.0, 0.75, 0.2)
RUNNING_COLOR: RGB = (0.4, 0.8, 0.4)
PAUSED_COLOR: RGB = (1.0, 0.8, 0.2)
FASTEST_COLOR: RGB = (0.3, 0.85, 0.45)
SLOWEST_COLOR: RGB = (1.0, 0.5, 0.3)
HISTORY_COLOR: RGB = (0.7, 0.7, 0.7)

BUTTON_NEUTRAL: RGB = (0.4, 0.4, 0.4)
BUTTON_RESUME: RGB = (0.2, 0.5, 0.2)
BUTTON_STOP: RGB = (0.5, 0.15, 0.15)
BUTTON_DISMISS: RGB = (0.5, 0.45, 0.1)

DEFAULT_STATE_COLORS: Mapping[str, RGB] = MappingProxyType({
    "Idle": (0.7, 0.7, 0.7),
    "Paused": PAUSED_COLOR,
    "Dead": (0.5, 0.5, 0.5),
})
UNKNOWN_STATE_COLOR: RGB = DEFAULT_STATE_COLORS["Idle"]


def resolve_palette(theme: Union[str, Palette, Mapping]) -> Palette:
    """Turn a theme name or custom palette into a ``Palette``.

    Unknown names raise ``UnknownThemeError`` immediately.
    """
    if isinstance(theme, Palette):
        return theme
    if isinstance(theme, str):
        try:
            return THEMES[theme]
        except KeyError:
            raise UnknownThemeError(theme, THEMES.keys()) from None
    if isinstance(theme, Mapping):
        return palette_from_mapping(theme)
    raise TypeError(f"theme must be a name, Palette or mapping, not {type(theme).__name__}")


class StateColors:
    """State name -> color table shown on the Info view."""

    def __init__(self):
        self._colors: Dict[str, RGB] = dict(DEFAULT_STATE_COLORS)

    def add(self, state: str, r: float, g: float, b: float):
        self._colors[state] = _rgb((r, g, b), state)

    def get(self, state: str) -> RGB:
        return self._colors.get(state, UNKNOWN_STATE_COLOR)

