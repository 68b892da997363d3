"""Declarative config fields and the ordered registry that owns them."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .errors import ConfigTypeError, DuplicateFieldKeyError
from .utils import get_logger

logger = get_logger("scriptui.fields")

ConfigValue = Union[bool, int, str]

DEFAULT_SLIDER_FORMAT = "%d"
DEFAULT_INPUT_MAX_LEN = 64


@dataclass(frozen=True)
class Section:
    label: str
    desc: Optional[str] = None


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class Spacing:
    pass


@dataclass(frozen=True)
class Checkbox:
    key: str
    label: str
    default: bool
    desc: Optional[str] = None


@dataclass(frozen=True)
class Slider:
    key: str
    label: str
    default: int
    min: int
    max: int
    fmt: str = DEFAULT_SLIDER_FORMAT
    desc: Optional[str] = None


@dataclass(frozen=True)
class Combo:
    """Dropdown; the stored value is the 0-based option index."""
    key: str
    label: str
    default: int
    options: Tuple[str, ...]
    desc: Optional[str] = None


@dataclass(frozen=True)
class Input:
    key: str
    label: str
    default: str
    desc: Optional[str] = None
    max_len: int = DEFAULT_INPUT_MAX_LEN


Field = Union[Section, Separator, Spacing, Checkbox, Slider, Combo, Input]
KeyedField = Union[Checkbox, Slider, Combo, Input]

FIELD_TYPES = (Section, Separator, Spacing, Checkbox, Slider, Combo, Input)
KEYED_FIELDS = (Checkbox, Slider, Combo, Input)

# Declared value type per keyed field kind
VALUE_TYPES = {
    Checkbox: bool,
    Slider: int,
    Combo: int,
    Input: str,
}


def value_type(field: KeyedField) -> type:
    try:
        return VALUE_TYPES[type(field)]
    except KeyError:
        raise TypeError(f"Not a keyed field: {field!r}") from None


def value_matches(field: KeyedField, value) -> bool:
    """Exact runtime type check; ``True`` is not accepted as an int."""
    expected = value_type(field)
    if type(value) is expected:
        return True
    # JSON writers sometimes emit 5.0 for integer values
    return expected is int and type(value) is float and value.is_integer()


def coerce_value(field: KeyedField, value) -> ConfigValue:
    """Return ``value`` in the field's declared type or raise ``ConfigTypeError``."""
    if not value_matches(field, value):
        raise ConfigTypeError(
            f"'{field.key}' expects {value_type(field).__name__}, got {type(value).__name__}"
        )
    if type(value) is float:
        return int(value)
    return value


def _validate(field: Field):
    if not isinstance(field, FIELD_TYPES):
        raise TypeError(f"Unsupported field type: {type(field).__name__}")
    if isinstance(field, KEYED_FIELDS):
        if not isinstance(field.key, str) or not field.key:
            raise ValueError("Field key must be a non-empty string")
        if type(field.default) is not value_type(field):
            raise ConfigTypeError(
                f"Default for '{field.key}' must be {value_type(field).__name__}, "
                f"got {type(field.default).__name__}"
            )
    if isinstance(field, Slider) and field.min > field.max:
        raise ValueError(f"Slider '{field.key}' has min {field.min} > max {field.max}")
    if isinstance(field, Combo) and not field.options:
        raise ValueError(f"Combo '{field.key}' needs at least one option")
    if isinstance(field, Input) and field.max_len < 1:
        raise ValueError(f"Input '{field.key}' max_len must be positive")


class FieldRegistry:
    """Ordered field list plus the key -> value config map built from defaults.

    Fields are append-only; order of registration is render order. Each keyed
    field contributes exactly one config entry, and keys must be unique.
    """

    def __init__(self):
        self._fields: List[Field] = []
        self._by_key: Dict[str, KeyedField] = {}
        self.config: Dict[str, ConfigValue] = {}

    def register(self, field: Field) -> Field:
        _validate(field)
        if isinstance(field, KEYED_FIELDS):
            if field.key in self._by_key:
                raise DuplicateFieldKeyError(f"Field key '{field.key}' is already registered")
            self._by_key[field.key] = field
            self.config[field.key] = field.default
        self._fields.append(field)
        logger.debug("Registered %s field %s", type(field).__name__, getattr(field, "key", "-"))
        return field

    # -- builders -----------------------------------------------------------

    def add_section(self, label: str, desc: Optional[str] = None) -> Section:
        return self.register(Section(label, desc))

    def add_checkbox(self, key: str, label: str, default: bool, desc: Optional[str] = None) -> Checkbox:
        return self.register(Checkbox(key, label, default, desc))

    def add_slider(self, key: str, label: str, default: int, min: int, max: int,
                   fmt: Optional[str] = None, desc: Optional[str] = None) -> Slider:
        return self.register(Slider(key, label, default, min, max, fmt or DEFAULT_SLIDER_FORMAT, desc))

    def add_combo(self, key: str, label: str, default: int, options, desc: Optional[str] = None) -> Combo:
        return self.register(Combo(key, label, default, tuple(options), desc))

    def add_input(self, key: str, label: str, default: str, desc: Optional[str] = None,
                  max_len: Optional[int] = None) -> Input:
        return self.register(Input(key, label, default, desc, max_len or DEFAULT_INPUT_MAX_LEN))

    def add_separator(self) -> Separator:
        return self.register(Separator())

    def add_spacing(self) -> Spacing:
        return self.register(Spacing())

    # -- queries ------------------------------------------------------------

    def get_all(self) -> Tuple[Field, ...]:
        return tuple(self._fields)

    fields = get_all

    def keyed_fields(self) -> Iterator[KeyedField]:
        return (f for f in self._fields if isinstance(f, KEYED_FIELDS))

    def keys(self) -> List[str]:
        return [f.key for f in self.keyed_fields()]

    def field_for(self, key: str) -> Optional[KeyedField]:
        return self._by_key.get(key)

    def defaults(self) -> Dict[str, ConfigValue]:
        return {f.key: f.default for f in self.keyed_fields()}

    def __len__(self):
        return len(self._fields)

    def __iter__(self):
        return iter(tuple(self._fields))
