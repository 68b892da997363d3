"""Config persistence for scriptui windows.

Each window saves its field values to ``<config-root>/<identity>.config.json``.
Saving and loading are best effort: failures are logged and the in-memory
config stays the source of truth.
"""

import os
import re
import json
import threading
from typing import Dict, Iterable, MutableMapping, Optional

from .fields import KEYED_FIELDS, ConfigValue, Field, coerce_value, value_matches
from .utils import get_logger, log_runtime_event

logger = get_logger("scriptui.config")

CONFIG_DIR_ENV = "SCRIPTUI_CONFIG_DIR"
DEFAULT_CONFIG_DIR = os.path.join("~", ".scriptui", "configs")
CONFIG_SUFFIX = ".config.json"

_WHITESPACE = re.compile(r"\s+")

# One write lock per config path
_path_locks: Dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def compute_identity(title: str) -> str:
    """Strip all whitespace from a window title."""
    return _WHITESPACE.sub("", title or "")


def storage_name(identity: str) -> str:
    return identity.lower() + CONFIG_SUFFIX


def default_config_dir() -> str:
    return os.path.expanduser(os.environ.get(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR)


def _lock_for(path: str) -> threading.Lock:
    key = os.path.abspath(path)
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


def project_config(config: MutableMapping[str, ConfigValue], fields: Iterable[Field]) -> Dict[str, ConfigValue]:
    """Keep only the keys that registered fields still declare."""
    out = {}
    for f in fields:
        if isinstance(f, KEYED_FIELDS) and f.key in config:
            out[f.key] = config[f.key]
    return out


def merge_saved(saved: dict, fields: Iterable[Field], config: MutableMapping[str, ConfigValue]):
    """Copy saved values into ``config`` where the type matches the field."""
    for f in fields:
        if not isinstance(f, KEYED_FIELDS) or f.key not in saved:
            continue
        value = saved[f.key]
        if value is None:
            continue
        if value_matches(f, value):
            config[f.key] = coerce_value(f, value)
        else:
            logger.debug("Ignoring saved '%s': expected %s, found %s",
                         f.key, type(f.default).__name__, type(value).__name__)
    return config


class ConfigStore:
    """Reads and writes the JSON document for one window identity."""

    def __init__(self, identity: str, config_dir: Optional[str] = None):
        self.identity = identity
        self.config_dir = os.path.expanduser(config_dir) if config_dir else default_config_dir()
        self.path = os.path.join(self.config_dir, storage_name(identity))

    def save(self, config: MutableMapping[str, ConfigValue], fields: Iterable[Field]) -> bool:
        """Write the projected config. Returns ``False`` on any failure, never raises."""
        data = project_config(config, fields)
        try:
            payload = json.dumps(data, indent=2)
        except (TypeError, ValueError) as e:
            logger.warning("Could not encode config for %s: %s", self.identity, e)
            return False

        try:
            os.makedirs(self.config_dir, exist_ok=True)
        except OSError as e:
            # The open below reports the real problem if the directory is unusable
            logger.debug("Could not create %s: %s", self.config_dir, e)

        with _lock_for(self.path):
            try:
                with open(self.path, "w", encoding="utf-8") as f:
                    f.write(payload)
            except OSError as e:
                logger.warning("Could not write config %s: %s", self.path, e)
                return False

        log_runtime_event("Config saved", f"path={self.path}, keys={len(data)}", level="DEBUG")
        return True

    def read(self) -> Optional[dict]:
        """Return the saved JSON object, or ``None`` if there is nothing usable."""
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read config %s: %s", self.path, e)
            return None
        if not content.strip():
            return None
        try:
            saved = json.loads(content)
        except (ValueError, RecursionError) as e:
            logger.warning("Config %s is not valid JSON: %s", self.path, e)
            return None
        if not isinstance(saved, dict):
            logger.warning("Config %s does not hold a JSON object", self.path)
            return None
        return saved

    def load(self, fields: Iterable[Field], config: MutableMapping[str, ConfigValue]):
        """Merge the saved document into ``config`` in place and return it."""
        saved = self.read()
        if saved is None:
            return config
        merge_saved(saved, fields, config)
        log_runtime_event("Config loaded", f"path={self.path}", level="DEBUG")
        return config

    def exists(self) -> bool:
        return os.path.exists(self.path)


def save_config(identity: str, config, fields, config_dir: Optional[str] = None) -> bool:
    return ConfigStore(identity, config_dir).save(config, fields)


def load_config(identity: str, fields, config, config_dir: Optional[str] = None):
    return ConfigStore(identity, config_dir).load(fields, config)
