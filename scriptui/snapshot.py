"""Runtime data shown on the Info view."""

import re
from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Optional, Set, Union

from .utils import get_logger

logger = get_logger("scriptui.snapshot")

RECENT_KILLS_SHOWN = 5

# Unknown keys already reported; later frames log them at debug level
_reported_keys: Set[str] = set()


@dataclass(frozen=True)
class KillRecord:
    fight_duration: Optional[str] = None

    @staticmethod
    def from_value(v) -> "KillRecord":
        if isinstance(v, KillRecord):
            return v
        if isinstance(v, Mapping):
            d = v.get("fight_duration", v.get("fightDuration"))
            return KillRecord(None if d is None else str(d))
        if v is None:
            return KillRecord()
        return KillRecord(str(v))


@dataclass
class RuntimeSnapshot:
    """Per-tick statistics supplied by the host script.

    Every field is optional; the Info view skips whatever is ``None``.

    state: current activity name, colored through the state color table.
    boss_name, boss_health, boss_max_health: health bar, drawn when health > 0.
    kills, kills_per_hour, deaths, gp, gp_per_hour: counters for the stats table.
    kill_timer, fastest_kill, slowest_kill, average_kill: preformatted time strings.
    kill_data: kill history, oldest first; the last five are shown.
    uniques_looted: names of unique drops (or sequences whose first item is the name).
    """
    state: Optional[str] = None
    boss_name: Optional[str] = None
    boss_health: Optional[float] = None
    boss_max_health: Optional[float] = None
    kills: Optional[int] = None
    kills_per_hour: Optional[Union[int, float, str]] = None
    deaths: Optional[int] = None
    gp: Optional[float] = None
    gp_per_hour: Optional[float] = None
    kill_timer: Optional[str] = None
    fastest_kill: Optional[str] = None
    slowest_kill: Optional[str] = None
    average_kill: Optional[str] = None
    kill_data: List[KillRecord] = field(default_factory=list)
    uniques_looted: List[Any] = field(default_factory=list)

    @property
    def has_stats(self) -> bool:
        return any(v is not None for v in (self.kills, self.deaths, self.kill_timer, self.gp))

    @property
    def has_boss_health(self) -> bool:
        return bool(self.boss_health and self.boss_max_health and self.boss_health > 0)

    def recent_kills(self, limit: int = RECENT_KILLS_SHOWN):
        """(1-based kill number, record) pairs for the newest ``limit`` kills."""
        start = max(0, len(self.kill_data) - limit)
        return [(i + 1, self.kill_data[i]) for i in range(start, len(self.kill_data))]

    def unique_names(self) -> List[str]:
        names = []
        for drop in self.uniques_looted:
            if isinstance(drop, (list, tuple)) and drop:
                names.append(str(drop[0]))
            else:
                names.append(str(drop))
        return names

    @staticmethod
    def from_mapping(d: Mapping[str, Any]) -> "RuntimeSnapshot":
        """Build a snapshot from a dict; camelCase keys are accepted.

        Unknown keys are dropped; each is logged as a warning the first time it
        is seen.
        """
        known = {f.name for f in fields(RuntimeSnapshot)}
        kwargs = {}
        unknown = []
        for key, value in d.items():
            name = _snake(key) if isinstance(key, str) else None
            if name not in known:
                unknown.append(str(key))
                continue
            kwargs[name] = value
        if unknown:
            _report_unknown(unknown)
        kills = kwargs.pop("kill_data", None) or []
        uniques = kwargs.pop("uniques_looted", None) or []
        return RuntimeSnapshot(
            kill_data=[KillRecord.from_value(k) for k in kills],
            uniques_looted=list(uniques),
            **kwargs,
        )


def _report_unknown(keys):
    new = sorted(k for k in keys if k not in _reported_keys)
    if new:
        _reported_keys.update(new)
        logger.warning("Ignoring unknown runtime snapshot keys: %s", ", ".join(new))
    else:
        logger.debug("Ignoring unknown runtime snapshot keys: %s", ", ".join(sorted(keys)))


_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def as_snapshot(data: Union[None, RuntimeSnapshot, Mapping[str, Any]]) -> RuntimeSnapshot:
    if data is None:
        return RuntimeSnapshot()
    if isinstance(data, RuntimeSnapshot):
        return data
    if isinstance(data, Mapping):
        return RuntimeSnapshot.from_mapping(data)
    raise TypeError(f"Runtime data must be a RuntimeSnapshot or mapping, not {type(data).__name__}")
