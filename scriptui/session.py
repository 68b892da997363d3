"""Session lifecycle, tab requests and the warning log."""

from collections import deque
from enum import Enum
from typing import Callable, Iterator, Optional

from .utils import get_logger, log_runtime_event

logger = get_logger("scriptui.session")

MAX_WARNINGS = 50


class Phase(Enum):
    CONFIGURING = "configuring"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    CANCELLED = "cancelled"


TERMINAL_PHASES = (Phase.STOPPED, Phase.CANCELLED)


class Tab(Enum):
    CONFIG = "config"
    INFO = "info"
    WARNINGS = "warnings"


class TabRequests:
    """One-shot "select this tab next frame" flags.

    ``consume`` reads and clears a flag in the same call, so a request is seen
    by exactly one render pass.
    """

    def __init__(self):
        self.config = True
        self.info = False
        self.warnings = False

    def request(self, tab: Tab):
        setattr(self, tab.value, True)

    def consume(self, tab: Tab) -> bool:
        wanted = getattr(self, tab.value)
        setattr(self, tab.value, False)
        return wanted

    def peek(self, tab: Tab) -> bool:
        return getattr(self, tab.value)

    def reset(self):
        self.config = True
        self.info = False
        self.warnings = False


class WarningLog:
    """FIFO of warning strings capped at ``MAX_WARNINGS``."""

    def __init__(self, limit: int = MAX_WARNINGS):
        self.limit = limit
        self._items = deque()

    def push(self, message: str):
        self._items.append(str(message))
        while len(self._items) > self.limit:
            self._items.popleft()

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._items))

    def __bool__(self):
        return bool(self._items)

    def as_tuple(self):
        return tuple(self._items)


class Session:
    """Lifecycle of one script run.

    CONFIGURING -> RUNNING <-> PAUSED -> STOPPED, or CONFIGURING -> CANCELLED.
    Transition methods return ``True`` when the transition fired and ``False``
    when it is not allowed from the current phase.
    """

    def __init__(self, on_start: Optional[Callable[[], object]] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.on_start = on_start
        self.clock = clock
        self.phase = Phase.CONFIGURING
        self.open = True
        self.tabs = TabRequests()
        self.warnings = WarningLog()
        self.started_at: Optional[float] = None

    # -- derived flags --------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.phase in (Phase.RUNNING, Phase.PAUSED, Phase.STOPPED)

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def stopped(self) -> bool:
        return self.phase is Phase.STOPPED

    @property
    def cancelled(self) -> bool:
        return self.phase is Phase.CANCELLED

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def finished(self) -> bool:
        return self.phase in TERMINAL_PHASES

    # -- transitions ----------------------------------------------------------

    def _move(self, allowed, target: Phase) -> bool:
        if self.phase not in allowed:
            logger.debug("Ignoring %s -> %s", self.phase.value, target.value)
            return False
        log_runtime_event("Session transition", f"{self.phase.value} -> {target.value}", level="DEBUG")
        self.phase = target
        return True

    def start(self) -> bool:
        if self.phase is not Phase.CONFIGURING:
            logger.debug("Ignoring start from %s", self.phase.value)
            return False
        if self.on_start is not None:
            self.on_start()
        self._move((Phase.CONFIGURING,), Phase.RUNNING)
        if self.clock is not None:
            self.started_at = self.clock()
        self.tabs.request(Tab.INFO)
        return True

    def cancel(self) -> bool:
        return self._move((Phase.CONFIGURING,), Phase.CANCELLED)

    def pause(self) -> bool:
        return self._move((Phase.RUNNING,), Phase.PAUSED)

    def resume(self) -> bool:
        return self._move((Phase.PAUSED,), Phase.RUNNING)

    def toggle_pause(self) -> bool:
        if self.phase is Phase.PAUSED:
            return self.resume()
        return self.pause()

    def stop(self) -> bool:
        return self._move((Phase.RUNNING, Phase.PAUSED), Phase.STOPPED)

    def close(self):
        self.open = False

    def reset(self):
        self.phase = Phase.CONFIGURING
        self.open = True
        self.started_at = None
        self.warnings.clear()
        self.tabs.reset()
        log_runtime_event("Session reset", level="DEBUG")

    def elapsed(self) -> float:
        if self.started_at is None or self.clock is None:
            return 0.0
        return max(0.0, self.clock() - self.started_at)
