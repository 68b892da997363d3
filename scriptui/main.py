"""Demo host loop for scriptui.

Builds a sample boss-fight script window and drives it once per tick, the way
an automation script would.
"""

import random
import time
from typing import Callable, Optional

from .backend import RecordingBackend, RenderBackend
from .helpers import format_time, per_hour
from .snapshot import KillRecord, RuntimeSnapshot
from .utils import get_logger, log_runtime_event, log_exception
from .window import Window

DEMO_TITLE = "Boss Demo"
BOSS_MAX_HEALTH = 150_000

logger = get_logger("scriptui.main")


def build_demo_window(theme: str = "teal", config_dir: Optional[str] = None,
                      backend: Optional[RenderBackend] = None) -> Window:
    ui = Window(DEMO_TITLE, theme, config_dir=config_dir, backend=backend)

    ui.add_section("Combat", "How the fight is handled")
    ui.add_checkbox("camp_boss", "Camp Boss", False, "Stay at the boss instead of banking")
    ui.add_combo("prayer", "Prayer", 0, ["Sorrow", "Ruination"], "Which damage prayer to use")
    ui.add_section("Health Thresholds")
    ui.add_slider("health_food", "Eat Food (%)", 60, 0, 100, "%d%%", "HP threshold to eat solid food")
    ui.add_slider("health_brew", "Drink Brew (%)", 40, 0, 100, "%d%%")
    ui.add_separator()
    ui.add_input("bank_pin", "Bank PIN", "", "Your bank PIN for auto-entry", max_len=4)

    ui.add_state_color("Fighting", 1.0, 0.4, 0.3)
    ui.add_state_color("Banking", 0.3, 0.8, 0.4)

    ui.set_summary_rows(lambda cfg: [
        ("Camp Boss", "Yes" if cfg["camp_boss"] else "No"),
        ("Eat at", "%d%%" % cfg["health_food"]),
    ])
    ui.load_config()
    return ui


class DemoScript:
    """Fake boss-fight statistics advanced once per tick."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, seed: int = 1):
        self.clock = clock
        self.rng = random.Random(seed)
        self.started_at: Optional[float] = None
        self.boss_health = BOSS_MAX_HEALTH
        self.kills = 0
        self.gp = 0
        self.kill_data = []
        self.uniques = []
        self.fight_started = 0.0

    def tick(self, ui: Window) -> RuntimeSnapshot:
        now = self.clock()
        if self.started_at is None:
            self.started_at = now
            self.fight_started = now
        elapsed = now - self.started_at
        state = "Fighting"
        if ui.is_started() and not ui.is_paused() and not ui.is_stopped():
            self.boss_health -= self.rng.randint(800, 4000)
            if self.boss_health <= 0:
                self.kills += 1
                self.gp += self.rng.randint(20_000, 90_000)
                self.kill_data.append(KillRecord(format_time(now - self.fight_started)))
                self.fight_started = now
                self.boss_health = BOSS_MAX_HEALTH
                if self.rng.random() < 0.1:
                    self.uniques.append("Shard of Genesis Essence")
                if not ui.get("camp_boss") and self.kills % 5 == 0:
                    state = "Banking"
            if self.rng.random() < 0.002:
                ui.add_warning("Low prayer points")
        return RuntimeSnapshot(
            state=state,
            boss_name="Demo Boss",
            boss_health=max(0, self.boss_health),
            boss_max_health=BOSS_MAX_HEALTH,
            kills=self.kills,
            kills_per_hour=per_hour(self.kills, elapsed),
            gp=self.gp,
            gp_per_hour=per_hour(self.gp, elapsed),
            kill_timer=format_time(now - self.fight_started),
            kill_data=list(self.kill_data),
            uniques_looted=list(self.uniques),
        )


def run_demo(theme: str = "teal", config_dir: Optional[str] = None, max_frames: Optional[int] = None) -> int:
    """Interactive demo using the pygame backend."""
    from .pygame_backend import PygameBackend

    backend = PygameBackend(caption=f"scriptui - {DEMO_TITLE}")
    ui = build_demo_window(theme, config_dir, backend)
    script = DemoScript()
    frames = 0
    log_runtime_event("Starting demo loop", f"theme={theme}")
    try:
        while True:
            if not backend.new_frame():
                ui.close()
            if not ui.draw(script.tick(ui)):
                break
            backend.present()
            if ui.is_cancelled() or ui.is_stopped():
                log_runtime_event("Demo finished", f"cancelled={ui.is_cancelled()}, stopped={ui.is_stopped()}")
                break
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
    except Exception as e:
        log_exception(e, "run_demo")
        raise
    finally:
        backend.quit()
    return 0


def run_headless(frames: int = 10, theme: str = "teal", config_dir: Optional[str] = None) -> int:
    """Drive the demo window with a recording backend: start, run, stop."""
    backend = RecordingBackend()
    ui = build_demo_window(theme, config_dir, backend)
    script = DemoScript()
    ident = ui.identity
    backend.click(f"##start{ident}")
    for _ in range(max(frames, 1)):
        ui.draw(script.tick(ui))
    # Stop lives on the Config tab
    ui.show_config_tab()
    backend.click(f"##stop{ident}")
    ui.draw(script.tick(ui))
    logger.info("Headless run: started=%s stopped=%s kills=%d", ui.is_started(), ui.is_stopped(), script.kills)
    return 0 if ui.is_stopped() else 1
