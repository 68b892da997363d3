"""Tests for the command-line entry points."""

import logging
from unittest.mock import patch

import pytest

from scriptui import __main__ as cli
from scriptui.main import build_demo_window, run_headless, DemoScript
from scriptui.backend import RecordingBackend
from scriptui.theme import THEMES


@pytest.fixture(autouse=True)
def reset_scriptui_logger():
    """main() installs a console handler; drop it after each test."""
    yield
    logging.getLogger("scriptui").handlers.clear()
    runtime = logging.getLogger("scriptui.runtime")
    for handler in list(runtime.handlers):
        handler.close()
        runtime.removeHandler(handler)


class TestMain:
    """``scriptui`` command."""

    def test_list_themes(self, capsys):
        assert cli.main(["--list-themes"]) == 0
        out = capsys.readouterr().out.split()
        assert out == list(THEMES)

    def test_headless_flag(self, isolated_config_dir):
        assert cli.main(["--headless", "--frames", "3", "--config-dir", str(isolated_config_dir)]) == 0
        assert (isolated_config_dir / "bossdemo.config.json").exists()

    def test_interactive_mode_dispatch(self):
        with patch.object(cli, "run_demo", return_value=0) as run_demo:
            assert cli.main(["--theme", "ice", "--frames", "5"]) == 0
        run_demo.assert_called_once_with("ice", None, 5)

    def test_runtime_log_option(self, tmp_path):
        log_file = tmp_path / "runtime.log"
        assert cli.main(["--list-themes", "--runtime-log", str(log_file)]) == 0
        handlers = logging.getLogger("scriptui.runtime").handlers
        assert any(getattr(h, "baseFilename", None) == str(log_file) for h in handlers)

    def test_runtime_log_off_by_default(self):
        assert cli.main(["--list-themes"]) == 0
        assert logging.getLogger("scriptui.runtime").handlers == []

    def test_invalid_theme_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["--theme", "neon"])


class TestHeadless:
    """``scriptui-headless`` command."""

    def test_headless_entry(self):
        assert cli.headless(["--frames", "3"]) == 0

    def test_run_headless_zero_frames(self, isolated_config_dir):
        assert run_headless(0, "gold", str(isolated_config_dir)) == 0


class TestDemoWindow:
    """The demo window builds and ticks without a display."""

    def test_fields(self, isolated_config_dir):
        ui = build_demo_window(config_dir=str(isolated_config_dir), backend=RecordingBackend())
        assert ui.identity == "BossDemo"
        assert set(ui.get_config()) == {"camp_boss", "prayer", "health_food", "health_brew", "bank_pin"}

    def test_tick_produces_snapshot(self, isolated_config_dir):
        ui = build_demo_window(config_dir=str(isolated_config_dir), backend=RecordingBackend())
        clock = iter(float(i) for i in range(0, 10_000, 10))
        script = DemoScript(clock=lambda: next(clock))
        ui.start()
        snap = None
        for _ in range(200):
            snap = script.tick(ui)
        assert snap.boss_max_health == 150_000
        assert snap.kills >= 1
        assert snap.state in ("Fighting", "Banking")
