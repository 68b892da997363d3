"""Pytest configuration and common fixtures for scriptui tests."""

import os
import sys
import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment variables for testing
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep every test's config files inside its own temp directory."""
    config_dir = tmp_path / "configs"
    monkeypatch.setenv("SCRIPTUI_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def backend():
    """Provide a headless recording backend."""
    from scriptui.backend import RecordingBackend
    return RecordingBackend()


@pytest.fixture
def window(backend, isolated_config_dir):
    """Provide a window with one field of every kind."""
    from scriptui.window import Window

    ui = Window("Test Script", "teal", config_dir=str(isolated_config_dir), backend=backend)
    ui.add_section("General", "Basic options")
    ui.add_checkbox("enabled", "Enabled", False)
    ui.add_slider("threshold", "Threshold", 50, 0, 100, "%d%%")
    ui.add_separator()
    ui.add_combo("mode", "Mode", 0, ["Fast", "Safe"])
    ui.add_spacing()
    ui.add_input("name", "Name", "bob", max_len=8)
    return ui


def pytest_configure(config):
    """Configure pytest for scriptui testing."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add default markers."""
    for item in items:
        if "test_pygame_backend.py" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "test_cli_entrypoints.py" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
