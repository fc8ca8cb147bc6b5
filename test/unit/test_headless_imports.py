"""Verify core/shared modules are importable without PySide6.

The ranging, axis and interaction logic must stay usable by tools and
tests that never start a Qt application.
"""
from __future__ import annotations

import importlib
import sys

import pytest

HEADLESS_MODULES = [
    "shared.models",
    "shared.kinematics",
    "shared.app_settings",
    "shared.simulated_track",
    "core.metrics",
    "core.ranging",
    "core.axes",
    "core.interaction",
    "core.overlay",
    "core.measurement",
]


def _block_qt(monkeypatch):
    for name in [k for k in sys.modules if k == "core" or k == "shared" or k.startswith(("core.", "shared."))]:
        monkeypatch.delitem(sys.modules, name, raising=False)
    for name in ("PySide6", "PySide6.QtCore", "PySide6.QtGui", "PySide6.QtWidgets", "pyqtgraph"):
        monkeypatch.setitem(sys.modules, name, None)


class TestHeadlessImports:
    """Core modules can be imported without PySide6 or pyqtgraph."""

    @pytest.mark.parametrize("module_name", HEADLESS_MODULES)
    def test_module_imports_without_qt(self, monkeypatch, module_name):
        _block_qt(monkeypatch)
        module = importlib.import_module(module_name)
        assert module is not None

    def test_package_exports_without_qt(self, monkeypatch):
        _block_qt(monkeypatch)
        core = importlib.import_module("core")
        for name in ("AxisRangeEngine", "AxisTable", "InteractionStateMachine", "default_metrics", "compute_overlay"):
            assert hasattr(core, name)

    def test_state_machine_runs_headless(self, monkeypatch):
        _block_qt(monkeypatch)
        from core.interaction import InteractionStateMachine, Pixel, PlotRect
        from shared.models import TimeWindow, Tool

        class Surface:
            def plot_rect(self):
                return PlotRect(0.0, 0.0, 10.0, 10.0)

            def pixel_to_coord(self, x):
                return x

            def time_window(self):
                return TimeWindow(0.0, 10.0)

        windows = []

        class Sink:
            def on_window_replace(self, window):
                windows.append(window)

        machine = InteractionStateMachine(Surface(), lambda: Tool.ZOOM, Sink())
        machine.press(Pixel(2.0, 5.0))
        machine.release(Pixel(6.0, 5.0))
        assert windows == [TimeWindow(2.0, 6.0)]
