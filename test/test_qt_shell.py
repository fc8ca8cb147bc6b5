"""Qt adapters and the main window driven through their signals.

Runs on the offscreen platform; skipped when PySide6 is not installed.
"""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtCore = pytest.importorskip("PySide6.QtCore")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")
pytest.importorskip("pyqtgraph")

from gui.interaction_signals import InteractionSignals  # noqa: E402
from gui.main_window import MainWindow  # noqa: E402
from gui.qsettings_adapter import QSettingsPersistence  # noqa: E402
from core.metrics import default_metrics  # noqa: E402
from shared.app_settings import AppSettingsStore, InMemoryPersistence  # noqa: E402
from shared.models import TimeWindow, Tool, UnitSystem  # noqa: E402
from test.fixtures.track_fixtures import make_samples  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    samples = make_samples([float(t) for t in range(11)], [100.0 + 10.0 * t for t in range(11)])
    store = AppSettingsStore(InMemoryPersistence())
    mw = MainWindow(samples=samples, settings_store=store)
    yield mw
    mw.close()
    mw.deleteLater()


def test_qsettings_persistence_round_trip(tmp_path):
    path = str(tmp_path / "trackplot.ini")
    qsettings = QtCore.QSettings(path, QtCore.QSettings.IniFormat)
    persistence = QSettingsPersistence(qsettings=qsettings)

    registry = default_metrics()
    registry["total_speed"].set_visible(True)
    registry["total_speed"].set_color((1, 2, 3))
    registry.save_settings(persistence)
    persistence.save({"units": "imperial"})

    reopened = QSettingsPersistence(qsettings=QtCore.QSettings(path, QtCore.QSettings.IniFormat))
    restored = default_metrics()
    restored.load_settings(reopened)
    assert restored["total_speed"].visible
    assert restored["total_speed"].color == (1, 2, 3)
    assert AppSettingsStore(reopened).get().unit_system is UnitSystem.IMPERIAL

    reopened.save({"units": None})
    assert "units" not in reopened.load()


def test_interaction_signals_reemit_intents(qapp):
    signals = InteractionSignals()
    seen = []
    signals.windowReplaceRequested.connect(seen.append)
    signals.measureRequested.connect(lambda a, b: seen.append((a, b)))
    signals.cursorCleared.connect(lambda: seen.append("clear"))

    signals.on_window_replace(TimeWindow(1.0, 2.0))
    signals.on_measure(3, 4)
    signals.on_cursor_clear()
    assert seen == [TimeWindow(1.0, 2.0), (3.0, 4.0), "clear"]


def test_window_starts_at_full_extent_with_default_axes(window):
    assert window.plot.time_window().lower == pytest.approx(0.0)
    assert window.plot.time_window().upper == pytest.approx(10.0)
    assert [m.key for m in window.plot_manager.axes.order] == ["elevation"]

    renderer = window.plot_manager.axes.axis_for(window.metrics["elevation"])
    lo, hi = renderer.y_range()
    assert lo == pytest.approx(100.0)
    assert hi == pytest.approx(200.0)


def test_zoom_intent_rescales_value_axes(window):
    window.plot.signals.windowReplaceRequested.emit(TimeWindow(2.0, 8.0))
    renderer = window.plot_manager.axes.axis_for(window.metrics["elevation"])
    lo, hi = renderer.y_range()
    assert lo == pytest.approx(120.0)
    assert hi == pytest.approx(180.0)


def test_toggling_metric_adds_and_removes_axes(window):
    vertical = window.metrics["vertical_speed"]
    window.set_metric_visible(vertical, True)
    assert [m.key for m in window.plot_manager.axes.order] == ["elevation", "vertical_speed"]

    window.set_metric_visible(window.metrics["elevation"], False)
    assert [m.key for m in window.plot_manager.axes.order] == ["vertical_speed"]
    assert "plotValue/elevation/visible" in window._settings_store.persistence.load()


def test_reference_intents_and_axis_switch(window):
    window.plot.signals.zeroRequested.emit(3.0)
    window.plot.signals.groundRequested.emit(7.0)
    assert window.zero_reference == 3.0
    assert window.ground_reference == 7.0
    assert window.plot.zero_line.isVisible()

    window.set_x_metric(window._x_metrics["distance_2d"])
    assert window.zero_reference is None
    assert window.ground_reference is None
    assert window._settings_store.get().x_axis_key == "distance_2d"


def test_measure_intent_fills_readout(window):
    window.set_tool(Tool.MEASURE)
    window.plot.signals.measureRequested.emit(1.0, 4.0)
    assert window.readout.table.rowCount() == 1
    assert window.readout.table.item(0, 2).text() == "30.00"
    assert window._settings_store.get().selected_tool is Tool.MEASURE


def test_units_switch_retitles_axes(window):
    window.set_units(UnitSystem.IMPERIAL)
    renderer = window.plot_manager.axes.axis_for(window.metrics["elevation"])
    assert "ft" in renderer.axis.labelText
