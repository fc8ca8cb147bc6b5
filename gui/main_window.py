from __future__ import annotations

import logging
from functools import partial
from typing import Dict, Optional, Sequence

from PySide6 import QtCore, QtGui, QtWidgets

from core.measurement import measure_span, readout_at
from core.metrics import Metric, MetricRegistry, default_metrics, x_axis_metrics
from shared.app_settings import AppSettingsStore
from shared.models import Sample, TimeWindow, Tool, UnitSystem
from shared.simulated_track import simulate_track

from .plot_manager import PlotManager
from .qsettings_adapter import create_gui_settings_store
from .readout_panel import ReadoutPanel
from .signal_bridge import SignalBridge
from .track_plot import TrackPlot
from .types import TOOL_LABELS, TOOL_SHORTCUTS, UNIT_LABELS, qcolor_from_rgb, rgb_from_qcolor


class MainWindow(QtWidgets.QMainWindow):
    """Application shell owning the samples, tool selection and reference points.

    The plot reports intents; this window applies them to the shared state
    (horizontal window, zero and ground references) and keeps the readout
    table in step with the cursor.
    """

    def __init__(
        self,
        samples: Optional[Sequence[Sample]] = None,
        settings_store: Optional[AppSettingsStore] = None,
    ) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.setWindowTitle("TrackPlot")
        self.resize(1200, 720)
        self.statusBar()

        self._settings_store = settings_store if settings_store is not None else create_gui_settings_store()
        settings = self._settings_store.get()

        self._metrics: MetricRegistry = default_metrics()
        self._metrics.load_settings(self._settings_store.persistence)
        self._x_metrics: MetricRegistry = x_axis_metrics()
        self._tool: Tool = settings.selected_tool
        self._units: UnitSystem = settings.unit_system
        x_metric = self._x_metrics.get(settings.x_axis_key) or self._x_metrics["time"]

        self._zero: Optional[float] = None
        self._ground: Optional[float] = None

        self._tool_actions: Dict[Tool, QtGui.QAction] = {}
        self._metric_actions: Dict[str, QtGui.QAction] = {}

        self.plot = TrackPlot(self.current_tool, self)
        self._plot_manager = PlotManager(self.plot, self._metrics, x_metric, self._units, parent=self)
        self._init_ui()

        self._bridge = SignalBridge(self)
        self._bridge.wire_plot_signals()
        self._bridge.wire_ui_internal()

        self._plot_manager.sync_metrics()
        self.set_samples(samples if samples is not None else simulate_track())

    # -------------------------------------------------------------------------
    # UI construction
    # -------------------------------------------------------------------------

    def _init_ui(self) -> None:
        self.setCentralWidget(self.plot)

        self.readout = ReadoutPanel(self)
        dock = QtWidgets.QDockWidget("Readout", self)
        dock.setObjectName("readoutDock")
        dock.setWidget(self.readout)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, dock)
        self._readout_dock = dock

        self._build_tool_bar()
        self._build_menus()
        self._setup_quit_shortcut()

    def _build_tool_bar(self) -> None:
        toolbar = self.addToolBar("Tools")
        toolbar.setObjectName("toolsToolBar")
        group = QtGui.QActionGroup(self)
        group.setExclusive(True)
        for tool in Tool:
            action = QtGui.QAction(TOOL_LABELS[tool], self)
            action.setCheckable(True)
            action.setShortcut(QtGui.QKeySequence(TOOL_SHORTCUTS[tool]))
            action.setChecked(tool is self._tool)
            action.triggered.connect(partial(self.set_tool, tool))
            group.addAction(action)
            toolbar.addAction(action)
            self._tool_actions[tool] = action
        toolbar.addSeparator()
        self.zoom_extent_action = QtGui.QAction("Zoom to Extent", self)
        self.zoom_extent_action.setShortcut(QtGui.QKeySequence("Home"))
        toolbar.addAction(self.zoom_extent_action)

    def _build_menus(self) -> None:
        menu_bar = self.menuBar()

        metrics_menu = menu_bar.addMenu("&Metrics")
        for metric in self._metrics:
            action = QtGui.QAction(metric.name, self)
            action.setCheckable(True)
            action.setChecked(metric.visible)
            action.toggled.connect(partial(self.set_metric_visible, metric))
            metrics_menu.addAction(action)
            self._metric_actions[metric.key] = action
        metrics_menu.addSeparator()
        colors_menu = metrics_menu.addMenu("Colors")
        for metric in self._metrics:
            action = colors_menu.addAction(f"{metric.name}…")
            action.triggered.connect(partial(self._choose_metric_color, metric))
        metrics_menu.addSeparator()
        self.reset_metrics_action = metrics_menu.addAction("Restore Defaults")

        units_menu = menu_bar.addMenu("&Units")
        units_group = QtGui.QActionGroup(self)
        for units in UnitSystem:
            action = QtGui.QAction(UNIT_LABELS[units], self)
            action.setCheckable(True)
            action.setChecked(units is self._units)
            action.triggered.connect(partial(self.set_units, units))
            units_group.addAction(action)
            units_menu.addAction(action)

        axis_menu = menu_bar.addMenu("&Horizontal Axis")
        axis_group = QtGui.QActionGroup(self)
        for x_metric in self._x_metrics:
            action = QtGui.QAction(x_metric.name, self)
            action.setCheckable(True)
            action.setChecked(x_metric is self._plot_manager.x_metric)
            action.triggered.connect(partial(self.set_x_metric, x_metric))
            axis_group.addAction(action)
            axis_menu.addAction(action)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.zoom_extent_action)
        view_menu.addAction(self._readout_dock.toggleViewAction())
        self.clear_references_action = view_menu.addAction("Clear Zero && Ground")

    def _setup_quit_shortcut(self) -> None:
        """Set up global shortcuts for quitting/closing."""
        quit_shortcut = QtGui.QShortcut(QtGui.QKeySequence(QtGui.QKeySequence.StandardKey.Quit), self)
        quit_shortcut.activated.connect(self.close)

    # -------------------------------------------------------------------------
    # Shell state
    # -------------------------------------------------------------------------

    @property
    def metrics(self) -> MetricRegistry:
        return self._metrics

    @property
    def plot_manager(self) -> PlotManager:
        return self._plot_manager

    @property
    def zero_reference(self) -> Optional[float]:
        return self._zero

    @property
    def ground_reference(self) -> Optional[float]:
        return self._ground

    def current_tool(self) -> Tool:
        return self._tool

    def set_tool(self, tool: Tool, *_args) -> None:
        self._tool = Tool(tool)
        action = self._tool_actions.get(self._tool)
        if action is not None and not action.isChecked():
            action.setChecked(True)
        self._settings_store.update(tool=self._tool)
        self.statusBar().showMessage(f"Tool: {TOOL_LABELS[self._tool]}", 2000)

    def set_units(self, units: UnitSystem, *_args) -> None:
        self._units = UnitSystem(units)
        self._settings_store.update(units=self._units)
        self._plot_manager.set_units(self._units)
        self._refresh_reference_status()

    def set_x_metric(self, x_metric: Metric, *_args) -> None:
        # References are coordinates on the old axis and mean nothing on the new one
        self._clear_references()
        self._settings_store.update(x_axis_key=x_metric.key)
        self._plot_manager.set_x_metric(x_metric)

    def set_samples(self, samples: Sequence[Sample]) -> None:
        self._clear_references()
        self._plot_manager.set_samples(samples)
        self.readout.clear_values()

    def set_metric_visible(self, metric: Metric, visible: bool) -> None:
        if metric.visible == bool(visible):
            return
        metric.set_visible(visible)
        self._plot_manager.sync_metrics()
        self._metrics.save_settings(self._settings_store.persistence)

    def set_metric_color(self, metric: Metric, rgb: Sequence[int]) -> None:
        metric.set_color(rgb)
        self._plot_manager.restyle(metric)
        self._metrics.save_settings(self._settings_store.persistence)

    def _choose_metric_color(self, metric: Metric, *_args) -> None:
        color = QtWidgets.QColorDialog.getColor(qcolor_from_rgb(metric.color), self, metric.name)
        if color.isValid():
            self.set_metric_color(metric, rgb_from_qcolor(color))

    def restore_metric_defaults(self) -> None:
        self._metrics.reset_defaults()
        for metric in self._metrics:
            action = self._metric_actions[metric.key]
            action.blockSignals(True)
            action.setChecked(metric.visible)
            action.blockSignals(False)
        self._plot_manager.sync_metrics()
        self._plot_manager.restyle()
        self._metrics.save_settings(self._settings_store.persistence)

    # -------------------------------------------------------------------------
    # Intent handlers
    # -------------------------------------------------------------------------

    def _on_window_shift(self, delta: float) -> None:
        self.plot.set_time_window(self.plot.time_window().shifted(delta))

    def _on_window_replace(self, window: TimeWindow) -> None:
        self.plot.set_time_window(window)

    def _on_measure(self, start: float, end: float) -> None:
        measurement = measure_span(self._plot_manager.index, self._metrics, start, end)
        if measurement is None:
            return
        x_title = self._plot_manager.x_metric.title(self._units)
        self.readout.show_measurement(measurement, x_title, self._units)
        self.statusBar().showMessage(f"Measured Δ {measurement.span:.2f} along {x_title}")

    def _on_cursor_mark(self, coord: float) -> None:
        readout = readout_at(self._plot_manager.index, self._metrics, coord)
        if readout is None:
            return
        x_title = self._plot_manager.x_metric.title(self._units)
        self.readout.show_readout(readout, x_title, self._units)
        if self._zero is not None:
            self.statusBar().showMessage(f"{x_title}: {readout.coord - self._zero:+.2f} from zero")

    def _on_cursor_cleared(self) -> None:
        self.readout.clear_values()

    def _on_set_zero(self, coord: float) -> None:
        self._zero = coord
        self.plot.set_zero_marker(coord)
        self._refresh_reference_status()

    def _on_set_ground(self, coord: float) -> None:
        self._ground = coord
        self.plot.set_ground_marker(coord)
        self._refresh_reference_status()

    def clear_references(self) -> None:
        self._clear_references()
        self.statusBar().clearMessage()

    def _clear_references(self) -> None:
        self._zero = None
        self._ground = None
        self.plot.set_zero_marker(None)
        self.plot.set_ground_marker(None)

    def _refresh_reference_status(self) -> None:
        parts = []
        x_title = self._plot_manager.x_metric.title(self._units)
        if self._zero is not None:
            parts.append(f"Zero at {self._zero:.2f} ({x_title})")
        if self._ground is not None:
            index = self._plot_manager.index
            i = index.nearest(self._ground)
            if i is not None:
                elevation = self._metrics["elevation"]
                height = elevation.value(index.sample(i), self._units)
                parts.append(f"Ground at {height:.1f} {elevation.unit_suffix(self._units)}")
        self.statusBar().showMessage("   ".join(parts))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # type: ignore[override]
        try:
            self._metrics.save_settings(self._settings_store.persistence)
        except Exception as e:
            self._logger.debug("Failed to save metric settings on close: %s", e)
        super().closeEvent(event)
