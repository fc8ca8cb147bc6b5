from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .main_window import MainWindow

logger = logging.getLogger(__name__)


class SignalBridge:
    """
    Centralizes the wiring of signal-slot connections between UI modules.

    Keeps the knowledge of which plot intent lands in which shell handler
    out of the layout and lifecycle code in MainWindow.
    """

    def __init__(self, main_window: MainWindow) -> None:
        self.mw = main_window

    def wire_plot_signals(self) -> None:
        """Connect plot interaction intents to the shell."""
        mw = self.mw
        signals = mw.plot.signals

        signals.windowShiftRequested.connect(mw._on_window_shift)
        signals.windowReplaceRequested.connect(mw._on_window_replace)
        signals.measureRequested.connect(mw._on_measure)
        signals.cursorMarked.connect(mw._on_cursor_mark)
        signals.cursorCleared.connect(mw._on_cursor_cleared)
        signals.zeroRequested.connect(mw._on_set_zero)
        signals.groundRequested.connect(mw._on_set_ground)

    def wire_ui_internal(self) -> None:
        """Connect menu and tool bar actions that are not per-item."""
        mw = self.mw

        mw.zoom_extent_action.triggered.connect(mw.plot_manager.zoom_to_extent)
        mw.reset_metrics_action.triggered.connect(mw.restore_metric_defaults)
        mw.clear_references_action.triggered.connect(mw.clear_references)
