"""Readout table synchronised with the plot cursor and measure tool."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6 import QtCore, QtWidgets

from core.measurement import Measurement, Readout
from core.metrics import Metric
from shared.models import UnitSystem

from .types import qcolor_from_rgb

logger = logging.getLogger(__name__)

MEASURE_COLUMNS = ("Start", "End", "Change", "Min", "Mean", "Max")


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "–"
    return f"{value:.2f}"


class ReadoutPanel(QtWidgets.QWidget):
    """Shows metric values at the cursor, or statistics over a measured span."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self.header_label = QtWidgets.QLabel("")
        layout.addWidget(self.header_label)

        self.table = QtWidgets.QTableWidget(0, 1, self)
        self.table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.table.verticalHeader().setVisible(True)
        self.table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table)

    def _set_rows(self, metrics: Sequence[Metric], units: UnitSystem, columns: Sequence[str]) -> None:
        self.table.clear()
        self.table.setColumnCount(len(columns))
        self.table.setHorizontalHeaderLabels(list(columns))
        self.table.setRowCount(len(metrics))
        for row, metric in enumerate(metrics):
            header = QtWidgets.QTableWidgetItem(metric.title(units))
            header.setForeground(qcolor_from_rgb(metric.color))
            self.table.setVerticalHeaderItem(row, header)

    def _set_cell(self, row: int, column: int, text: str) -> None:
        item = QtWidgets.QTableWidgetItem(text)
        item.setTextAlignment(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
        self.table.setItem(row, column, item)

    def show_readout(self, readout: Readout, x_title: str, units: UnitSystem) -> None:
        self.header_label.setText(f"{x_title}: {readout.coord:.2f}")
        self._set_rows([r.metric for r in readout.rows], units, ("Value",))
        for row, entry in enumerate(readout.rows):
            self._set_cell(row, 0, _fmt(entry.value))

    def show_measurement(self, measurement: Measurement, x_title: str, units: UnitSystem) -> None:
        self.header_label.setText(
            f"{x_title}: {measurement.start_coord:.2f} → {measurement.end_coord:.2f}"
            f"  (Δ {measurement.span:.2f})"
        )
        self._set_rows([r.metric for r in measurement.rows], units, MEASURE_COLUMNS)
        for row, entry in enumerate(measurement.rows):
            values = (entry.start, entry.end, entry.change, entry.minimum, entry.mean, entry.maximum)
            for column, value in enumerate(values):
                self._set_cell(row, column, _fmt(value))

    def clear_values(self) -> None:
        self.header_label.setText("")
        for row in range(self.table.rowCount()):
            for column in range(self.table.columnCount()):
                self._set_cell(row, column, "")
