import sys

import pyqtgraph as pg
from PySide6.QtWidgets import QApplication

from gui import MainWindow


# Smooth curves and crosshair; must be set before any PyQtGraph widgets are created.
pg.setConfigOptions(antialias=True)


def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName("TrackPlot")
    app.setOrganizationName("TrackPlot")
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
