__all__ = ["MainWindow", "PlotManager", "TrackPlot"]

from .main_window import MainWindow
from .plot_manager import PlotManager
from .track_plot import TrackPlot
