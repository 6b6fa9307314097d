"""CIE xy chromaticity diagram with the marker of the edited spectrum."""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QWidget, QVBoxLayout

if TYPE_CHECKING:
    from spectralcurve.model.chromaticity import ChromaticityCoordinate
    from spectralcurve.model.spectrum import SpectrumTable


logger = logging.getLogger(__name__)


class ChromaticityDiagram(QWidget):
    """
    Spectral locus computed from the loaded table, plus a single marker.

    The marker is placed at the coordinate clamped to [0, 1]; the label
    shows the unclamped value with five decimals.
    """

    def __init__(self, table: SpectrumTable, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._coordinate: Optional[ChromaticityCoordinate] = None
        self._marker_visible = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setLabel('bottom', 'x', color='black')
        self.plot_widget.setLabel('left', 'y', color='black')
        self.plot_widget.setTitle('Chromaticity', color='black', size='12pt')
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.setXRange(0, 0.8)
        self.plot_widget.setYRange(0, 0.9)
        layout.addWidget(self.plot_widget)

        self._draw_locus(table)

        self._marker = pg.ScatterPlotItem(size=10, brush=pg.mkBrush('k'), pen=None)
        self._label = pg.TextItem('', color='k', anchor=(0.0, 1.0))
        self.plot_widget.addItem(self._marker)
        self.plot_widget.addItem(self._label)
        self._refresh_marker()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_coordinate(self, coordinate: Optional[ChromaticityCoordinate]) -> None:
        self._coordinate = coordinate
        self._refresh_marker()

    def set_marker_visible(self, visible: bool) -> None:
        self._marker_visible = visible
        self._refresh_marker()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_locus(self, table: SpectrumTable) -> None:
        locus = table.spectral_locus()
        if locus.shape[0] < 2:
            logger.warning("Spectrum table too small to draw the spectral locus.")
            return
        # close the horseshoe with the line of purples
        closed = np.vstack((locus, locus[:1]))
        self.plot_widget.plot(closed[:, 0], closed[:, 1], pen=pg.mkPen(color='#1f77b4', width=2))

    def _refresh_marker(self) -> None:
        if not self._marker_visible or self._coordinate is None:
            self._marker.setData([], [])
            self._label.setText('')
            return

        shown = self._coordinate.clamped()
        self._marker.setData([shown.x], [shown.y])
        self._label.setText(self._coordinate.format(5))
        self._label.setPos(shown.x + 0.01, shown.y + 0.01)
