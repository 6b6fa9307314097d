"""Canvas for placing and dragging Bézier control points."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF
from PySide6.QtWidgets import QWidget, QSizePolicy

if TYPE_CHECKING:
    from spectralcurve.controller.pipeline import PipelineController
    from spectralcurve.model.state import PipelineResult


logger = logging.getLogger(__name__)


class CurveCanvas(QWidget):
    """
    Drawing surface of the spectrum editor.

    The horizontal axis is wavelength and the vertical axis intensity, both
    laid out according to the controller's calibration. Left click adds a
    control point (up to degree + 1) or grabs an existing one for dragging.
    """

    GRID_STEP_NM = 50.0
    GRID_COLOR = QColor("#d0d0d0")
    AXIS_COLOR = QColor("#606060")
    POINT_COLOR = QColor("blue")
    CURVE_COLOR = QColor("black")

    def __init__(self, controller: PipelineController, point_radius: float = 5.0, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.point_radius = point_radius
        self._show_grid = True

        self.setMinimumSize(400, 300)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(False)

        controller.result_changed.connect(self._on_result_changed)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_show_grid(self, visible: bool) -> None:
        self._show_grid = visible
        self.update()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event):
        self.controller.set_viewport(self.width(), self.height())
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            pos = event.position()
            self.controller.press(pos.x(), pos.y())
            self.update()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.controller.editor.is_dragging:
            pos = event.position()
            self.controller.move(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.controller.release()
        super().mouseReleaseEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), Qt.white)

        if self._show_grid:
            self._draw_grid(painter)

        self._draw_curve(painter, self.controller.result)
        self._draw_control_points(painter)
        painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _on_result_changed(self, result: PipelineResult) -> None:
        self.update()

    def _wavelength_to_x(self, wavelength: float) -> float:
        c = self.controller.calibration
        return c.offset_x + (wavelength - c.wavelength_min) / c.wavelength_span * self.width()

    def _draw_grid(self, painter: QPainter) -> None:
        """Wavelength grid lines and the intensity baseline."""
        c = self.controller.calibration
        w, h = self.width(), self.height()

        painter.setPen(QPen(self.GRID_COLOR, 1, Qt.DashLine))
        wavelength = c.wavelength_min
        while wavelength <= c.wavelength_max:
            x = self._wavelength_to_x(wavelength)
            painter.drawLine(QPointF(x, 0), QPointF(x, h))
            painter.drawText(QPointF(x + 2, h - 4), f"{wavelength:g}")
            wavelength += self.GRID_STEP_NM

        # full-scale intensity at y = offset_y, zero at offset_y + height
        painter.setPen(QPen(self.AXIS_COLOR, 1))
        painter.drawLine(QPointF(c.offset_x, 0), QPointF(c.offset_x, h))
        painter.drawLine(QPointF(0, c.offset_y), QPointF(w, c.offset_y))
        painter.drawText(QPointF(c.offset_x + 4, c.offset_y - 4), "nm →")

    def _draw_curve(self, painter: QPainter, result: PipelineResult) -> None:
        if result.is_empty:
            return
        polyline = QPolygonF([QPointF(float(x), float(y)) for x, y in result.polyline()])
        painter.setPen(QPen(self.CURVE_COLOR, 1))
        painter.drawPolyline(polyline)

    def _draw_control_points(self, painter: QPainter) -> None:
        r = self.point_radius
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self.POINT_COLOR))
        for x, y in self.controller.editor.points:
            painter.drawEllipse(QRectF(x - r, y - r, 2 * r, 2 * r))
