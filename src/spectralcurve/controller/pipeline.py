"""
Pipeline Controller
===================
Bridges the editor widgets and the numeric model.

Every edit of the control polygon re-runs the full pipeline on a snapshot
and publishes the result through a Qt signal. Results are tagged with the
editor version they were computed from; a result for a superseded version
is dropped, never shown.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from spectralcurve.config import CalibrationConfig, EditorConfig, DEFAULT_CALIBRATION, DEFAULT_EDITOR
from spectralcurve.model.spectrum import SpectrumTable
from spectralcurve.model.state import CurveEditor, PipelineResult, run_pipeline

logger = logging.getLogger(__name__)


class PipelineController(QObject):
    """Owns the editor state and publishes recomputed curves."""
    result_changed = Signal(object)  # PipelineResult
    points_changed = Signal(object)  # ControlPolygon

    def __init__(
        self,
        table: SpectrumTable,
        calibration: CalibrationConfig = DEFAULT_CALIBRATION,
        editor_config: EditorConfig = DEFAULT_EDITOR,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.table = table
        self.calibration = calibration
        self.editor = CurveEditor.from_config(editor_config)
        self._viewport: tuple[int, int] = (1, 1)
        self._result: PipelineResult = run_pipeline((), table, 1, 1, calibration)

    @property
    def result(self) -> PipelineResult:
        return self._result

    @property
    def viewport(self) -> tuple[int, int]:
        return self._viewport

    # ---- editing ----

    def set_viewport(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        if (width, height) != self._viewport:
            self._viewport = (width, height)
            self.recompute()

    def set_degree_text(self, text: str) -> None:
        if self.editor.set_degree_text(text):
            self.recompute()

    def press(self, x: float, y: float) -> None:
        version = self.editor.version
        self.editor.press(x, y)
        if self.editor.version != version:
            self._points_edited()

    def move(self, x: float, y: float) -> None:
        if self.editor.move(x, y):
            self._points_edited()

    def release(self) -> None:
        self.editor.release()

    def reset(self) -> None:
        self.editor.reset()
        self._points_edited()

    # ---- pipeline ----

    def _points_edited(self) -> None:
        self.points_changed.emit(self.editor.snapshot())
        self.recompute()

    def recompute(self) -> None:
        version = self.editor.version
        width, height = self._viewport
        result = run_pipeline(
            self.editor.snapshot(), self.table, width, height, self.calibration, version=version
        )
        self.publish(result)

    def publish(self, result: PipelineResult) -> bool:
        """
        Show `result` unless the polygon was edited after it was computed.

        `recompute` runs on the GUI thread and always passes the current
        version. A result computed elsewhere (e.g. in a worker thread started
        from a `snapshot()`) can arrive after further edits; it is dropped.

        Returns:
            True if the result was accepted.
        """
        if result.version != self.editor.version:
            logger.debug(f"Dropping stale result v{result.version} (current v{self.editor.version}).")
            return False
        self._result = result
        self.result_changed.emit(result)
        return True
