"""
Editor State (Data Model)
=========================
Holds the control polygon being edited and runs the curve → chromaticity
pipeline on immutable snapshots of it.

Classes:
    CurveEditor: Control points plus the drag/selection session state.
    PipelineResult: Output of one recomputation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from spectralcurve.config import CalibrationConfig, EditorConfig, DEFAULT_CALIBRATION, DEFAULT_EDITOR
from spectralcurve.model.bezier import CurveSampler
from spectralcurve.model.chromaticity import ChromaticityCoordinate, compute_chromaticity
from spectralcurve.model.spectrum import SpectrumTable

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Point = tuple[float, float]
ControlPolygon = tuple[Point, ...]


@dataclass
class CurveEditor:
    """
    Mutable control polygon with mouse-driven editing semantics.

    New points are appended until the polygon holds `degree + 1` points.
    Pressing near an existing point (within `pick_radius` on both axes)
    grabs it instead; moving replaces it in place until release.
    `version` increases on every change of the polygon.
    """
    degree: int = DEFAULT_EDITOR.degree
    pick_radius: float = DEFAULT_EDITOR.pick_radius

    points: list[Point] = field(default_factory=list)
    version: int = 0

    _drag_index: int = field(default=-1, init=False, repr=False)

    @classmethod
    def from_config(cls, config: EditorConfig) -> CurveEditor:
        return cls(degree=config.degree, pick_radius=config.pick_radius)

    @property
    def max_points(self) -> int:
        return self.degree + 1

    @property
    def is_dragging(self) -> bool:
        return self._drag_index >= 0

    @property
    def drag_index(self) -> int:
        return self._drag_index

    def set_degree(self, degree: int) -> bool:
        """Change the curve degree. Existing points are kept."""
        if degree < 1:
            return False
        if degree != self.degree:
            logger.debug(f"Curve degree set to {degree}.")
            self.degree = degree
        return True

    def set_degree_text(self, text: str) -> bool:
        """Change the degree from user input; anything but an integer >= 1 is ignored."""
        try:
            degree = int(text.strip())
        except ValueError:
            return False
        return self.set_degree(degree)

    def hit_test(self, x: float, y: float) -> int:
        """Index of the first point within the pick radius, or -1."""
        for i, (px, py) in enumerate(self.points):
            if abs(x - px) < self.pick_radius and abs(y - py) < self.pick_radius:
                return i
        return -1

    def press(self, x: float, y: float) -> bool:
        """
        Handle a mouse press: grab an existing point or append a new one.

        Returns:
            True if a point was grabbed or added.
        """
        index = self.hit_test(x, y)
        if index >= 0:
            self._drag_index = index
            return True

        if len(self.points) < self.max_points:
            self.points.append((float(x), float(y)))
            self.version += 1
            return True
        return False

    def move(self, x: float, y: float) -> bool:
        if not self.is_dragging:
            return False
        self.points[self._drag_index] = (float(x), float(y))
        self.version += 1
        return True

    def release(self) -> None:
        self._drag_index = -1

    def reset(self) -> None:
        """Remove all control points."""
        self.points = []
        self._drag_index = -1
        self.version += 1
        logger.info("Control points cleared.")

    def snapshot(self) -> ControlPolygon:
        return tuple(self.points)


@dataclass(frozen=True)
class PipelineResult:
    """One full recomputation from a control polygon snapshot."""
    version: int
    start: Optional[npt.NDArray[np.float64]]
    curve: npt.NDArray[np.float64]
    chromaticity: Optional[ChromaticityCoordinate] = None

    @property
    def is_empty(self) -> bool:
        return self.curve.shape[0] == 0

    def polyline(self) -> npt.NDArray[np.float64]:
        """Curve samples prefixed with the curve start, for drawing."""
        if self.start is None:
            return self.curve
        return np.vstack((self.start, self.curve))


def run_pipeline(
    polygon: ControlPolygon,
    table: SpectrumTable,
    width: float,
    height: float,
    calibration: CalibrationConfig = DEFAULT_CALIBRATION,
    version: int = 0,
) -> PipelineResult:
    """
    Sample the curve of `polygon` and reduce it to a chromaticity coordinate.

    With fewer than 2 control points there is no curve: the result holds an
    empty (0, 2) curve and no chromaticity.
    """
    if len(polygon) < 2:
        return PipelineResult(version=version, start=None, curve=np.empty((0, 2), dtype=np.float64))

    sampler = CurveSampler(polygon, steps=calibration.step_count)
    curve = sampler.to_array()
    chromaticity = compute_chromaticity(curve, table, width, height, calibration)
    logger.debug(f"Pipeline v{version}: degree {sampler.degree}, chromaticity {chromaticity.format()}")
    return PipelineResult(version=version, start=sampler.start, curve=curve, chromaticity=chromaticity)
