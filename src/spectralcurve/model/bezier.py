"""
Bézier Curve Evaluation
=======================
Evaluates a polynomial Bézier curve by repeated linear interpolation
(de Casteljau) and samples it into a polyline.
"""
from __future__ import annotations

from typing import Iterator, Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

PointLike = Sequence[float]


def _as_control_array(points: Sequence[PointLike] | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Copy control points into a private (N+1, 2) float array."""
    arr = np.array(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Control points must have shape (n, 2), got {arr.shape}.")
    if arr.shape[0] < 2:
        raise ValueError(f"At least 2 control points are required, got {arr.shape[0]}.")
    return arr


def evaluate_bezier(
    points: Sequence[PointLike] | npt.NDArray[np.float64],
    t: float,
) -> npt.NDArray[np.float64]:
    """
    Evaluate the Bézier curve defined by `points` at parameter t.

    Each of the N rounds replaces the k working points by the k-1 points
    (1 - t) * p[i] + t * p[i + 1]; the single point left is the result.
    The caller's sequence is never modified.

    Args:
        points: N+1 control points (N >= 1), first at t=0 and last at t=1.
        t: Curve parameter. Usually within [0, 1], not range-checked.

    Returns:
        Array of shape (2,) with the (x, y) curve point.

    Raises:
        ValueError: If fewer than 2 control points are given.
    """
    work = _as_control_array(points)
    for _ in range(work.shape[0] - 1):
        work = (1.0 - t) * work[:-1] + t * work[1:]
    return work[0]


class CurveSampler:
    """
    Lazy, restartable sampling of a Bézier curve at t = i / steps, i = 1..steps.

    The curve start (t = 0, the first control point) is not part of the
    sequence; it is available as `start` for drawing the first segment.
    Every iteration re-evaluates the curve from the control points.
    """

    def __init__(self, points: Sequence[PointLike] | npt.NDArray[np.float64], steps: int = 100):
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}.")
        self._points = _as_control_array(points)
        self.steps = steps

    @property
    def start(self) -> npt.NDArray[np.float64]:
        return self._points[0].copy()

    @property
    def degree(self) -> int:
        return self._points.shape[0] - 1

    def __len__(self) -> int:
        return self.steps

    def __iter__(self) -> Iterator[npt.NDArray[np.float64]]:
        for i in range(1, self.steps + 1):
            yield evaluate_bezier(self._points, i / self.steps)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Materialize the sampled curve as an (steps, 2) array."""
        return np.vstack(list(self))
