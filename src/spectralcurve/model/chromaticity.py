"""
Chromaticity Reduction
======================
Reads a sampled curve as a spectrum: horizontal position encodes wavelength,
vertical position encodes intensity. The spectrum is integrated against the
colour-matching table and projected to a chromaticity coordinate.
"""
from __future__ import annotations

import logging
from typing import Iterable, NamedTuple, Sequence, TYPE_CHECKING

import numpy as np

from spectralcurve.config import CalibrationConfig, DEFAULT_CALIBRATION
from spectralcurve.model.spectrum import SpectrumTable

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class ChromaticityCoordinate(NamedTuple):
    x: float
    y: float

    def clamped(self) -> ChromaticityCoordinate:
        """Coordinate limited to [0, 1] on both axes, for display."""
        return ChromaticityCoordinate(min(max(self.x, 0.0), 1.0), min(max(self.y, 0.0), 1.0))

    def format(self, decimals: int = 5) -> str:
        return f"({self.x:.{decimals}f}, {self.y:.{decimals}f})"


ORIGIN = ChromaticityCoordinate(0.0, 0.0)


def _as_sample_array(samples: Iterable[Sequence[float]] | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    if isinstance(samples, np.ndarray):
        arr = np.asarray(samples, dtype=np.float64)
    else:
        arr = np.array(list(samples), dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Samples must have shape (n, 2), got {arr.shape}.")
    return arr


def encode_samples(
    samples: Iterable[Sequence[float]] | npt.NDArray[np.float64],
    width: float,
    height: float,
    calibration: CalibrationConfig = DEFAULT_CALIBRATION,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Map canvas samples to (wavelength, intensity) pairs.

    Wavelengths are rounded to the nearest whole nanometre (ties to even).
    Intensities below zero are clamped to zero.

    Args:
        samples: (n, 2) canvas points, origin top-left.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        calibration: Offsets, scale and wavelength domain.

    Returns:
        Tuple of (wavelengths, intensities), each of shape (n,).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport size must be positive, got {width} x {height}.")

    pts = _as_sample_array(samples)
    c = calibration

    wavelengths = np.round(c.wavelength_min + ((pts[:, 0] - c.offset_x) / width) * c.wavelength_span)
    intensities = c.scale_factor * (1.0 - (pts[:, 1] - c.offset_y) / height)
    intensities = np.maximum(intensities, 0.0)
    return wavelengths, intensities


def tristimulus(
    samples: Iterable[Sequence[float]] | npt.NDArray[np.float64],
    table: SpectrumTable,
    width: float,
    height: float,
    calibration: CalibrationConfig = DEFAULT_CALIBRATION,
) -> npt.NDArray[np.float64]:
    """
    Accumulate the X, Y, Z tristimulus sums of a sampled curve.

    Samples whose wavelength is not in the table contribute nothing.
    """
    wavelengths, intensities = encode_samples(samples, width, height, calibration)

    xyz = np.zeros(3, dtype=np.float64)
    misses = 0
    for wavelength, intensity in zip(wavelengths.tolist(), intensities.tolist()):
        coeffs = table.lookup(wavelength)
        if coeffs is None:
            misses += 1
            continue
        xyz += np.asarray(coeffs[:3], dtype=np.float64) * intensity

    if misses:
        logger.debug(f"{misses}/{wavelengths.size} samples outside the spectrum table.")
    return xyz


def compute_chromaticity(
    samples: Iterable[Sequence[float]] | npt.NDArray[np.float64],
    table: SpectrumTable,
    width: float,
    height: float,
    calibration: CalibrationConfig = DEFAULT_CALIBRATION,
) -> ChromaticityCoordinate:
    """
    Reduce a sampled curve to its chromaticity coordinate (x, y).

    x = X / (X + Y + Z), y = Y / (X + Y + Z). When nothing contributes
    (zero sum) the coordinate (0, 0) is returned. The result is not clamped.

    Args:
        samples: (n, 2) canvas points of the sampled curve.
        table: Colour-matching coefficients.
        width: Canvas width used for the wavelength encoding.
        height: Canvas height used for the intensity encoding.
        calibration: Offsets, scale and wavelength domain.

    Returns:
        The chromaticity coordinate.
    """
    big_x, big_y, big_z = tristimulus(samples, table, width, height, calibration)
    total = big_x + big_y + big_z
    if total == 0.0:
        return ORIGIN
    return ChromaticityCoordinate(float(big_x / total), float(big_y / total))
