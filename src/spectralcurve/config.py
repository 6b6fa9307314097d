"""
Configuration & Path Management
===============================
Central registry for resource paths and the calibration constants that map
the editor's pixel space onto wavelength and intensity.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_SPECTRUM_PATH (str): Absolute path to the colour-matching table.
    CalibrationConfig: Pixel → (wavelength, intensity) calibration.
    EditorConfig: Control point editing behaviour.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/spectralcurve/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_SPECTRUM_PATH: str = os.path.join(ASSETS_PATH, "WL.txt")

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")


@dataclass(frozen=True)
class CalibrationConfig:
    """
    Calibration of the editor canvas against the physical domain.

    A sample at pixel (px, py) on a W x H canvas is encoded as

        wavelength = round(wavelength_min + (px - offset_x) / W * (wavelength_max - wavelength_min))
        intensity  = max(0, scale_factor * (1 - (py - offset_y) / H))

    Attributes:
        offset_x: Horizontal pixel offset of the wavelength axis origin.
        offset_y: Vertical pixel offset of the intensity axis origin.
        scale_factor: Intensity scale. Cancels out in the normalized result.
        wavelength_min: Lower bound of the wavelength domain in nm.
        wavelength_max: Upper bound of the wavelength domain in nm.
        step_count: Number of samples taken along the curve.
    """
    offset_x: float = 50.0
    offset_y: float = 50.0
    scale_factor: float = 1.8
    wavelength_min: float = 380.0
    wavelength_max: float = 780.0
    step_count: int = 100

    def __post_init__(self) -> None:
        if self.step_count < 1:
            raise ValueError(f"step_count must be at least 1, got {self.step_count}.")
        if self.wavelength_max <= self.wavelength_min:
            raise ValueError(
                f"wavelength_max ({self.wavelength_max}) must be greater than "
                f"wavelength_min ({self.wavelength_min})."
            )
        if self.scale_factor <= 0.0:
            raise ValueError(f"scale_factor must be positive, got {self.scale_factor}.")

    @property
    def wavelength_span(self) -> float:
        return self.wavelength_max - self.wavelength_min


@dataclass(frozen=True)
class EditorConfig:
    degree: int = 3
    pick_radius: float = 5.0  # px, per axis
    point_radius: float = 5.0  # px, drawn dot radius

    def __post_init__(self) -> None:
        if self.degree < 1:
            raise ValueError(f"degree must be at least 1, got {self.degree}.")


DEFAULT_CALIBRATION = CalibrationConfig()
DEFAULT_EDITOR = EditorConfig()
