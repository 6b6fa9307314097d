"""
Spectrum Table
==============
Wavelength → colour-matching coefficient table (X̄, Ȳ, Z̄ weights).

The table is loaded once from a plain text resource, one record per line:

    <wavelength> <x_bar> <y_bar> <z_bar> [extra columns ...]

Fields may be separated by spaces, tabs or commas. Lines whose first field
is not a number (comments, headers) are skipped. A line with a valid
wavelength but a malformed coefficient is a broken resource and aborts the
load with `SpectrumLoadError`.
"""
from __future__ import annotations

import logging
import math
import os
import re
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[ \t,]+")

Coefficients = tuple[float, ...]
SpectrumSource = Union[str, "os.PathLike[str]", Iterable[str]]

# Integer-rounded lookups only line up with a 1 nm table
EXPECTED_STEP_NM = 1.0


class SpectrumLoadError(Exception):
    """Raised when the colour-matching resource cannot be loaded."""


def _parse_wavelength(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class SpectrumTable:
    """
    Immutable mapping from wavelength (nm) to a coefficient tuple.

    Lookups are exact: no interpolation between neighbouring wavelengths
    is done, so callers quantize the wavelength to the table step first.
    """

    def __init__(self, entries: Mapping[float, Iterable[float]]):
        data: dict[float, Coefficients] = {}
        for wavelength, coefficients in entries.items():
            coeffs = tuple(float(c) for c in coefficients)
            if len(coeffs) < 3:
                raise ValueError(
                    f"Wavelength {wavelength} needs at least 3 coefficients, got {len(coeffs)}."
                )
            data[float(wavelength)] = coeffs
        self._entries: Mapping[float, Coefficients] = MappingProxyType(data)
        self._wavelengths = np.array(sorted(data), dtype=np.float64)
        self._wavelengths.setflags(write=False)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, source: SpectrumSource) -> SpectrumTable:
        """
        Parse a spectrum resource.

        Args:
            source: Path to a text file, or an iterable of text lines.

        Returns:
            The loaded table.

        Raises:
            SpectrumLoadError: The file is missing/unreadable, or a line with a
                valid wavelength carries an invalid or incomplete coefficient list.
        """
        if isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            logger.info(f"Loading spectrum table from: {path}")
            try:
                with open(path, mode="r", encoding="utf-8-sig") as f:
                    table = cls._from_lines(f, origin=path)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read spectrum table '{path}': {e}")
                raise SpectrumLoadError(f"Failed to read spectrum table '{path}': {e}") from e
        else:
            table = cls._from_lines(source, origin="<lines>")

        table._check_granularity()
        return table

    @classmethod
    def _from_lines(cls, lines: Iterable[str], origin: str) -> SpectrumTable:
        entries: dict[float, Coefficients] = {}
        skipped = 0

        for line_no, line in enumerate(lines, start=1):
            parts = [p for p in _SEPARATORS.split(line.strip()) if p]
            if len(parts) < 2:
                skipped += 1
                continue

            wavelength = _parse_wavelength(parts[0])
            if wavelength is None:
                logger.debug(f"{origin}:{line_no}: skipping line without wavelength: {line.strip()!r}")
                skipped += 1
                continue

            try:
                coeffs = tuple(float(p) for p in parts[1:])
            except ValueError as e:
                msg = f"{origin}:{line_no}: invalid coefficient for wavelength {parts[0]}: {e}"
                logger.error(msg)
                raise SpectrumLoadError(msg) from e

            if len(coeffs) < 3:
                msg = f"{origin}:{line_no}: expected at least 3 coefficients, got {len(coeffs)}"
                logger.error(msg)
                raise SpectrumLoadError(msg)

            if wavelength in entries:
                logger.debug(f"{origin}:{line_no}: duplicate wavelength {wavelength:g}, overriding")
            entries[wavelength] = coeffs

        logger.info(f"Loaded {len(entries)} spectrum entries ({skipped} lines skipped).")
        if not entries:
            logger.warning(f"Spectrum table '{origin}' contains no entries.")
        return cls(entries)

    def _check_granularity(self) -> None:
        step = self.step
        if step is not None and not math.isclose(step, EXPECTED_STEP_NM):
            logger.warning(
                f"Spectrum table step is {step:g} nm; wavelengths are rounded to whole nm, "
                f"so lookups between table rows will miss."
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, wavelength: float) -> Optional[Coefficients]:
        """Coefficients for an exact wavelength match, or None."""
        return self._entries.get(wavelength)

    def __contains__(self, wavelength: object) -> bool:
        return wavelength in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[float]:
        return iter(self._wavelengths.tolist())

    @property
    def entries(self) -> Mapping[float, Coefficients]:
        return self._entries

    @property
    def wavelengths(self) -> npt.NDArray[np.float64]:
        """Sorted, read-only array of the table wavelengths."""
        return self._wavelengths

    @property
    def step(self) -> Optional[float]:
        """Smallest spacing between consecutive wavelengths."""
        if self._wavelengths.size < 2:
            return None
        return float(np.min(np.diff(self._wavelengths)))

    def spectral_locus(self) -> npt.NDArray[np.float64]:
        """
        Chromaticity (x, y) of each monochromatic entry, in wavelength order.

        Entries whose first three coefficients sum to zero are left out.
        """
        if not self._entries:
            return np.empty((0, 2), dtype=np.float64)

        xyz = np.array([self._entries[w][:3] for w in self._wavelengths], dtype=np.float64)
        sums = xyz.sum(axis=1)
        valid = sums != 0.0
        return xyz[valid, :2] / sums[valid, np.newaxis]
