from __future__ import annotations

import pytest

from spectralcurve.config import DEFAULT_SPECTRUM_PATH
from spectralcurve.model.spectrum import SpectrumTable


@pytest.fixture(scope="session")
def cie_table() -> SpectrumTable:
    """The shipped CIE 1931 table (380-780 nm, 1 nm)."""
    return SpectrumTable.load(DEFAULT_SPECTRUM_PATH)


@pytest.fixture
def endpoint_table() -> SpectrumTable:
    """Only the two ends of the domain: 380 nm → X, 780 nm → Y."""
    return SpectrumTable.load([
        "380 1 0 0",
        "780 0 1 0",
    ])
