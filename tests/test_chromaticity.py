import numpy as np
import pytest

from spectralcurve.config import CalibrationConfig
from spectralcurve.model.bezier import CurveSampler
from spectralcurve.model.chromaticity import (
    ChromaticityCoordinate, compute_chromaticity, encode_samples, tristimulus
)
from spectralcurve.model.spectrum import SpectrumTable

WIDTH, HEIGHT = 400, 300


def test_encoding_maps_offsets_to_domain_start():
    wavelengths, intensities = encode_samples([(50.0, 50.0), (450.0, 350.0)], WIDTH, HEIGHT)
    np.testing.assert_array_equal(wavelengths, [380.0, 780.0])
    np.testing.assert_allclose(intensities, [1.8, 0.0])


def test_wavelength_rounds_half_to_even():
    # one pixel is one nanometre on a 400 px canvas
    wavelengths, _ = encode_samples([(50.5, 50.0), (51.5, 50.0), (52.25, 50.0)], WIDTH, HEIGHT)
    np.testing.assert_array_equal(wavelengths, [380.0, 382.0, 382.0])


def test_negative_intensity_is_clamped():
    _, intensities = encode_samples([(100.0, 500.0)], WIDTH, HEIGHT)
    assert intensities[0] == 0.0


@pytest.mark.parametrize("width, height", [(0, 300), (400, 0), (-1, 10)])
def test_invalid_viewport_is_rejected(width, height, endpoint_table):
    with pytest.raises(ValueError):
        compute_chromaticity([(60.0, 60.0)], endpoint_table, width, height)


def test_no_samples_gives_origin(endpoint_table):
    assert compute_chromaticity([], endpoint_table, WIDTH, HEIGHT) == (0.0, 0.0)


def test_out_of_range_curve_gives_origin(cie_table):
    # entirely left of the 380 nm mark
    samples = CurveSampler([(-600.0, 100.0), (-100.0, 80.0)]).to_array()
    assert compute_chromaticity(samples, cie_table, WIDTH, HEIGHT) == ChromaticityCoordinate(0.0, 0.0)


def test_zero_intensity_everywhere_gives_origin(cie_table):
    # below the intensity baseline: every sample clamps to zero
    samples = CurveSampler([(100.0, 400.0), (400.0, 380.0)]).to_array()
    assert compute_chromaticity(samples, cie_table, WIDTH, HEIGHT) == (0.0, 0.0)


def test_lookup_misses_contribute_nothing(endpoint_table):
    xyz = tristimulus([(50.0, 50.0), (200.0, 50.0), (450.0, 200.0)], endpoint_table, WIDTH, HEIGHT)
    np.testing.assert_allclose(xyz, [1.8, 0.9, 0.0])


def test_extra_coefficients_are_ignored():
    table = SpectrumTable.load(["380 1 2 3 100 200"])
    xyz = tristimulus([(50.0, 50.0)], table, WIDTH, HEIGHT)
    np.testing.assert_allclose(xyz, [1.8, 3.6, 5.4])


def test_scaling_coefficients_keeps_coordinate(cie_table):
    scaled = SpectrumTable({w: [3.7 * c for c in cie_table.lookup(w)] for w in cie_table})
    samples = CurveSampler([(60.0, 280.0), (150.0, 20.0), (320.0, 300.0), (430.0, 90.0)]).to_array()

    base = compute_chromaticity(samples, cie_table, WIDTH, HEIGHT)
    other = compute_chromaticity(samples, scaled, WIDTH, HEIGHT)

    assert base != (0.0, 0.0)
    assert other.x == pytest.approx(base.x, rel=1e-12)
    assert other.y == pytest.approx(base.y, rel=1e-12)


def test_scale_factor_cancels_out(cie_table):
    samples = CurveSampler([(80.0, 100.0), (250.0, 40.0), (400.0, 250.0)]).to_array()
    base = compute_chromaticity(samples, cie_table, WIDTH, HEIGHT, CalibrationConfig(scale_factor=1.8))
    other = compute_chromaticity(samples, cie_table, WIDTH, HEIGHT, CalibrationConfig(scale_factor=42.0))
    assert other.x == pytest.approx(base.x, rel=1e-12)
    assert other.y == pytest.approx(base.y, rel=1e-12)


def test_straight_line_only_reaches_domain_end(endpoint_table):
    # t = 0 is not sampled, so 380 nm is never hit
    samples = CurveSampler([(50.0, 50.0), (50.0 + WIDTH, 50.0)]).to_array()
    assert compute_chromaticity(samples, endpoint_table, WIDTH, HEIGHT) == pytest.approx((0.0, 1.0))


def test_sloped_line_regression(endpoint_table):
    samples = CurveSampler([(46.0, 50.0), (450.0, 200.0)]).to_array()
    result = compute_chromaticity(samples, endpoint_table, WIDTH, HEIGHT)

    assert 0.0 < result.x < 1.0
    assert 0.0 < result.y < 1.0
    assert result.x == pytest.approx(0.665551839465, abs=1e-9)
    assert result.y == pytest.approx(0.334448160535, abs=1e-9)


def test_monochromatic_sample_lands_on_locus(cie_table):
    # single sample at 555 nm
    result = compute_chromaticity([(225.0, 120.0)], cie_table, WIDTH, HEIGHT)
    x_bar, y_bar, z_bar = cie_table.lookup(555.0)
    total = x_bar + y_bar + z_bar
    assert result.x == pytest.approx(x_bar / total)
    assert result.y == pytest.approx(y_bar / total)


def test_custom_calibration_domain():
    table = SpectrumTable.load(["500 0 0 1", "600 1 0 0"])
    calibration = CalibrationConfig(offset_x=0.0, offset_y=0.0, wavelength_min=500.0, wavelength_max=600.0)
    xyz = tristimulus([(0.0, 0.0), (100.0, 50.0)], table, 100, 100, calibration)
    np.testing.assert_allclose(xyz, [0.9, 0.0, 1.8])


def test_coordinate_display_helpers():
    coordinate = ChromaticityCoordinate(1.25, -0.5)
    assert coordinate.clamped() == (1.0, 0.0)
    assert coordinate.format() == "(1.25000, -0.50000)"


@pytest.mark.parametrize("kwargs", [
    {"step_count": 0},
    {"wavelength_min": 780.0, "wavelength_max": 380.0},
    {"scale_factor": 0.0},
])
def test_invalid_calibration_is_rejected(kwargs):
    with pytest.raises(ValueError):
        CalibrationConfig(**kwargs)
