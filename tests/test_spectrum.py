import logging

import numpy as np
import pytest

from spectralcurve.model.spectrum import SpectrumLoadError, SpectrumTable


def test_shipped_table_covers_visible_range(cie_table):
    assert len(cie_table) == 401
    assert cie_table.wavelengths[0] == 380.0
    assert cie_table.wavelengths[-1] == 780.0
    assert cie_table.step == 1.0
    assert cie_table.lookup(555.0) == pytest.approx((0.5121, 1.0, 0.0057))


def test_duplicate_wavelength_keeps_last_entry():
    table = SpectrumTable.load([
        "500 1 2 3",
        "510 4 5 6",
        "500 7 8 9",
    ])
    assert len(table) == 2
    assert table.lookup(500.0) == (7.0, 8.0, 9.0)


def test_unparsable_wavelength_line_is_skipped():
    table = SpectrumTable.load([
        "abc 1 2 3",
        "# wavelength x y z",
        "500 0.1 0.2 0.3",
    ])
    assert len(table) == 1
    assert 500.0 in table


def test_unparsable_coefficients_fail_the_load():
    with pytest.raises(SpectrumLoadError):
        SpectrumTable.load([
            "490 0.1 0.2 0.3",
            "500 x y z",
        ])


def test_too_few_coefficients_fail_the_load():
    with pytest.raises(SpectrumLoadError):
        SpectrumTable.load(["500 0.1 0.2"])


def test_short_and_blank_lines_are_skipped():
    table = SpectrumTable.load([
        "",
        "   ",
        "500",
        "510 0.1 0.2 0.3",
    ])
    assert list(table) == [510.0]


def test_mixed_separators_and_extra_columns():
    table = SpectrumTable.load([
        "400,0.01,0.02,0.03",
        "401\t0.04  0.05,\t0.06 99",
        "4.02e2 1e-1 2E-1 .3",
    ])
    assert table.lookup(400.0) == (0.01, 0.02, 0.03)
    assert table.lookup(401.0) == (0.04, 0.05, 0.06, 99.0)
    assert table.lookup(402.0) == pytest.approx((0.1, 0.2, 0.3))


def test_lookup_is_exact():
    table = SpectrumTable.load(["500 1 2 3", "501 4 5 6"])
    assert table.lookup(500.0) == (1.0, 2.0, 3.0)
    assert table.lookup(500.4) is None
    assert table.lookup(600.0) is None


def test_table_is_read_only(cie_table):
    with pytest.raises(TypeError):
        cie_table.entries[555.0] = (0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        cie_table.wavelengths[0] = 1.0


def test_missing_file_fails_the_load(tmp_path):
    with pytest.raises(SpectrumLoadError):
        SpectrumTable.load(tmp_path / "missing.txt")


def test_undecodable_file_fails_the_load(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"380 0.1 0.2 0.3\n\xff\xfe\x00 garbage\n")
    with pytest.raises(SpectrumLoadError) as excinfo:
        SpectrumTable.load(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_load_from_file(tmp_path):
    path = tmp_path / "wl.txt"
    path.write_text("380 0.0014 0.0 0.0065\n381 0.0015 0.0 0.0070\n", encoding="utf-8")
    table = SpectrumTable.load(path)
    assert len(table) == 2
    assert table.lookup(381.0) == (0.0015, 0.0, 0.0070)


def test_coarse_table_logs_granularity_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="spectralcurve.model.spectrum"):
        table = SpectrumTable.load(["380 1 0 0", "385 0 1 0", "390 0 0 1"])
    assert table.step == 5.0
    assert any("step is 5 nm" in r.getMessage() for r in caplog.records)


def test_spectral_locus_skips_zero_rows():
    table = SpectrumTable.load([
        "500 1 1 2",
        "600 3 1 0",
        "700 0 0 0",
    ])
    locus = table.spectral_locus()
    np.testing.assert_allclose(locus, [[0.25, 0.25], [0.75, 0.25]])


def test_empty_table(caplog):
    with caplog.at_level(logging.WARNING, logger="spectralcurve.model.spectrum"):
        table = SpectrumTable.load(["just text"])
    assert len(table) == 0
    assert table.step is None
    assert table.spectral_locus().shape == (0, 2)
