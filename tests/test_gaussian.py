import pytest
import numpy as np
from scipy.stats import norm
from normalarb.core.errors import DomainError
from normalarb.core.fixedpoint import WAD, to_wad
from normalarb.core.gaussian import cdf_wad, pdf_wad, ppf_wad

@pytest.mark.parametrize("x", ["-5", "-2.5", "-1", "-0.05", "0", "0.3", "1.96", "4"])
def test_cdf_matches_scipy(x):
    """Test Φ against scipy."""
    assert np.isclose(cdf_wad(to_wad(x)) / WAD, norm.cdf(float(x)), rtol=1e-12, atol=1e-15)

def test_cdf_known_values():
    """Test Φ at points with known values."""
    assert cdf_wad(0) == WAD // 2
    assert cdf_wad(to_wad(20)) == WAD
    assert cdf_wad(to_wad(-20)) == 0

def test_cdf_symmetry():
    """Test Φ(x) + Φ(-x) = 1 exactly."""
    for x in ("0.1", "0.8", "2.2"):
        total = cdf_wad(to_wad(x)) + cdf_wad(-to_wad(x))
        assert total == WAD

def test_pdf():
    """Test the density at its peak."""
    assert np.isclose(pdf_wad(0) / WAD, norm.pdf(0.0), rtol=1e-12)

@pytest.mark.parametrize("p", ["0.000001", "0.01", "0.3", "0.5", "0.75", "0.99", "0.999999"])
def test_ppf_matches_scipy(p):
    """Test Φ⁻¹ against scipy across all three approximation regions."""
    assert np.isclose(ppf_wad(to_wad(p)) / WAD, norm.ppf(float(p)), rtol=1e-10, atol=1e-12)

def test_ppf_inverts_cdf():
    """Test that Φ(Φ⁻¹(p)) lands back on p to double precision."""
    for p in ("0.02", "0.48", "0.97"):
        p_wad = to_wad(p)
        assert abs(cdf_wad(ppf_wad(p_wad)) - p_wad) <= 10 ** 4

def test_ppf_extreme_inputs():
    """Test the smallest and largest representable probabilities."""
    assert ppf_wad(1) < -8 * WAD
    assert ppf_wad(WAD - 1) > 8 * WAD

@pytest.mark.parametrize("p", [0, -1, WAD, WAD + 1])
def test_ppf_domain(p):
    """Test that Φ⁻¹ outside (0, 1) fails."""
    with pytest.raises(DomainError):
        ppf_wad(p)

def test_upper_tail_precision():
    """Test that probabilities near one keep the precision of their complement."""
    assert np.isclose((WAD - cdf_wad(to_wad(6))) / WAD, norm.sf(6.0), rtol=1e-12)
    assert np.isclose(ppf_wad(WAD - 1_000) / WAD, norm.isf(1e-15), rtol=1e-12)

def test_cdf_saturates():
    """Test that Φ is exactly 0 or 1 beyond ten standard deviations."""
    assert cdf_wad(10 * WAD) == WAD
    assert cdf_wad(-10 * WAD) == 0
    assert 0 < WAD - cdf_wad(to_wad(8))
