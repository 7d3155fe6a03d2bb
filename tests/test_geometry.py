"""
Tests for p-line geometry.
"""

import pytest
import numpy as np

from snformal.core.constants import C_INV
from snformal.integral.geometry import calculate_z, populate_z, calculate_p_values


def _buffers(model):
    z = np.full(2 * model.no_of_shells, np.nan)
    shell_id = np.full(2 * model.no_of_shells, -1, dtype=np.int64)
    return z, shell_id


def test_calculate_z_through_center():
    """Half chord through the centre equals the radius in units of c*t."""
    inv_t = 1.0 / 1.0e6
    assert calculate_z(1.0e14, 0.0, inv_t) == pytest.approx(1.0e14 * C_INV * inv_t)


def test_calculate_z_pythagoras():
    """Half chord follows sqrt(r^2 - p^2)."""
    inv_t = 1.0 / 1.0e6
    assert calculate_z(5.0, 3.0, inv_t) == pytest.approx(4.0 * C_INV * inv_t)


def test_calculate_z_no_intersection():
    """Shells at or inside p are not intersected."""
    assert calculate_z(1.0, 2.0, 1.0) == 0
    assert calculate_z(2.0, 2.0, 1.0) == 0


@pytest.mark.parametrize("fraction", [0.0, 0.3, 1.0])
def test_populate_z_photosphere(sample_model, fraction):
    """Rays hitting the photosphere cross every shell once."""
    z, shell_id = _buffers(sample_model)
    p = fraction * sample_model.r_photosphere

    size_z = populate_z(sample_model, p, z, shell_id)

    assert size_z == sample_model.no_of_shells
    assert np.all(z[:size_z] > 0)
    assert np.all(z[:size_z] <= 1)
    assert np.array_equal(shell_id[:size_z], np.arange(sample_model.no_of_shells))
    # Larger shells are further from the point of closest approach
    assert np.all(np.diff(z[:size_z]) < 0)


def test_populate_z_outside_photosphere(sample_model):
    """Rays missing the photosphere cross each intersected shell twice."""
    z, shell_id = _buffers(sample_model)
    # Between the outer radius of shell 0 and shell 1
    p = 0.5 * (sample_model.r_outer[0] + sample_model.r_outer[1])

    size_z = populate_z(sample_model, p, z, shell_id)

    n_intersected = np.sum(sample_model.r_outer > p)
    assert n_intersected == 2
    assert size_z == 2 * n_intersected
    assert size_z % 2 == 0

    z_valid = z[:size_z]
    # Symmetric about the point of closest approach
    assert np.allclose(z_valid + z_valid[::-1], 2.0)
    assert np.array_equal(shell_id[:size_z], shell_id[:size_z][::-1])
    assert set(shell_id[:size_z]) == {1, 2}
    # No entries written beyond the valid count
    assert np.all(np.isnan(z[size_z:]))


def test_populate_z_outside_photosphere_ordering(sample_model):
    """Crossings run from the outermost far-side to the outermost near-side."""
    z, shell_id = _buffers(sample_model)
    p = 1.01 * sample_model.r_photosphere

    size_z = populate_z(sample_model, p, z, shell_id)

    assert size_z == 2 * sample_model.no_of_shells
    assert np.all(np.diff(z[:size_z]) < 0)
    assert shell_id[0] == sample_model.no_of_shells - 1
    assert shell_id[size_z - 1] == sample_model.no_of_shells - 1


def test_populate_z_tangent_to_envelope(sample_model):
    """A ray grazing the outer boundary has no crossings."""
    z, shell_id = _buffers(sample_model)

    size_z = populate_z(sample_model, sample_model.r_max, z, shell_id)

    assert size_z == 0


def test_calculate_p_values(sample_model):
    """Impact parameters are equally spaced from 0 to the outer radius."""
    pp = calculate_p_values(sample_model, 11)

    assert len(pp) == 11
    assert pp[0] == 0
    assert pp[-1] == pytest.approx(sample_model.r_max)
    assert np.allclose(np.diff(pp), sample_model.r_max / 10)


def test_calculate_p_values_two_points(sample_model):
    """The smallest grid holds the centre and the outer radius."""
    pp = calculate_p_values(sample_model, 2)
    assert np.allclose(pp, [0.0, sample_model.r_max])


def test_calculate_p_values_too_few(sample_model):
    """Fewer than two rays cannot be integrated."""
    with pytest.raises(ValueError, match=">= 2"):
        calculate_p_values(sample_model, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
