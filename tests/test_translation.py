import numpy as np
import pytest
from numpy.testing import assert_allclose

from geomopt import DimensionMismatch, delete_translation


@pytest.mark.parametrize("n_atoms", [1, 2, 3, 10])
def test_mean_displacement_is_zero(n_atoms):
	rng = np.random.default_rng(2016 + n_atoms)
	dR = rng.standard_normal(3 * n_atoms)
	original = dR.copy()

	result = delete_translation(dR)

	assert result is dR
	assert_allclose(dR.reshape(-1, 3).mean(axis=0), 0.0, atol=1e-14)
	# every atom is shifted by the same vector
	shift = (original - dR).reshape(-1, 3)
	assert_allclose(shift, np.tile(shift[0], (n_atoms, 1)), atol=1e-14)


def test_single_atom_becomes_zero():
	dR = np.array([0.1, -0.2, 0.3])
	delete_translation(dR)
	assert_allclose(dR, 0.0, atol=1e-15)


def test_internal_motion_is_kept():
	dR = np.array([-0.1, 0.0, 0.0, 0.1, 0.0, 0.0])
	delete_translation(dR)
	assert_allclose(dR, [-0.1, 0.0, 0.0, 0.1, 0.0, 0.0])


@pytest.mark.parametrize("length", [0, 4, 7])
def test_length_not_multiple_of_three(length):
	with pytest.raises(DimensionMismatch):
		delete_translation(np.ones(length))
