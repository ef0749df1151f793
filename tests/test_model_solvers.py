import numpy as np
import pytest
from numpy.testing import assert_allclose

from geomopt import GuessMode, HarmonicPairSolver, Molecule, MorsePairSolver


def _energy_and_forces(solver, molecule):
	table = solver.build_representation(molecule)
	solution = solver.compute_energy(table, molecule, 1, 1, GuessMode.CORE, None)
	forces = np.column_stack(solver.compute_forces(table, molecule, 1, 1, solution))
	return solution.energy, forces


def _numerical_forces(solver, molecule, h=1e-5):
	forces = np.zeros_like(molecule.coordinates)
	for i in range(molecule.n_atoms):
		for axis in range(3):
			shifted = []
			for sign in (1.0, -1.0):
				coords = molecule.coordinates.copy()
				coords[i, axis] += sign * h
				shifted.append(_energy_and_forces(solver, Molecule(molecule.atomic_numbers, coords))[0])
			forces[i, axis] = -(shifted[0] - shifted[1]) / (2 * h)
	return forces


@pytest.fixture
def triangle():
	return Molecule([1, 1, 1], np.array([[0.0, 0.0, 0.0], [1.9, 0.1, 0.0], [0.8, 1.5, 0.3]]), charge=1)


def test_harmonic_energy(stretched_h2, harmonic_bond):
	energy, forces = _energy_and_forces(harmonic_bond, stretched_h2)
	assert energy == pytest.approx(-1.0 + 0.5 * 0.2**2)
	assert_allclose(forces, [[0.0, 0.0, 0.2], [0.0, 0.0, -0.2]], atol=1e-14)


def test_energy_offset_keeps_minimum_nonzero():
	molecule = Molecule([1, 1], np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]]))
	energy, _ = _energy_and_forces(HarmonicPairSolver([(0, 1, 1.0, 1.4)]), molecule)
	assert energy == -1.0


@pytest.mark.parametrize(
	"solver",
	[HarmonicPairSolver([(0, 1, 0.5, 1.4), (1, 2, 0.3, 1.6)]), MorsePairSolver(depth=0.17, width=1.1, equilibrium=1.8)],
)
def test_forces_match_finite_differences(solver, triangle):
	_, forces = _energy_and_forces(solver, triangle)
	assert_allclose(forces, _numerical_forces(solver, triangle), atol=1e-7)
	# pair forces carry no net force
	assert_allclose(forces.sum(axis=0), 0.0, atol=1e-14)


def test_morse_minimum():
	solver = MorsePairSolver(depth=0.2, width=1.0, equilibrium=1.5)
	energy, dE_dr = solver.pair_energy(0, 1.5)
	assert energy == pytest.approx(-0.2)
	assert dE_dr == pytest.approx(0.0)


def test_pair_table_tracks_geometry(stretched_h2, harmonic_bond):
	table = harmonic_bond.build_representation(stretched_h2)
	assert table.distances[0, 1] == pytest.approx(1.6)
	assert_allclose(table.vectors[0, 1], [0.0, 0.0, -1.6])

	stretched_h2.coordinates[1, 2] = 2.0
	assert table.distances[0, 1] == pytest.approx(1.6)
	assert harmonic_bond.build_representation(stretched_h2).distances[0, 1] == pytest.approx(2.0)

	assert not table.released
	table.close()
	assert table.released
