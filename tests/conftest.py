import numpy as np
import pytest

from geomopt import HarmonicPairSolver, Molecule, SCFSolution


class RecordingSolver:
	"""Wraps a solver and records what the optimizer asks of it."""

	def __init__(self, inner):
		self.inner = inner
		self.guesses = []
		self.orbitals = []
		self.representations = []
		self.electron_counts = []

	def build_representation(self, molecule):
		representation = self.inner.build_representation(molecule)
		self.representations.append(representation)
		return representation

	def compute_energy(self, representation, molecule, n_alpha, n_beta, guess, orbitals):
		self.guesses.append(guess)
		self.orbitals.append(orbitals)
		self.electron_counts.append((n_alpha, n_beta))
		return self.inner.compute_energy(representation, molecule, n_alpha, n_beta, guess, orbitals)

	def compute_forces(self, representation, molecule, n_alpha, n_beta, solution):
		return self.inner.compute_forces(representation, molecule, n_alpha, n_beta, solution)


class ConstantForceSolver:
	"""Same force on every atom regardless of geometry."""

	def __init__(self, force):
		self.force = np.asarray(force, dtype=float)

	def build_representation(self, molecule):
		return None

	def compute_energy(self, representation, molecule, n_alpha, n_beta, guess, orbitals):
		return SCFSolution(energy=-1.0)

	def compute_forces(self, representation, molecule, n_alpha, n_beta, solution):
		forces = np.tile(self.force, (molecule.n_atoms, 1))
		return forces[:, 0], forces[:, 1], forces[:, 2]


class TetherSolver:
	"""Each atom is tied to its anchor by an isotropic spring."""

	def __init__(self, anchors, k=1.0):
		self.anchors = np.asarray(anchors, dtype=float)
		self.k = k

	def build_representation(self, molecule):
		return molecule.coordinates - self.anchors

	def compute_energy(self, representation, molecule, n_alpha, n_beta, guess, orbitals):
		return SCFSolution(energy=-1.0 + 0.5 * self.k * float(np.sum(representation**2)))

	def compute_forces(self, representation, molecule, n_alpha, n_beta, solution):
		forces = -self.k * representation
		return forces[:, 0], forces[:, 1], forces[:, 2]


class UnconvergedSolver(ConstantForceSolver):
	def __init__(self):
		super().__init__([0.0, 0.0, 0.0])

	def compute_energy(self, representation, molecule, n_alpha, n_beta, guess, orbitals):
		return SCFSolution(energy=0.0)


@pytest.fixture
def stretched_h2():
	"""H2 with a 1.6 bohr bond along z."""
	return Molecule([1, 1], np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.6]]))


@pytest.fixture
def harmonic_bond():
	"""Harmonic bond with k = 1 hartree/bohr^2 and r0 = 1.4 bohr."""
	return HarmonicPairSolver([(0, 1, 1.0, 1.4)])
