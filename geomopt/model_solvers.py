"""
Analytic pair-potential solvers.

These implement the ElectronicStructureSolver interface with closed-form
model surfaces, so the optimizer can be run without an SCF program. No
orbitals are produced; the returned SCFSolution carries empty arrays.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from .molecule import Molecule
from .solver import GuessMode, SCFSolution


@dataclass
class PairTable:
	"""Geometry-dependent pair vectors and distances."""

	vectors: np.ndarray  # (n_atoms, n_atoms, 3), r_i - r_j
	distances: np.ndarray  # (n_atoms, n_atoms)
	released: bool = False

	def close(self):
		self.released = True


def build_pair_table(molecule: Molecule) -> PairTable:
	coords = molecule.coordinates
	vectors = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
	if molecule.n_atoms > 1:
		distances = squareform(pdist(coords))
	else:
		distances = np.zeros((molecule.n_atoms, molecule.n_atoms))
	return PairTable(vectors=vectors.copy(), distances=distances)


class PairPotentialSolver:
	"""
	Base class for solvers whose energy is a sum over atom pairs.

	Subclasses provide ``pairs`` and ``pair_energy(pair_index, r)`` returning
	the energy and its derivative with respect to the distance. A constant
	``energy_offset`` is added to the total so that a converged energy is
	never the 0.0 non-convergence marker.
	"""

	energy_offset: float = -1.0

	def pairs(self, molecule: Molecule) -> List[Tuple[int, int]]:
		raise NotImplementedError

	def pair_energy(self, pair_index: int, r: float) -> Tuple[float, float]:
		raise NotImplementedError

	def build_representation(self, molecule: Molecule) -> PairTable:
		return build_pair_table(molecule)

	def compute_energy(
		self,
		representation: PairTable,
		molecule: Molecule,
		n_alpha: int,
		n_beta: int,
		guess: GuessMode,
		orbitals: Optional[SCFSolution],
	) -> SCFSolution:
		logging.debug(f"{type(self).__name__}: energy requested with {guess.value} guess")
		energy = self.energy_offset
		for index, (i, j) in enumerate(self.pairs(molecule)):
			e, _ = self.pair_energy(index, representation.distances[i, j])
			energy += e
		return SCFSolution(energy=energy)

	def compute_forces(
		self,
		representation: PairTable,
		molecule: Molecule,
		n_alpha: int,
		n_beta: int,
		solution: SCFSolution,
	) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		forces = np.zeros((molecule.n_atoms, 3))
		for index, (i, j) in enumerate(self.pairs(molecule)):
			r = representation.distances[i, j]
			_, dE_dr = self.pair_energy(index, r)
			gradient_i = dE_dr * representation.vectors[i, j] / r
			forces[i] -= gradient_i
			forces[j] += gradient_i
		return forces[:, 0], forces[:, 1], forces[:, 2]


class HarmonicPairSolver(PairPotentialSolver):
	"""Harmonic springs E = 1/2 k (r - r0)^2 on selected atom pairs."""

	def __init__(self, bonds: Sequence[Tuple[int, int, float, float]], energy_offset: float = -1.0):
		"""
		Args:
		    bonds: List of (atom1, atom2, force constant, equilibrium distance in bohr)
		    energy_offset: Constant added to the total energy
		"""
		self.bonds = [(int(i), int(j), float(k), float(r0)) for i, j, k, r0 in bonds]
		self.energy_offset = energy_offset

	def pairs(self, molecule: Molecule) -> List[Tuple[int, int]]:
		return [(i, j) for i, j, _, _ in self.bonds]

	def pair_energy(self, pair_index: int, r: float) -> Tuple[float, float]:
		_, _, k, r0 = self.bonds[pair_index]
		return 0.5 * k * (r - r0) ** 2, k * (r - r0)


class MorsePairSolver(PairPotentialSolver):
	"""Morse potential E = D (1 - exp(-a (r - re)))^2 - D between every pair of atoms."""

	def __init__(
		self, depth: float = 0.17, width: float = 1.0, equilibrium: float = 1.4, energy_offset: float = -1.0
	):
		self.depth = depth
		self.width = width
		self.equilibrium = equilibrium
		self.energy_offset = energy_offset

	def pairs(self, molecule: Molecule) -> List[Tuple[int, int]]:
		return [(i, j) for i in range(molecule.n_atoms) for j in range(i + 1, molecule.n_atoms)]

	def pair_energy(self, pair_index: int, r: float) -> Tuple[float, float]:
		x = np.exp(-self.width * (r - self.equilibrium))
		energy = self.depth * (1.0 - x) ** 2 - self.depth
		return energy, 2.0 * self.depth * self.width * x * (1.0 - x)
