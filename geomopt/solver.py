"""
Interface between the optimizer and an electronic-structure solver.

The optimizer treats the solver as an oracle: given the current geometry it
returns the total energy and the force on each nucleus. Any object with the
three methods of ``ElectronicStructureSolver`` can be used.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol, Tuple

import numpy as np

from .molecule import Molecule


class GuessMode(Enum):
	"""Initial guess policy for the SCF procedure."""

	CORE = "core"  # solver default guess
	PREVIOUS = "previous"  # start from supplied orbitals


@dataclass
class SCFSolution:
	"""
	Result of one SCF calculation.

	A total energy of exactly 0.0 signals that the SCF did not converge.
	"""

	energy: float
	coefficients_alpha: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
	coefficients_beta: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
	orbital_energies_alpha: np.ndarray = field(default_factory=lambda: np.zeros(0))
	orbital_energies_beta: np.ndarray = field(default_factory=lambda: np.zeros(0))

	@property
	def converged(self) -> bool:
		return self.energy != 0.0


class ElectronicStructureSolver(Protocol):
	def build_representation(self, molecule: Molecule) -> Any:
		"""Build the geometry-dependent basis for the current coordinates."""
		...

	def compute_energy(
		self,
		representation: Any,
		molecule: Molecule,
		n_alpha: int,
		n_beta: int,
		guess: GuessMode,
		orbitals: Optional[SCFSolution],
	) -> SCFSolution:
		"""Solve the SCF equations and return energy and orbitals."""
		...

	def compute_forces(
		self,
		representation: Any,
		molecule: Molecule,
		n_alpha: int,
		n_beta: int,
		solution: SCFSolution,
	) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		"""Return the x, y and z force components on each atom."""
		...
