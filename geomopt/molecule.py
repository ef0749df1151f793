from typing import List, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from .constants import ANGSTROM_TO_BOHR
from .errors import InvalidConfiguration

SYMBOL_TO_NUMBER = {"H": 1, "He": 2, "Li": 3, "Be": 4, "B": 5, "C": 6, "N": 7, "O": 8, "F": 9, "Ne": 10}
NUMBER_TO_SYMBOL = {number: symbol for symbol, number in SYMBOL_TO_NUMBER.items()}


def symbol_to_atomic_number(symbol: str) -> int:
	"""Convert atomic symbol to atomic number."""
	symbol = symbol.title()  # Convert to title case (e.g., 'h' -> 'H')
	if symbol not in SYMBOL_TO_NUMBER:
		raise ValueError(f"Unsupported atomic symbol: {symbol}")
	return SYMBOL_TO_NUMBER[symbol]


class Molecule:
	"""
	A molecular system with atomic coordinates and nuclear charges.

	Coordinates are stored in bohr. The geometry optimizer moves atoms by
	updating ``coordinates`` in place, so the array keeps its identity for
	the lifetime of the molecule.
	"""

	def __init__(self, atomic_numbers: List[int], coordinates: np.ndarray, charge: int = 0):
		"""
		Initialize a molecule with atomic numbers and coordinates.

		Args:
		    atomic_numbers: List of atomic numbers for each atom
		    coordinates: Array of shape (n_atoms, 3) with XYZ coordinates in bohr
		    charge: Total molecular charge
		"""
		self.atomic_numbers = np.array(atomic_numbers, dtype=int)
		self.coordinates = np.array(coordinates, dtype=float).reshape(-1, 3)
		if len(self.coordinates) != len(self.atomic_numbers):
			raise ValueError(
				f"Got {len(self.atomic_numbers)} atomic numbers but {len(self.coordinates)} coordinate rows"
			)
		self.charge = charge
		self.n_atoms = len(atomic_numbers)
		self.n_electrons = int(self.atomic_numbers.sum()) - charge

	@property
	def n_dof(self) -> int:
		"""Number of Cartesian degrees of freedom."""
		return 3 * self.n_atoms

	@property
	def symbols(self) -> List[str]:
		return [NUMBER_TO_SYMBOL.get(int(Z), str(Z)) for Z in self.atomic_numbers]

	@classmethod
	def from_xyz(cls, filename: str, charge: int = 0) -> "Molecule":
		"""
		Create a Molecule instance from an XYZ file.

		Args:
		    filename: Path to the XYZ file (coordinates in Angstroms)
		    charge: Total molecular charge

		Returns:
		    Molecule instance
		"""
		atomic_numbers = []
		coordinates = []

		with open(filename, "r") as f:
			n_atoms = int(f.readline())
			f.readline()  # Skip comment line

			for _ in range(n_atoms):
				line = f.readline().strip().split()
				atomic_numbers.append(symbol_to_atomic_number(line[0]))
				coordinates.append([float(x) for x in line[1:4]])

		return cls(atomic_numbers, np.array(coordinates) * ANGSTROM_TO_BOHR, charge=charge)

	def electron_counts(self, multiplicity: int) -> Tuple[int, int]:
		"""
		Split the electrons into alpha and beta spin counts.

		Args:
		    multiplicity: Spin multiplicity 2S+1

		Returns:
		    Tuple of (n_alpha, n_beta)
		"""
		n_unpaired = multiplicity - 1
		if multiplicity < 1 or n_unpaired > self.n_electrons or (self.n_electrons - n_unpaired) % 2 != 0:
			raise InvalidConfiguration(
				f"Multiplicity {multiplicity} is not possible with {self.n_electrons} electrons"
			)
		n_beta = (self.n_electrons - n_unpaired) // 2
		return n_beta + n_unpaired, n_beta

	def distance_matrix(self) -> np.ndarray:
		"""Interatomic distances in bohr, shape (n_atoms, n_atoms)."""
		if self.n_atoms < 2:
			return np.zeros((self.n_atoms, self.n_atoms))
		return squareform(pdist(self.coordinates))
