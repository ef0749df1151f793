import numpy as np

from .errors import DimensionMismatch


def delete_translation(displacement: np.ndarray) -> np.ndarray:
	"""
	Remove rigid translation from an atom-major displacement vector.

	The per-axis mean displacement over all atoms is subtracted from every
	atom, in place.

	Args:
	    displacement: Flat vector (x0, y0, z0, x1, ...) of length 3 * n_atoms

	Returns:
	    The same array, with zero mean displacement along x, y and z
	"""
	if displacement.ndim != 1 or displacement.size == 0 or displacement.size % 3 != 0:
		raise DimensionMismatch(f"Displacement length {displacement.size} is not a multiple of 3")

	per_atom = displacement.reshape(-1, 3)
	per_atom -= per_atom.mean(axis=0)
	return displacement
