"""Text report of an optimization run."""

from typing import List

from .constants import ANGSTROM_TO_BOHR
from .convergence import ConvergenceMetrics
from .molecule import Molecule

RULE = "-" * 61
VALUES_PER_LINE = 5


def _banner(title: str) -> str:
	return "\n".join(["", "", RULE, f"-----{title:^51s}-----", RULE])


def format_step_header(iteration: int) -> str:
	"""Header printed before each optimization step (1-based in the output)."""
	return _banner(f"GEOMETRY OPTIMIZATION Step {iteration + 1:5d}")


def _yes_no(converged: bool) -> str:
	return "YES" if converged else "NO"


def format_convergence_report(metrics: ConvergenceMetrics) -> str:
	"""Table with value, threshold and status of each convergence criterion."""
	criteria = metrics.criteria
	rows = [
		("Maximum Force       ", metrics.force_max, criteria.force_max, metrics.force_max_converged),
		("RMS     Force       ", metrics.force_rms, criteria.force_rms, metrics.force_rms_converged),
		(
			"Maximum Displacement",
			metrics.displacement_max,
			criteria.displacement_max,
			metrics.displacement_max_converged,
		),
		(
			"RMS     Displacement",
			metrics.displacement_rms,
			criteria.displacement_rms,
			metrics.displacement_rms_converged,
		),
	]
	lines = ["Convergence Criterion    Value        Threshold"]
	for label, value, threshold, converged in rows:
		lines.append(f"  {label} {value:10.6f}   {threshold:10.6f}  {_yes_no(converged)}")
	return "\n".join(lines)


def format_geometry(molecule: Molecule) -> str:
	"""XYZ block of the current geometry in Angstroms."""
	lines = [f"{molecule.n_atoms}", ""]
	for symbol, (x, y, z) in zip(molecule.symbols, molecule.coordinates / ANGSTROM_TO_BOHR):
		lines.append(f"{symbol:<2s} {x:16.8f} {y:16.8f} {z:16.8f}")
	return "\n".join(lines)


def distance_table(molecule: Molecule) -> List[float]:
	"""Lower triangle (diagonal included) of the distance matrix in Angstroms, row by row."""
	distances = molecule.distance_matrix() / ANGSTROM_TO_BOHR
	return [float(distances[i, j]) for i in range(molecule.n_atoms) for j in range(i + 1)]


def format_distance_table(molecule: Molecule) -> str:
	"""Distance table wrapped at five values per line."""
	values = distance_table(molecule)
	lines = []
	for start in range(0, len(values), VALUES_PER_LINE):
		lines.append(" ".join(f"{d:11.5f}" for d in values[start : start + VALUES_PER_LINE]))
	return "\n".join(lines)


def format_final_report(molecule: Molecule) -> str:
	"""Optimized geometry followed by the interatomic distance table."""
	return "\n".join(
		[
			_banner("OPTIMIZED GEOMETRY"),
			"",
			format_geometry(molecule),
			_banner("DISTANCE MATRIX"),
			"",
			"                       Output Sequence",
			"             +---------------------------------",
			"             |   Atom1   Atom2   Atom3   ...",
			"             +---------------------------------",
			"       Atom1 |    1",
			"       Atom2 |    2       3",
			"       Atom3 |    4       5       6",
			"         :   |    7       8       9      10",
			"",
			"                      Output (Angstroms)",
			"                      ------------------",
			format_distance_table(molecule),
		]
	)
