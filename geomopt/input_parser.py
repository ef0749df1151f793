"""Parser for geometry optimization input files."""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .constants import (
	ANGSTROM_TO_BOHR,
	DEFAULT_MAX_ITERATIONS,
	MAX_STEP_SIZE,
	OPT_CONV_DISPMAX,
	OPT_CONV_DISPRMS,
	OPT_CONV_FORCEMAX,
	OPT_CONV_FORCERMS,
)
from .convergence import ConvergenceCriteria
from .geometry_optimizer import OptimizerConfig
from .model_solvers import HarmonicPairSolver, MorsePairSolver, PairPotentialSolver
from .molecule import Molecule, symbol_to_atomic_number
from .solver import GuessMode

POTENTIALS = ("morse", "harmonic")


@dataclass
class InputData:
	"""Container for parsed input data."""

	title: str
	charge: int
	multiplicity: int
	atomic_symbols: List[str]
	coordinates: np.ndarray  # Angstroms
	max_iterations: int = DEFAULT_MAX_ITERATIONS
	max_step: float = MAX_STEP_SIZE
	force_max: float = OPT_CONV_FORCEMAX
	force_rms: float = OPT_CONV_FORCERMS
	disp_max: float = OPT_CONV_DISPMAX
	disp_rms: float = OPT_CONV_DISPRMS
	guess: GuessMode = GuessMode.CORE
	delete_translation: bool = False
	potential: str = "morse"
	morse_depth: float = 0.17
	morse_width: float = 1.0
	morse_equilibrium: float = 0.74  # Angstroms
	bonds: List[Tuple[int, int, float, float]] = field(default_factory=list)


def _parse_bool(value: str) -> bool:
	value = value.lower()
	if value in ("yes", "true", "on", "1"):
		return True
	if value in ("no", "false", "off", "0"):
		return False
	raise ValueError(f"Invalid boolean value: {value}")


def parse_input_file(filename: str) -> InputData:
	"""
	Parse a geometry optimization input file.

	Format:
	```
	title = Hydrogen molecule
	charge = 0
	multiplicity = 1
	max_iterations = 50
	max_step = 0.3
	force_max = 4.5e-4
	guess = core
	delete_translation = no
	potential = harmonic
	bond = 1 2 0.37 0.74

	geometry
	H    0.0000    0.0000    0.0000
	H    0.0000    0.0000    0.9000
	end
	```

	Bonds are given as 1-based atom indices, force constant (hartree/bohr^2)
	and equilibrium distance (Angstroms). Geometry is in Angstroms.
	"""
	data = InputData(
		title="Geometry Optimization",
		charge=0,
		multiplicity=1,
		atomic_symbols=[],
		coordinates=np.zeros((0, 3)),
	)
	coordinates = []

	with open(filename, "r") as f:
		lines = [line.strip() for line in f.readlines()]

	reading_geometry = False

	for line in lines:
		if not line or line.startswith("#"):
			continue

		if reading_geometry:
			if line.lower() == "end":
				reading_geometry = False
				continue
			try:
				symbol, x, y, z = line.split()
				data.atomic_symbols.append(symbol)
				coordinates.append([float(x), float(y), float(z)])
			except ValueError:
				raise ValueError(f"Invalid geometry line: {line}")
			continue

		if line.lower() == "geometry":
			reading_geometry = True
			continue

		if "=" not in line:
			continue

		key, value = [x.strip() for x in line.split("=", 1)]
		key = key.lower()

		if key == "title":
			data.title = value
		elif key in ("charge", "multiplicity", "max_iterations"):
			setattr(data, key, int(value))
		elif key in ("max_step", "force_max", "force_rms", "disp_max", "disp_rms"):
			setattr(data, key, float(value))
		elif key in ("morse_depth", "morse_width", "morse_equilibrium"):
			setattr(data, key, float(value))
		elif key == "guess":
			try:
				data.guess = GuessMode(value.lower())
			except ValueError:
				raise ValueError(f"Unsupported guess: {value}. Available: {[g.value for g in GuessMode]}")
		elif key == "delete_translation":
			data.delete_translation = _parse_bool(value)
		elif key == "potential":
			if value.lower() not in POTENTIALS:
				raise ValueError(f"Unsupported potential: {value}. Available: {list(POTENTIALS)}")
			data.potential = value.lower()
		elif key == "bond":
			try:
				i, j, k, r0 = value.split()
				data.bonds.append((int(i) - 1, int(j) - 1, float(k), float(r0)))
			except ValueError:
				raise ValueError(f"Invalid bond definition: {value}")

	if not data.atomic_symbols:
		raise ValueError("No geometry found in input file")
	if reading_geometry:
		raise ValueError("Geometry block is not terminated with 'end'")

	data.coordinates = np.array(coordinates)
	return data


def create_molecule_from_input(input_data: InputData) -> Molecule:
	"""Create a Molecule instance (coordinates in bohr) from input data."""
	atomic_numbers = [symbol_to_atomic_number(symbol) for symbol in input_data.atomic_symbols]
	return Molecule(atomic_numbers, input_data.coordinates * ANGSTROM_TO_BOHR, charge=input_data.charge)


def create_config_from_input(input_data: InputData, verbose: bool = True) -> OptimizerConfig:
	"""Create the optimizer settings from input data."""
	criteria = ConvergenceCriteria(
		force_max=input_data.force_max,
		force_rms=input_data.force_rms,
		displacement_max=input_data.disp_max,
		displacement_rms=input_data.disp_rms,
	)
	return OptimizerConfig(
		multiplicity=input_data.multiplicity,
		max_iterations=input_data.max_iterations,
		max_step_size=input_data.max_step,
		criteria=criteria,
		initial_guess=input_data.guess,
		delete_translation=input_data.delete_translation,
		verbose=verbose,
	)


def create_solver_from_input(input_data: InputData) -> PairPotentialSolver:
	"""Create the model solver named in the input data."""
	if input_data.potential == "harmonic":
		if not input_data.bonds:
			raise ValueError("Harmonic potential needs at least one 'bond' line")
		n_atoms = len(input_data.atomic_symbols)
		for i, j, _, _ in input_data.bonds:
			if not (0 <= i < n_atoms and 0 <= j < n_atoms) or i == j:
				raise ValueError(f"Bond ({i + 1}, {j + 1}) does not name two different atoms")
		return HarmonicPairSolver([(i, j, k, r0 * ANGSTROM_TO_BOHR) for i, j, k, r0 in input_data.bonds])
	return MorsePairSolver(
		depth=input_data.morse_depth,
		width=input_data.morse_width,
		equilibrium=input_data.morse_equilibrium * ANGSTROM_TO_BOHR,
	)
