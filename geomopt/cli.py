"""
Command line entry point for geometry optimization from input files.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .errors import OptimizationError
from .geometry_optimizer import GeometryOptimizer, OptimizationResult
from .input_parser import (
	create_config_from_input,
	create_molecule_from_input,
	create_solver_from_input,
	parse_input_file,
)


def setup_logging(log_dir: str = "logs", filename: str = "geometry_optimization.log", level: int = logging.DEBUG):
	"""Send log records to a file under ``log_dir``."""
	if not os.path.exists(log_dir):
		os.makedirs(log_dir)
	logging.basicConfig(
		filename=os.path.join(log_dir, filename),
		level=level,
		format="%(asctime)s - %(levelname)s - %(message)s",
	)


def print_results(input_file: str, result: OptimizationResult) -> None:
	"""Print a short summary of the optimization."""
	print("\n" + "=" * 80)
	print(f"Results for input file: {input_file}")
	print("=" * 80)

	print(f"\nFinal Energy: {result.energy:.10f} Hartree")
	print(f"              {result.energy * 27.211386:.10f} eV")
	print(f"              {result.energy * 627.509474:.10f} kcal/mol")
	print(f"Number of Iterations: {result.n_iterations}")

	print("\nEnergy History (Hartree):")
	print("-" * 40)
	for i, e in enumerate(result.energy_history):
		print(f"Step {i + 1:3d}: {e:16.10f}")
	print("=" * 80 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
	parser = argparse.ArgumentParser(description="Optimize a molecular geometry.")
	parser.add_argument("input_file", help="Path to the input file")
	parser.add_argument("--log-dir", default="logs", help="Directory for the log file")
	parser.add_argument("--quiet", action="store_true", help="Do not print the per-step report")
	args = parser.parse_args(argv)

	setup_logging(args.log_dir)

	try:
		input_data = parse_input_file(args.input_file)
		molecule = create_molecule_from_input(input_data)
		solver = create_solver_from_input(input_data)
		config = create_config_from_input(input_data, verbose=not args.quiet)

		result = GeometryOptimizer(solver, config).optimize(molecule)

		print_results(args.input_file, result)

	except OptimizationError as e:
		print(f"Error: {type(e).__name__}: {str(e)}", file=sys.stderr)
		return 1
	except Exception as e:
		print(f"Error: {str(e)}", file=sys.stderr)
		return 1
	return 0
