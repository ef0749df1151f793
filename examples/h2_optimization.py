import numpy as np

from geomopt import GeometryOptimizer, HarmonicPairSolver, Molecule, OptimizerConfig


def main():
	# Stretched H2 molecule, coordinates in bohr
	atomic_numbers = [1, 1]
	coordinates = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.7]])
	molecule = Molecule(atomic_numbers, coordinates)

	# Harmonic bond with the H2 equilibrium distance
	solver = HarmonicPairSolver([(0, 1, 0.37, 1.4)])

	optimizer = GeometryOptimizer(solver, OptimizerConfig(verbose=True))
	result = optimizer.optimize(molecule)

	print(f"\nConverged in {result.n_iterations} steps")
	print(f"Bond length: {molecule.distance_matrix()[0, 1]:.6f} bohr")


if __name__ == "__main__":
	main()
