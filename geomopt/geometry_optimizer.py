"""
Geometry optimizer for quantum chemistry calculations.
Implements a quasi-Newton (BFGS inverse Hessian) search for a local energy
minimum, driving an external electronic-structure solver.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from .constants import DEFAULT_MAX_ITERATIONS, MAX_STEP_SIZE
from .convergence import ConvergenceCriteria, ConvergenceMetrics, evaluate_convergence
from .errors import (
	AllocationFailure,
	DimensionMismatch,
	InvalidConfiguration,
	IterationBudgetExceeded,
	OptimizationError,
	OracleNonConvergence,
)
from .hessian_update import update_inverse_hessian_bfgs
from .molecule import Molecule
from .report import format_convergence_report, format_final_report, format_step_header
from .solver import ElectronicStructureSolver, GuessMode, SCFSolution
from .step import newton_step
from .translation import delete_translation


class OptimizerState(Enum):
	INITIALIZING = "initializing"
	ITERATING = "iterating"
	AWAITING_ENERGY = "awaiting_energy"
	AWAITING_FORCES = "awaiting_forces"
	UPDATING_MODEL = "updating_model"
	CONVERGED = "converged"
	FAILED = "failed"


@dataclass(frozen=True)
class OptimizerConfig:
	"""
	Settings for one optimization run.

	Attributes:
	    multiplicity: Spin multiplicity 2S+1
	    max_iterations: Maximum number of optimization iterations
	    max_step_size: Trust radius of a single step (bohr)
	    criteria: Convergence thresholds
	    initial_guess: SCF guess used in the first iteration only
	    delete_translation: Project rigid translation out of every step
	    curvature_tolerance: Smallest |dR . dGrad| accepted by the BFGS update
	    hessian_update: "direct" or "rank2" evaluation of the BFGS formula
	    verbose: Print the per-iteration and final report
	"""

	multiplicity: int = 1
	max_iterations: int = DEFAULT_MAX_ITERATIONS
	max_step_size: float = MAX_STEP_SIZE
	criteria: ConvergenceCriteria = field(default_factory=ConvergenceCriteria)
	initial_guess: GuessMode = GuessMode.CORE
	delete_translation: bool = False
	curvature_tolerance: float = 0.0
	hessian_update: str = "direct"
	verbose: bool = False

	def __post_init__(self):
		if self.multiplicity < 1:
			raise InvalidConfiguration(f"multiplicity must be at least 1, got {self.multiplicity}")
		if self.max_iterations <= 0:
			raise InvalidConfiguration(f"max_iterations must be positive, got {self.max_iterations}")
		if not self.max_step_size > 0.0:
			raise InvalidConfiguration(f"max_step_size must be positive, got {self.max_step_size}")
		if self.curvature_tolerance < 0.0:
			raise InvalidConfiguration(f"curvature_tolerance must not be negative, got {self.curvature_tolerance}")
		if self.hessian_update not in ("direct", "rank2"):
			raise InvalidConfiguration(f"Unknown BFGS update method: {self.hessian_update}")

	def guess_for_iteration(self, iteration: int) -> GuessMode:
		"""SCF guess policy for the given zero-based iteration."""
		return self.initial_guess if iteration == 0 else GuessMode.PREVIOUS


@dataclass
class OptimizationResult:
	"""Outcome of a converged optimization."""

	coordinates: np.ndarray
	energy: float
	n_iterations: int
	inverse_hessian: np.ndarray
	gradient: np.ndarray
	solution: SCFSolution
	energy_history: List[float]
	history: List[ConvergenceMetrics]

	@property
	def converged(self) -> bool:
		return bool(self.history) and self.history[-1].converged


class GeometryOptimizer:
	"""Geometry optimizer using the BFGS inverse Hessian update."""

	def __init__(self, solver: ElectronicStructureSolver, config: Optional[OptimizerConfig] = None):
		"""
		Initialize geometry optimizer.

		Args:
		    solver: Electronic-structure solver providing energies and forces
		    config: Optimizer settings, defaults to OptimizerConfig()
		"""
		self.solver = solver
		self.config = config or OptimizerConfig()
		self.state = OptimizerState.INITIALIZING

	def _allocate(self, n_atoms: int):
		n_dof = 3 * n_atoms
		try:
			self.inverse_hessian = np.eye(n_dof)
			self.gradient = np.zeros(n_dof)
			self.delta_gradient = np.zeros(n_dof)
			self.step = np.zeros(n_dof)
			self.forces = np.zeros((n_atoms, 3))
		except MemoryError as e:
			raise AllocationFailure(f"Cannot allocate optimizer buffers for {n_dof} degrees of freedom") from e

	def _release(self):
		for name in ("inverse_hessian", "gradient", "delta_gradient", "step", "forces"):
			self.__dict__.pop(name, None)

	def _fail(self, error: OptimizationError, iteration: int, history: List[ConvergenceMetrics]):
		self.state = OptimizerState.FAILED
		error.iteration = iteration
		error.history = list(history)
		logging.error(f"Geometry optimization failed in step {iteration + 1}: {error}")
		raise error

	def _solve(self, molecule: Molecule, n_alpha: int, n_beta: int, iteration: int, previous: Optional[SCFSolution]):
		"""Run the energy and force calculations for the current geometry."""
		representation = self.solver.build_representation(molecule)
		try:
			self.state = OptimizerState.AWAITING_ENERGY
			guess = self.config.guess_for_iteration(iteration)
			solution = self.solver.compute_energy(representation, molecule, n_alpha, n_beta, guess, previous)
			if solution.energy == 0.0:
				raise OracleNonConvergence("SCF calculation did not converge")

			self.state = OptimizerState.AWAITING_FORCES
			fx, fy, fz = self.solver.compute_forces(representation, molecule, n_alpha, n_beta, solution)
			for axis, component in enumerate((fx, fy, fz)):
				component = np.asarray(component, dtype=float)
				if component.shape != (molecule.n_atoms,):
					raise DimensionMismatch(
						f"Solver returned {component.size} force components for {molecule.n_atoms} atoms"
					)
				self.forces[:, axis] = component
		finally:
			close = getattr(representation, "close", None)
			if callable(close):
				close()
		return solution

	def optimize(self, molecule: Molecule) -> OptimizationResult:
		"""
		Optimize molecular geometry in place.

		Args:
		    molecule: Molecule whose coordinates are updated every iteration

		Returns:
		    OptimizationResult of the converged run

		Raises:
		    OptimizationError: One of its subclasses on any fatal condition
		"""
		config = self.config
		self.state = OptimizerState.INITIALIZING
		history: List[ConvergenceMetrics] = []
		energy_history: List[float] = []
		n_iter = 0

		solution: Optional[SCFSolution] = None
		try:
			try:
				n_alpha, n_beta = molecule.electron_counts(config.multiplicity)
				self._allocate(molecule.n_atoms)
			except OptimizationError as e:
				self._fail(e, n_iter, history)
			logging.info(
				f"Starting geometry optimization: {molecule.n_atoms} atoms, {molecule.n_dof} degrees of freedom, "
				f"{n_alpha} alpha and {n_beta} beta electrons"
			)

			while True:
				self.state = OptimizerState.ITERATING
				if config.verbose:
					print(format_step_header(n_iter))

				try:
					solution = self._solve(molecule, n_alpha, n_beta, n_iter, solution)

					self.state = OptimizerState.UPDATING_MODEL
					current = -self.forces.reshape(-1)
					self.delta_gradient[:] = current - self.gradient
					self.gradient[:] = current

					# the first iteration has no previous step to learn from
					if n_iter > 0:
						update_inverse_hessian_bfgs(
							self.step,
							self.delta_gradient,
							self.inverse_hessian,
							curvature_tolerance=config.curvature_tolerance,
							method=config.hessian_update,
						)

					self.step[:] = newton_step(self.inverse_hessian, self.gradient, config.max_step_size)
					if config.delete_translation:
						delete_translation(self.step)
				except OptimizationError as e:
					self._fail(e, n_iter, history)

				molecule.coordinates += self.step.reshape(-1, 3)

				metrics = evaluate_convergence(self.gradient, self.step, config.criteria)
				history.append(metrics)
				energy_history.append(solution.energy)
				logging.debug(
					f"Step {n_iter + 1}: E = {solution.energy:.10f} max force = {metrics.force_max:.6f} "
					f"rms force = {metrics.force_rms:.6f} max disp = {metrics.displacement_max:.6f} "
					f"rms disp = {metrics.displacement_rms:.6f}"
				)
				if config.verbose:
					print(format_convergence_report(metrics))

				n_iter += 1
				if n_iter > config.max_iterations:
					self._fail(
						IterationBudgetExceeded(
							f"Geometry optimization has not converged within {config.max_iterations} iterations"
						),
						n_iter - 1,
						history,
					)
				if metrics.converged:
					break

			self.state = OptimizerState.CONVERGED
			logging.info(f"Geometry optimization converged in {n_iter} steps, E = {solution.energy:.10f}")
			if config.verbose:
				print(format_final_report(molecule))

			return OptimizationResult(
				coordinates=molecule.coordinates.copy(),
				energy=solution.energy,
				n_iterations=n_iter,
				inverse_hessian=self.inverse_hessian.copy(),
				gradient=self.gradient.copy(),
				solution=solution,
				energy_history=energy_history,
				history=history,
			)
		except Exception:
			self.state = OptimizerState.FAILED
			raise
		finally:
			self._release()
