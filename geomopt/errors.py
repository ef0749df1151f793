"""Exceptions raised by the geometry optimizer."""

from typing import List, Optional


class OptimizationError(RuntimeError):
	"""
	Base class for every fatal condition of an optimization run.

	Attributes:
	    iteration: Zero-based iteration in which the failure occurred, if known
	    history: Convergence metrics recorded before the failure
	"""

	def __init__(self, message: str, iteration: Optional[int] = None, history: Optional[List] = None):
		super().__init__(message)
		self.iteration = iteration
		self.history = history if history is not None else []


class AllocationFailure(OptimizationError, MemoryError):
	"""Working buffers could not be allocated."""


class DegenerateUpdate(OptimizationError, ArithmeticError):
	"""Displacement is orthogonal to the change of gradient."""


class InvalidConfiguration(OptimizationError, ValueError):
	"""An option has a value outside its allowed range."""


class DimensionMismatch(OptimizationError, ValueError):
	"""A vector or matrix does not have the expected size."""


class OracleNonConvergence(OptimizationError):
	"""The electronic-structure solver reported an unconverged SCF."""


class IterationBudgetExceeded(OptimizationError):
	"""Convergence was not reached within the allowed number of iterations."""
