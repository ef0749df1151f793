"""Convergence test for geometry optimization."""

from dataclasses import dataclass

import numpy as np

from .constants import OPT_CONV_DISPMAX, OPT_CONV_DISPRMS, OPT_CONV_FORCEMAX, OPT_CONV_FORCERMS
from .errors import DimensionMismatch, InvalidConfiguration


@dataclass(frozen=True)
class ConvergenceCriteria:
	"""Thresholds on the gradient (hartree/bohr) and on the step (bohr)."""

	force_max: float = OPT_CONV_FORCEMAX
	force_rms: float = OPT_CONV_FORCERMS
	displacement_max: float = OPT_CONV_DISPMAX
	displacement_rms: float = OPT_CONV_DISPRMS

	def __post_init__(self):
		for name in ("force_max", "force_rms", "displacement_max", "displacement_rms"):
			value = getattr(self, name)
			if not value > 0.0:
				raise InvalidConfiguration(f"Convergence threshold {name} must be positive, got {value}")


@dataclass(frozen=True)
class ConvergenceMetrics:
	"""Values of the four convergence criteria for one iteration."""

	force_max: float
	force_rms: float
	displacement_max: float
	displacement_rms: float
	criteria: ConvergenceCriteria

	@property
	def force_max_converged(self) -> bool:
		return not self.force_max > self.criteria.force_max

	@property
	def force_rms_converged(self) -> bool:
		return not self.force_rms > self.criteria.force_rms

	@property
	def displacement_max_converged(self) -> bool:
		return not self.displacement_max > self.criteria.displacement_max

	@property
	def displacement_rms_converged(self) -> bool:
		return not self.displacement_rms > self.criteria.displacement_rms

	@property
	def converged(self) -> bool:
		"""True when no criterion exceeds its threshold."""
		return (
			self.force_max_converged
			and self.force_rms_converged
			and self.displacement_max_converged
			and self.displacement_rms_converged
		)


def evaluate_convergence(gradient: np.ndarray, step: np.ndarray, criteria: ConvergenceCriteria) -> ConvergenceMetrics:
	"""
	Compute maximum and RMS of the gradient and of the step.

	Args:
	    gradient: Gradient vector (negative forces), shape (n,)
	    step: Step vector applied in this iteration, shape (n,)
	    criteria: Thresholds to compare against

	Returns:
	    ConvergenceMetrics for this iteration
	"""
	grad = np.asarray(gradient, dtype=float).ravel()
	dR = np.asarray(step, dtype=float).ravel()
	if grad.size == 0 or grad.size != dR.size:
		raise DimensionMismatch(f"Gradient of length {grad.size} and step of length {dR.size} cannot be compared")

	return ConvergenceMetrics(
		force_max=float(np.max(np.abs(grad))),
		force_rms=float(np.sqrt(np.mean(grad**2))),
		displacement_max=float(np.max(np.abs(dR))),
		displacement_rms=float(np.sqrt(np.mean(dR**2))),
		criteria=criteria,
	)
