import numpy as np

from .errors import DimensionMismatch, InvalidConfiguration


def newton_step(inverse_hessian: np.ndarray, gradient: np.ndarray, max_step_size: float) -> np.ndarray:
	"""
	Compute a Newton step dR = -H^-1 grad limited to a trust radius.

	A step longer than ``max_step_size`` is scaled down along its own
	direction so that its norm equals ``max_step_size``.

	Args:
	    inverse_hessian: Inverse Hessian approximation, shape (n, n)
	    gradient: Gradient vector, shape (n,)
	    max_step_size: Maximum Euclidean norm of the step (bohr)

	Returns:
	    Step vector of shape (n,)
	"""
	grad = np.asarray(gradient, dtype=float)
	n = grad.shape[0]
	if inverse_hessian.shape != (n, n):
		raise DimensionMismatch(f"Inverse Hessian of shape {inverse_hessian.shape} does not match gradient length {n}")

	dR = -(inverse_hessian @ grad)

	if max_step_size <= 0.0:
		raise InvalidConfiguration(f"max_step_size must be positive, got {max_step_size}")

	r = np.linalg.norm(dR)
	if r > max_step_size:
		dR = dR * (max_step_size / r)
	return dR
