"""
BFGS update of the inverse Hessian.

Follows equation C.25b of Szabo & Ostlund, "Modern Quantum Chemistry":

    G' = B G B^T + q q^T / alpha,    B = I - q d^T / alpha,    alpha = q^T d

where q is the displacement dR and d is the change of gradient dGrad. The
updated matrix satisfies the secant condition G' d = q.
"""

import numpy as np

from .errors import DegenerateUpdate, DimensionMismatch, InvalidConfiguration


def curvature(displacement: np.ndarray, delta_gradient: np.ndarray) -> float:
	"""Return alpha = dR . dGrad."""
	return float(np.dot(displacement, delta_gradient))


def update_inverse_hessian_bfgs(
	displacement: np.ndarray,
	delta_gradient: np.ndarray,
	inverse_hessian: np.ndarray,
	curvature_tolerance: float = 0.0,
	method: str = "direct",
) -> np.ndarray:
	"""
	Apply one BFGS correction to an inverse Hessian in place.

	Args:
	    displacement: Step taken in the previous iteration, shape (n,)
	    delta_gradient: Current gradient minus previous gradient, shape (n,)
	    inverse_hessian: Inverse Hessian approximation, shape (n, n), overwritten
	    curvature_tolerance: Updates with |alpha| <= tolerance are rejected
	    method: "direct" evaluates B H B^T literally, "rank2" uses the expanded form

	Returns:
	    The updated inverse Hessian (same array as ``inverse_hessian``)

	Raises:
	    DegenerateUpdate: If the displacement is orthogonal to the gradient change
	    DimensionMismatch: If the shapes do not agree
	"""
	dR = np.asarray(displacement, dtype=float)
	dG = np.asarray(delta_gradient, dtype=float)
	n = inverse_hessian.shape[0]
	if dR.shape != (n,) or dG.shape != (n,) or inverse_hessian.shape != (n, n):
		raise DimensionMismatch(
			f"BFGS update needs vectors of length {n} and a square matrix, got "
			f"{dR.shape}, {dG.shape} and {inverse_hessian.shape}"
		)

	alpha = curvature(dR, dG)
	if abs(alpha) <= curvature_tolerance:
		raise DegenerateUpdate(f"dR perpendicular to dGrad (alpha = {alpha:.3e})")

	if method == "direct":
		B = np.eye(n) - np.outer(dR, dG) / alpha
		updated = B @ inverse_hessian @ B.T + np.outer(dR, dR) / alpha
	elif method == "rank2":
		H_dG = inverse_hessian @ dG
		dG_H = dG @ inverse_hessian
		updated = (
			inverse_hessian
			- (np.outer(dR, dG_H) + np.outer(H_dG, dR)) / alpha
			+ (np.dot(dG, H_dG) / alpha**2) * np.outer(dR, dR)
			+ np.outer(dR, dR) / alpha
		)
	else:
		raise InvalidConfiguration(f"Unknown BFGS update method: {method}")

	inverse_hessian[:, :] = updated
	return inverse_hessian
