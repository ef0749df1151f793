from .convergence import ConvergenceCriteria, ConvergenceMetrics, evaluate_convergence
from .errors import (
	AllocationFailure,
	DegenerateUpdate,
	DimensionMismatch,
	InvalidConfiguration,
	IterationBudgetExceeded,
	OptimizationError,
	OracleNonConvergence,
)
from .geometry_optimizer import GeometryOptimizer, OptimizationResult, OptimizerConfig, OptimizerState
from .hessian_update import update_inverse_hessian_bfgs
from .model_solvers import HarmonicPairSolver, MorsePairSolver
from .molecule import Molecule
from .solver import GuessMode, SCFSolution
from .step import newton_step
from .translation import delete_translation

__version__ = "0.1.0"

__all__ = [
	"GeometryOptimizer",
	"OptimizerConfig",
	"OptimizerState",
	"OptimizationResult",
	"ConvergenceCriteria",
	"ConvergenceMetrics",
	"evaluate_convergence",
	"update_inverse_hessian_bfgs",
	"newton_step",
	"delete_translation",
	"Molecule",
	"GuessMode",
	"SCFSolution",
	"HarmonicPairSolver",
	"MorsePairSolver",
	"OptimizationError",
	"AllocationFailure",
	"DegenerateUpdate",
	"InvalidConfiguration",
	"DimensionMismatch",
	"OracleNonConvergence",
	"IterationBudgetExceeded",
]
