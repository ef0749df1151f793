import numpy as np
import pytest

from geomopt import ConvergenceCriteria, ConvergenceMetrics, DimensionMismatch, InvalidConfiguration, evaluate_convergence

CRITERIA = ConvergenceCriteria(force_max=4e-4, force_rms=3e-4, displacement_max=2e-3, displacement_rms=1e-3)


def test_metrics_values():
	gradient = np.array([0.3, -0.4, 0.0, 0.0])
	step = np.array([0.0, 0.1, -0.2, 0.2])
	metrics = evaluate_convergence(gradient, step, CRITERIA)
	assert metrics.force_max == pytest.approx(0.4)
	assert metrics.force_rms == pytest.approx(0.25)
	assert metrics.displacement_max == pytest.approx(0.2)
	assert metrics.displacement_rms == pytest.approx(0.15)
	assert not metrics.converged


def test_values_equal_to_thresholds_converge():
	metrics = ConvergenceMetrics(
		force_max=CRITERIA.force_max,
		force_rms=CRITERIA.force_rms,
		displacement_max=CRITERIA.displacement_max,
		displacement_rms=CRITERIA.displacement_rms,
		criteria=CRITERIA,
	)
	assert metrics.converged


def test_single_component_at_threshold_converges():
	criteria = ConvergenceCriteria(force_max=0.25, force_rms=0.25, displacement_max=0.125, displacement_rms=0.125)
	metrics = evaluate_convergence(np.array([-0.25]), np.array([0.125]), criteria)
	assert metrics.force_max == 0.25
	assert metrics.force_rms == 0.25
	assert metrics.converged


@pytest.mark.parametrize("name", ["force_max", "force_rms", "displacement_max", "displacement_rms"])
def test_one_criterion_above_threshold_fails(name):
	values = {
		"force_max": CRITERIA.force_max,
		"force_rms": CRITERIA.force_rms,
		"displacement_max": CRITERIA.displacement_max,
		"displacement_rms": CRITERIA.displacement_rms,
	}
	values[name] = np.nextafter(values[name], np.inf)
	metrics = ConvergenceMetrics(criteria=CRITERIA, **values)
	assert not getattr(metrics, f"{name}_converged")
	assert not metrics.converged


def test_zero_vectors_converge():
	assert evaluate_convergence(np.zeros(3), np.zeros(3), CRITERIA).converged


def test_length_mismatch():
	with pytest.raises(DimensionMismatch):
		evaluate_convergence(np.zeros(3), np.zeros(6), CRITERIA)


def test_empty_vectors():
	with pytest.raises(DimensionMismatch):
		evaluate_convergence(np.zeros(0), np.zeros(0), CRITERIA)


@pytest.mark.parametrize("value", [0.0, -1e-4])
def test_thresholds_must_be_positive(value):
	with pytest.raises(InvalidConfiguration):
		ConvergenceCriteria(force_rms=value)
