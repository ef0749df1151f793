import pytest

from geomopt.cli import main

H2_INPUT = """\
potential = harmonic
bond = 1 2 0.37 0.74
max_iterations = 50

geometry
H    0.0000    0.0000    0.0000
H    0.0000    0.0000    0.9000
end
"""


@pytest.fixture
def log_dir(tmp_path):
	return str(tmp_path / "logs")


def test_optimizes_input_file(tmp_path, log_dir, capsys):
	path = tmp_path / "h2.inp"
	path.write_text(H2_INPUT)

	assert main([str(path), "--log-dir", log_dir]) == 0

	out = capsys.readouterr().out
	assert "GEOMETRY OPTIMIZATION Step     1" in out
	assert "OPTIMIZED GEOMETRY" in out
	assert "Final Energy:" in out
	assert (tmp_path / "logs").is_dir()


def test_quiet_skips_step_report(tmp_path, log_dir, capsys):
	path = tmp_path / "h2.inp"
	path.write_text(H2_INPUT)

	assert main([str(path), "--log-dir", log_dir, "--quiet"]) == 0

	out = capsys.readouterr().out
	assert "GEOMETRY OPTIMIZATION Step" not in out
	assert "Number of Iterations:" in out


def test_budget_exhaustion_reported(tmp_path, log_dir, capsys):
	path = tmp_path / "h2.inp"
	path.write_text(H2_INPUT.replace("max_iterations = 50", "max_iterations = 1"))

	assert main([str(path), "--log-dir", log_dir, "--quiet"]) == 1
	assert "IterationBudgetExceeded" in capsys.readouterr().err


def test_missing_file(tmp_path, log_dir, capsys):
	assert main([str(tmp_path / "missing.inp"), "--log-dir", log_dir]) == 1
	assert capsys.readouterr().err.startswith("Error:")
