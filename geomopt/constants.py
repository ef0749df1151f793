"""Default settings and unit conversions used by the optimizer."""

# Length conversion
ANGSTROM_TO_BOHR = 1.889725989

# Trust radius for a single Newton step (bohr)
MAX_STEP_SIZE = 0.3

# Convergence thresholds (hartree/bohr and bohr)
OPT_CONV_FORCEMAX = 0.00045
OPT_CONV_FORCERMS = 0.00030
OPT_CONV_DISPMAX = 0.00180
OPT_CONV_DISPRMS = 0.00120

DEFAULT_MAX_ITERATIONS = 100
