# The variable SYMMETRY_TOL controls the precision used when comparing atomic
# positions. Two positions are considered equivalent when the norm of their
# minimum image difference in fractional coordinates is at most SYMMETRY_TOL.
SYMMETRY_TOL = 1e-5  # unit: fraction of a lattice vector

# Negative angle tolerance means that the default of the symmetry routines is
# used.
ANGLE_TOLERANCE = -1.0  # unit: degrees

# The tolerance is multiplied with this factor every time a search attempt
# fails.
REDUCE_RATE = 0.95

# The maximum number of attempts for each of the iterative searches.
NUM_ATTEMPT = 20

# Relative positions closer than this to zero or unity are wrapped to zero.
WRAP_PRECISION = 1e-5
