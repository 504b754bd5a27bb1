"""Numeric constants shared by the pricing and swap engines.

Centralizes integer bounds, fixed-point scales and solver limits.
"""

# Integer bounds for the on-chain integer widths
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1

# 64.64 fixed-point unit (1.0 == 2^64)
Q64 = 2**64

# 18-decimal fixed-point unit used by the stable curve
ONE_18 = 10**18

# Fees are integers where 300 == 0.30%
FEE_DENOMINATOR = 100_000

# Newton-Raphson bounds for the stable curve (per swap simulation)
STABLE_MAX_ITERATIONS = 255
STABLE_CONVERGENCE_TOLERANCE = 1

# Default number of entries requested per discovery page
DEFAULT_DISCOVERY_STEP = 766
DEFAULT_MAX_CONCURRENT_PAGES = 8
