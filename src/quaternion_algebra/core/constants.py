"""
===============================================================================
QUATERNION ALGEBRA - Library Constants
===============================================================================
Version metadata, the component tuples of the named quaternions, and the
default numerical tolerances shared by the value type and the configuration
layer.
===============================================================================
"""

import numpy as np


# =============================================================================
# VERSION
# =============================================================================
VERSION = "0.1"

# =============================================================================
# NAMED QUATERNIONS (r, i, j, k)
# =============================================================================
ZERO_COMPONENTS = (0.0, 0.0, 0.0, 0.0)
ONE_COMPONENTS = (1.0, 0.0, 0.0, 0.0)
I_COMPONENTS = (0.0, 1.0, 0.0, 0.0)
J_COMPONENTS = (0.0, 0.0, 1.0, 0.0)
K_COMPONENTS = (0.0, 0.0, 0.0, 1.0)

NAN_COMPONENTS = (np.nan, np.nan, np.nan, np.nan)

# =============================================================================
# NUMERICAL DEFAULTS
# =============================================================================
DEFAULT_COMPARISON_TOLERANCE = 1e-9    # absolute, per component
HASH_DECIMALS = 8                      # fixed for the lifetime of a value

# Behaviour of log() for the zero quaternion
LOG_ZERO_RAISE = "raise"
LOG_ZERO_RETURN_ZERO = "zero"
LOG_ZERO_RETURN_NAN = "nan"
LOG_ZERO_POLICIES = (LOG_ZERO_RAISE, LOG_ZERO_RETURN_ZERO, LOG_ZERO_RETURN_NAN)
DEFAULT_LOG_ZERO_POLICY = LOG_ZERO_RAISE
