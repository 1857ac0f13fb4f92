"""
===============================================================================
QUATERNION ALGEBRA
===============================================================================
Quaternions, a 4-tuple number system extending the complex numbers, as an
immutable value type with the basic calculus operations.

Unary operations have the form x.op() and binary operations x.op(y), where
x is the left and y the right operand. Neither operand is changed; every
method returns a new Quaternion or a float.

Examples
--------
>>> from quaternion_algebra import Quaternion
>>> x = Quaternion(1.0, 2.0, -3.0, -1.0)      # construction by components
>>> y = Quaternion.from_real(0.75)            # construction from a real
>>> inv = x.inverse()
>>> total = x + y
>>> prod = x * y

Submodules:
    core.constants   -- Version string, named components, tolerances
    core.quaternion  -- The Quaternion value type
    config           -- Numerical policy (YAML loading) and logging setup
===============================================================================
"""

from quaternion_algebra.core.constants import VERSION
from quaternion_algebra.config import (
    QuaternionConfig,
    get_config,
    load_config,
    set_config,
    setup_logging,
)
from quaternion_algebra.core.quaternion import I, J, K, ONE, ZERO, Quaternion

__version__ = VERSION

__all__ = [
    "__version__",
    "VERSION",
    # Value type
    "Quaternion",
    "ZERO",
    "ONE",
    "I",
    "J",
    "K",
    # Configuration
    "QuaternionConfig",
    "get_config",
    "set_config",
    "load_config",
    "setup_logging",
]
