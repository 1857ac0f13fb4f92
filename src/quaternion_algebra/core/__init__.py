"""
===============================================================================
QUATERNION ALGEBRA - Core Module
===============================================================================
The quaternion value type and its constants.

Submodules:
    constants   -- Version string, named quaternion components, tolerances
    quaternion  -- Immutable Quaternion value type and its operation set
===============================================================================
"""
