"""
===============================================================================
QUATERNION ALGEBRA - Quaternion Value Type
===============================================================================

Immutable quaternion value type with the basic hypercomplex calculus:
conjugation, quadratic norm, magnitude, signum, inverse, exponential and
logarithm, plus the component-wise sum and difference, the Hamilton product,
the scalar (dot) product and the vector cross product.

Convention
----------
Components are stored scalar-first:

    q = (r, i, j, k) = r + i*i_hat + j*j_hat + k*k_hat

where r is the real part and (i, j, k) is the imaginary (vector) part.
No unit-norm constraint is imposed: any four reals form a valid quaternion,
including the all-zero one.

Every operation returns a new Quaternion. Operands are never modified; the
internal numpy buffer is read-only, so an accidental in-place write raises.

Degenerate inputs
-----------------
    signum(0), inverse(0)  -> zero quaternion (no division is attempted)
    exp(q), log(q) with a zero vector part -> the real exp/log only
    log(0)                 -> governed by the configured log_zero_policy:
                              ValueError (default), zero, or NaN

Branch of the logarithm
-----------------------
The quaternion logarithm is multivalued. log() returns the principal value,
whose vector part has magnitude in [0, pi]. Consequently q.log().exp() == q
always holds for q != 0, while q.exp().log() == q only holds when the
vector part of q has magnitude below pi.

References
----------
    [1] Hamilton, "On Quaternions", Philosophical Magazine, 1844.
    [2] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.
    [3] Dam, Koch & Lillholm, "Quaternions, Interpolation and Animation",
        DIKU-TR-98/5, 1998, Sec. 6.

===============================================================================
"""

import logging
from typing import Optional, Union

import numpy as np

from quaternion_algebra.config import get_config
from quaternion_algebra.core.constants import (
    HASH_DECIMALS,
    I_COMPONENTS,
    J_COMPONENTS,
    K_COMPONENTS,
    LOG_ZERO_POLICIES,
    LOG_ZERO_RETURN_NAN,
    LOG_ZERO_RETURN_ZERO,
    NAN_COMPONENTS,
    ONE_COMPONENTS,
    ZERO_COMPONENTS,
)

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (int, float, np.integer, np.floating)


class Quaternion:
    """
    Quaternion r + i*i_hat + j*j_hat + k*k_hat over double-precision floats.

    Attributes
    ----------
    r : float
        Real (scalar) component.
    i : float
        First imaginary component.
    j : float
        Second imaginary component.
    k : float
        Third imaginary component.

    Examples
    --------
    >>> x = Quaternion(1.0, 2.0, -0.5, -1.0)
    >>> y = Quaternion.from_real(0.75)
    >>> x.inverse() * x == Quaternion.one()
    True
    >>> (x + y).real()
    1.75
    """

    __slots__ = ('_q',)

    # Let numpy defer to our reflected operators (np.float64(2) * q).
    __array_ufunc__ = None

    def __init__(self, r: float, i: float, j: float, k: float) -> None:
        """
        Initialize a quaternion from its four components.

        Parameters
        ----------
        r : float
            Real part.
        i, j, k : float
            Imaginary components.
        """
        q = np.array([r, i, j, k], dtype=np.float64)
        q.flags.writeable = False
        self._q = q

    # =========================================================================
    # PROPERTIES - Read access to components
    # =========================================================================

    @property
    def r(self) -> float:
        """Real component."""
        return float(self._q[0])

    @property
    def i(self) -> float:
        """First imaginary component."""
        return float(self._q[1])

    @property
    def j(self) -> float:
        """Second imaginary component."""
        return float(self._q[2])

    @property
    def k(self) -> float:
        """Third imaginary component."""
        return float(self._q[3])

    @property
    def vector(self) -> np.ndarray:
        """Copy of the imaginary part as a 3-element array [i, j, k]."""
        return self._q[1:4].copy()

    @property
    def components(self) -> np.ndarray:
        """Copy of all four components as an array [r, i, j, k]."""
        return self._q.copy()

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def from_real(a: float) -> 'Quaternion':
        """
        Embed a real number as the quaternion (a, 0, 0, 0).

        Parameters
        ----------
        a : float
            Real value.

        Returns
        -------
        Quaternion
            Real quaternion with zero imaginary part.
        """
        return Quaternion(a, 0.0, 0.0, 0.0)

    @staticmethod
    def from_array(arr) -> 'Quaternion':
        """
        Build a quaternion from a 4-element array-like [r, i, j, k].

        Raises
        ------
        ValueError
            If arr does not have shape (4,).
        """
        q = np.asarray(arr, dtype=np.float64)
        if q.shape != (4,):
            raise ValueError(
                f"Quaternion array must have shape (4,), got {q.shape}"
            )
        return Quaternion(q[0], q[1], q[2], q[3])

    @staticmethod
    def zero() -> 'Quaternion':
        """The zero quaternion (0, 0, 0, 0)."""
        return Quaternion(*ZERO_COMPONENTS)

    @staticmethod
    def one() -> 'Quaternion':
        """The real unit (1, 0, 0, 0), the multiplicative identity."""
        return Quaternion(*ONE_COMPONENTS)

    @staticmethod
    def unit_i() -> 'Quaternion':
        """The imaginary unit i = (0, 1, 0, 0)."""
        return Quaternion(*I_COMPONENTS)

    @staticmethod
    def unit_j() -> 'Quaternion':
        """The imaginary unit j = (0, 0, 1, 0)."""
        return Quaternion(*J_COMPONENTS)

    @staticmethod
    def unit_k() -> 'Quaternion':
        """The imaginary unit k = (0, 0, 0, 1)."""
        return Quaternion(*K_COMPONENTS)

    # =========================================================================
    # UNARY OPERATIONS
    # =========================================================================

    def conjugate(self) -> 'Quaternion':
        """
        Return the conjugate (r, -i, -j, -k).

        The conjugate is an anti-automorphism: (p*q)* = q* * p*.
        """
        return Quaternion(self._q[0], -self._q[1], -self._q[2], -self._q[3])

    def norm(self) -> float:
        """
        Quadratic norm r^2 + i^2 + j^2 + k^2.

        This is the squared Euclidean length; see magnitude() for the
        length itself.
        """
        return float(np.dot(self._q, self._q))

    def magnitude(self) -> float:
        """
        Absolute value sqrt(r^2 + i^2 + j^2 + k^2).

        Also known as length, modulus or (Euclidean) norm. Available via
        the builtin abs() as well. Computed with scaling, so it stays finite
        and non-zero wherever the true length does, even when norm() over-
        or underflows.
        """
        return _length(self._q)

    def real(self) -> float:
        """Real part as a float."""
        return float(self._q[0])

    def imag(self) -> 'Quaternion':
        """Imaginary part as the quaternion (0, i, j, k)."""
        return Quaternion(0.0, self._q[1], self._q[2], self._q[3])

    def signum(self) -> 'Quaternion':
        """
        Return q / |q|, the unit quaternion pointing in the direction of q.

        Returns
        -------
        Quaternion
            A quaternion of magnitude 1, or the zero quaternion when q is
            exactly zero.
        """
        if self.is_zero():
            logger.debug("signum() of the zero quaternion; returning zero")
            return Quaternion.zero()

        q = self._q / _length(self._q)
        return Quaternion(q[0], q[1], q[2], q[3])

    def inverse(self) -> 'Quaternion':
        """
        Return the multiplicative inverse q^{-1} = q* / norm(q).

        For q != 0 the inverse satisfies q * q^{-1} = q^{-1} * q = 1.

        Returns
        -------
        Quaternion
            The inverse, or the zero quaternion when q is exactly zero.
        """
        if self.is_zero():
            logger.debug("inverse() of the zero quaternion; returning zero")
            return Quaternion.zero()

        # Divide by |q| twice instead of by norm(q), which may over/underflow
        abs_q = _length(self._q)
        q = self.conjugate()._q / abs_q / abs_q
        return Quaternion(q[0], q[1], q[2], q[3])

    def exp(self) -> 'Quaternion':
        """
        Quaternion exponential e^q.

        Writing q = r + u*n with u = |(i, j, k)| and n the unit vector part:

            e^q = e^r * (cos(u) + n * sin(u))

        When the vector part vanishes (u == 0) this reduces to the real
        exponential (e^r, 0, 0, 0).

        Returns
        -------
        Quaternion
            The exponential of q.
        """
        exp_r = np.exp(self._q[0])
        vec = self._q[1:4]
        u = _length(vec)

        if u == 0.0:
            return Quaternion(exp_r, 0.0, 0.0, 0.0)

        img_factor = exp_r * np.sin(u) / u
        return Quaternion(exp_r * np.cos(u),
                          img_factor * vec[0],
                          img_factor * vec[1],
                          img_factor * vec[2])

    def log(self, zero_policy: Optional[str] = None) -> 'Quaternion':
        """
        Principal natural logarithm ln(q).

        With |q| the magnitude and u = |(i, j, k)|:

            ln(q) = ln|q| + n * acos(r / |q|)     with n = (i, j, k) / u

        When u == 0 the vector part of the result is zero and only ln|q|
        remains; for a negative real q this is ln|r|, not ln|r| + pi*n,
        since the axis n is undefined.

        The vector part of the result has magnitude in [0, pi], so
        q.exp().log() recovers q only when q's vector magnitude is below pi.

        Parameters
        ----------
        zero_policy : str, optional
            Handling of the zero quaternion, where ln|q| is undefined:
            "raise" raises ValueError, "zero" returns the zero quaternion,
            "nan" returns a quaternion of NaNs. Defaults to the active
            configuration's log_zero_policy.

        Returns
        -------
        Quaternion
            The principal logarithm of q.

        Raises
        ------
        ValueError
            If q is zero under the "raise" policy, or zero_policy is unknown.
        """
        if zero_policy is None:
            zero_policy = get_config().log_zero_policy
        elif zero_policy not in LOG_ZERO_POLICIES:
            raise ValueError(
                f"zero_policy must be one of {LOG_ZERO_POLICIES}, "
                f"got {zero_policy!r}"
            )

        if self.is_zero():
            logger.debug("log() of the zero quaternion under policy %r",
                         zero_policy)
            if zero_policy == LOG_ZERO_RETURN_ZERO:
                return Quaternion.zero()
            if zero_policy == LOG_ZERO_RETURN_NAN:
                return Quaternion(*NAN_COMPONENTS)
            raise ValueError(
                "Logarithm of the zero quaternion is undefined "
                f"(log_zero_policy={zero_policy!r})"
            )

        vec = self._q[1:4]
        abs_q = _length(self._q)
        log_abs = np.log(abs_q)
        u = _length(vec)

        if u == 0.0:
            return Quaternion(log_abs, 0.0, 0.0, 0.0)

        # Clamp to [-1, 1] to protect against floating-point overshoot in arccos
        img_factor = np.arccos(np.clip(self._q[0] / abs_q, -1.0, 1.0)) / u
        return Quaternion(log_abs,
                          img_factor * vec[0],
                          img_factor * vec[1],
                          img_factor * vec[2])

    # =========================================================================
    # BINARY OPERATIONS
    # =========================================================================

    def add(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise sum self + other."""
        _check_quaternion(other, 'add')
        q = self._q + other._q
        return Quaternion(q[0], q[1], q[2], q[3])

    def subtract(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise difference self - other."""
        _check_quaternion(other, 'subtract')
        q = self._q - other._q
        return Quaternion(q[0], q[1], q[2], q[3])

    def multiply(self, other: 'Quaternion') -> 'Quaternion':
        """
        Hamilton product self * other.

        Quaternion multiplication is NOT commutative: p * q != q * p
        in general (i * j = k but j * i = -k).

        The Hamilton product formula is:

            (a1 + b1*i + c1*j + d1*k) * (a2 + b2*i + c2*j + d2*k) =

            (a1*a2 - b1*b2 - c1*c2 - d1*d2) +
            (a1*b2 + b1*a2 + c1*d2 - d1*c2) i +
            (a1*c2 - b1*d2 + c1*a2 + d1*b2) j +
            (a1*d2 + b1*c2 - c1*b2 + d1*a2) k

        Parameters
        ----------
        other : Quaternion
            The right-hand quaternion in the product.

        Returns
        -------
        Quaternion
            The Hamilton product self * other.
        """
        _check_quaternion(other, 'multiply')
        a1, b1, c1, d1 = self._q
        a2, b2, c2, d2 = other._q

        r = a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2
        i = a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2
        j = a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2
        k = a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2

        return Quaternion(r, i, j, k)

    def scalar_product(self, other: 'Quaternion') -> float:
        """Scalar (dot) product of the two 4-tuples, a real number."""
        _check_quaternion(other, 'scalar_product')
        return float(np.dot(self._q, other._q))

    def cross_product(self, other: 'Quaternion') -> 'Quaternion':
        """
        Cross product of the vector parts.

        The real parts are ignored and the real part of the result is
        always zero:

            (0, aj*bk - ak*bj, -ai*bk + ak*bi, ai*bj - aj*bi)
        """
        _check_quaternion(other, 'cross_product')
        v = np.cross(self._q[1:4], other._q[1:4])
        return Quaternion(0.0, v[0], v[1], v[2])

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other: Union['Quaternion', float, int]) -> 'Quaternion':
        """
        Multiplication operator.

        - Quaternion * Quaternion -> Hamilton product
        - Quaternion * scalar -> component-wise scaling
        """
        if isinstance(other, Quaternion):
            return self.multiply(other)
        elif isinstance(other, _SCALAR_TYPES):
            q = self._q * float(other)
            return Quaternion(q[0], q[1], q[2], q[3])
        return NotImplemented

    def __rmul__(self, other: Union[float, int]) -> 'Quaternion':
        """Right-multiplication by a scalar: scalar * Quaternion."""
        if isinstance(other, _SCALAR_TYPES):
            q = self._q * float(other)
            return Quaternion(q[0], q[1], q[2], q[3])
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        """Negate all four components."""
        return Quaternion(-self._q[0], -self._q[1], -self._q[2], -self._q[3])

    def __abs__(self) -> float:
        return self.magnitude()

    def __eq__(self, other: object) -> bool:
        """
        Equality within the configured comparison tolerance.

        See isclose() for the comparison rule.
        """
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.isclose(other)

    def __hash__(self) -> int:
        """
        Hash based on rounded components for use in sets/dicts.

        Rounding is fixed at HASH_DECIMALS so a value never changes hash.
        Two quaternions that are == but lie on either side of a rounding
        boundary (e.g. 4.9999999e-9 and 5.0000001e-9) still hash apart;
        tolerance-based equality cannot be made transitive.
        """
        # +0.0 folds -0.0 into the same bucket
        rounded = tuple(float(c) + 0.0 for c in np.round(self._q, decimals=HASH_DECIMALS))
        return hash(rounded)

    def __repr__(self) -> str:
        """
        Unambiguous string representation for debugging.

        Format: Quaternion(r=..., i=..., j=..., k=...)
        """
        return (f"Quaternion(r={self.r:+.8f}, i={self.i:+.8f}, "
                f"j={self.j:+.8f}, k={self.k:+.8f})")

    def __str__(self) -> str:
        """Algebraic form, e.g. '1.000000 + 2.000000i - 0.500000j - 1.000000k'."""
        text = f"{self.r:.6f}"
        for value, unit in zip(self._q[1:4], ('i', 'j', 'k')):
            sign = '-' if np.signbit(value) else '+'
            text += f" {sign} {abs(float(value)):.6f}{unit}"
        return text

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def isclose(self, other: 'Quaternion', tolerance: Optional[float] = None) -> bool:
        """
        Check component-wise closeness to another quaternion.

        Parameters
        ----------
        other : Quaternion
            Quaternion to compare against.
        tolerance : float, optional
            Maximum absolute difference allowed per component. Defaults to
            the active configuration's comparison_tolerance.

        Returns
        -------
        bool
            True if every component differs by less than the tolerance.
            NaN components never compare close.
        """
        _check_quaternion(other, 'isclose')
        if tolerance is None:
            tolerance = get_config().comparison_tolerance
        return bool(np.all(np.abs(self._q - other._q) < tolerance))

    def is_zero(self) -> bool:
        """True if all four components are exactly zero."""
        return not np.any(self._q)

    def copy(self) -> 'Quaternion':
        """Return an independent copy of this quaternion."""
        return Quaternion(self._q[0], self._q[1], self._q[2], self._q[3])


def _length(v: np.ndarray) -> float:
    """
    Euclidean length of v, scaled by its largest component.

    Plain sqrt(dot(v, v)) overflows above ~1e154 and underflows to zero
    below ~1e-162; scaling first keeps the result within one rounding
    error of the true length for every finite v.
    """
    scale = np.max(np.abs(v))
    if scale == 0.0 or not np.isfinite(scale):
        return float(np.sqrt(np.dot(v, v)))
    s = v / scale
    return float(scale * np.sqrt(np.dot(s, s)))


def _check_quaternion(value: object, operation: str) -> None:
    if not isinstance(value, Quaternion):
        raise TypeError(
            f"Quaternion.{operation}() expects a Quaternion, "
            f"got {type(value).__name__}"
        )


# =============================================================================
# NAMED CONSTANTS
# =============================================================================
ZERO = Quaternion.zero()
ONE = Quaternion.one()
I = Quaternion.unit_i()
J = Quaternion.unit_j()
K = Quaternion.unit_k()
