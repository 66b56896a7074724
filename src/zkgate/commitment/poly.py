"""
Integer Polynomials

Provides:
- Immutable polynomials with arbitrary-precision integer coefficients
- Shifted evaluation used by the commitment proofs
- Coefficient-wise algebra (add, subtract, scale)
- Random polynomials bounded by a nominal modulus
"""

from typing import Iterable, Optional, Tuple
import secrets

from ..errors import EntropySourceError, InvalidInput
from .params import CommitmentParams, DEFAULT_PARAMS


class Polynomial:
    """
    Polynomial with integer coefficients.

    coefficients[0] is the lowest-order coefficient. See evaluate() for
    the power each coefficient is paired with.
    """

    __slots__ = ('_coeffs',)

    def __init__(self, coefficients: Iterable[int]):
        """
        Create polynomial from coefficients.

        Args:
            coefficients: [c_0, c_1, ..., c_n], at least one entry
        """
        coeffs = tuple(int(c) for c in coefficients)
        if not coeffs:
            raise InvalidInput("Polynomial needs at least one coefficient")
        self._coeffs = coeffs

    @property
    def coefficients(self) -> Tuple[int, ...]:
        return self._coeffs

    @property
    def degree(self) -> int:
        """Index of the highest coefficient (trailing zeros included)."""
        return len(self._coeffs) - 1

    def __len__(self) -> int:
        return len(self._coeffs)

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate(self, x: int) -> int:
        """
        Evaluate at x with exact integer arithmetic.

        The running power starts at x, not 1, so the result is

            c_0*x + c_1*x^2 + ... + c_n*x^(n+1)

        rather than the textbook c_0 + c_1*x + ... . Existing proofs depend
        on this shift; do not change it.
        """
        result = 0
        power = x
        for c in self._coeffs:
            result += c * power
            power *= x
        return result

    def evaluate_mod(self, x: int, modulus: int) -> int:
        """
        Same sum as evaluate(), reduced mod `modulus` after every step.

        Equal to evaluate(x) % modulus but keeps intermediates bounded.
        """
        if modulus < 1:
            raise InvalidInput(f"Modulus must be positive, got {modulus}")
        x %= modulus
        result = 0
        power = x
        for c in self._coeffs:
            result = (result + c * power) % modulus
            power = (power * x) % modulus
        return result

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def _zip_longest(self, other: 'Polynomial'):
        n = max(len(self._coeffs), len(other._coeffs))
        a = self._coeffs + (0,) * (n - len(self._coeffs))
        b = other._coeffs + (0,) * (n - len(other._coeffs))
        return zip(a, b)

    def __add__(self, other: 'Polynomial') -> 'Polynomial':
        """Add coefficient-wise."""
        return Polynomial(a + b for a, b in self._zip_longest(other))

    def __sub__(self, other: 'Polynomial') -> 'Polynomial':
        """Subtract coefficient-wise."""
        return Polynomial(a - b for a, b in self._zip_longest(other))

    def __neg__(self) -> 'Polynomial':
        return Polynomial(-c for c in self._coeffs)

    def scale(self, k: int) -> 'Polynomial':
        """Multiply every coefficient by k."""
        return Polynomial(c * k for c in self._coeffs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return False
        return self._coeffs == other._coeffs

    def __hash__(self) -> int:
        return hash(self._coeffs)

    def __repr__(self) -> str:
        return f"Polynomial({list(self._coeffs)})"


def random_polynomial(params: Optional[CommitmentParams] = None) -> Polynomial:
    """
    Draw degree + 1 coefficients uniformly from [0, modulus).

    Raises:
        EntropySourceError: the CSPRNG is unavailable
    """
    params = params or DEFAULT_PARAMS
    try:
        coeffs = [secrets.randbelow(params.modulus) for _ in range(params.num_coefficients)]
    except (OSError, NotImplementedError) as exc:
        raise EntropySourceError(f"randomness source unavailable: {exc}") from exc
    return Polynomial(coeffs)
