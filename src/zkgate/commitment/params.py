"""
Parameters for commitment polynomials.

The modulus only bounds freshly drawn coefficients. Evaluation itself
uses unbounded integers (see Polynomial.evaluate).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitmentParams:
    """Nominal field description for random polynomials."""

    modulus: int = 256
    """Coefficients are drawn from [0, modulus)."""

    degree: int = 3
    """Polynomial degree; degree + 1 coefficients are drawn."""

    def __post_init__(self):
        if self.modulus < 2:
            raise ValueError(f"Modulus must be at least 2, got {self.modulus}")
        if self.degree < 0:
            raise ValueError(f"Degree must be non-negative, got {self.degree}")

    @property
    def num_coefficients(self) -> int:
        return self.degree + 1


DEFAULT_PARAMS = CommitmentParams()
