"""
Error Taxonomy

ZkGateError
├── InvalidInput        malformed arguments (also a ValueError)
├── ProofMismatch       challenge/response failed re-derivation
└── EntropySourceError  the OS randomness source failed

Puzzle verification never raises: malformed salts and oversized solutions
collapse into a plain False result.
"""

from typing import Optional


class ZkGateError(Exception):
    """Base class for all zkgate errors."""


class InvalidInput(ZkGateError, ValueError):
    """Argument rejected before any hashing took place."""


class ProofMismatch(ZkGateError):
    """
    A (challenge, response) pair does not match the restated statement.

    `reason` is "challenge" when the re-derived challenge differs and
    "response" when the polynomial evaluation differs.
    """

    def __init__(self, reason: str, challenge: Optional[int] = None):
        self.reason = reason
        self.challenge = challenge
        super().__init__(f"invalid proof: {reason} mismatch")


class EntropySourceError(ZkGateError):
    """The system randomness source is unavailable."""
