"""
Commitment Proofs

Challenge-response attestation over a secret integer polynomial.

Main API:
    engine = CommitmentProofEngine(modulus, Polynomial([...]))
    challenge, response = engine.generate_proof(sender, receiver, commitment)
    engine.verify_proof(sender, receiver, commitment, challenge, response)

Example:
    >>> from zkgate.commitment import CommitmentProofEngine, commit_value
    >>> engine = CommitmentProofEngine.random()
    >>> proof = engine.generate_proof(b'\\x01' * 32, b'\\x02' * 32, commit_value(100))
    >>> engine.verify_proof(b'\\x01' * 32, b'\\x02' * 32, commit_value(100), *proof)
"""

from .params import CommitmentParams, DEFAULT_PARAMS
from .poly import Polynomial, random_polynomial
from .proof import (
    CommitmentProof,
    CommitmentProofEngine,
    build_statement,
    derive_challenge,
    commitment_bytes,
    commit_value,
    PUBLIC_KEY_LENGTH,
)

__all__ = [
    'CommitmentParams',
    'DEFAULT_PARAMS',
    'Polynomial',
    'random_polynomial',
    'CommitmentProof',
    'CommitmentProofEngine',
    'build_statement',
    'derive_challenge',
    'commitment_bytes',
    'commit_value',
    'PUBLIC_KEY_LENGTH',
]
