"""
zkgate: Admission Puzzles and Commitment Proofs

Two independent primitives for gating ledger operations:

- Puzzle: leading-zero-bit proof of work over SHA-512(salt || solution),
  with a multi-worker search.
- Commitment: Fiat-Shamir challenge-response over a secret integer
  polynomial, binding a sender key, a receiver key and a commitment.

Usage:
    from zkgate import new_salt, search, verify

    salt = new_salt()
    solution, attempts = search(salt, difficulty=12, workers=4)
    assert verify(salt, solution, 12)

    from zkgate import CommitmentProofEngine, commit_value

    engine = CommitmentProofEngine.random()
    challenge, response = engine.generate_proof(sender, receiver, commit_value(100))
    engine.verify_proof(sender, receiver, commit_value(100), challenge, response)
"""

# Errors
from .errors import ZkGateError, InvalidInput, ProofMismatch, EntropySourceError

# Puzzle
from .puzzle import (
    PuzzleParams,
    HashAlgorithm,
    new_salt,
    verify,
    search,
    SearchResult,
    leading_zero_bits,
    solution_digest,
    encode_nonce,
)

# Commitment proofs
from .commitment import (
    CommitmentParams,
    Polynomial,
    random_polynomial,
    CommitmentProof,
    CommitmentProofEngine,
    build_statement,
    derive_challenge,
    commitment_bytes,
    commit_value,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "ZkGateError",
    "InvalidInput",
    "ProofMismatch",
    "EntropySourceError",
    # Puzzle
    "PuzzleParams",
    "HashAlgorithm",
    "new_salt",
    "verify",
    "search",
    "SearchResult",
    "leading_zero_bits",
    "solution_digest",
    "encode_nonce",
    # Commitment proofs
    "CommitmentParams",
    "Polynomial",
    "random_polynomial",
    "CommitmentProof",
    "CommitmentProofEngine",
    "build_statement",
    "derive_challenge",
    "commitment_bytes",
    "commit_value",
]
