"""
Salt Generation and Solution Verification

A solution is accepted when H(salt || solution) starts with at least
`difficulty` zero bits. Every malformed input is simply "not a solution":
verify() returns False instead of raising.
"""

from typing import Optional
import secrets

from ..errors import EntropySourceError
from .params import PuzzleParams, DEFAULT_PARAMS


BITS_PER_BYTE = 8


def random_bytes(n: int) -> bytes:
    """Read n bytes from the OS CSPRNG."""
    try:
        return secrets.token_bytes(n)
    except (OSError, NotImplementedError) as exc:
        raise EntropySourceError(f"randomness source unavailable: {exc}") from exc


def new_salt(params: Optional[PuzzleParams] = None) -> bytes:
    """Fresh random salt for a single puzzle instance."""
    params = params or DEFAULT_PARAMS
    return random_bytes(params.salt_length)


def encode_nonce(nonce: int) -> bytes:
    """Minimal big-endian encoding (0 encodes as b'')."""
    return nonce.to_bytes((nonce.bit_length() + 7) // 8, 'big')


def leading_zero_bits(digest: bytes) -> int:
    """
    Count zero bits from the most significant bit of digest[0].

    Whole zero bytes contribute 8 each; the first non-zero byte
    contributes its own leading zeros and ends the scan.
    """
    zeros = 0
    for byte in digest:
        if byte == 0:
            zeros += BITS_PER_BYTE
            continue
        zeros += BITS_PER_BYTE - byte.bit_length()
        break
    return zeros


def solution_digest(salt: bytes, solution: bytes, params: Optional[PuzzleParams] = None) -> bytes:
    """H(salt || solution) with the configured algorithm."""
    params = params or DEFAULT_PARAMS
    h = params.algorithm.new()
    h.update(salt)
    h.update(solution)
    return h.digest()


def verify(
    salt: bytes,
    solution: bytes,
    difficulty: int,
    params: Optional[PuzzleParams] = None
) -> bool:
    """
    Check a (salt, solution, difficulty) triple.

    Args:
        salt: Puzzle salt, exactly params.salt_length bytes
        solution: Candidate nonce bytes, at most params.max_solution_size
        difficulty: Required leading zero bits

    Returns:
        True iff the inputs are well formed and the digest meets difficulty
    """
    params = params or DEFAULT_PARAMS
    if len(salt) != params.salt_length:
        return False
    if len(solution) > params.max_solution_size:
        return False
    if difficulty < 0:
        return False
    return leading_zero_bits(solution_digest(salt, solution, params)) >= difficulty
