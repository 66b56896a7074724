"""
Admission Puzzle

Leading-zero-bit proof of work used as an anti-spam check.

Main API:
    new_salt() -> bytes
    verify(salt, solution, difficulty) -> bool
    search(salt, difficulty, workers) -> SearchResult

Example:
    >>> from zkgate.puzzle import new_salt, search, verify
    >>> salt = new_salt()
    >>> solution, attempts = search(salt, difficulty=8, workers=2)
    >>> assert verify(salt, solution, 8)
"""

from .params import PuzzleParams, HashAlgorithm, DEFAULT_PARAMS
from .work import (
    new_salt,
    verify,
    leading_zero_bits,
    solution_digest,
    encode_nonce,
    random_bytes,
)
from .search import search, SearchResult

__all__ = [
    'PuzzleParams',
    'HashAlgorithm',
    'DEFAULT_PARAMS',
    'new_salt',
    'verify',
    'leading_zero_bits',
    'solution_digest',
    'encode_nonce',
    'random_bytes',
    'search',
    'SearchResult',
]
