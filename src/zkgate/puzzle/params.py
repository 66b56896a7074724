"""
Public Parameters for the Admission Puzzle

PuzzleParams fixes the sizes and the hash function of the puzzle.
The defaults are PINNED: changing them changes which solutions verify.
"""

from dataclasses import dataclass
from enum import Enum
import hashlib


class HashAlgorithm(Enum):
    """Hash functions usable for the puzzle digest. SHA512 is the default."""
    SHA256 = 'sha256'
    SHA512 = 'sha512'
    SHA3_512 = 'sha3_512'
    BLAKE2B = 'blake2b'

    def new(self):
        """Fresh hashlib object for this algorithm."""
        return hashlib.new(self.value)

    @property
    def digest_size(self) -> int:
        return self.new().digest_size


@dataclass(frozen=True)
class PuzzleParams:
    """
    Parameters shared by the salt generator, the verifier and the search.

    Verify(salt, solution, d) accepts iff
        len(salt) == salt_length
        len(solution) <= max_solution_size
        lzb(H(salt || solution)) >= d
    """

    salt_length: int = 32
    """Exact salt length in bytes."""

    max_solution_size: int = 128
    """Longest accepted solution in bytes."""

    seed_size: int = 64
    """Random bytes seeding each search worker's starting nonce."""

    algorithm: HashAlgorithm = HashAlgorithm.SHA512
    """
    Digest used for the difficulty check.

    SHA512 is the pinned default. Solutions found under any other algorithm
    only verify with parameters naming that same algorithm, never against
    the default parameters.
    """

    def __post_init__(self):
        if self.salt_length <= 0:
            raise ValueError(f"salt_length must be positive, got {self.salt_length}")
        if self.max_solution_size <= 0:
            raise ValueError(f"max_solution_size must be positive, got {self.max_solution_size}")
        # Leave headroom so incrementing the nonce never outgrows the limit
        if not 0 < self.seed_size < self.max_solution_size:
            raise ValueError(
                f"seed_size must be in (0, {self.max_solution_size}), got {self.seed_size}"
            )

    @property
    def digest_bits(self) -> int:
        """Upper bound on any achievable difficulty."""
        return self.algorithm.digest_size * 8

    def serialize(self) -> bytes:
        """
        Canonical serialization.

        Format:
            salt_length(2) || max_solution_size(2) || seed_size(2) ||
            algorithm_len(1) || algorithm
        """
        name = self.algorithm.value.encode('utf-8')
        return b''.join([
            self.salt_length.to_bytes(2, 'big'),
            self.max_solution_size.to_bytes(2, 'big'),
            self.seed_size.to_bytes(2, 'big'),
            len(name).to_bytes(1, 'big'),
            name,
        ])


DEFAULT_PARAMS = PuzzleParams()
