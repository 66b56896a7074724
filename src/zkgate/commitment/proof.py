"""
Commitment Challenge-Response Proofs

Fiat-Shamir style: the challenge is derived from the statement

    statement = sender_key (32) || receiver_key (32) || commitment
    challenge = int(SHA-256(statement), big-endian)
    response  = P.evaluate(challenge)

Verification re-derives the challenge from the restated inputs and
re-evaluates P.

SECURITY NOTE: this is challenge-response authentication, not a
zero-knowledge proof. The polynomial acts as a shared secret key:
anyone holding it can produce valid proofs for any statement, and the
response reveals an evaluation of it. Nothing about the committed value
is hidden beyond what the commitment itself hides.
"""

from dataclasses import dataclass
from typing import Optional, Union
import hashlib
import logging

from ..errors import InvalidInput, ProofMismatch
from .params import CommitmentParams, DEFAULT_PARAMS
from .poly import Polynomial, random_polynomial


logger = logging.getLogger(__name__)

PUBLIC_KEY_LENGTH = 32

Commitment = Union[bytes, int]


def commitment_bytes(commitment: Commitment) -> bytes:
    """
    Byte form of a commitment.

    Raw bytes pass through. Integers use their minimal big-endian
    encoding (0 encodes as b'').
    """
    if isinstance(commitment, (bytes, bytearray, memoryview)):
        return bytes(commitment)
    if isinstance(commitment, int):
        if commitment < 0:
            raise InvalidInput(f"Commitment must be non-negative, got {commitment}")
        return commitment.to_bytes((commitment.bit_length() + 7) // 8, 'big')
    raise InvalidInput(f"Unsupported commitment type: {type(commitment).__name__}")


def commit_value(value: int) -> bytes:
    """Commit to a non-negative amount: SHA-256 of its big-endian bytes."""
    return hashlib.sha256(commitment_bytes(value)).digest()


def build_statement(sender_key: bytes, receiver_key: bytes, commitment: Commitment) -> bytes:
    """sender_key || receiver_key || commitment."""
    for role, key in (('sender', sender_key), ('receiver', receiver_key)):
        if len(key) != PUBLIC_KEY_LENGTH:
            raise InvalidInput(f"{role} key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)}")
    return b''.join([bytes(sender_key), bytes(receiver_key), commitment_bytes(commitment)])


def derive_challenge(statement: bytes) -> int:
    """SHA-256 of the statement as a big-endian integer."""
    return int.from_bytes(hashlib.sha256(statement).digest(), 'big')


def _int_to_signed(n: int) -> bytes:
    return n.to_bytes(n.bit_length() // 8 + 1, 'big', signed=True)


@dataclass(frozen=True)
class CommitmentProof:
    """A (challenge, response) pair. Unpacks as a 2-tuple."""

    challenge: int
    response: int

    def __iter__(self):
        return iter((self.challenge, self.response))

    def serialize(self) -> bytes:
        """
        Format:
            challenge_len(4) || challenge || response_len(4) || response

        Both integers are signed big-endian.
        """
        c = _int_to_signed(self.challenge)
        r = _int_to_signed(self.response)
        return b''.join([
            len(c).to_bytes(4, 'big'), c,
            len(r).to_bytes(4, 'big'), r,
        ])

    @classmethod
    def deserialize(cls, data: bytes) -> 'CommitmentProof':
        """Inverse of serialize(); rejects truncated or trailing data."""
        values = []
        offset = 0
        for _ in range(2):
            if len(data) < offset + 4:
                raise InvalidInput("Truncated proof length prefix")
            n = int.from_bytes(data[offset:offset + 4], 'big')
            offset += 4
            if len(data) < offset + n:
                raise InvalidInput("Truncated proof value")
            values.append(int.from_bytes(data[offset:offset + n], 'big', signed=True))
            offset += n
        if offset != len(data):
            raise InvalidInput(f"Trailing bytes in proof: {len(data) - offset}")
        return cls(challenge=values[0], response=values[1])


class CommitmentProofEngine:
    """
    Prover and verifier bound to one secret polynomial.

    `modulus` records the range the coefficients were drawn from; it does
    not affect evaluation.
    """

    def __init__(self, modulus: int, polynomial: Polynomial):
        self._modulus = modulus
        self._polynomial = polynomial

    @classmethod
    def random(cls, params: Optional[CommitmentParams] = None) -> 'CommitmentProofEngine':
        """Engine over a freshly drawn random polynomial."""
        params = params or DEFAULT_PARAMS
        return cls(params.modulus, random_polynomial(params))

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def polynomial(self) -> Polynomial:
        return self._polynomial

    def generate_proof(
        self,
        sender_key: bytes,
        receiver_key: bytes,
        commitment: Commitment
    ) -> CommitmentProof:
        """
        Prove knowledge of the polynomial for (sender, receiver, commitment).

        Returns:
            CommitmentProof(challenge, response)
        """
        challenge = derive_challenge(build_statement(sender_key, receiver_key, commitment))
        response = self._polynomial.evaluate(challenge)
        logger.debug("generated proof, challenge=%x...", challenge >> 224)
        return CommitmentProof(challenge=challenge, response=response)

    def verify_proof(
        self,
        sender_key: bytes,
        receiver_key: bytes,
        commitment: Commitment,
        challenge: int,
        response: int
    ):
        """
        Check a proof against the restated statement.

        Keys must be passed in the same roles used at generation.

        Raises:
            ProofMismatch: challenge or response does not match
            InvalidInput: malformed key or commitment
        """
        expected = derive_challenge(build_statement(sender_key, receiver_key, commitment))
        if expected != challenge:
            logger.warning("proof rejected: challenge mismatch (expected %x...)", expected >> 224)
            raise ProofMismatch("challenge", challenge)
        if self._polynomial.evaluate(expected) != response:
            logger.warning("proof rejected: response mismatch (challenge %x...)", expected >> 224)
            raise ProofMismatch("response", challenge)

    def __repr__(self) -> str:
        return f"CommitmentProofEngine(modulus={self._modulus}, degree={self._polynomial.degree})"
