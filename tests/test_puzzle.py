"""
Tests for the Admission Puzzle

Covers:
- Leading zero bit accounting
- Verification predicate and its malformed-input contract
- Salt generation and entropy failures
- Parallel search
"""

import hashlib
import secrets
import threading

import pytest

from zkgate import EntropySourceError, InvalidInput
from zkgate.puzzle.search import _SolutionCell
from zkgate.puzzle import (
    PuzzleParams,
    HashAlgorithm,
    SearchResult,
    new_salt,
    verify,
    search,
    leading_zero_bits,
    solution_digest,
    encode_nonce,
)


class TestLeadingZeroBits:
    """Tests for bit-level difficulty accounting."""

    def test_no_leading_zeros(self):
        assert leading_zero_bits(b"\x80\x00") == 0

    def test_partial_first_byte(self):
        assert leading_zero_bits(b"\x01") == 7
        assert leading_zero_bits(b"\x0f\x00") == 4

    def test_whole_zero_bytes(self):
        """Zero bytes add 8 each, the first set byte ends the scan."""
        assert leading_zero_bits(b"\x00\x00\x80") == 16
        assert leading_zero_bits(b"\x00\x00\x01\x00") == 23

    def test_later_bytes_ignored(self):
        """Zeros after the first set bit do not count."""
        assert leading_zero_bits(b"\x40\x00\x00\x00") == 1

    def test_all_zero_digest(self):
        assert leading_zero_bits(b"\x00" * 64) == 512


class TestVerify:
    """Tests for the verification predicate."""

    def test_digest_is_sha512_of_concatenation(self):
        salt = bytes(range(32))
        assert solution_digest(salt, b"abc") == hashlib.sha512(salt + b"abc").digest()

    def test_difficulty_zero_always_passes(self):
        salt = new_salt()
        assert verify(salt, b"", 0)
        assert verify(salt, b"\xff" * 128, 0)

    def test_rejects_wrong_salt_length(self):
        """Malformed salts are rejected even at difficulty 0."""
        assert not verify(b"\x00" * 31, b"\x01", 0)
        assert not verify(b"\x00" * 33, b"\x01", 0)
        assert not verify(b"", b"\x01", 0)

    def test_rejects_oversized_solution(self):
        salt = new_salt()
        assert verify(salt, b"\x00" * 128, 0)
        assert not verify(salt, b"\x00" * 129, 0)

    def test_rejects_negative_difficulty(self):
        assert not verify(new_salt(), b"\x01", -1)

    def test_matches_leading_zero_count(self):
        """Accepts exactly up to the digest's leading zero count."""
        salt = b"\x07" * 32
        solution = b"\x2a"
        zeros = leading_zero_bits(solution_digest(salt, solution))
        assert verify(salt, solution, zeros)
        assert not verify(salt, solution, zeros + 1)

    def test_unreachable_difficulty(self):
        assert not verify(new_salt(), b"\x01", 513)

    def test_custom_params(self):
        params = PuzzleParams(salt_length=16, max_solution_size=8, seed_size=4)
        assert verify(b"\x00" * 16, b"\x01" * 8, 0, params)
        assert not verify(b"\x00" * 32, b"\x01", 0, params)
        assert not verify(b"\x00" * 16, b"\x01" * 9, 0, params)


class TestSalt:
    """Tests for salt generation."""

    def test_length(self):
        assert len(new_salt()) == 32

    def test_fresh_per_call(self):
        assert new_salt() != new_salt()

    def test_params_length(self):
        assert len(new_salt(PuzzleParams(salt_length=16, seed_size=8))) == 16

    def test_entropy_failure(self, monkeypatch):
        def broken(n):
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "token_bytes", broken)
        with pytest.raises(EntropySourceError):
            new_salt()


class TestEncodeNonce:
    """Tests for nonce encoding."""

    def test_zero_is_empty(self):
        assert encode_nonce(0) == b""

    def test_minimal_big_endian(self):
        assert encode_nonce(1) == b"\x01"
        assert encode_nonce(256) == b"\x01\x00"


class TestSearch:
    """Tests for parallel search."""

    def test_difficulty_zero_single_worker(self):
        """First attempt always succeeds: one attempt, solution is the seed."""
        salt = b"\x00" * 32
        result = search(salt, 0, 1)
        assert isinstance(result, SearchResult)
        assert result.attempts == 1
        assert len(result.solution) <= 64
        assert verify(salt, result.solution, 0)

    def test_solution_is_seed(self, monkeypatch):
        monkeypatch.setattr(secrets, "token_bytes", lambda n: b"\x01" * n)
        solution, attempts = search(b"\x00" * 32, 0, 1)
        assert solution == b"\x01" * 64
        assert attempts == 1

    def test_seed_increments(self, monkeypatch):
        """Workers walk upward from the seed one nonce at a time."""
        seed = b"\x01" * 64
        monkeypatch.setattr(secrets, "token_bytes", lambda n: seed)
        salt = b"\x05" * 32
        solution, attempts = search(salt, 6, 1)
        assert int.from_bytes(solution, "big") == int.from_bytes(seed, "big") + attempts - 1

    @pytest.mark.parametrize("difficulty", [1, 8, 12])
    def test_finds_valid_solution(self, difficulty):
        salt = new_salt()
        solution, attempts = search(salt, difficulty, 2)
        assert verify(salt, solution, difficulty)
        assert attempts >= 1

    def test_many_workers(self):
        salt = new_salt()
        result = search(salt, 10, 8)
        assert verify(salt, result.solution, 10)
        assert result.elapsed >= 0.0

    def test_difficulty_sixteen(self):
        salt = new_salt()
        solution, _ = search(salt, 16, 4)
        assert verify(salt, solution, 16)
        assert leading_zero_bits(solution_digest(salt, solution)) >= 16

    def test_difficulty_zero_many_workers(self):
        """Each worker makes at most one attempt when the first always wins."""
        result = search(new_salt(), 0, 4)
        assert 1 <= result.attempts <= 4

    def test_rejects_bad_salt(self):
        with pytest.raises(InvalidInput):
            search(b"\x00" * 10, 1, 1)

    def test_rejects_zero_workers(self):
        with pytest.raises(InvalidInput):
            search(new_salt(), 1, 0)

    def test_rejects_unreachable_difficulty(self):
        with pytest.raises(InvalidInput):
            search(new_salt(), 513, 1)
        with pytest.raises(ValueError):
            search(new_salt(), 257, 1, PuzzleParams(algorithm=HashAlgorithm.SHA256))

    def test_entropy_failure_propagates(self, monkeypatch):
        def broken(n):
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "token_bytes", broken)
        with pytest.raises(EntropySourceError):
            search(b"\x00" * 32, 0, 3)

    def test_single_worker_entropy_failure_stops_search(self, monkeypatch):
        """One worker failing to seed aborts the whole search promptly."""
        real = secrets.token_bytes
        lock = threading.Lock()
        calls = []

        def flaky(n):
            with lock:
                calls.append(n)
                first = len(calls) == 1
            if first:
                return real(n)
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "token_bytes", flaky)
        errors = []

        def run():
            try:
                search(b"\x00" * 32, 40, 2)
            except EntropySourceError as exc:
                errors.append(exc)

        runner = threading.Thread(target=run, daemon=True)
        runner.start()
        runner.join(timeout=10)
        assert not runner.is_alive()
        assert len(errors) == 1

    def test_alternate_algorithm(self):
        params = PuzzleParams(algorithm=HashAlgorithm.BLAKE2B)
        salt = new_salt(params)
        solution, _ = search(salt, 8, 2, params)
        assert verify(salt, solution, 8, params)
        # Checked against a different digest than the SHA-512 default
        assert solution_digest(salt, solution, params) != solution_digest(salt, solution)
        assert PuzzleParams().algorithm is HashAlgorithm.SHA512


class TestPuzzleParams:
    """Tests for parameter validation."""

    def test_defaults(self):
        params = PuzzleParams()
        assert params.salt_length == 32
        assert params.max_solution_size == 128
        assert params.seed_size == 64
        assert params.digest_bits == 512

    def test_seed_must_fit(self):
        with pytest.raises(ValueError):
            PuzzleParams(seed_size=128)

    def test_serialize_deterministic(self):
        assert PuzzleParams().serialize() == PuzzleParams().serialize()
        assert PuzzleParams().serialize() != PuzzleParams(algorithm=HashAlgorithm.SHA256).serialize()


class TestSolutionCell:
    """Tests for the shared single-assignment result slot."""

    def test_first_publish_wins(self):
        cell = _SolutionCell()
        assert cell.publish(b"\x01")
        assert cell.found.is_set()
        assert not cell.publish(b"\x02")
        assert cell.solution == b"\x01"

    def test_concurrent_publish(self):
        """Exactly one of many simultaneous winners is stored."""
        cell = _SolutionCell()
        barrier = threading.Barrier(8)
        wins = []

        def contend(i):
            barrier.wait()
            if cell.publish(bytes([i])):
                wins.append(i)
            cell.add_attempts(1000)

        threads = [threading.Thread(target=contend, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(wins) == 1
        assert cell.solution == bytes([wins[0]])
        assert cell.attempts == 8000
