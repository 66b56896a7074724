"""
Parallel Solution Search

Each worker starts from an independent random nonce and walks upward
(nonce, nonce + 1, ...) until some worker finds a solution.

Coordination:
- One threading.Event is the "found" broadcast. Workers test it between
  attempts; a hash in progress is never interrupted.
- The winning solution goes into a lock-guarded single-assignment cell,
  so exactly one value is published even if two workers succeed together.
- Attempt counts are summed under the same lock. The total is a cost
  estimate: losers may finish a few attempts after the winner.

There is no timeout. search() returns only once a solution exists.
"""

from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from dataclasses import dataclass
from typing import Optional
import logging
import threading
import time

from ..errors import InvalidInput
from .params import PuzzleParams, DEFAULT_PARAMS
from .work import random_bytes, encode_nonce, verify


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of search(). Unpacks as (solution, attempts)."""

    solution: bytes
    """First published solution."""

    attempts: int
    """Sum of attempts over all workers (approximate cost)."""

    elapsed: float = 0.0
    """Wall-clock seconds spent searching."""

    def __iter__(self):
        return iter((self.solution, self.attempts))


class _SolutionCell:
    """Single-assignment slot plus attempt accumulator shared by workers."""

    def __init__(self):
        self._lock = threading.Lock()
        self.found = threading.Event()
        self.solution: Optional[bytes] = None
        self.attempts = 0

    def publish(self, solution: bytes) -> bool:
        """Store solution if none is stored yet. Returns True for the winner."""
        with self._lock:
            if self.solution is not None:
                return False
            self.solution = solution
        self.found.set()
        return True

    def add_attempts(self, n: int):
        with self._lock:
            self.attempts += n


def _worker(
    index: int,
    salt: bytes,
    difficulty: int,
    cell: _SolutionCell,
    params: PuzzleParams
) -> int:
    nonce = int.from_bytes(random_bytes(params.seed_size), 'big')
    attempts = 0
    try:
        while not cell.found.is_set():
            attempts += 1
            candidate = encode_nonce(nonce)
            if verify(salt, candidate, difficulty, params):
                if cell.publish(candidate):
                    logger.debug("worker %d found solution after %d attempts", index, attempts)
                break
            nonce += 1
    finally:
        cell.add_attempts(attempts)
    logger.debug("worker %d stopped after %d attempts", index, attempts)
    return attempts


def search(
    salt: bytes,
    difficulty: int,
    workers: int = 1,
    params: Optional[PuzzleParams] = None
) -> SearchResult:
    """
    Find a solution for (salt, difficulty) using `workers` parallel workers.

    Blocks until every worker has stopped. Expected total work is about
    2^difficulty attempts.

    Args:
        salt: Puzzle salt (params.salt_length bytes)
        difficulty: Required leading zero bits, at most params.digest_bits
        workers: Number of parallel workers (>= 1)
        params: Puzzle parameters (defaults if None)

    Returns:
        SearchResult with the solution and the approximate attempt total

    Raises:
        InvalidInput: malformed salt, unreachable difficulty, or workers < 1
        EntropySourceError: a worker could not seed its starting nonce
    """
    params = params or DEFAULT_PARAMS
    if len(salt) != params.salt_length:
        raise InvalidInput(f"Salt must be {params.salt_length} bytes, got {len(salt)}")
    if not 0 <= difficulty <= params.digest_bits:
        raise InvalidInput(f"Difficulty must be in [0, {params.digest_bits}], got {difficulty}")
    if workers < 1:
        raise InvalidInput(f"Need at least one worker, got {workers}")

    logger.debug("searching: difficulty=%d workers=%d", difficulty, workers)
    cell = _SolutionCell()
    start = time.perf_counter()

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='zkgate-search') as executor:
        futures = [
            executor.submit(_worker, i, salt, difficulty, cell, params)
            for i in range(workers)
        ]
        try:
            # Returns once every worker has stopped or as soon as one raises
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                future.result()
        except BaseException:
            # Stop the remaining workers before the executor joins them
            cell.found.set()
            raise

    elapsed = time.perf_counter() - start
    logger.info("search done: difficulty=%d attempts=%d elapsed=%.3fs", difficulty, cell.attempts, elapsed)
    return SearchResult(solution=cell.solution, attempts=cell.attempts, elapsed=elapsed)
