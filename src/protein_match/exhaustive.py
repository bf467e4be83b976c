"""Exhaustive longest common subsequence by subsequence enumeration.

Both functions here are exponential in input length. They exist as an
independent check on the dynamic-programming engine and for timing
comparisons, so callers should keep inputs short or pass ``max_length``.
"""

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class SequenceTooLongError(ValueError):
    """Raised when an input exceeds the configured exhaustive search bound."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Sequence of length {length} exceeds the exhaustive search limit of {max_length}"
        )


def all_subsequences(sequence: str) -> List[str]:
    """
    Enumerate every subsequence of a string.

    Subsequence number ``mask`` keeps the characters whose bit is set in
    ``mask``, reading bits from least to most significant so characters stay
    in their original order. Repeated characters yield repeated entries.

    Args:
        sequence: Input string

    Returns:
        List of exactly 2 ** len(sequence) strings, including '' and the
        input itself
    """
    subsequences = []
    for mask in range(1 << len(sequence)):
        subsequences.append(''.join(
            char for bit, char in enumerate(sequence) if (mask >> bit) & 1
        ))
    return subsequences


def check_length(sequence: str, max_length: Optional[int]) -> None:
    """Raise SequenceTooLongError if a bound is set and exceeded."""
    if max_length is not None and len(sequence) > max_length:
        raise SequenceTooLongError(len(sequence), max_length)


def lcs_length_exhaustive(a: str, b: str, max_length: Optional[int] = None) -> int:
    """
    Length of the longest common subsequence, by brute force.

    Every subsequence of ``a`` is compared with every subsequence of ``b``,
    a full 2 ** len(a) by 2 ** len(b) scan, and the longest string found on
    both sides is the answer. The empty string is always shared, so the
    result is never below 0.

    Args:
        a: First string
        b: Second string
        max_length: Optional upper bound on either input's length

    Returns:
        LCS length, equal to lcs_length_dp(a, b)

    Raises:
        SequenceTooLongError: If max_length is set and an input exceeds it
    """
    check_length(a, max_length)
    check_length(b, max_length)

    subsequences_a = all_subsequences(a)
    subsequences_b = all_subsequences(b)

    best = 0
    for x in subsequences_a:
        for y in subsequences_b:
            if x == y and len(x) > best:
                best = len(x)

    logger.debug(f"Exhaustive LCS of lengths {len(a)}x{len(b)}: {best}")
    return best
