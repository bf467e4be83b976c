"""Dynamic-programming longest common subsequence."""

import numpy as np


def _codes(sequence: str) -> np.ndarray:
    """Encode a string as an array of code points for vectorized comparison."""
    return np.fromiter(map(ord, sequence), dtype=np.uint32, count=len(sequence))


def _next_row(previous: np.ndarray, symbol: int, columns: np.ndarray) -> np.ndarray:
    """Compute one table row from the row above it.

    A cell takes the best of the cell above, the diagonal plus one on a
    match, and the cell to its left. The left dependency is a running
    maximum along the row, so the whole row is one accumulate.
    """
    candidates = np.maximum(previous[1:], previous[:-1] + (columns == symbol))
    row = np.zeros_like(previous)
    row[1:] = np.maximum.accumulate(candidates)
    return row


def lcs_table(a: str, b: str) -> np.ndarray:
    """
    Build the full LCS table for two strings.

    Args:
        a: First string (table rows)
        b: Second string (table columns)

    Returns:
        Array of shape (len(a) + 1, len(b) + 1) where cell (i, j) holds the
        LCS length of a[:i] and b[:j]
    """
    table = np.zeros((len(a) + 1, len(b) + 1), dtype=np.int64)
    columns = _codes(b)

    for i, symbol in enumerate(_codes(a), start=1):
        table[i] = _next_row(table[i - 1], symbol, columns)

    return table


def lcs_length_dp(a: str, b: str) -> int:
    """
    Length of the longest common subsequence of two strings.

    Only two rows of the table are kept, laid out along the shorter string,
    so memory stays at O(min(len(a), len(b))).

    Args:
        a: First string
        b: Second string

    Returns:
        LCS length, between 0 and min(len(a), len(b))
    """
    if len(b) > len(a):
        a, b = b, a

    if not b:
        return 0

    columns = _codes(b)
    row = np.zeros(len(b) + 1, dtype=np.int64)
    for symbol in _codes(a):
        row = _next_row(row, symbol, columns)

    return int(row[-1])


def lcs_string(a: str, b: str) -> str:
    """Recover one longest common subsequence by tracing back the table."""
    table = lcs_table(a, b)
    i, j = len(a), len(b)
    chars = []

    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            chars.append(a[i - 1])
            i -= 1
            j -= 1
        elif table[i - 1, j] >= table[i, j - 1]:
            i -= 1
        else:
            j -= 1

    return ''.join(reversed(chars))
