"""Timing comparison of the LCS engines on random protein sequences."""

import logging
import time
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .engines import Engine, get_engine

logger = logging.getLogger(__name__)

# The 20 standard amino acids
AMINO_ACIDS = "ACDEFGHIKLMNPQRSTVWY"


@dataclass
class BenchmarkResult:
    """Timing of one engine on one input length."""
    engine: str
    length: int
    repeats: int
    mean_seconds: float
    min_seconds: float
    max_seconds: float
    mean_score: float


def random_protein(length: int, rng: np.random.Generator, alphabet: str = AMINO_ACIDS) -> str:
    """Draw a random sequence of the given length."""
    letters = np.array(list(alphabet))
    return ''.join(rng.choice(letters, size=length))


class EngineBenchmark:
    """Times LCS engines over a range of input lengths."""

    def __init__(self, repeats: int = 3, seed: Optional[int] = 0, alphabet: str = AMINO_ACIDS):
        """
        Initialize the benchmark.

        Args:
            repeats: Random sequence pairs timed per length
            seed: Seed for the random generator
            alphabet: Letters to draw sequences from
        """
        self.repeats = repeats
        self.alphabet = alphabet
        self.rng = np.random.default_rng(seed)

    def time_engine(self, engine: Union[Engine, str], length: int) -> BenchmarkResult:
        """Time one engine on ``repeats`` random pairs of equal length."""
        engine = Engine.parse(engine)
        score = get_engine(engine)
        timings = []
        scores = []

        for _ in range(self.repeats):
            a = random_protein(length, self.rng, self.alphabet)
            b = random_protein(length, self.rng, self.alphabet)

            start = time.perf_counter()
            scores.append(score(a, b))
            timings.append(time.perf_counter() - start)

        result = BenchmarkResult(
            engine=engine.value,
            length=length,
            repeats=self.repeats,
            mean_seconds=float(np.mean(timings)),
            min_seconds=float(np.min(timings)),
            max_seconds=float(np.max(timings)),
            mean_score=float(np.mean(scores)),
        )
        logger.info(f"{engine.value} n={length}: {result.mean_seconds:.6f}s mean")
        return result

    def run(self,
            lengths: Iterable[int],
            engines: Sequence[Union[Engine, str]] = (Engine.DP, Engine.EXHAUSTIVE)) -> pd.DataFrame:
        """
        Time each engine at each length.

        Returns:
            One row per (engine, length)
        """
        results: List[BenchmarkResult] = []
        for length in lengths:
            for engine in engines:
                results.append(self.time_engine(engine, length))

        return pd.DataFrame([asdict(r) for r in results])


def speedup_table(results: pd.DataFrame) -> pd.DataFrame:
    """Pivot benchmark rows to one row per length with an engine speedup column."""
    table = results.pivot_table(index='length', columns='engine', values='mean_seconds', aggfunc='mean')
    if Engine.DP.value in table.columns and Engine.EXHAUSTIVE.value in table.columns:
        table['speedup'] = table[Engine.EXHAUSTIVE.value] / table[Engine.DP.value]
    return table.reset_index()
