"""Selection of the LCS scoring engine."""

from enum import Enum
from functools import partial
from typing import Callable, Optional, Union

from .exhaustive import lcs_length_exhaustive
from .lcs import lcs_length_dp

ScoreFunction = Callable[[str, str], int]


class Engine(Enum):
    """Available LCS engines."""
    DP = "dp"
    EXHAUSTIVE = "exhaustive"

    @classmethod
    def parse(cls, value: Union['Engine', str]) -> 'Engine':
        """Accept an Engine or its name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ', '.join(engine.value for engine in cls)
            raise ValueError(f"Unknown engine: {value!r} (choose from {choices})") from None


def get_engine(engine: Union[Engine, str] = Engine.DP,
               max_length: Optional[int] = None) -> ScoreFunction:
    """
    Get the scoring function for an engine.

    Args:
        engine: Engine or engine name
        max_length: Length bound applied by the exhaustive engine

    Returns:
        Function taking (sequence, query) and returning the LCS length
    """
    engine = Engine.parse(engine)

    if engine is Engine.EXHAUSTIVE:
        return partial(lcs_length_exhaustive, max_length=max_length)

    return lcs_length_dp
