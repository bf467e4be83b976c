"""Protein LCS best-match tool.

Scores protein sequences against a query by longest common subsequence
length, using either a dynamic-programming or an exhaustive engine.
"""

__version__ = "1.0.0"
__author__ = "Austin P. Morrissey"

from .engines import Engine, get_engine
from .exhaustive import all_subsequences, lcs_length_exhaustive
from .lcs import lcs_length_dp, lcs_string, lcs_table
from .matcher import (
    EmptyCollectionError,
    best_match,
    dynamic_programming_best_match,
    exhaustive_best_match,
    rank_matches,
    score_collection,
)
from .models import BestMatch, ProteinCollection, ProteinRecord

__all__ = [
    "BestMatch",
    "EmptyCollectionError",
    "Engine",
    "ProteinCollection",
    "ProteinRecord",
    "all_subsequences",
    "best_match",
    "dynamic_programming_best_match",
    "exhaustive_best_match",
    "get_engine",
    "lcs_length_dp",
    "lcs_length_exhaustive",
    "lcs_string",
    "lcs_table",
    "rank_matches",
    "score_collection",
]
