"""Best-match selection of protein records against a query sequence."""

import logging
from typing import List, Optional, Union

from .engines import Engine, get_engine
from .logging_config import LogTimer, log_performance
from .models import BestMatch, ProteinCollection
from .parallel_processor import ParallelProcessor

logger = logging.getLogger(__name__)


class EmptyCollectionError(ValueError):
    """Raised when a best match is requested from an empty collection."""

    def __init__(self, message: str = "Cannot select a best match from an empty collection"):
        super().__init__(message)


def score_collection(collection: ProteinCollection,
                     query: str,
                     engine: Union[Engine, str] = Engine.DP,
                     max_length: Optional[int] = None,
                     max_workers: Optional[int] = None,
                     chunk_size: Optional[int] = None) -> List[int]:
    """
    Score every record in a collection against a query.

    Args:
        collection: Records to score
        query: Query sequence
        engine: LCS engine to use
        max_length: Length bound for the exhaustive engine
        max_workers: Score on a thread pool when greater than 1
        chunk_size: Records per pool submission round

    Returns:
        Scores in collection order

    Raises:
        SequenceTooLongError: If the exhaustive engine's bound is exceeded
    """
    score = get_engine(engine, max_length=max_length)
    records = list(collection)

    if not max_workers or max_workers <= 1 or len(records) <= 1:
        return [score(record.sequence, query) for record in records]

    processor = ParallelProcessor(max_workers=max_workers)
    results, stats = processor.process_batch(
        records,
        lambda record: score(record.sequence, query),
        chunk_size=chunk_size
    )

    # Results come back in collection order, so the first failure is the
    # one a sequential scan would have hit.
    for result in results:
        if not result.success:
            raise result.error

    logger.debug(f"Scored {stats.successful}/{stats.total_items} records on {max_workers} workers")
    return [result.result for result in results]


def best_match(collection: ProteinCollection,
               query: str,
               engine: Union[Engine, str] = Engine.DP,
               max_length: Optional[int] = None,
               max_workers: Optional[int] = None,
               chunk_size: Optional[int] = None) -> BestMatch:
    """
    Find the record whose sequence has the longest LCS with the query.

    The first record holds the lead until a later record scores strictly
    higher, so ties always go to the earliest record and repeated runs
    return the same answer regardless of how scoring was scheduled.

    Args:
        collection: Records to search
        query: Query sequence
        engine: LCS engine to use
        max_length: Length bound for the exhaustive engine
        max_workers: Score on a thread pool when greater than 1
        chunk_size: Records per pool submission round

    Returns:
        The winning record, its index and its score

    Raises:
        EmptyCollectionError: If the collection has no records
    """
    if len(collection) == 0:
        raise EmptyCollectionError()

    engine = Engine.parse(engine)

    with LogTimer(f"{engine.value} best match over {len(collection)} records", logger) as timer:
        scores = score_collection(collection, query, engine, max_length, max_workers, chunk_size)

    best: Optional[BestMatch] = None
    for index, (record, score) in enumerate(zip(collection, scores)):
        if best is None or score > best.score:
            best = BestMatch(index=index, record=record, score=score)

    log_performance(f"{engine.value} best match", timer.elapsed, len(collection))
    logger.info(f"Best match: {best.description!r} (score {best.score})")
    return best


def dynamic_programming_best_match(collection: ProteinCollection, query: str, **kwargs) -> BestMatch:
    """Best match using the dynamic-programming engine."""
    return best_match(collection, query, engine=Engine.DP, **kwargs)


def exhaustive_best_match(collection: ProteinCollection, query: str, **kwargs) -> BestMatch:
    """Best match using the exhaustive engine."""
    return best_match(collection, query, engine=Engine.EXHAUSTIVE, **kwargs)


def rank_matches(collection: ProteinCollection,
                 query: str,
                 engine: Union[Engine, str] = Engine.DP,
                 top: Optional[int] = None,
                 **kwargs) -> List[BestMatch]:
    """
    Rank records by score, highest first.

    Records with equal scores keep their collection order, so the first
    entry is always the same record best_match would pick.

    Raises:
        EmptyCollectionError: If the collection has no records
    """
    if len(collection) == 0:
        raise EmptyCollectionError()

    scores = score_collection(collection, query, engine, **kwargs)
    matches = [
        BestMatch(index=index, record=record, score=score)
        for index, (record, score) in enumerate(zip(collection, scores))
    ]
    matches.sort(key=lambda match: match.score, reverse=True)

    if top is not None:
        matches = matches[:top]

    return matches
