"""Data models for the protein matching tool."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union, overload


@dataclass(frozen=True)
class ProteinRecord:
    """A single description/sequence pair."""

    description: str
    sequence: str

    def __len__(self) -> int:
        return len(self.sequence)


class ProteinCollection(Sequence[ProteinRecord]):
    """Ordered, read-only collection of protein records.

    Order is significant: when two records score the same against a query,
    the one that appears first wins.
    """

    def __init__(self, records: Iterable[ProteinRecord] = ()):
        self._records: Tuple[ProteinRecord, ...] = tuple(records)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> 'ProteinCollection':
        """Build a collection from (description, sequence) pairs."""
        return cls(ProteinRecord(description, sequence) for description, sequence in pairs)

    @overload
    def __getitem__(self, index: int) -> ProteinRecord: ...

    @overload
    def __getitem__(self, index: slice) -> 'ProteinCollection': ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return ProteinCollection(self._records[index])
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProteinRecord]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProteinCollection):
            return self._records == other._records
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"ProteinCollection({len(self._records)} records)"

    @property
    def descriptions(self) -> Tuple[str, ...]:
        """Descriptions in collection order."""
        return tuple(record.description for record in self._records)


@dataclass(frozen=True)
class BestMatch:
    """A scored record, referenced by its position in the collection."""

    index: int
    record: ProteinRecord
    score: int

    @property
    def description(self) -> str:
        return self.record.description

    @property
    def sequence(self) -> str:
        return self.record.sequence

    def similarity(self, query: str) -> float:
        """Score normalized by the longer of the record and the query."""
        longest = max(len(query), len(self.record.sequence))
        return self.score / longest if longest else 0.0
